"""Infrastructure layer - logging, database lifecycle and adapters."""
