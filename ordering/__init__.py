"""Order aggregation and consistency engine."""
