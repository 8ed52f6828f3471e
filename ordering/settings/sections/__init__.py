from .database import DatabaseSettings
from .logs import DEFAULT_LOG_FORMAT, LoggingSettings

__all__ = ["DatabaseSettings", "DEFAULT_LOG_FORMAT", "LoggingSettings"]
