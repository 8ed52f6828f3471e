# Settings package
from ordering.settings.app import AppSettings, get_app_settings
from ordering.settings.sections import DatabaseSettings, LoggingSettings

__all__ = ["get_app_settings", "AppSettings", "DatabaseSettings", "LoggingSettings"]
