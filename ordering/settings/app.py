# ordering/settings/app.py
from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from ordering.settings.sections import DatabaseSettings, LoggingSettings


class AppSettings(BaseModel):
    """
    Central application settings aggregator.
    Sections are loaded on the first get_app_settings() call. Modules
    that create a logger at import time make that call while importing.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    database: DatabaseSettings
    logging: LoggingSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings(
        database=DatabaseSettings(),
        logging=LoggingSettings(),
    )
