from pydantic import Field, field_validator

from ordering.settings.base import OrderingBaseSettings


DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class LoggingSettings(OrderingBaseSettings):
    """
    Logging settings.
    Loaded from .env file with exact variable name matching.
    """

    level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field(DEFAULT_LOG_FORMAT, alias="LOG_FORMAT")

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()
