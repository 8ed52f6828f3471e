from pydantic import Field

from ordering.settings.base import OrderingBaseSettings


class DatabaseSettings(OrderingBaseSettings):
    """
    Database settings for the persistence adapter.
    Loaded from .env file with exact variable name matching.
    """

    url: str = Field("sqlite+aiosqlite:///./ordering.db", alias="DB_URL")
    echo_sql: bool = Field(False, alias="DB_ECHO_SQL")
