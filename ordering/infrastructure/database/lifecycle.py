"""Database Lifecycle Management - Async Version"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ordering.infrastructure.logging import get_logger
from ordering.settings import DatabaseSettings, get_app_settings

logger = get_logger(__name__)

_async_engine: Optional[AsyncEngine] = None
_async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory used by units of work."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_database(settings: Optional[DatabaseSettings] = None) -> None:
    """Initialize async database engine and session factory, creating tables."""
    global _async_engine, _async_session_factory

    if _async_engine is not None:
        return

    from ordering.data.models import Base

    settings = settings or get_app_settings().database
    logger.info("Creating database engine: %s", settings.url)

    _async_engine = create_async_engine(
        settings.url,
        echo=settings.echo_sql,
        pool_pre_ping=True,
    )
    _async_session_factory = create_session_factory(_async_engine)

    async with _async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get async session factory."""
    if _async_session_factory is None:
        raise RuntimeError(
            "Database not initialized. Call init_database() first."
        )
    return _async_session_factory


async def close_database() -> None:
    """Close async database engine."""
    global _async_engine, _async_session_factory

    if _async_engine is not None:
        await _async_engine.dispose()
        logger.info("Database engine disposed")

    _async_engine = None
    _async_session_factory = None
