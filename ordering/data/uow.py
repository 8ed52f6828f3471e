"""Unit of Work pattern for atomic transactions."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ordering.infrastructure.logging import get_logger

from .repositories.order_repository_impl import SqlAlchemyOrderRepository

logger = get_logger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Atomic commit/rollback of all repository operations
    3. Lazy initialization of repositories

    One unit of work loads, mutates and saves one order graph; callers
    serialize concurrent writers to the same order themselves.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, then close the session."""
        if exc_type is not None:
            logger.warning("Rolling back unit of work: %s", exc_val)
            await self._session.rollback()
        await self._session.close()
        self._session = None
        self._order_repository = None

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(self._session)
        return self._order_repository

    async def commit(self) -> None:
        """Commit all pending changes."""
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        await self._session.rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
