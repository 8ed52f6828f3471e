"""SQLAlchemy implementation of OrderRepository."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ordering.domain.entities import Order
from ordering.domain.repositories.order_repository import (
    OrderRepository,
    assign_identifiers,
)
from ordering.infrastructure.logging import get_logger

from ..mappers import OrderMapper
from ..models.order_model import OrderModel

logger = get_logger(__name__)


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def save(self, order: Order) -> None:
        """Persist the full order graph.

        Args:
            order: Order domain aggregate
        """
        assign_identifiers(order)

        # Check if exists (upsert logic)
        existing = await self._session.get(OrderModel, order.id)

        if existing:
            OrderMapper.update_persistence(order, existing)
            self._session.add(existing)
        else:
            self._session.add(OrderMapper.to_persistence(order))

        await self._session.flush()  # Propagate to DB without committing
        logger.debug(
            "Order %s saved (state=%s, items=%d, total=%d)",
            order.id,
            order.state,
            order.count_items(),
            order.total,
        )

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_all(self, limit: int = 100) -> List[Order]:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return

        Returns:
            List of Order aggregates
        """
        result = await self._session.execute(
            select(OrderModel).order_by(OrderModel.created_at).limit(limit)
        )
        models = result.scalars().all()

        return [OrderMapper.to_domain(model) for model in models]

    async def exists(self, order_id: str) -> bool:
        """Check if order exists.

        Args:
            order_id: Order identifier

        Returns:
            True if order exists, False otherwise
        """
        result = await self._session.execute(
            select(OrderModel.id).where(OrderModel.id == order_id)
        )
        return result.scalar_one_or_none() is not None

    async def delete(self, order_id: str) -> None:
        """Delete order with its items and adjustments.

        Args:
            order_id: Order identifier
        """
        model = await self._session.get(OrderModel, order_id)
        if model is None:
            logger.warning("Order not found for deletion: %s", order_id)
            return

        await self._session.delete(model)
        await self._session.flush()
