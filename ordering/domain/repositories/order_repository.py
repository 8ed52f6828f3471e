"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import uuid4

from ..entities.order import Order


def new_identifier() -> str:
    """Generate a store-side identifier."""
    return uuid4().hex


def assign_identifiers(order: Order) -> None:
    """Give the order, its items and all adjustments an id where missing."""
    if order.id is None:
        order.assign_id(new_identifier())

    for adjustment in order.get_adjustments_recursively():
        if adjustment.id is None:
            adjustment.id = new_identifier()

    for item in order.items:
        if item.id is None:
            item.id = new_identifier()


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence.

    Loads return the full graph (items, adjustments, back-references)
    with cached totals recalculated.
    """

    @abstractmethod
    async def save(self, order: Order) -> None:
        """Persist the full order graph, assigning missing identifiers.

        Args:
            order: Order aggregate to persist
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """Retrieve order by unique identifier.

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, limit: int = 100) -> List[Order]:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return

        Returns:
            List of Order aggregates
        """
        pass

    @abstractmethod
    async def exists(self, order_id: str) -> bool:
        """Check if order exists.

        Args:
            order_id: Order identifier

        Returns:
            True if order exists, False otherwise
        """
        pass

    @abstractmethod
    async def delete(self, order_id: str) -> None:
        """Delete order and its whole graph (no-op if missing).

        Args:
            order_id: Order identifier
        """
        pass
