"""
In-memory Order Repository Implementation.

Stores snapshot dictionaries, so every load returns a fresh order graph
and mutations of a loaded order are invisible until saved.
"""
import copy
import logging
from typing import Any, Dict, List, Optional

from ordering.domain.entities import Order
from ordering.domain.repositories.order_repository import (
    OrderRepository,
    assign_identifiers,
)


logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """
    In-memory implementation of OrderRepository.

    Stores order snapshots in a dictionary for testing/demo purposes.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._storage: Dict[str, Dict[str, Any]] = {}
        logger.info("InMemoryOrderRepository initialized (in-memory storage)")

    async def save(self, order: Order) -> None:
        """
        Save order snapshot to in-memory storage.

        Args:
            order: Order entity to save
        """
        assign_identifiers(order)
        self._storage[order.id] = copy.deepcopy(order.to_snapshot_dict())
        logger.info(
            "Order saved to in-memory repository: %s (state: %s, total: %d)",
            order.id,
            order.state,
            order.total,
        )

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Get order by ID from in-memory storage.

        Args:
            order_id: Order ID to lookup

        Returns:
            Order if found, None otherwise
        """
        snapshot = self._storage.get(order_id)

        if snapshot is None:
            logger.info("Order not found in in-memory repository: %s", order_id)
            return None

        return Order.from_snapshot_dict(copy.deepcopy(snapshot))

    async def find_all(self, limit: int = 100) -> List[Order]:
        """
        Get all orders with pagination.

        Args:
            limit: Maximum number of orders to return

        Returns:
            List of orders (up to limit)
        """
        snapshots = list(self._storage.values())[:limit]
        logger.info("Found %d order(s) in in-memory repository (limit: %d)", len(snapshots), limit)
        return [Order.from_snapshot_dict(copy.deepcopy(s)) for s in snapshots]

    async def exists(self, order_id: str) -> bool:
        """
        Check if order exists in storage.

        Args:
            order_id: Order ID to check

        Returns:
            True if exists, False otherwise
        """
        exists = order_id in self._storage
        logger.debug("Order %s exists: %s", order_id, exists)
        return exists

    async def delete(self, order_id: str) -> None:
        """
        Delete order from in-memory storage.

        Args:
            order_id: Order ID to delete
        """
        if order_id in self._storage:
            del self._storage[order_id]
            logger.info("Order deleted from in-memory repository: %s", order_id)
        else:
            logger.warning("Order not found for deletion: %s", order_id)

    def clear(self) -> None:
        """Clear all orders (for demo/testing)."""
        self._storage.clear()
        logger.info("In-memory repository cleared")
