"""Application service for Order operations."""

from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from ordering.application.dtos.order_dto import (
    AddAdjustmentRequest,
    AddItemRequest,
    CreateCartRequest,
    OrderDTO,
    OrderListDTO,
)
from ordering.application.exceptions import OrderItemNotFoundError, OrderNotFoundError
from ordering.application.workflow import OrderStateMachine, OrderTransitions
from ordering.data.uow import UnitOfWork, create_uow
from ordering.domain.entities import Order, OrderItem
from ordering.infrastructure.logging import get_logger

logger = get_logger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Coordinate domain + infrastructure
    - Handle transactions via UoW (load full graph, mutate, save, commit)
    - Reconcile items_total after item-level changes
    - Transform between DTOs and domain entities
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        state_machine: Optional[OrderStateMachine] = None,
    ) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
            state_machine: Workflow collaborator for state transitions
        """
        self._session_factory = session_factory
        self._state_machine = state_machine or OrderStateMachine()

    async def create_cart(self, request: CreateCartRequest) -> OrderDTO:
        """Open a new order in the cart state.

        Args:
            request: CreateCartRequest DTO

        Returns:
            OrderDTO with the stored (empty) cart
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = Order(number=request.number, notes=request.notes)
            await uow.orders.save(order)
            await uow.commit()

            logger.info("Cart created: %s", order.id)
            return OrderDTO.from_entity(order)

    async def get_order(self, order_id: str) -> Optional[OrderDTO]:
        """Get order by ID.

        Args:
            order_id: Order ID string

        Returns:
            OrderDTO if found, None otherwise
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await uow.orders.find_by_id(order_id)

            if not order:
                return None

            return OrderDTO.from_entity(order)

    async def list_orders(self, limit: int = 100) -> OrderListDTO:
        """List orders with pagination.

        Args:
            limit: Maximum number of orders to return

        Returns:
            OrderListDTO
        """
        uow = create_uow(self._session_factory)
        async with uow:
            orders = await uow.orders.find_all(limit=limit)
            return OrderListDTO(
                orders=[OrderDTO.from_entity(order) for order in orders],
                total=len(orders),
            )

    async def add_item(self, order_id: str, request: AddItemRequest) -> OrderDTO:
        """Add a priced line item.

        A plain item (no item-level adjustments) for a product already in
        the order is merged into the existing line.

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load(uow, order_id)
            item = request.to_entity()

            existing = None
            if not request.adjustments:
                existing = next((i for i in order.items if i.equals(item)), None)

            if existing is not None:
                existing.merge(item)
                order.recalculate_items_total()
            else:
                order.add_item(item)

            return await self._save(uow, order)

    async def remove_item(self, order_id: str, item_id: str) -> OrderDTO:
        """Remove a line item.

        Raises:
            OrderNotFoundError: If the order does not exist
            OrderItemNotFoundError: If the item is not in the order
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load(uow, order_id)
            order.remove_item(self._find_item(order, item_id))
            return await self._save(uow, order)

    async def add_adjustment(
        self,
        order_id: str,
        request: AddAdjustmentRequest,
        item_id: Optional[str] = None,
    ) -> OrderDTO:
        """Attach an adjustment to the order, or to one of its items.

        Raises:
            OrderNotFoundError: If the order does not exist
            OrderItemNotFoundError: If item_id is given but not in the order
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load(uow, order_id)
            adjustment = request.to_entity()

            if item_id is None:
                order.add_adjustment(adjustment)
            else:
                self._find_item(order, item_id).add_adjustment(adjustment)
                order.recalculate_items_total()

            return await self._save(uow, order)

    async def remove_adjustments(
        self,
        order_id: str,
        type: Optional[str] = None,
        recursive: bool = False,
    ) -> OrderDTO:
        """Remove unlocked adjustments, optionally of one type and from items too.

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load(uow, order_id)

            if recursive:
                order.remove_adjustments_recursively(type)
            else:
                order.remove_adjustments(type)

            return await self._save(uow, order)

    async def complete_checkout(self, order_id: str) -> OrderDTO:
        """Record checkout completion and move the cart to `new`.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidTransitionError: If the order is no longer a cart
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load(uow, order_id)
            self._state_machine.apply(order, OrderTransitions.CREATE)
            order.complete_checkout()

            logger.info("Checkout completed: %s (total: %d)", order.id, order.total)
            return await self._save(uow, order)

    async def apply_transition(self, order_id: str, transition: str) -> OrderDTO:
        """Apply a workflow transition to the order state.

        Raises:
            OrderNotFoundError: If the order does not exist
            InvalidTransitionError: If the transition is not allowed
        """
        uow = create_uow(self._session_factory)
        async with uow:
            order = await self._load(uow, order_id)
            previous_state = order.get_state()
            self._state_machine.apply(order, transition)

            logger.info(
                "Order %s: %s -> %s (%s)",
                order.id,
                previous_state,
                order.get_state(),
                transition,
            )
            return await self._save(uow, order)

    async def _load(self, uow: UnitOfWork, order_id: str) -> Order:
        order = await uow.orders.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def _save(self, uow: UnitOfWork, order: Order) -> OrderDTO:
        await uow.orders.save(order)
        await uow.commit()
        return OrderDTO.from_entity(order)

    @staticmethod
    def _find_item(order: Order, item_id: str) -> OrderItem:
        for item in order.items:
            if item.id == item_id:
                return item
        raise OrderItemNotFoundError(order.id, item_id)
