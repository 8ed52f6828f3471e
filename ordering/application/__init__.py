"""Application layer - services, workflow and DTOs."""

from .dtos import (
    AddAdjustmentRequest,
    AddItemRequest,
    AdjustmentDTO,
    CreateCartRequest,
    OrderDTO,
    OrderItemDTO,
    OrderListDTO,
)
from .exceptions import (
    InvalidTransitionError,
    OrderingError,
    OrderItemNotFoundError,
    OrderNotFoundError,
)
from .services import OrderApplicationService
from .workflow import OrderStateMachine, OrderTransitions

__all__ = [
    # DTOs
    "AddAdjustmentRequest",
    "AddItemRequest",
    "AdjustmentDTO",
    "CreateCartRequest",
    "OrderDTO",
    "OrderItemDTO",
    "OrderListDTO",
    # Errors
    "InvalidTransitionError",
    "OrderingError",
    "OrderItemNotFoundError",
    "OrderNotFoundError",
    # Services
    "OrderApplicationService",
    # Workflow
    "OrderStateMachine",
    "OrderTransitions",
]
