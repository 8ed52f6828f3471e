"""Domain layer - pure domain models and interfaces."""

from .entities import AdjustableMixin, Adjustment, Order, OrderItem
from .enums import AdjustmentType, OrderState
from .repositories import OrderRepository

__all__ = [
    "AdjustableMixin",
    "Adjustment",
    "AdjustmentType",
    "Order",
    "OrderItem",
    "OrderRepository",
    "OrderState",
]
