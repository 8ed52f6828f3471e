"""Domain entities."""

from .adjustable import AdjustableMixin
from .adjustment import Adjustment
from .order import Order
from .order_item import OrderItem

__all__ = ["AdjustableMixin", "Adjustment", "Order", "OrderItem"]
