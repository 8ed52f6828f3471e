"""Domain enums."""

from .adjustment_type import AdjustmentType
from .order_state import OrderState

__all__ = ["AdjustmentType", "OrderState"]
