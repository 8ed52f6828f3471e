"""Database models."""

from .base import Base
from .order_model import AdjustmentModel, OrderItemModel, OrderModel

__all__ = ["AdjustmentModel", "Base", "OrderItemModel", "OrderModel"]
