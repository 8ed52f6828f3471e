"""Data layer - infrastructure persistence and mapping."""

from .mappers import AdjustmentMapper, OrderItemMapper, OrderMapper
from .models import AdjustmentModel, Base, OrderItemModel, OrderModel
from .repositories import SqlAlchemyOrderRepository
from .uow import UnitOfWork, create_uow

__all__ = [
    "AdjustmentMapper",
    "AdjustmentModel",
    "Base",
    "create_uow",
    "OrderItemMapper",
    "OrderItemModel",
    "OrderMapper",
    "OrderModel",
    "SqlAlchemyOrderRepository",
    "UnitOfWork",
]
