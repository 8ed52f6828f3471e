"""Application DTOs."""

from .order_dto import (
    AddAdjustmentRequest,
    AddItemRequest,
    AdjustmentDTO,
    CreateCartRequest,
    OrderDTO,
    OrderItemDTO,
    OrderListDTO,
)

__all__ = [
    "AddAdjustmentRequest",
    "AddItemRequest",
    "AdjustmentDTO",
    "CreateCartRequest",
    "OrderDTO",
    "OrderItemDTO",
    "OrderListDTO",
]
