"""Application DTOs for Order operations."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ordering.domain.entities import Adjustment, Order, OrderItem


class AdjustmentDTO(BaseModel):
    """DTO for an order- or item-level adjustment."""

    id: Optional[str] = Field(None, description="Adjustment ID")
    type: str = Field(..., description="Adjustment type tag")
    label: Optional[str] = Field(None, description="Human-readable label")
    amount: int = Field(..., description="Signed amount in minor units")
    neutral: bool = Field(default=False, description="Excluded from totals")
    locked: bool = Field(default=False, description="Protected from bulk removal")
    origin_code: Optional[str] = Field(None, description="Origin code")
    details: Dict[str, Any] = Field(default_factory=dict, description="Metadata")

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, adjustment: Adjustment) -> "AdjustmentDTO":
        return cls(**adjustment.to_dict())


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    id: Optional[str] = Field(None, description="Item ID")
    product_code: Optional[str] = Field(None, description="Product code")
    name: Optional[str] = Field(None, description="Product name")
    quantity: int = Field(..., ge=0, description="Quantity ordered")
    unit_price: int = Field(..., description="Unit price in minor units")
    adjustments_total: int = Field(..., description="Item adjustments total")
    total: int = Field(..., ge=0, description="Item total in minor units")
    adjustments: List[AdjustmentDTO] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, item: OrderItem) -> "OrderItemDTO":
        return cls(
            id=item.id,
            product_code=item.product_code,
            name=item.name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            adjustments_total=item.adjustments_total,
            total=item.total,
            adjustments=[AdjustmentDTO.from_entity(a) for a in item.get_adjustments()],
        )


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: str = Field(..., description="Order ID")
    number: Optional[str] = Field(None, description="Order reference")
    notes: Optional[str] = Field(None, description="Free-text notes")
    state: str = Field(..., description="Order state")
    checkout_completed_at: Optional[datetime] = Field(None, description="Checkout completion time")
    items: List[OrderItemDTO] = Field(default_factory=list, description="Order items")
    adjustments: List[AdjustmentDTO] = Field(default_factory=list, description="Order-level adjustments")
    items_total: int = Field(..., description="Sum of item totals")
    adjustments_total: int = Field(..., description="Sum of order-level adjustments")
    total: int = Field(..., ge=0, description="Grand total in minor units")
    total_quantity: int = Field(..., ge=0, description="Sum of item quantities")

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            number=order.number,
            notes=order.notes,
            state=order.state,
            checkout_completed_at=order.checkout_completed_at,
            items=[OrderItemDTO.from_entity(item) for item in order.items],
            adjustments=[AdjustmentDTO.from_entity(a) for a in order.get_adjustments()],
            items_total=order.items_total,
            adjustments_total=order.adjustments_total,
            total=order.total,
            total_quantity=order.get_total_quantity(),
        )


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    total: int = Field(..., ge=0, description="Total count")

    model_config = {"frozen": True}


class CreateCartRequest(BaseModel):
    """Request DTO for opening a cart."""

    number: Optional[str] = Field(None, description="Order reference")
    notes: Optional[str] = Field(None, description="Free-text notes")

    model_config = {"frozen": True}


class AddAdjustmentRequest(BaseModel):
    """Request DTO for attaching an adjustment."""

    type: str = Field(..., min_length=1, description="Adjustment type tag")
    amount: int = Field(..., description="Signed amount in minor units")
    label: Optional[str] = Field(None, description="Human-readable label")
    neutral: bool = Field(default=False)
    locked: bool = Field(default=False)
    origin_code: Optional[str] = Field(None)
    details: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def to_entity(self) -> Adjustment:
        return Adjustment(
            type=self.type,
            amount=self.amount,
            label=self.label,
            neutral=self.neutral,
            locked=self.locked,
            origin_code=self.origin_code,
            details=dict(self.details),
        )


class AddItemRequest(BaseModel):
    """Request DTO for adding a priced line item."""

    product_code: Optional[str] = Field(None, description="Product code")
    name: Optional[str] = Field(None, description="Product name")
    quantity: int = Field(..., ge=0, description="Quantity ordered")
    unit_price: int = Field(..., description="Unit price in minor units")
    adjustments: List[AddAdjustmentRequest] = Field(
        default_factory=list, description="Item-level adjustments"
    )

    model_config = {"frozen": True}

    def to_entity(self) -> OrderItem:
        item = OrderItem(
            quantity=self.quantity,
            unit_price=self.unit_price,
            product_code=self.product_code,
            name=self.name,
        )
        for adjustment in self.adjustments:
            item.add_adjustment(adjustment.to_entity())
        return item
