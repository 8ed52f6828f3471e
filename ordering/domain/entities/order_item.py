"""
Order line item.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, TYPE_CHECKING

from .adjustable import AdjustableMixin
from .adjustment import Adjustment

if TYPE_CHECKING:
    from .order import Order


@dataclass(eq=False)
class OrderItem(AdjustableMixin):
    """
    Line item within an order, owning its item-level adjustments.

    total = max(0, quantity * unit_price + adjustments_total)

    The item keeps its own total current. It never reaches into its
    order: after changing an attached item, call
    `order.recalculate_items_total()`.
    """
    quantity: int = 1
    unit_price: int = 0
    product_code: Optional[str] = None
    name: Optional[str] = None
    id: Optional[str] = None

    # Non-owning back-reference, maintained by Order
    order: Optional["Order"] = field(default=None, init=False, repr=False)

    _adjustments: List[Adjustment] = field(default_factory=list, init=False, repr=False)
    _adjustments_total: int = field(default=0, init=False)
    _total: int = field(default=0, init=False)

    def __post_init__(self):
        if self.quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {self.quantity}")
        self.recalculate_total()

    @property
    def total(self) -> int:
        return self._total

    @property
    def units_total(self) -> int:
        return self.quantity * self.unit_price

    def set_quantity(self, quantity: int) -> None:
        if quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {quantity}")
        self.quantity = quantity
        self.recalculate_total()

    def set_unit_price(self, unit_price: int) -> None:
        self.unit_price = unit_price
        self.recalculate_total()

    def recalculate_total(self) -> None:
        """Units total + adjustments total, floored at zero."""
        self._total = max(0, self.units_total + self._adjustments_total)

    def _on_adjustments_total_changed(self) -> None:
        self.recalculate_total()

    def equals(self, other: "OrderItem") -> bool:
        """Items for the same product at the same unit price can share one line."""
        return other is self or (
            self.product_code is not None
            and self.product_code == other.product_code
            and self.unit_price == other.unit_price
        )

    def merge(self, other: "OrderItem") -> None:
        """
        Fold another line for the same product into this one.

        Only the quantity is taken over. A line carrying its own
        adjustments is not merged.
        """
        if other is self or not self.equals(other) or other._adjustments:
            return
        self.set_quantity(self.quantity + other.quantity)

    # =========================================================================
    # LOADING / SNAPSHOTS
    # =========================================================================

    @classmethod
    def reconstitute(
        cls,
        id: Optional[str],
        quantity: int,
        unit_price: int,
        adjustments: Iterable[Adjustment] = (),
        product_code: Optional[str] = None,
        name: Optional[str] = None,
    ) -> "OrderItem":
        """
        Rebuild an item from stored state.

        Adjustments are attached directly and every cached total is
        recalculated from them.
        """
        item = cls(
            id=id,
            quantity=quantity,
            unit_price=unit_price,
            product_code=product_code,
            name=name,
        )
        item._attach_adjustments(adjustments)
        return item

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "product_code": self.product_code,
            "name": self.name,
            "total": self._total,
            "adjustments": [adjustment.to_dict() for adjustment in self._adjustments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrderItem":
        return cls.reconstitute(
            id=data.get("id"),
            quantity=int(data["quantity"]),
            unit_price=int(data["unit_price"]),
            adjustments=[Adjustment.from_dict(a) for a in data.get("adjustments", [])],
            product_code=data.get("product_code"),
            name=data.get("name"),
        )
