"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from .adjustable import AdjustableMixin, sum_adjustments
from .adjustment import Adjustment
from .order_item import OrderItem
from ..enums import OrderState


logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Order(AdjustableMixin):
    """
    Order aggregate root: items, order-level adjustments and cached totals.

    Invariants after every mutating call:
    - items_total == sum(item.total for item in items)
    - adjustments_total == sum of non-neutral order-level adjustment amounts
    - total == max(0, items_total + adjustments_total)

    Only the grand total is floored at zero; items_total and
    adjustments_total keep their signed values.

    The aggregate validates nothing about `state`; transitions belong to
    the checkout workflow.
    """
    number: Optional[str] = None
    notes: Optional[str] = None
    state: str = OrderState.CART.value
    checkout_completed_at: Optional[datetime] = None

    _id: Optional[str] = field(default=None, init=False, repr=False)
    _items: List[OrderItem] = field(default_factory=list, init=False, repr=False)
    _items_total: int = field(default=0, init=False)
    _adjustments: List[Adjustment] = field(default_factory=list, init=False, repr=False)
    _adjustments_total: int = field(default=0, init=False)
    _total: int = field(default=0, init=False)

    # =========================================================================
    # IDENTITY & SCALAR STATE
    # =========================================================================

    @property
    def id(self) -> Optional[str]:
        return self._id

    def assign_id(self, order_id: str) -> None:
        """
        Store-side identifier assignment.

        Raises:
            ValueError: If a different id was already assigned
        """
        if self._id is not None and self._id != order_id:
            raise ValueError(f"Order id already assigned: {self._id}")
        self._id = order_id

    def get_state(self) -> str:
        return self.state

    def set_state(self, state: str) -> None:
        self.state = state

    def get_checkout_completed_at(self) -> Optional[datetime]:
        return self.checkout_completed_at

    def set_checkout_completed_at(self, checkout_completed_at: Optional[datetime]) -> None:
        self.checkout_completed_at = checkout_completed_at

    def is_checkout_completed(self) -> bool:
        return self.checkout_completed_at is not None

    def complete_checkout(self) -> None:
        """Record checkout completion time. Calling again overwrites it."""
        self.checkout_completed_at = datetime.now(timezone.utc)

    # =========================================================================
    # ITEMS
    # =========================================================================

    @property
    def items(self) -> List[OrderItem]:
        """Snapshot of the items in insertion order."""
        return list(self._items)

    @property
    def items_total(self) -> int:
        return self._items_total

    @property
    def total(self) -> int:
        return self._total

    def has_item(self, item: OrderItem) -> bool:
        return any(existing is item for existing in self._items)

    def count_items(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def add_item(self, item: OrderItem) -> None:
        """Add item and fold its total into items_total (no-op if present)."""
        if self.has_item(item):
            return

        if item.order is not None:
            item.order.remove_item(item)

        self._items_total += item.total
        self._items.append(item)
        item.order = self

        self._recalculate_total()

    def remove_item(self, item: OrderItem) -> None:
        """Remove item and subtract its total (no-op if absent)."""
        if not self.has_item(item):
            return

        self._items = [existing for existing in self._items if existing is not item]
        self._items_total -= item.total
        self._recalculate_total()
        item.order = None

    def clear_items(self) -> None:
        for item in self._items:
            item.order = None
        self._items = []

        self.recalculate_items_total()

    def recalculate_items_total(self) -> None:
        """
        Re-sum items_total from the items' current totals.

        Call after any item's total changed while it was attached
        (repricing, item-level adjustments, quantity changes).
        """
        self._items_total = sum(item.total for item in self._items)
        self._recalculate_total()

    def get_total_quantity(self) -> int:
        return sum(item.quantity for item in self._items)

    # =========================================================================
    # ADJUSTMENTS (order + items)
    # =========================================================================

    def get_adjustments_recursively(self, type: Optional[str] = None) -> List[Adjustment]:
        """Order-level adjustments first, then each item's, in collection order."""
        adjustments = self.get_adjustments(type)
        for item in self._items:
            adjustments.extend(item.get_adjustments_recursively(type))

        return adjustments

    def get_adjustments_total_recursively(self, type: Optional[str] = None) -> int:
        return sum_adjustments(self.get_adjustments_recursively(type))

    def add_adjustment(self, adjustment: Adjustment) -> None:
        """
        Attach an order-level adjustment.

        Taking it from one of this order's items changes that item's
        total, so items_total is re-summed.
        """
        previous = adjustment.adjustable
        super().add_adjustment(adjustment)

        if previous is not None and previous is not self and any(
            item is previous for item in self._items
        ):
            self.recalculate_items_total()

    def remove_adjustments_recursively(self, type: Optional[str] = None) -> None:
        """Remove unlocked matching adjustments from the order and every item."""
        self.remove_adjustments(type)
        for item in self._items:
            item.remove_adjustments_recursively(type)

        self.recalculate_items_total()

    def _on_adjustments_total_changed(self) -> None:
        self._recalculate_total()

    def _recalculate_total(self) -> None:
        """Items total + adjustments total, floored at zero."""
        self._total = self._items_total + self._adjustments_total

        if self._total < 0:
            logger.debug(
                "Order %s total %d clamped to 0", self._id, self._total
            )
            self._total = 0

    # =========================================================================
    # LOADING / SNAPSHOTS
    # =========================================================================

    @classmethod
    def reconstitute(
        cls,
        id: Optional[str],
        items: Iterable[OrderItem] = (),
        adjustments: Iterable[Adjustment] = (),
        number: Optional[str] = None,
        notes: Optional[str] = None,
        state: str = OrderState.CART.value,
        checkout_completed_at: Optional[datetime] = None,
    ) -> "Order":
        """
        Rebuild an order graph from stored state.

        Collections are populated directly, back-references set, and
        both cached totals recalculated from scratch.
        """
        order = cls(
            number=number,
            notes=notes,
            state=state,
            checkout_completed_at=checkout_completed_at,
        )
        order._id = id

        for item in items:
            if order.has_item(item):
                continue
            order._items.append(item)
            item.order = order

        order.recalculate_items_total()
        order._attach_adjustments(adjustments)
        return order

    def to_snapshot_dict(self) -> Dict[str, Any]:
        """
        Serialize the full order graph to a dictionary.

        Returns:
            Dictionary of JSON-compatible values
        """
        return {
            "id": self._id,
            "number": self.number,
            "notes": self.notes,
            "state": self.state,
            "checkout_completed_at": (
                self.checkout_completed_at.isoformat()
                if self.checkout_completed_at
                else None
            ),
            "items_total": self._items_total,
            "adjustments_total": self._adjustments_total,
            "total": self._total,
            "items": [item.to_dict() for item in self._items],
            "adjustments": [adjustment.to_dict() for adjustment in self._adjustments],
        }

    @classmethod
    def from_snapshot_dict(cls, snapshot_data: Dict[str, Any]) -> "Order":
        """
        Restore Order from snapshot dictionary.

        Stored totals are ignored; they are recalculated from the
        restored collections.
        """
        completed_at = snapshot_data.get("checkout_completed_at")

        return cls.reconstitute(
            id=snapshot_data.get("id"),
            items=[OrderItem.from_dict(item) for item in snapshot_data.get("items", [])],
            adjustments=[
                Adjustment.from_dict(adjustment)
                for adjustment in snapshot_data.get("adjustments", [])
            ],
            number=snapshot_data.get("number"),
            notes=snapshot_data.get("notes"),
            state=snapshot_data.get("state", OrderState.CART.value),
            checkout_completed_at=(
                datetime.fromisoformat(completed_at) if completed_at else None
            ),
        )
