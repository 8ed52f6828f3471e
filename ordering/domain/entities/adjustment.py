"""
Adjustment entity.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .adjustable import AdjustableMixin


@dataclass(eq=False)
class Adjustment:
    """
    Signed monetary modifier attached to an Order or an OrderItem.

    Amounts are integers in minor currency units (e.g. cents):
    - Negative: discounts, promotions (a "charge" against the total)
    - Positive: taxes, shipping fees (a "credit" to the total)

    Equality is identity: two adjustments with identical fields are
    still two different adjustments.

    Attributes:
        type: Tag used for filtering ("tax", "promotion", "shipping", ...)
        amount: Signed amount in minor units
        label: Human-readable description
        neutral: Excluded from totals when True (informational only)
        locked: Survives generic and bulk removal when True
        origin_code: Code of whatever produced the adjustment (promotion code, tax rate)
        details: Free-form metadata
    """
    type: str
    amount: int = 0
    label: Optional[str] = None
    neutral: bool = False
    locked: bool = False
    origin_code: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    # Non-owning back-reference, maintained by the adjustable
    adjustable: Optional["AdjustableMixin"] = field(default=None, init=False, repr=False)

    def is_neutral(self) -> bool:
        return self.neutral

    def is_locked(self) -> bool:
        return self.locked

    def lock(self) -> None:
        self.locked = True

    def unlock(self) -> None:
        self.locked = False

    def is_charge(self) -> bool:
        """Adjustment lowers the total."""
        return self.amount < 0

    def is_credit(self) -> bool:
        """Adjustment raises the total."""
        return self.amount > 0

    def set_amount(self, amount: int) -> None:
        """Change the amount and keep the owner's cached totals in step."""
        self.amount = amount
        if not self.neutral:
            self._recalculate_adjustable()

    def set_neutral(self, neutral: bool) -> None:
        """Toggle neutrality and keep the owner's cached totals in step."""
        if self.neutral == neutral:
            return
        self.neutral = neutral
        self._recalculate_adjustable()

    def _recalculate_adjustable(self) -> None:
        if self.adjustable is not None:
            self.adjustable.recalculate_adjustments_total()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary (without back-reference)."""
        return {
            "id": self.id,
            "type": self.type,
            "amount": self.amount,
            "label": self.label,
            "neutral": self.neutral,
            "locked": self.locked,
            "origin_code": self.origin_code,
            "details": dict(self.details),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Adjustment":
        """Restore a detached adjustment from `to_dict()` output."""
        return cls(
            id=data.get("id"),
            type=data["type"],
            amount=int(data.get("amount", 0)),
            label=data.get("label"),
            neutral=bool(data.get("neutral", False)),
            locked=bool(data.get("locked", False)),
            origin_code=data.get("origin_code"),
            details=dict(data.get("details") or {}),
        )
