"""
Adjustment aggregation shared by Order and OrderItem.

The host class provides:
- `_adjustments`: ordered list of Adjustment (identity membership)
- `_adjustments_total`: cached sum of non-neutral amounts
- `_on_adjustments_total_changed()`: recomputes the host's own total

Unfiltered totals are cached and O(1). Filtered and recursive totals are
always summed on demand.
"""
from typing import Iterable, List, Optional

from .adjustment import Adjustment


def sum_adjustments(adjustments: Iterable[Adjustment]) -> int:
    """Sum amounts of non-neutral adjustments."""
    return sum(adjustment.amount for adjustment in adjustments if not adjustment.neutral)


class AdjustableMixin:
    """Adjustment collection with an incrementally maintained total."""

    _adjustments: List[Adjustment]
    _adjustments_total: int

    def _on_adjustments_total_changed(self) -> None:
        raise NotImplementedError

    def get_adjustments(self, type: Optional[str] = None) -> List[Adjustment]:
        """
        Get adjustments, optionally only those of one type.

        Returns:
            Snapshot list; mutating it does not affect the collection
        """
        if type is None:
            return list(self._adjustments)

        return [adjustment for adjustment in self._adjustments if adjustment.type == type]

    def has_adjustment(self, adjustment: Adjustment) -> bool:
        return any(existing is adjustment for existing in self._adjustments)

    def add_adjustment(self, adjustment: Adjustment) -> None:
        """
        Attach adjustment (no-op when already attached here).

        An adjustment attached to another adjustable is detached from it
        first. A locked one can't be detached and stays where it is.
        """
        if self.has_adjustment(adjustment):
            return

        previous = adjustment.adjustable
        if previous is not None:
            previous.remove_adjustment(adjustment)
            if adjustment.adjustable is not None:
                return

        self._adjustments.append(adjustment)
        self._add_to_adjustments_total(adjustment)
        adjustment.adjustable = self

    def remove_adjustment(self, adjustment: Adjustment) -> None:
        """Detach adjustment. Locked or absent adjustments are left alone."""
        if adjustment.locked or not self.has_adjustment(adjustment):
            return

        self._adjustments = [
            existing for existing in self._adjustments if existing is not adjustment
        ]
        self._subtract_from_adjustments_total(adjustment)
        adjustment.adjustable = None

    def remove_adjustments(self, type: Optional[str] = None) -> None:
        """Remove every unlocked adjustment matching the type filter."""
        for adjustment in self.get_adjustments(type):
            if adjustment.locked:
                continue

            self.remove_adjustment(adjustment)

    def get_adjustments_total(self, type: Optional[str] = None) -> int:
        """
        Total of non-neutral adjustments.

        Without a filter this is the cached value; with a filter it is
        summed over the matching adjustments on every call.
        """
        if type is None:
            return self._adjustments_total

        return sum_adjustments(self.get_adjustments(type))

    @property
    def adjustments_total(self) -> int:
        return self._adjustments_total

    def get_adjustments_recursively(self, type: Optional[str] = None) -> List[Adjustment]:
        return self.get_adjustments(type)

    def get_adjustments_total_recursively(self, type: Optional[str] = None) -> int:
        return sum_adjustments(self.get_adjustments_recursively(type))

    def remove_adjustments_recursively(self, type: Optional[str] = None) -> None:
        self.remove_adjustments(type)

    def recalculate_adjustments_total(self) -> None:
        """Re-sum the cached total from the live collection."""
        self._adjustments_total = sum_adjustments(self._adjustments)
        self._on_adjustments_total_changed()

    def _add_to_adjustments_total(self, adjustment: Adjustment) -> None:
        if not adjustment.neutral:
            self._adjustments_total += adjustment.amount
            self._on_adjustments_total_changed()

    def _subtract_from_adjustments_total(self, adjustment: Adjustment) -> None:
        if not adjustment.neutral:
            self._adjustments_total -= adjustment.amount
            self._on_adjustments_total_changed()

    def _attach_adjustments(self, adjustments: Iterable[Adjustment]) -> None:
        """Populate the collection directly (loader path), then re-sum."""
        self._adjustments = []
        for adjustment in adjustments:
            if self.has_adjustment(adjustment):
                continue
            self._adjustments.append(adjustment)
            adjustment.adjustable = self
        self.recalculate_adjustments_total()
