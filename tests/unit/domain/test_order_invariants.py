"""
Invariant checks over random mutation sequences.

After every call:
- item.total == max(0, units_total + sum(non-neutral item amounts))
- items_total == sum(item.total)
- adjustments_total == sum(non-neutral order-level amounts)
- total == max(0, items_total + adjustments_total)
- back-references match collection membership
"""
import random

import pytest

from ordering.domain.entities import Adjustment, Order, OrderItem


def assert_consistent(order: Order, pool_items, pool_adjustments) -> None:
    for item in pool_items:
        assert item.total == max(
            0,
            item.units_total
            + sum(a.amount for a in item.get_adjustments() if not a.neutral),
        )

    assert order.items_total == sum(item.total for item in order.items)
    assert order.adjustments_total == sum(
        a.amount for a in order.get_adjustments() if not a.neutral
    )
    assert order.total == max(0, order.items_total + order.adjustments_total)

    assert len({id(item) for item in order.items}) == order.count_items()
    assert len({id(a) for a in order.get_adjustments()}) == len(order.get_adjustments())

    for item in pool_items:
        assert (item.order is order) == order.has_item(item)
    for adjustment in pool_adjustments:
        assert (adjustment.adjustable is order) == order.has_adjustment(adjustment)
        owners = [item for item in pool_items if item.has_adjustment(adjustment)]
        if adjustment.adjustable is order:
            assert owners == []
        elif adjustment.adjustable is None:
            assert owners == []
        else:
            assert owners == [adjustment.adjustable]


def _random_adjustment(rng: random.Random) -> Adjustment:
    return Adjustment(
        type=rng.choice(["tax", "promotion", "shipping"]),
        amount=rng.randint(-4000, 2000),
        neutral=rng.random() < 0.2,
        locked=rng.random() < 0.2,
    )


def _random_pool(rng: random.Random):
    """Items (some carrying item-level adjustments) plus free adjustments."""
    items = [
        OrderItem(quantity=rng.randint(0, 5), unit_price=rng.randint(0, 5000))
        for _ in range(6)
    ]
    adjustments = [_random_adjustment(rng) for _ in range(8)]

    for item in items:
        for _ in range(rng.randint(0, 2)):
            adjustment = _random_adjustment(rng)
            item.add_adjustment(adjustment)
            adjustments.append(adjustment)

    return items, adjustments


OPERATIONS = [
    "add_item",
    "remove_item",
    "add_adjustment",
    "remove_adjustment",
    "remove_type",
    "remove_recursively",
    "add_to_item",
    "clear_items",
]


@pytest.mark.parametrize("seed", range(25))
def test_invariants_hold_after_every_operation(seed):
    rng = random.Random(seed)
    items, adjustments = _random_pool(rng)
    order = Order()

    for _ in range(80):
        operation = rng.choice(OPERATIONS)
        if operation == "add_item":
            order.add_item(rng.choice(items))
        elif operation == "remove_item":
            order.remove_item(rng.choice(items))
        elif operation == "add_adjustment":
            # may take the adjustment away from one of the order's items
            order.add_adjustment(rng.choice(adjustments))
        elif operation == "remove_adjustment":
            order.remove_adjustment(rng.choice(adjustments))
        elif operation == "remove_type":
            order.remove_adjustments(rng.choice([None, "tax", "promotion"]))
        elif operation == "remove_recursively":
            order.remove_adjustments_recursively(rng.choice([None, "tax", "promotion"]))
        elif operation == "add_to_item":
            rng.choice(items).add_adjustment(rng.choice(adjustments))
            # item-level changes are reconciled by the caller
            order.recalculate_items_total()
        else:
            order.clear_items()

        assert_consistent(order, items, adjustments)


@pytest.mark.parametrize("seed", range(10))
def test_recalculation_matches_incremental_totals(seed):
    rng = random.Random(seed)
    items, adjustments = _random_pool(rng)
    order = Order()
    for item in items:
        if rng.random() < 0.7:
            order.add_item(item)
    for adjustment in adjustments:
        if rng.random() < 0.5:
            order.add_adjustment(adjustment)
    for adjustment in adjustments:
        if rng.random() < 0.3:
            order.remove_adjustment(adjustment)
    order.remove_adjustments_recursively(rng.choice(["tax", "promotion"]))

    incremental = (order.items_total, order.adjustments_total, order.total)

    for item in order.items:
        item.recalculate_adjustments_total()
    order.recalculate_items_total()
    order.recalculate_adjustments_total()

    assert (order.items_total, order.adjustments_total, order.total) == incremental


def test_locked_adjustments_never_removed_by_bulk_calls():
    rng = random.Random(7)
    items, adjustments = _random_pool(rng)
    order = Order()
    for item in items:
        order.add_item(item)
    free = adjustments[:8]
    for adjustment in free:
        order.add_adjustment(adjustment)
    locked = [a for a in free if a.locked]
    locked_on_items = {id(item): [a for a in item.get_adjustments() if a.locked] for item in items}

    order.remove_adjustments()
    order.remove_adjustments_recursively()
    for adjustment in adjustments:
        order.remove_adjustment(adjustment)

    assert order.get_adjustments() == locked
    for item in items:
        assert item.get_adjustments() == locked_on_items[id(item)]
    assert_consistent(order, items, adjustments)
