"""Tests for the Adjustment entity."""
from ordering.domain.entities import Adjustment, Order, OrderItem


class TestAdjustment:
    """Adjustment flags and owner recalculation."""

    def test_defaults(self):
        adjustment = Adjustment(type="tax", amount=100)

        assert adjustment.is_neutral() is False
        assert adjustment.is_locked() is False
        assert adjustment.adjustable is None
        assert adjustment.details == {}

    def test_identity_equality(self):
        first = Adjustment(type="tax", amount=100)
        second = Adjustment(type="tax", amount=100)

        assert first == first
        assert first != second
        assert len({first, second}) == 2

    def test_charge_and_credit(self):
        assert Adjustment(type="promotion", amount=-50).is_charge()
        assert not Adjustment(type="promotion", amount=-50).is_credit()
        assert Adjustment(type="tax", amount=50).is_credit()
        zero = Adjustment(type="tax", amount=0)
        assert not zero.is_charge() and not zero.is_credit()

    def test_lock_and_unlock(self):
        adjustment = Adjustment(type="tax", amount=10)
        adjustment.lock()
        assert adjustment.is_locked()
        adjustment.unlock()
        assert not adjustment.is_locked()

    def test_set_amount_recalculates_order(self):
        order = Order()
        adjustment = Adjustment(type="shipping", amount=500)
        order.add_adjustment(adjustment)

        adjustment.set_amount(700)

        assert order.adjustments_total == 700
        assert order.total == 700

    def test_set_amount_recalculates_item(self):
        item = OrderItem(quantity=2, unit_price=1000)
        adjustment = Adjustment(type="promotion", amount=-300)
        item.add_adjustment(adjustment)

        adjustment.set_amount(-500)

        assert item.adjustments_total == -500
        assert item.total == 1500

    def test_set_neutral_recalculates_owner(self):
        order = Order()
        adjustment = Adjustment(type="promotion", amount=-200)
        order.add_adjustment(adjustment)
        assert order.adjustments_total == -200

        adjustment.set_neutral(True)
        assert order.adjustments_total == 0

        adjustment.set_neutral(False)
        assert order.adjustments_total == -200

    def test_detached_setters_do_not_fail(self):
        adjustment = Adjustment(type="tax", amount=1)
        adjustment.set_amount(5)
        adjustment.set_neutral(True)

        assert adjustment.amount == 5
        assert adjustment.neutral is True

    def test_dict_roundtrip_is_detached(self):
        order = Order()
        adjustment = Adjustment(
            type="promotion",
            amount=-150,
            label="Spring sale",
            locked=True,
            origin_code="SPRING",
            details={"percent": 10},
            id="adj-1",
        )
        order.add_adjustment(adjustment)

        restored = Adjustment.from_dict(adjustment.to_dict())

        assert restored is not adjustment
        assert restored.adjustable is None
        assert restored.to_dict() == adjustment.to_dict()
