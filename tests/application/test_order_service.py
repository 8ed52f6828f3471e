"""Tests for OrderApplicationService against an in-memory SQLite database."""

import pytest

from ordering.application.dtos import (
    AddAdjustmentRequest,
    AddItemRequest,
    CreateCartRequest,
)
from ordering.application.exceptions import (
    InvalidTransitionError,
    OrderItemNotFoundError,
    OrderNotFoundError,
)
from ordering.application.services import OrderApplicationService
from ordering.application.workflow import OrderTransitions


@pytest.fixture
def service(test_session_factory):
    return OrderApplicationService(test_session_factory)


@pytest.mark.asyncio
async def test_create_cart(service):
    cart = await service.create_cart(CreateCartRequest(number="000001", notes="hi"))

    assert cart.id
    assert cart.state == "cart"
    assert cart.total == 0
    assert cart.checkout_completed_at is None

    fetched = await service.get_order(cart.id)
    assert fetched == cart


@pytest.mark.asyncio
async def test_get_missing_order(service):
    assert await service.get_order("missing") is None

    with pytest.raises(OrderNotFoundError):
        await service.add_item("missing", AddItemRequest(quantity=1, unit_price=1))


@pytest.mark.asyncio
async def test_add_items_and_adjustments(service):
    cart = await service.create_cart(CreateCartRequest())

    order = await service.add_item(
        cart.id,
        AddItemRequest(
            product_code="MUG",
            quantity=2,
            unit_price=1000,
            adjustments=[AddAdjustmentRequest(type="promotion", amount=-200)],
        ),
    )
    assert order.items_total == 1800

    order = await service.add_adjustment(
        cart.id, AddAdjustmentRequest(type="tax", amount=180)
    )
    assert order.adjustments_total == 180
    assert order.total == 1980

    item_id = order.items[0].id
    order = await service.add_adjustment(
        cart.id, AddAdjustmentRequest(type="promotion", amount=-300), item_id=item_id
    )
    assert order.items[0].total == 1500
    assert order.items_total == 1500
    assert order.total == 1680


@pytest.mark.asyncio
async def test_same_product_is_merged(service):
    cart = await service.create_cart(CreateCartRequest())

    await service.add_item(cart.id, AddItemRequest(product_code="MUG", quantity=1, unit_price=500))
    order = await service.add_item(
        cart.id, AddItemRequest(product_code="MUG", quantity=2, unit_price=500)
    )

    assert len(order.items) == 1
    assert order.items[0].quantity == 3
    assert order.items_total == 1500
    assert order.total_quantity == 3


@pytest.mark.asyncio
async def test_same_product_at_another_price_is_a_new_line(service):
    cart = await service.create_cart(CreateCartRequest())

    await service.add_item(cart.id, AddItemRequest(product_code="MUG", quantity=2, unit_price=1000))
    order = await service.add_item(
        cart.id, AddItemRequest(product_code="MUG", quantity=1, unit_price=800)
    )

    assert [(item.quantity, item.unit_price) for item in order.items] == [(2, 1000), (1, 800)]
    assert order.items_total == 2800
    assert order.total == 2800


@pytest.mark.asyncio
async def test_remove_item(service):
    cart = await service.create_cart(CreateCartRequest())
    order = await service.add_item(cart.id, AddItemRequest(quantity=1, unit_price=500))
    order = await service.add_item(cart.id, AddItemRequest(quantity=1, unit_price=700))

    order = await service.remove_item(cart.id, order.items[0].id)

    assert [item.unit_price for item in order.items] == [700]
    assert order.items_total == 700

    with pytest.raises(OrderItemNotFoundError):
        await service.remove_item(cart.id, "missing")


@pytest.mark.asyncio
async def test_remove_adjustments_keeps_locked(service):
    cart = await service.create_cart(CreateCartRequest())
    order = await service.add_item(
        cart.id,
        AddItemRequest(
            quantity=1,
            unit_price=1000,
            adjustments=[AddAdjustmentRequest(type="promotion", amount=-100)],
        ),
    )
    await service.add_adjustment(cart.id, AddAdjustmentRequest(type="promotion", amount=-50))
    await service.add_adjustment(
        cart.id, AddAdjustmentRequest(type="shipping", amount=500, locked=True)
    )

    order = await service.remove_adjustments(cart.id, type="promotion")
    assert [a.type for a in order.adjustments] == ["shipping"]
    assert order.items[0].total == 900

    order = await service.remove_adjustments(cart.id, recursive=True)
    assert [a.type for a in order.adjustments] == ["shipping"]
    assert order.items[0].adjustments == []
    assert order.items_total == 1000
    assert order.total == 1500


@pytest.mark.asyncio
async def test_complete_checkout(service):
    cart = await service.create_cart(CreateCartRequest())
    await service.add_item(cart.id, AddItemRequest(quantity=1, unit_price=100))

    order = await service.complete_checkout(cart.id)

    assert order.state == "new"
    assert order.checkout_completed_at is not None

    with pytest.raises(InvalidTransitionError):
        await service.complete_checkout(cart.id)


@pytest.mark.asyncio
async def test_apply_transition(service):
    cart = await service.create_cart(CreateCartRequest())

    with pytest.raises(InvalidTransitionError):
        await service.apply_transition(cart.id, OrderTransitions.CANCEL)
    assert (await service.get_order(cart.id)).state == "cart"

    await service.complete_checkout(cart.id)
    order = await service.apply_transition(cart.id, OrderTransitions.CANCEL)

    assert order.state == "cancelled"


@pytest.mark.asyncio
async def test_list_orders(service):
    await service.create_cart(CreateCartRequest(number="A"))
    await service.create_cart(CreateCartRequest(number="B"))

    listing = await service.list_orders()

    assert listing.total == 2
    assert sorted(o.number for o in listing.orders) == ["A", "B"]
