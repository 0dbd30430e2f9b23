"""Tests for the Order aggregate and its state machine."""

import json

import pytest
from protean.exceptions import ValidationError

from storefront.cart.pricing import Totals
from storefront.exceptions import InvalidTransition
from storefront.order.events import OrderCancelled, OrderDelivered, OrderPlaced
from storefront.order.order import Order, OrderStatus

ITEMS = [
    {"product_id": "prod-001", "name": "Keyboard", "quantity": 2, "unit_price": 250.0},
    {"product_id": "prod-002", "name": "Mouse", "quantity": 5, "unit_price": 100.0},
]
TOTALS = Totals(subtotal=1000.0, shipping_fee=100.0, tax_fee=120.0, total=1220.0, item_count=7)


def _place(**overrides):
    kwargs = {
        "user_key": "user-001",
        "items_data": ITEMS,
        "totals": TOTALS,
        "remote_order_id": "AT-00000001",
        "shipping_address": "1 Main St",
        "shipping_city": "Springfield",
    }
    kwargs.update(overrides)
    return Order.place(**kwargs)


class TestPlace:
    def test_new_order_is_for_shipping(self):
        order = _place()
        assert order.status == OrderStatus.FOR_SHIPPING.value
        assert order.is_active

    def test_items_and_pricing_are_captured(self):
        order = _place()
        assert len(order.items) == 2
        assert order.item_count == 7
        assert order.pricing.subtotal == 1000.0
        assert order.total == 1220.0
        assert order.remote_order_id == "AT-00000001"

    def test_order_needs_items(self):
        with pytest.raises(ValidationError):
            _place(items_data=[])

    def test_place_raises_event(self):
        order = _place()
        event = next(e for e in order._events if isinstance(e, OrderPlaced))
        assert event.order_id == str(order.id)
        assert json.loads(event.items)[0]["product_id"] == "prod-001"
        assert event.total == 1220.0


class TestConfirmDelivery:
    def test_deliver_from_for_shipping(self):
        order = _place()
        order.confirm_delivery()
        assert order.status == OrderStatus.DELIVERED.value
        assert order.delivered_at is not None
        assert not order.is_active
        assert any(isinstance(e, OrderDelivered) for e in order._events)

    def test_cannot_deliver_twice(self):
        order = _place()
        order.confirm_delivery()
        with pytest.raises(InvalidTransition):
            order.confirm_delivery()
        assert order.status == OrderStatus.DELIVERED.value

    def test_cannot_deliver_cancelled_order(self):
        order = _place()
        order.cancel()
        with pytest.raises(InvalidTransition) as exc:
            order.confirm_delivery()
        assert exc.value.current == "Cancelled"
        assert exc.value.target == "Delivered"


class TestCancel:
    def test_cancel_from_for_shipping(self):
        order = _place()
        order.cancel()
        assert order.status == OrderStatus.CANCELLED.value
        assert order.cancelled_at is not None

    def test_cancel_returns_quantities_to_restock(self):
        order = _place()
        assert sorted(order.cancel()) == [("prod-001", 2), ("prod-002", 5)]

    def test_cancel_raises_event(self):
        order = _place()
        order.cancel()
        event = next(e for e in order._events if isinstance(e, OrderCancelled))
        assert {line["product_id"] for line in json.loads(event.items)} == {"prod-001", "prod-002"}

    def test_cannot_cancel_delivered_order(self):
        order = _place()
        order.confirm_delivery()
        with pytest.raises(InvalidTransition):
            order.cancel()
        assert order.status == OrderStatus.DELIVERED.value

    def test_cannot_cancel_twice(self):
        order = _place()
        order.cancel()
        with pytest.raises(InvalidTransition):
            order.cancel()
