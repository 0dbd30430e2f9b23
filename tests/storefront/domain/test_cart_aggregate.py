"""Tests for the ShoppingCart aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.cart.cart import ShoppingCart
from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartItemSelectionToggled,
    CartLinesCheckedOut,
    CartQuantityUpdated,
    CartSelectionChanged,
)
from storefront.cart.pricing import RatePricing
from storefront.exceptions import ExceedsAvailableStock, NotFound


def _make_cart():
    return ShoppingCart.create(user_key="user-001")


class TestCreate:
    def test_new_cart_is_empty(self):
        cart = _make_cart()
        assert cart.user_key == "user-001"
        assert len(cart.items) == 0
        assert cart.created_at is not None


class TestAddItem:
    def test_add_item_creates_selected_line(self):
        cart = _make_cart()
        cart.add_item("prod-001", 2, available=10)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].selected is True

    def test_add_item_returns_line_id(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 1, available=10)
        assert item_id == str(cart.items[0].id)

    def test_add_same_product_increments_line(self):
        cart = _make_cart()
        first = cart.add_item("prod-001", 2, available=10)
        second = cart.add_item("prod-001", 3, available=10)
        assert first == second
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_add_up_to_exact_stock(self):
        cart = _make_cart()
        cart.add_item("prod-001", 10, available=10)
        assert cart.quantity_of("prod-001") == 10

    def test_add_beyond_stock_fails(self):
        cart = _make_cart()
        cart.add_item("prod-001", 7, available=10)
        with pytest.raises(ExceedsAvailableStock) as exc:
            cart.add_item("prod-001", 5, available=10)
        assert exc.value.in_cart == 7
        assert exc.value.max_addable == 3

    def test_failed_add_leaves_cart_unchanged(self):
        cart = _make_cart()
        cart.add_item("prod-001", 7, available=10)
        with pytest.raises(ExceedsAvailableStock):
            cart.add_item("prod-001", 5, available=10)
        assert cart.quantity_of("prod-001") == 7

    def test_add_out_of_stock_product_fails(self):
        cart = _make_cart()
        with pytest.raises(ExceedsAvailableStock):
            cart.add_item("prod-001", 1, available=0)
        assert len(cart.items) == 0

    def test_add_rejects_non_positive_quantity(self):
        cart = _make_cart()
        with pytest.raises(ValidationError):
            cart.add_item("prod-001", 0, available=10)

    def test_add_item_raises_event(self):
        cart = _make_cart()
        cart.add_item("prod-001", 2, available=10)
        cart.add_item("prod-001", 1, available=10)
        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(events) == 2
        assert events[-1].quantity == 1
        assert events[-1].line_quantity == 3


class TestMaxAddable:
    def test_max_addable_for_untouched_product(self):
        cart = _make_cart()
        assert cart.max_addable("prod-001", available=10) == 10

    def test_max_addable_accounts_for_cart_line(self):
        cart = _make_cart()
        cart.add_item("prod-001", 7, available=10)
        assert cart.max_addable("prod-001", available=10) == 3

    def test_max_addable_never_negative(self):
        cart = _make_cart()
        cart.add_item("prod-001", 7, available=10)
        # Stock fell after the line was added
        assert cart.max_addable("prod-001", available=4) == 0

    @pytest.mark.parametrize("in_cart", [0, 1, 5, 9, 10])
    def test_max_addable_plus_in_cart_equals_available(self, in_cart):
        cart = _make_cart()
        if in_cart:
            cart.add_item("prod-001", in_cart, available=10)
        assert cart.max_addable("prod-001", available=10) + cart.quantity_of("prod-001") == 10


class TestUpdateQuantity:
    def test_update_quantity(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 1, available=10)
        applied = cart.update_item_quantity(item_id, 5, available=10)
        assert applied == 5
        assert cart.items[0].quantity == 5

    def test_update_above_stock_is_clamped(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 1, available=4)
        applied = cart.update_item_quantity(item_id, 9, available=4)
        assert applied == 4
        assert cart.items[0].quantity == 4

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_update_below_one_is_rejected(self, quantity):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 2, available=10)
        with pytest.raises(ValidationError):
            cart.update_item_quantity(item_id, quantity, available=10)
        assert cart.items[0].quantity == 2

    def test_update_when_stock_gone_fails(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 2, available=10)
        with pytest.raises(ExceedsAvailableStock):
            cart.update_item_quantity(item_id, 1, available=0)
        assert cart.items[0].quantity == 2

    def test_update_unknown_line(self):
        cart = _make_cart()
        with pytest.raises(NotFound):
            cart.update_item_quantity("missing", 1, available=10)

    def test_update_raises_event(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 1, available=10)
        cart.update_item_quantity(item_id, 3, available=10)
        event = next(e for e in cart._events if isinstance(e, CartQuantityUpdated))
        assert event.previous_quantity == 1
        assert event.new_quantity == 3


class TestDecreaseQuantity:
    def test_partial_decrease(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 5, available=10)
        assert cart.decrease_item_quantity(item_id, 2) == 3
        assert cart.items[0].quantity == 3

    def test_decrease_to_zero_removes_line(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 2, available=10)
        assert cart.decrease_item_quantity(item_id, 2) == 0
        assert len(cart.items) == 0
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_decrease_below_zero_is_rejected(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 2, available=10)
        with pytest.raises(ValidationError):
            cart.decrease_item_quantity(item_id, 3)
        assert cart.items[0].quantity == 2


class TestSelection:
    def test_toggle_flips_flag(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 1, available=10)
        assert cart.toggle_selected(item_id) is False
        assert cart.toggle_selected(item_id) is True

    def test_toggle_raises_event(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 1, available=10)
        cart.toggle_selected(item_id)
        event = next(e for e in cart._events if isinstance(e, CartItemSelectionToggled))
        assert event.selected is False

    def test_selected_items(self):
        cart = _make_cart()
        keep = cart.add_item("prod-001", 1, available=10)
        drop = cart.add_item("prod-002", 1, available=10)
        cart.toggle_selected(drop)
        assert [str(i.id) for i in cart.selected_items()] == [keep]

    def test_select_all(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, available=10)
        item_id = cart.add_item("prod-002", 1, available=10)
        cart.toggle_selected(item_id)
        assert cart.select_all(True) == 1
        assert all(item.selected for item in cart.items)
        assert any(isinstance(e, CartSelectionChanged) for e in cart._events)

    def test_deselect_all(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, available=10)
        cart.add_item("prod-002", 1, available=10)
        assert cart.select_all(False) == 2
        assert cart.selected_items() == []


class TestRemoveAndClear:
    def test_remove_item(self):
        cart = _make_cart()
        item_id = cart.add_item("prod-001", 1, available=10)
        cart.remove_item(item_id)
        assert len(cart.items) == 0

    def test_remove_unknown_item(self):
        cart = _make_cart()
        with pytest.raises(NotFound):
            cart.remove_item("missing")

    def test_clear(self):
        cart = _make_cart()
        cart.add_item("prod-001", 1, available=10)
        cart.add_item("prod-002", 2, available=10)
        assert cart.clear() == 2
        assert len(cart.items) == 0
        event = next(e for e in cart._events if isinstance(e, CartCleared))
        assert event.items_removed == 2


class TestTotals:
    def test_totals_cover_selected_lines_only(self):
        cart = _make_cart()
        cart.add_item("prod-001", 2, available=10)
        skipped = cart.add_item("prod-002", 1, available=10)
        cart.toggle_selected(skipped)

        totals = cart.compute_totals({"prod-001": 500.0, "prod-002": 999.0}, RatePricing())
        assert totals.subtotal == pytest.approx(1000.0)
        assert totals.shipping_fee == pytest.approx(100.0)
        assert totals.tax_fee == pytest.approx(120.0)
        assert totals.total == pytest.approx(1220.0)
        assert totals.item_count == 2


class TestCheckOutItems:
    def test_committed_lines_are_dropped(self):
        cart = _make_cart()
        bought = cart.add_item("prod-001", 2, available=10)
        kept = cart.add_item("prod-002", 1, available=10)
        cart.check_out_items([bought], order_id="ord-001")
        assert [str(i.id) for i in cart.items] == [kept]

        event = next(e for e in cart._events if isinstance(e, CartLinesCheckedOut))
        assert event.order_id == "ord-001"
