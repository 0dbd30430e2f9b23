"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart
from storefront.exceptions import (
    CheckoutSubmissionFailed,
    ExceedsAvailableStock,
    InsufficientStock,
    InvalidTransition,
)
from storefront.inventory.adjustment import SetStockLevel
from storefront.inventory.ledger import get_stock

_ERROR_CLASSES = {
    "exceeding stock": ExceedsAvailableStock,
    "insufficient stock": InsufficientStock,
    "an invalid transition": InvalidTransition,
    "a failed submission": CheckoutSubmissionFailed,
    "invalid": ValidationError,
}


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def shopper():
    return "shopper-001"


@pytest.fixture()
def outcome():
    """Container for the order id and any captured domain error."""
    return {"order_id": None, "exc": None}


def shopper_cart(shopper):
    return current_domain.repository_for(ShoppingCart).for_user(shopper)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('product "{product_id}" has {quantity:d} units in stock'))
def product_has_stock(product_id, quantity):
    current_domain.process(SetStockLevel(product_id=product_id, quantity=quantity), asynchronous=False)


@given(parsers.cfparse('the shopper has {quantity:d} of "{product_id}" in the cart'))
def shopper_has_items(shopper, product_id, quantity):
    current_domain.process(
        AddToCart(user_key=shopper, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the request is refused as {kind}"))
def request_refused(outcome, kind):
    assert isinstance(outcome["exc"], _ERROR_CLASSES[kind])


@then(parsers.cfparse('"{product_id}" has {quantity:d} units in stock'))
def stock_level_is(product_id, quantity):
    assert get_stock(product_id) == quantity


@then(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def cart_holds(shopper, product_id, quantity):
    assert shopper_cart(shopper).quantity_of(product_id) == quantity


@then("the cart is empty")
def cart_is_empty(shopper):
    assert len(shopper_cart(shopper).items) == 0
