"""Tests for checkout pricing policies."""

import pytest

from storefront.cart.pricing import (
    FlatFeePricing,
    PricedLine,
    RatePricing,
    get_pricing_policy,
    policy_from_settings,
    set_pricing_policy,
)
from storefront.config import Settings, set_settings


class TestRatePricing:
    def test_default_rates(self):
        totals = RatePricing().totals([PricedLine(unit_price=1000.0, quantity=1)])
        assert totals.subtotal == pytest.approx(1000.0)
        assert totals.shipping_fee == pytest.approx(100.0)
        assert totals.tax_fee == pytest.approx(120.0)
        assert totals.total == pytest.approx(1220.0)

    def test_multiple_lines(self):
        totals = RatePricing().totals(
            [
                PricedLine(unit_price=250.0, quantity=2),
                PricedLine(unit_price=100.0, quantity=5),
            ]
        )
        assert totals.subtotal == pytest.approx(1000.0)
        assert totals.item_count == 7

    def test_empty_selection(self):
        totals = RatePricing().totals([])
        assert totals.subtotal == 0
        assert totals.total == 0
        assert totals.item_count == 0

    def test_amounts_are_rounded_to_cents(self):
        totals = RatePricing(shipping_rate=0.1, tax_rate=0.12).totals([PricedLine(unit_price=33.33, quantity=1)])
        assert totals.shipping_fee == 3.33
        assert totals.tax_fee == 4.0


class TestFlatFeePricing:
    def test_flat_shipping_fee(self):
        totals = FlatFeePricing(flat_fee=50.0, tax_rate=0.12).totals([PricedLine(unit_price=1000.0, quantity=1)])
        assert totals.shipping_fee == pytest.approx(50.0)
        assert totals.total == pytest.approx(1170.0)

    def test_no_shipping_fee_for_empty_selection(self):
        totals = FlatFeePricing(flat_fee=50.0).totals([])
        assert totals.shipping_fee == 0
        assert totals.total == 0


class TestPolicySelection:
    def test_rates_from_settings(self):
        policy = policy_from_settings(Settings(shipping_rate=0.05, tax_rate=0.2))
        assert isinstance(policy, RatePricing)
        assert policy.shipping_rate == 0.05

    def test_flat_fee_from_settings(self):
        policy = policy_from_settings(Settings(flat_shipping_fee=75.0))
        assert isinstance(policy, FlatFeePricing)
        assert policy.flat_fee == 75.0

    def test_default_policy_follows_active_settings(self):
        set_settings(Settings(flat_shipping_fee=10.0))
        assert isinstance(get_pricing_policy(), FlatFeePricing)

    def test_policy_can_be_overridden(self):
        custom = RatePricing(shipping_rate=0.0, tax_rate=0.0)
        set_pricing_policy(custom)
        assert get_pricing_policy() is custom
