"""Checkout pricing policies.

Totals are a fold over the selected cart lines. The policy decides how the
shipping fee and tax are derived from the subtotal; two are supported:

* ``RatePricing``    shipping and tax are both fractions of the subtotal
* ``FlatFeePricing`` a fixed shipping fee plus a tax fraction

The active policy comes from settings and can be swapped at runtime.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.config import Settings, get_settings


def _money(amount):
    return round(amount, 2)


@dataclass(frozen=True)
class PricedLine:
    unit_price: float
    quantity: int


@dataclass(frozen=True)
class Totals:
    subtotal: float
    shipping_fee: float
    tax_fee: float
    total: float
    item_count: int


class PricingPolicy(ABC):
    tax_rate: float

    @abstractmethod
    def shipping_fee(self, subtotal: float) -> float: ...

    def tax_fee(self, subtotal: float) -> float:
        return subtotal * self.tax_rate

    def totals(self, lines: list[PricedLine]) -> Totals:
        subtotal = sum(line.unit_price * line.quantity for line in lines)
        shipping = self.shipping_fee(subtotal)
        tax = self.tax_fee(subtotal)
        return Totals(
            subtotal=_money(subtotal),
            shipping_fee=_money(shipping),
            tax_fee=_money(tax),
            total=_money(subtotal + shipping + tax),
            item_count=sum(line.quantity for line in lines),
        )


@dataclass(frozen=True)
class RatePricing(PricingPolicy):
    shipping_rate: float = 0.10
    tax_rate: float = 0.12

    def shipping_fee(self, subtotal: float) -> float:
        return subtotal * self.shipping_rate


@dataclass(frozen=True)
class FlatFeePricing(PricingPolicy):
    flat_fee: float = 0.0
    tax_rate: float = 0.12

    def shipping_fee(self, subtotal: float) -> float:
        # Nothing selected, nothing shipped
        return self.flat_fee if subtotal > 0 else 0.0


def policy_from_settings(settings: Settings) -> PricingPolicy:
    if settings.flat_shipping_fee is not None:
        return FlatFeePricing(flat_fee=settings.flat_shipping_fee, tax_rate=settings.tax_rate)
    return RatePricing(shipping_rate=settings.shipping_rate, tax_rate=settings.tax_rate)


_current_policy: PricingPolicy | None = None


def get_pricing_policy() -> PricingPolicy:
    """Return the active pricing policy, derived from settings on first use."""
    global _current_policy
    if _current_policy is None:
        _current_policy = policy_from_settings(get_settings())
    return _current_policy


def set_pricing_policy(policy: PricingPolicy) -> None:
    global _current_policy
    _current_policy = policy


def reset_pricing_policy() -> None:
    global _current_policy
    _current_policy = None
