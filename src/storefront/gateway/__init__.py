"""Checkout gateway factory.

Provides get_gateway() / set_gateway() to swap implementations. Defaults to
FakeCheckoutGateway.
"""

from storefront.gateway.fake_adapter import FakeCheckoutGateway
from storefront.gateway.port import CheckoutGateway, SubmissionResult

_current_gateway: CheckoutGateway | None = None


def get_gateway() -> CheckoutGateway:
    """Return the current checkout gateway. Defaults to FakeCheckoutGateway."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = FakeCheckoutGateway()
    return _current_gateway


def set_gateway(gateway: CheckoutGateway) -> None:
    """Override the active checkout gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None


__all__ = ["CheckoutGateway", "FakeCheckoutGateway", "SubmissionResult", "get_gateway", "set_gateway", "reset_gateway"]
