"""Remote checkout submission port (abstract interface).

The remote commerce backend accepts an order payload and answers with its
own order identifier. Checkout treats this call as the atomic commit point:
local stock and order state change only after a successful submission.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SubmissionResult:
    """Result of a checkout submission."""

    success: bool
    remote_order_id: str | None = None
    failure_reason: str | None = None


class CheckoutGateway(ABC):
    """Abstract remote checkout interface."""

    @abstractmethod
    def submit(self, payload: dict) -> SubmissionResult:
        """Submit an order payload to the remote backend."""
        ...
