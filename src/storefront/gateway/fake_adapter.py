"""Configurable fake checkout gateway for development and testing.

Simulates the remote backend without network calls. Remote order ids follow
the storefront's ``AT-########`` receipt format.
"""

import itertools
import time

from storefront.gateway.port import CheckoutGateway, SubmissionResult


class FakeCheckoutGateway(CheckoutGateway):
    """Configurable fake checkout gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Remote backend unavailable"
        self.submissions: list[dict] = []
        self._sequence = itertools.count(1)

    def configure(self, should_succeed: bool, failure_reason: str = "Remote backend unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def submit(self, payload: dict) -> SubmissionResult:
        self.submissions.append(payload)

        if not self.should_succeed:
            return SubmissionResult(success=False, failure_reason=self.failure_reason)

        # Millisecond clock tail plus a sequence keeps ids unique within a process
        stamp = (int(time.time() * 1000) + next(self._sequence)) % 100_000_000
        return SubmissionResult(success=True, remote_order_id=f"AT-{stamp:08d}")
