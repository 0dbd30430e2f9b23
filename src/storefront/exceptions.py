"""Typed failures raised by the storefront core.

Each error builds on Protean's exception hierarchy and carries a ``messages``
dict keyed by field or kind. Errors travel through command processing and
the FastAPI exception handlers like any other domain error. A raised
error always means the unit of work was rolled back and no state changed.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class InsufficientStock(ValidationError):
    """A ledger reservation asked for more than is available."""

    def __init__(self, product_id, requested, available):
        self.product_id = str(product_id)
        self.requested = requested
        self.available = available
        super().__init__(
            {
                "quantity": [
                    f"Insufficient stock for {self.product_id}: only {available} remain, {requested} requested"
                ]
            }
        )


class ExceedsAvailableStock(ValidationError):
    """A cart mutation would put more of a product in the cart than is in stock."""

    def __init__(self, product_id, requested, in_cart, available):
        self.product_id = str(product_id)
        self.requested = requested
        self.in_cart = in_cart
        self.available = available
        remaining = max(available - in_cart, 0)
        super().__init__(
            {
                "quantity": [
                    f"Cannot add {requested} of {self.product_id}: only {remaining} remain "
                    f"({in_cart} already in cart, {available} in stock)"
                ]
            }
        )

    @property
    def max_addable(self):
        return max(self.available - self.in_cart, 0)


class InvalidTransition(ValidationError):
    """An order lifecycle operation was attempted from the wrong state."""

    def __init__(self, order_id, current, target):
        self.order_id = str(order_id)
        self.current = current
        self.target = target
        super().__init__({"status": [f"Cannot transition order {self.order_id} from {current} to {target}"]})


class NotFound(ObjectNotFoundError):
    """Unknown product, cart line, cart or order."""

    def __init__(self, kind, identifier):
        self.kind = kind
        self.identifier = str(identifier)
        messages = {kind: [f"{kind} `{self.identifier}` was not found"]}
        super().__init__(messages)
        # ObjectNotFoundError keeps only args; the HTTP layer reads messages
        self.messages = messages


class CheckoutSubmissionFailed(ValidationError):
    """The remote checkout submission rejected the order payload."""

    def __init__(self, reason):
        self.reason = reason
        super().__init__({"checkout": [f"Checkout submission failed: {reason}"]})
