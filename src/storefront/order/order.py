"""Order aggregate — a committed checkout and its lifecycle.

State Machine:
    FOR_SHIPPING → DELIVERED   (customer confirms receipt)
    FOR_SHIPPING → CANCELLED   (customer cancels; stock is restocked)

Items and pricing are captured at checkout and never change afterwards;
status is the only field that moves.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.exceptions import InvalidTransition
from storefront.order.events import OrderCancelled, OrderDelivered, OrderPlaced


class OrderStatus(Enum):
    FOR_SHIPPING = "ForShipping"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.FOR_SHIPPING: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

ACTIVE_STATES = {OrderStatus.FOR_SHIPPING}


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Amounts locked at checkout."""

    subtotal = Float(default=0.0)
    shipping_fee = Float(default=0.0)
    tax_fee = Float(default=0.0)
    total = Float(default=0.0)


@storefront.entity(part_of="Order")
class OrderItem:
    """A product line as it was bought: name and unit price at the moment of checkout."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


@storefront.aggregate
class Order:
    remote_order_id = String(max_length=50)
    user_key = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.FOR_SHIPPING.value)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    item_count = Integer(default=0)
    shipping_address = String(max_length=255)
    shipping_city = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        user_key,
        items_data,
        totals,
        remote_order_id,
        shipping_address=None,
        shipping_city=None,
    ):
        """Create an order in ForShipping from a checkout snapshot.

        Args:
            user_key: The session user placing the order.
            items_data: List of dicts with product_id, name, quantity, unit_price.
            totals: ``Totals`` computed by the active pricing policy.
            remote_order_id: Identifier returned by the remote checkout submission.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            remote_order_id=remote_order_id,
            user_key=str(user_key),
            status=OrderStatus.FOR_SHIPPING.value,
            pricing=OrderPricing(
                subtotal=totals.subtotal,
                shipping_fee=totals.shipping_fee,
                tax_fee=totals.tax_fee,
                total=totals.total,
            ),
            item_count=sum(item["quantity"] for item in items_data),
            shipping_address=shipping_address,
            shipping_city=shipping_city,
            created_at=now,
            updated_at=now,
        )
        for item in items_data:
            order.add_items(
                OrderItem(
                    product_id=str(item["product_id"]),
                    name=item["name"],
                    quantity=item["quantity"],
                    unit_price=item["unit_price"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                remote_order_id=remote_order_id,
                user_key=str(user_key),
                items=json.dumps(items_data),
                subtotal=totals.subtotal,
                shipping_fee=totals.shipping_fee,
                tax_fee=totals.tax_fee,
                total=totals.total,
                item_count=order.item_count,
                placed_at=now,
            )
        )
        return order

    @property
    def total(self):
        return self.pricing.total if self.pricing else 0.0

    @property
    def is_active(self):
        return OrderStatus(self.status) in ACTIVE_STATES

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise InvalidTransition(self.id, current=current.value, target=target_status.value)

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def confirm_delivery(self):
        """Customer confirmed receipt. Stock was already debited at checkout."""
        self._assert_can_transition(OrderStatus.DELIVERED)

        now = datetime.now(UTC)
        self.status = OrderStatus.DELIVERED.value
        self.delivered_at = now
        self.updated_at = now

        self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))

    def cancel(self):
        """Cancel before delivery.

        Returns the (product_id, quantity) pairs that must go back to stock,
        exactly the quantities debited at checkout.
        """
        self._assert_can_transition(OrderStatus.CANCELLED)

        restock = [(str(item.product_id), item.quantity) for item in self.items]

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                items=json.dumps([{"product_id": pid, "quantity": qty} for pid, qty in restock]),
                cancelled_at=now,
            )
        )
        return restock
