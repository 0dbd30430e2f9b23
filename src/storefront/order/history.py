"""Read-only order views over the Order repository."""

from dataclasses import dataclass
from datetime import datetime

from protean.utils.globals import current_domain

from storefront.order.order import Order


@dataclass(frozen=True)
class OrderLineView:
    product_id: str
    name: str
    quantity: int
    unit_price: float
    line_total: float


@dataclass(frozen=True)
class OrderView:
    order_id: str
    remote_order_id: str
    status: str
    lines: list[OrderLineView]
    item_count: int
    subtotal: float
    shipping_fee: float
    tax_fee: float
    total: float
    shipping_address: str | None
    shipping_city: str | None
    created_at: datetime
    delivered_at: datetime | None
    cancelled_at: datetime | None


@dataclass(frozen=True)
class OrderHistory:
    active: list[OrderView]
    completed: list[OrderView]


def order_view(order: Order) -> OrderView:
    pricing = order.pricing
    return OrderView(
        order_id=str(order.id),
        remote_order_id=order.remote_order_id,
        status=order.status,
        lines=[
            OrderLineView(
                product_id=str(item.product_id),
                name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=round(item.unit_price * item.quantity, 2),
            )
            for item in order.items
        ],
        item_count=order.item_count,
        subtotal=pricing.subtotal,
        shipping_fee=pricing.shipping_fee,
        tax_fee=pricing.tax_fee,
        total=pricing.total,
        shipping_address=order.shipping_address,
        shipping_city=order.shipping_city,
        created_at=order.created_at,
        delivered_at=order.delivered_at,
        cancelled_at=order.cancelled_at,
    )


def get_order(order_id, user_key=None) -> OrderView:
    return order_view(current_domain.repository_for(Order).get_order(order_id, user_key=user_key))


def list_for_user(user_key) -> list[OrderView]:
    """A user's orders, newest first."""
    return [order_view(o) for o in current_domain.repository_for(Order).for_user(user_key)]


def order_history(user_key) -> OrderHistory:
    """Partition a user's orders into those still awaiting delivery and the rest."""
    orders = current_domain.repository_for(Order).for_user(user_key)
    return OrderHistory(
        active=[order_view(o) for o in orders if o.is_active],
        completed=[order_view(o) for o in orders if not o.is_active],
    )
