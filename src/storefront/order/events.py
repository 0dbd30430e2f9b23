"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A checkout committed: stock was debited and the order awaits shipping."""

    order_id = Identifier(required=True)
    remote_order_id = String(required=True)
    user_key = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, name, quantity, unit_price}
    subtotal = Float(required=True)
    shipping_fee = Float(required=True)
    tax_fee = Float(required=True)
    total = Float(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderDelivered:
    """The customer confirmed receipt."""

    order_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The customer cancelled before delivery; items go back to stock."""

    order_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity} restocked
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="ShippingProfile")
class ShippingDetailsSaved:
    """A shopper saved the shipping details checkout pre-fills from."""

    user_key = Identifier(required=True)
    shipping_address = String(required=True)
    shipping_city = String(required=True)
    saved_at = DateTime(required=True)
