"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Boolean, Identifier, Integer, Text

from storefront.domain import storefront


@storefront.event(part_of="ShoppingCart")
class CartItemAdded:
    """A product was added to the cart, or an existing line was incremented."""

    cart_id = Identifier(required=True)
    user_key = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """A cart line's quantity was set or decreased."""

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartItemRemoved:
    """A line was removed from the cart."""

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartItemSelectionToggled:
    """A line was included in or excluded from checkout."""

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    selected = Boolean(required=True)


@storefront.event(part_of="ShoppingCart")
class CartSelectionChanged:
    """Every line was selected or deselected at once."""

    cart_id = Identifier(required=True)
    selected = Boolean(required=True)
    items_changed = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartCleared:
    """Every line was removed from the cart."""

    cart_id = Identifier(required=True)
    items_removed = Integer(required=True)


@storefront.event(part_of="ShoppingCart")
class CartLinesCheckedOut:
    """Selected lines were committed into an order and left the cart."""

    cart_id = Identifier(required=True)
    order_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {item_id, product_id, quantity}
