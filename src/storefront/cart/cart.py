"""ShoppingCart aggregate — one cart per session user.

Cart lines are soft holds: every add or quantity change is checked against
the Inventory Ledger's available stock, but nothing is debited until the
lines are committed at checkout. Callers pass the product's current
available quantity into each stock-sensitive mutation; the aggregate itself
never reads the ledger.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer

from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartItemSelectionToggled,
    CartLinesCheckedOut,
    CartQuantityUpdated,
    CartSelectionChanged,
)
from storefront.cart.pricing import PricedLine
from storefront.domain import storefront
from storefront.exceptions import ExceedsAvailableStock, NotFound


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    selected = Boolean(default=True)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    user_key = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear on only one cart line"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_key):
        now = datetime.now(UTC)
        return cls(user_key=str(user_key), created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise NotFound("cart_item", item_id)
        return item

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def quantity_of(self, product_id):
        line = self.line_for(product_id)
        return line.quantity if line else 0

    def max_addable(self, product_id, available):
        """Units of ``product_id`` that can still be added given ``available`` stock."""
        return max(available - self.quantity_of(product_id), 0)

    def selected_items(self):
        return [item for item in self.items if item.selected]

    def compute_totals(self, unit_prices, policy):
        """Totals over selected lines. ``unit_prices`` maps product id to current price."""
        lines = [
            PricedLine(unit_price=unit_prices[str(item.product_id)], quantity=item.quantity)
            for item in self.selected_items()
        ]
        return policy.totals(lines)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity, available):
        """Add ``quantity`` units of a product, incrementing its line if present.

        Returns the line's id.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        in_cart = self.quantity_of(product_id)
        if in_cart + quantity > available:
            raise ExceedsAvailableStock(product_id, requested=quantity, in_cart=in_cart, available=available)

        now = datetime.now(UTC)
        existing = self.line_for(product_id)
        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(product_id=str(product_id), quantity=quantity, selected=True, added_at=now)
            self.add_items(item)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_key=str(self.user_key),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return str(item.id)

    def update_item_quantity(self, item_id, new_quantity, available):
        """Set a line's quantity, clamped to the product's available stock.

        Quantities below 1 are rejected rather than treated as a removal.
        Returns the quantity actually applied.
        """
        if new_quantity is None or new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1; remove the item instead"]})

        item = self.find_item(item_id)
        # Upper bound: the line's own units plus remaining headroom, i.e. all available stock
        if available < 1:
            raise ExceedsAvailableStock(
                item.product_id, requested=new_quantity, in_cart=item.quantity, available=available
            )

        applied = min(new_quantity, available)
        previous_quantity = item.quantity
        item.quantity = applied
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(item.product_id),
                previous_quantity=previous_quantity,
                new_quantity=applied,
            )
        )
        return applied

    def decrease_item_quantity(self, item_id, quantity):
        """Take ``quantity`` units off a line; a line that reaches zero is removed.

        Returns the remaining quantity.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity to remove must be at least 1"]})

        item = self.find_item(item_id)
        remaining = item.quantity - quantity
        if remaining < 0:
            raise ValidationError({"quantity": [f"Cannot remove {quantity}: only {item.quantity} in cart"]})

        if remaining == 0:
            self.remove_item(item_id)
            return 0

        previous_quantity = item.quantity
        item.quantity = remaining
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(item.product_id),
                previous_quantity=previous_quantity,
                new_quantity=remaining,
            )
        )
        return remaining

    def toggle_selected(self, item_id):
        """Flip a line's checkout-inclusion flag. Returns the new flag."""
        item = self.find_item(item_id)
        item.selected = not item.selected
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemSelectionToggled(
                cart_id=str(self.id),
                item_id=str(item.id),
                selected=item.selected,
            )
        )
        return item.selected

    def select_all(self, selected=True):
        changed = 0
        for item in self.items:
            if bool(item.selected) != selected:
                item.selected = selected
                changed += 1

        self.updated_at = datetime.now(UTC)
        self.raise_(CartSelectionChanged(cart_id=str(self.id), selected=selected, items_changed=changed))
        return changed

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        product_id = str(item.product_id)
        quantity = item.quantity

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                product_id=product_id,
                quantity=quantity,
            )
        )

    def clear(self):
        removed = 0
        for item in list(self.items):
            self.remove_items(item)
            removed += 1

        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), items_removed=removed))
        return removed

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def check_out_items(self, item_ids, order_id):
        """Drop lines that were committed into ``order_id``."""
        committed = [self.find_item(item_id) for item_id in item_ids]
        snapshot = [
            {
                "item_id": str(item.id),
                "product_id": str(item.product_id),
                "quantity": item.quantity,
            }
            for item in committed
        ]

        for item in committed:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLinesCheckedOut(
                cart_id=str(self.id),
                order_id=str(order_id),
                items=json.dumps(snapshot),
            )
        )
