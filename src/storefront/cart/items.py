"""Cart item management — commands and handler.

``AddToCart`` is the channel other parts of the storefront use to request an
add-to-cart; this handler is its only consumer.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront
from storefront.inventory.stock import ProductStock

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    user_key = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    user_key = Identifier(required=True)
    item_id = Identifier(required=True)
    new_quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class DecreaseCartQuantity:
    user_key = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_key = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ToggleCartItemSelection:
    user_key = Identifier(required=True)
    item_id = Identifier(required=True)


def _available(product_id):
    return current_domain.repository_for(ProductStock).get_or_seed(product_id).available_quantity


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        available = _available(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_key)
        item_id = cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            available=available,
        )
        repo.add(cart)

        logger.info(
            "Item added to cart",
            user_key=str(command.user_key),
            product_id=str(command.product_id),
            quantity=command.quantity,
            max_addable=cart.max_addable(command.product_id, available),
        )
        return item_id

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_key)
        item = cart.find_item(command.item_id)

        applied = cart.update_item_quantity(
            item_id=command.item_id,
            new_quantity=command.new_quantity,
            available=_available(item.product_id),
        )
        repo.add(cart)

        if applied != command.new_quantity:
            logger.info(
                "Cart quantity clamped to available stock",
                item_id=str(command.item_id),
                requested=command.new_quantity,
                applied=applied,
            )
        return applied

    @handle(DecreaseCartQuantity)
    def decrease_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_key)
        remaining = cart.decrease_item_quantity(item_id=command.item_id, quantity=command.quantity)
        repo.add(cart)
        return remaining

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_key)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)

    @handle(ToggleCartItemSelection)
    def toggle_cart_item_selection(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_key)
        selected = cart.toggle_selected(item_id=command.item_id)
        repo.add(cart)
        return selected
