"""Whole-cart commands: clear and select-all."""

from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    user_key = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class SelectAllCartItems:
    user_key = Identifier(required=True)
    selected = Boolean(default=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_key)
        removed = cart.clear()
        repo.add(cart)
        return removed

    @handle(SelectAllCartItems)
    def select_all_cart_items(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_user(command.user_key)
        changed = cart.select_all(selected=command.selected if command.selected is not None else True)
        repo.add(cart)
        return changed
