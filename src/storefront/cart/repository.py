"""Repository for the ShoppingCart aggregate."""

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class CartRepository:
    """Carts are looked up by the session user they belong to."""

    def find_for_user(self, user_key) -> ShoppingCart | None:
        carts = self._dao.query.filter(user_key=str(user_key)).all().items
        return carts[0] if carts else None

    def for_user(self, user_key) -> ShoppingCart:
        """Return the user's cart, or a new unsaved one."""
        cart = self.find_for_user(user_key)
        if cart is None:
            cart = ShoppingCart.create(user_key)
        return cart
