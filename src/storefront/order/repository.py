"""Repositories for the Order and ShippingProfile aggregates."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.exceptions import NotFound
from storefront.order.order import Order
from storefront.order.shipping import ShippingProfile


@storefront.repository(part_of=Order)
class OrderRepository:
    def get_order(self, order_id, user_key=None) -> Order:
        """Load an order; when ``user_key`` is given the order must belong to that user."""
        try:
            order = self.get(str(order_id))
        except ObjectNotFoundError as exc:
            raise NotFound("order", order_id) from exc

        if user_key is not None and str(order.user_key) != str(user_key):
            raise NotFound("order", order_id)
        return order

    def for_user(self, user_key) -> list[Order]:
        """All of a user's orders, newest first."""
        orders = self._dao.query.filter(user_key=str(user_key)).all().items
        return sorted(orders, key=lambda o: o.created_at, reverse=True)


@storefront.repository(part_of=ShippingProfile)
class ShippingProfileRepository:
    def find_for_user(self, user_key) -> ShippingProfile | None:
        profiles = self._dao.query.filter(user_key=str(user_key)).all().items
        return profiles[0] if profiles else None

    def for_user(self, user_key) -> ShippingProfile:
        profile = self.find_for_user(user_key)
        if profile is None:
            profile = ShippingProfile.create(user_key)
        return profile
