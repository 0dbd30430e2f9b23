"""The cart as the storefront renders it.

Each line is resolved against the catalog for display data and against the
Inventory Ledger for its current bound. Totals cover selected lines only.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.pricing import PricingPolicy, Totals, get_pricing_policy
from storefront.catalog import get_catalog
from storefront.exceptions import NotFound
from storefront.inventory.stock import ProductStock


@dataclass(frozen=True)
class CartLineView:
    item_id: str
    product_id: str
    name: str
    unit_price: float
    quantity: int
    selected: bool
    line_total: float
    available: int
    max_addable: int


@dataclass(frozen=True)
class CartView:
    user_key: str
    lines: list[CartLineView]
    totals: Totals

    @property
    def selected_count(self):
        return self.totals.item_count


def cart_view(user_key, policy: PricingPolicy | None = None) -> CartView:
    cart = current_domain.repository_for(ShoppingCart).for_user(user_key)
    stock_repo = current_domain.repository_for(ProductStock)
    catalog = get_catalog()

    lines = []
    prices = {}
    for item in cart.items:
        product_id = str(item.product_id)
        entry = catalog.get(product_id)
        if entry is None:
            raise NotFound("product", product_id)

        available = stock_repo.get_or_seed(product_id).available_quantity
        prices[product_id] = entry.unit_price
        lines.append(
            CartLineView(
                item_id=str(item.id),
                product_id=product_id,
                name=entry.name,
                unit_price=entry.unit_price,
                quantity=item.quantity,
                selected=bool(item.selected),
                line_total=round(entry.unit_price * item.quantity, 2),
                available=available,
                max_addable=cart.max_addable(product_id, available),
            )
        )

    totals = cart.compute_totals(prices, policy or get_pricing_policy())
    return CartView(user_key=str(user_key), lines=lines, totals=totals)


def max_addable(user_key, product_id) -> int:
    """How many more units of ``product_id`` the user may add right now."""
    cart = current_domain.repository_for(ShoppingCart).for_user(user_key)
    available = current_domain.repository_for(ProductStock).get_or_seed(product_id).available_quantity
    return cart.max_addable(product_id, available)
