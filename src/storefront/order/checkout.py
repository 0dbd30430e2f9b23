"""Checkout — command and handler.

Checkout turns the selected cart lines into an order. The handler runs as a
single unit of work:

1. Snapshot selected lines with catalog names and prices
2. Pre-check every line against the Inventory Ledger
3. Submit the payload to the remote checkout gateway
4. Debit stock, place the order, drop the committed lines from the cart

Any failure in steps 1-3 raises before a single aggregate is mutated, and a
failure in step 4 rolls the unit of work back, so a rejected checkout never
leaves partial state behind. Blank shipping fields are filled from the
shopper's saved profile.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.pricing import PricedLine, get_pricing_policy
from storefront.catalog import get_catalog
from storefront.domain import storefront
from storefront.exceptions import CheckoutSubmissionFailed, InsufficientStock, NotFound
from storefront.gateway import get_gateway
from storefront.inventory.stock import ProductStock
from storefront.order.order import Order
from storefront.order.shipping import saved_shipping_details, shipping_errors

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class Checkout:
    user_key = Identifier(required=True)
    shipping_address = String(max_length=255)
    shipping_city = String(max_length=100)


def _shipping_details(command):
    """Command fields win; blank ones fall back to the saved profile."""
    address = (command.shipping_address or "").strip()
    city = (command.shipping_city or "").strip()
    if not (address and city):
        saved = saved_shipping_details(command.user_key)
        if saved is not None:
            address = address or saved[0]
            city = city or saved[1]

    errors = shipping_errors(address, city)
    if errors:
        raise ValidationError(errors)
    return address, city


def _snapshot(selected):
    catalog = get_catalog()
    items_data = []
    for item in selected:
        entry = catalog.get(str(item.product_id))
        if entry is None:
            raise NotFound("product", item.product_id)
        items_data.append(
            {
                "product_id": entry.product_id,
                "name": entry.name,
                "quantity": item.quantity,
                "unit_price": entry.unit_price,
            }
        )
    return items_data


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(Checkout)
    def checkout(self, command):
        shipping_address, shipping_city = _shipping_details(command)

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.find_for_user(command.user_key)
        if cart is None:
            raise NotFound("cart", command.user_key)

        selected = cart.selected_items()
        if not selected:
            raise ValidationError({"items": ["Select at least one cart item to check out"]})

        items_data = _snapshot(selected)

        stock_repo = current_domain.repository_for(ProductStock)
        stocks = {}
        for line in items_data:
            stock = stock_repo.get_or_seed(line["product_id"])
            if stock.available_quantity < line["quantity"]:
                raise InsufficientStock(
                    line["product_id"],
                    requested=line["quantity"],
                    available=stock.available_quantity,
                )
            stocks[line["product_id"]] = stock

        totals = get_pricing_policy().totals(
            [PricedLine(unit_price=line["unit_price"], quantity=line["quantity"]) for line in items_data]
        )

        result = get_gateway().submit(
            {
                "user_key": str(command.user_key),
                "items": items_data,
                "subtotal": totals.subtotal,
                "shipping_fee": totals.shipping_fee,
                "tax_fee": totals.tax_fee,
                "total": totals.total,
                "shipping_address": shipping_address,
                "shipping_city": shipping_city,
            }
        )
        if not result.success:
            logger.warning(
                "Checkout submission rejected",
                user_key=str(command.user_key),
                reason=result.failure_reason,
            )
            raise CheckoutSubmissionFailed(result.failure_reason)

        # Commit point passed: every mutation below lands in this unit of work
        order = Order.place(
            user_key=command.user_key,
            items_data=items_data,
            totals=totals,
            remote_order_id=result.remote_order_id,
            shipping_address=shipping_address,
            shipping_city=shipping_city,
        )

        for line in items_data:
            stock = stocks[line["product_id"]]
            stock.reserve(line["quantity"], order_id=order.id)
            stock_repo.add(stock)

        cart.check_out_items([item.id for item in selected], order_id=order.id)
        cart_repo.add(cart)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            remote_order_id=result.remote_order_id,
            user_key=str(command.user_key),
            item_count=order.item_count,
            total=totals.total,
        )
        return str(order.id)
