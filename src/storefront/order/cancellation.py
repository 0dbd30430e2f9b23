"""Order cancellation — command and handler.

Cancelling returns every line to the Inventory Ledger, quantity for
quantity, in the same unit of work as the status change.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.stock import ProductStock
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_key = Identifier()
    reason = String(max_length=500)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_order(command.order_id, user_key=command.user_key)
        restock = order.cancel()

        stock_repo = current_domain.repository_for(ProductStock)
        for product_id, quantity in restock:
            stock = stock_repo.get_or_seed(product_id)
            stock.restock(quantity, order_id=order.id)
            stock_repo.add(stock)

        repo.add(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            reason=command.reason,
            lines_restocked=len(restock),
        )
        return order.status
