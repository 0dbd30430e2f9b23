"""Stock reservation — command and handler.

Checkout debits stock directly inside its own unit of work; this command is
the standalone entry point to the same ledger operation.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.stock import ProductStock


@storefront.command(part_of="ProductStock")
class ReserveStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    order_id = Identifier()


@storefront.command_handler(part_of=ProductStock)
class ReserveStockHandler:
    @handle(ReserveStock)
    def reserve_stock(self, command):
        repo = current_domain.repository_for(ProductStock)
        stock = repo.get_or_seed(command.product_id)
        stock.reserve(command.quantity, order_id=command.order_id)
        repo.add(stock)
        return stock.available_quantity
