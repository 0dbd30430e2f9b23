"""Operator stock override — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.inventory.stock import ProductStock

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ProductStock")
class SetStockLevel:
    """Set a product's available stock to an absolute count."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    reason = String(max_length=255)


@storefront.command_handler(part_of=ProductStock)
class SetStockLevelHandler:
    @handle(SetStockLevel)
    def set_stock_level(self, command):
        repo = current_domain.repository_for(ProductStock)
        stock = repo.get_or_seed(command.product_id)
        previous = stock.available_quantity
        stock.set_level(command.quantity, reason=command.reason)
        repo.add(stock)

        logger.info(
            "Stock level overridden",
            product_id=str(command.product_id),
            previous=previous,
            new=command.quantity,
            reason=command.reason,
        )
        return stock.available_quantity
