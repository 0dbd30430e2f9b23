"""Catalog reconciliation — command and handler.

Seeds every catalog product the ledger does not track yet, and resets sold-out
products whose catalog entry now declares stock again.
"""

import json

import structlog
from protean import handle
from protean.fields import Text
from protean.utils.globals import current_domain

from storefront.catalog import get_catalog
from storefront.catalog.static_adapter import entry_from_dict
from storefront.domain import storefront
from storefront.inventory.stock import ProductStock

logger = structlog.get_logger(__name__)


@storefront.command(part_of="ProductStock")
class ReconcileCatalog:
    """Reconcile the ledger against catalog entries (defaults to the active catalog)."""

    entries = Text()  # JSON: optional list of {product_id, name, unit_price, declared_stock}


@storefront.command_handler(part_of=ProductStock)
class ReconcileCatalogHandler:
    @handle(ReconcileCatalog)
    def reconcile_catalog(self, command):
        if command.entries:
            records = json.loads(command.entries) if isinstance(command.entries, str) else command.entries
            entries = [entry_from_dict(record) for record in records]
        else:
            entries = get_catalog().entries()

        repo = current_domain.repository_for(ProductStock)
        seeded = 0
        restocked = 0

        for entry in entries:
            stock = repo.find(entry.product_id)
            if stock is None:
                repo.add(ProductStock.seed(entry.product_id, entry.declared_stock))
                seeded += 1
            elif stock.reconcile(entry.declared_stock):
                repo.add(stock)
                restocked += 1

        logger.info(
            "Catalog reconciled",
            entries=len(entries),
            seeded=seeded,
            restocked=restocked,
        )
        return seeded + restocked
