"""Inventory Ledger read API.

``get_stock`` is the single read path for available quantity. It persists a
catalog baseline the first time a product is seen, so a reload always finds
the same starting level.
"""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from storefront.inventory.stock import LOW_STOCK_THRESHOLD, ProductStock


def get_stock(product_id) -> int:
    """Available quantity of ``product_id``, seeding it from the catalog if untracked."""
    return current_domain.repository_for(ProductStock).get_or_seed(product_id).available_quantity


@dataclass(frozen=True)
class StockLine:
    product_id: str
    available_quantity: int
    status: str


@dataclass(frozen=True)
class InventoryReport:
    lines: list[StockLine]
    critical_count: int


def inventory_report() -> InventoryReport:
    """Every tracked product with its stock badge, plus the count at or below the low-stock threshold."""
    records = current_domain.repository_for(ProductStock).all_tracked()
    lines = [
        StockLine(
            product_id=str(record.product_id),
            available_quantity=record.available_quantity,
            status=record.status.value,
        )
        for record in records
    ]
    critical = sum(1 for line in lines if line.available_quantity <= LOW_STOCK_THRESHOLD)
    return InventoryReport(lines=lines, critical_count=critical)
