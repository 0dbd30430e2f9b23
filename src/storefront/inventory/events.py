"""Domain events for the ProductStock aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="ProductStock")
class StockSeeded:
    """A product was first tracked, with its baseline taken from the catalog."""

    product_id = Identifier(required=True)
    declared_quantity = Integer()  # None when the catalog declares no stock
    baseline_quantity = Integer(required=True)
    seeded_at = DateTime(required=True)


@storefront.event(part_of="ProductStock")
class StockReserved:
    """Stock was permanently debited at checkout commit."""

    product_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    previous_available = Integer(required=True)
    new_available = Integer(required=True)
    reserved_at = DateTime(required=True)


@storefront.event(part_of="ProductStock")
class StockRestocked:
    """Stock was returned to the ledger by an order cancellation."""

    product_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    previous_available = Integer(required=True)
    new_available = Integer(required=True)
    restocked_at = DateTime(required=True)


@storefront.event(part_of="ProductStock")
class StockReconciled:
    """A sold-out product was reset to the catalog's newly declared stock."""

    product_id = Identifier(required=True)
    previous_available = Integer(required=True)
    new_available = Integer(required=True)
    reconciled_at = DateTime(required=True)


@storefront.event(part_of="ProductStock")
class StockLevelSet:
    """An operator overrode the stock level of a product."""

    product_id = Identifier(required=True)
    previous_available = Integer(required=True)
    new_available = Integer(required=True)
    reason = String(max_length=255)
    set_at = DateTime(required=True)


@storefront.event(part_of="ProductStock")
class LowStockDetected:
    """Available stock fell to or below the low-stock threshold."""

    product_id = Identifier(required=True)
    current_available = Integer(required=True)
    threshold = Integer(required=True)
    detected_at = DateTime(required=True)
