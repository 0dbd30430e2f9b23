"""ProductStock aggregate — the Inventory Ledger's unit of stock truth.

One record per product, keyed by product id. Records are created lazily
from the catalog's declared stock and are never deleted. The only way stock
goes down is ``reserve`` at checkout commit; the only way it goes up is
``restock`` on order cancellation, plus catalog reconciliation of sold-out
products and operator overrides.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront
from storefront.exceptions import InsufficientStock
from storefront.inventory.events import (
    LowStockDetected,
    StockLevelSet,
    StockReconciled,
    StockReserved,
    StockRestocked,
    StockSeeded,
)

# Baseline for products whose catalog entry declares no stock
UNLIMITED_STOCK = 99999

LOW_STOCK_THRESHOLD = 5
MEDIUM_STOCK_THRESHOLD = 10


class StockStatus(Enum):
    OUT_OF_STOCK = "Out of Stock"
    LOW = "Low Stock"
    MEDIUM = "Medium Stock"
    IN_STOCK = "In Stock"


def stock_status(quantity):
    """Classify an available quantity into the badge shown to shoppers and operators."""
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= LOW_STOCK_THRESHOLD:
        return StockStatus.LOW
    if quantity <= MEDIUM_STOCK_THRESHOLD:
        return StockStatus.MEDIUM
    return StockStatus.IN_STOCK


@storefront.aggregate
class ProductStock:
    product_id = Identifier(identifier=True, required=True)
    available_quantity = Integer(required=True, min_value=0)
    declared_quantity = Integer(min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def seed(cls, product_id, declared_stock=None):
        """Start tracking a product from its catalog-declared stock."""
        baseline = declared_stock if declared_stock is not None else UNLIMITED_STOCK
        if baseline < 0:
            raise ValidationError({"declared_stock": ["Declared stock cannot be negative"]})

        now = datetime.now(UTC)
        stock = cls(
            product_id=str(product_id),
            available_quantity=baseline,
            declared_quantity=baseline,
            created_at=now,
            updated_at=now,
        )
        stock.raise_(
            StockSeeded(
                product_id=str(product_id),
                declared_quantity=declared_stock,
                baseline_quantity=baseline,
                seeded_at=now,
            )
        )
        return stock

    @property
    def status(self):
        return stock_status(self.available_quantity)

    def _check_low_stock(self):
        if self.available_quantity <= LOW_STOCK_THRESHOLD:
            self.raise_(
                LowStockDetected(
                    product_id=str(self.product_id),
                    current_available=self.available_quantity,
                    threshold=LOW_STOCK_THRESHOLD,
                    detected_at=datetime.now(UTC),
                )
            )

    # -------------------------------------------------------------------
    # Debit / credit
    # -------------------------------------------------------------------
    def reserve(self, quantity, order_id=None):
        """Permanently debit ``quantity`` units. All or nothing."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        previous = self.available_quantity
        if quantity > previous:
            raise InsufficientStock(self.product_id, requested=quantity, available=previous)

        now = datetime.now(UTC)
        self.available_quantity = previous - quantity
        self.updated_at = now

        self.raise_(
            StockReserved(
                product_id=str(self.product_id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                previous_available=previous,
                new_available=self.available_quantity,
                reserved_at=now,
            )
        )
        self._check_low_stock()

    def restock(self, quantity, order_id=None):
        """Return ``quantity`` units to the ledger."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})

        previous = self.available_quantity
        now = datetime.now(UTC)
        self.available_quantity = previous + quantity
        self.updated_at = now

        self.raise_(
            StockRestocked(
                product_id=str(self.product_id),
                order_id=str(order_id) if order_id else None,
                quantity=quantity,
                previous_available=previous,
                new_available=self.available_quantity,
                restocked_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Upstream catalog and operator changes
    # -------------------------------------------------------------------
    def reconcile(self, declared_stock):
        """Reset a sold-out product to newly declared catalog stock.

        Returns True when the level changed. Never lowers stock.
        """
        if declared_stock is None or declared_stock <= 0:
            return False
        if self.available_quantity != 0:
            return False

        now = datetime.now(UTC)
        self.available_quantity = declared_stock
        self.declared_quantity = declared_stock
        self.updated_at = now

        self.raise_(
            StockReconciled(
                product_id=str(self.product_id),
                previous_available=0,
                new_available=declared_stock,
                reconciled_at=now,
            )
        )
        return True

    def set_level(self, quantity, reason=None):
        """Override the stock level with an absolute count."""
        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Stock level cannot be negative"]})

        previous = self.available_quantity
        now = datetime.now(UTC)
        self.available_quantity = quantity
        self.updated_at = now

        self.raise_(
            StockLevelSet(
                product_id=str(self.product_id),
                previous_available=previous,
                new_available=quantity,
                reason=reason,
                set_at=now,
            )
        )
        self._check_low_stock()
