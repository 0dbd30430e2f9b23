"""Repository for the ProductStock aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalog import get_catalog
from storefront.domain import storefront
from storefront.exceptions import NotFound
from storefront.inventory.stock import ProductStock


@storefront.repository(part_of=ProductStock)
class StockRepository:
    """Stock records keyed by product id, seeded on first sight."""

    def find(self, product_id) -> ProductStock | None:
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            return None

    def get_or_seed(self, product_id) -> ProductStock:
        """Return the stock record, creating it from the catalog baseline if untracked.

        Raises NotFound when the product is neither tracked nor in the catalog.
        """
        stock = self.find(product_id)
        if stock is not None:
            return stock

        entry = get_catalog().get(str(product_id))
        if entry is None:
            raise NotFound("product", product_id)

        stock = ProductStock.seed(entry.product_id, entry.declared_stock)
        self.add(stock)
        return stock

    def all_tracked(self) -> list[ProductStock]:
        return sorted(self._dao.query.all().items, key=lambda s: str(s.product_id))
