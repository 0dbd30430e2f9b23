"""Catalog provider port (abstract interface).

The catalog is the upstream source of product names, prices and declared
stock. The Inventory Ledger seeds and reconciles from it; the cart and
checkout read names and prices from it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    """A product as the catalog declares it.

    ``declared_stock`` is None when the catalog does not track stock for the
    product; the ledger then treats it as effectively unlimited.
    """

    product_id: str
    name: str
    unit_price: float
    declared_stock: int | None = None


class CatalogProvider(ABC):
    """Abstract catalog interface."""

    @abstractmethod
    def entries(self) -> list[CatalogEntry]:
        """Return every catalog entry, in catalog order."""
        ...

    @abstractmethod
    def get(self, product_id: str) -> CatalogEntry | None:
        """Return the entry for ``product_id``, or None if the catalog does not list it."""
        ...
