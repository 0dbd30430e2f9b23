"""Static, in-process catalog backed by a JSON document or a list of entries."""

import json
from pathlib import Path

from storefront.catalog.port import CatalogEntry, CatalogProvider

BUNDLED_CATALOG = Path(__file__).with_name("products.json")


def entry_from_dict(data: dict) -> CatalogEntry:
    """Normalize one raw catalog record.

    Upstream records use ``id``/``price``/``stock``; the canonical shape uses
    ``product_id``/``unit_price``/``declared_stock``. Both are accepted here
    and nowhere else.
    """
    product_id = data.get("product_id", data.get("id"))
    if product_id is None:
        raise ValueError(f"Catalog record has no product id: {data!r}")

    unit_price = data.get("unit_price", data.get("price"))
    if unit_price is None:
        raise ValueError(f"Catalog record {product_id} has no price")

    declared_stock = data.get("declared_stock", data.get("stock"))

    return CatalogEntry(
        product_id=str(product_id),
        name=data.get("name") or str(product_id),
        unit_price=float(unit_price),
        declared_stock=int(declared_stock) if declared_stock is not None else None,
    )


class StaticCatalog(CatalogProvider):
    """Catalog held in memory; order of entries is preserved."""

    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        self._entries: dict[str, CatalogEntry] = {}
        for entry in entries or []:
            self._entries[entry.product_id] = entry

    @classmethod
    def from_records(cls, records: list[dict]) -> "StaticCatalog":
        return cls([entry_from_dict(record) for record in records])

    @classmethod
    def from_file(cls, path: str | Path) -> "StaticCatalog":
        with open(path, encoding="utf-8") as fp:
            return cls.from_records(json.load(fp))

    def entries(self) -> list[CatalogEntry]:
        return list(self._entries.values())

    def get(self, product_id: str) -> CatalogEntry | None:
        return self._entries.get(str(product_id))

    def upsert(self, entry: CatalogEntry) -> None:
        """Add or replace an entry (models an upstream catalog update)."""
        self._entries[entry.product_id] = entry
