"""Catalog provider factory.

Provides get_catalog() / set_catalog() to swap implementations. The default
is a StaticCatalog loaded from STOREFRONT_CATALOG_PATH, or from the bundled
products.json when that is not set.
"""

from storefront.catalog.port import CatalogEntry, CatalogProvider
from storefront.catalog.static_adapter import BUNDLED_CATALOG, StaticCatalog
from storefront.config import get_settings

_current_catalog: CatalogProvider | None = None


def get_catalog() -> CatalogProvider:
    """Return the current catalog provider."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = StaticCatalog.from_file(get_settings().catalog_path or BUNDLED_CATALOG)
    return _current_catalog


def set_catalog(catalog: CatalogProvider) -> None:
    """Override the active catalog provider (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to the default catalog."""
    global _current_catalog
    _current_catalog = None


__all__ = ["CatalogEntry", "CatalogProvider", "StaticCatalog", "get_catalog", "set_catalog", "reset_catalog"]
