"""Application settings read from the environment.

Protean's own configuration (providers, brokers, processing mode) lives in
domain.toml beside the domain module. This module carries the storefront's
business settings: checkout pricing and the catalog source.

    STOREFRONT_SHIPPING_RATE      fraction of subtotal charged for shipping (default 0.10)
    STOREFRONT_FLAT_SHIPPING_FEE  flat shipping fee; when set, replaces the rate
    STOREFRONT_TAX_RATE           fraction of subtotal charged as tax (default 0.12)
    STOREFRONT_CATALOG_PATH       JSON catalog file (default: bundled products.json)
"""

import os
from dataclasses import dataclass

DEFAULT_SHIPPING_RATE = 0.10
DEFAULT_TAX_RATE = 0.12


@dataclass(frozen=True)
class Settings:
    shipping_rate: float = DEFAULT_SHIPPING_RATE
    flat_shipping_fee: float | None = None
    tax_rate: float = DEFAULT_TAX_RATE
    catalog_path: str | None = None


def _float_env(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def load_settings() -> Settings:
    """Build settings from environment variables."""
    return Settings(
        shipping_rate=_float_env("STOREFRONT_SHIPPING_RATE", DEFAULT_SHIPPING_RATE),
        flat_shipping_fee=_float_env("STOREFRONT_FLAT_SHIPPING_FEE", None),
        tax_rate=_float_env("STOREFRONT_TAX_RATE", DEFAULT_TAX_RATE),
        catalog_path=os.getenv("STOREFRONT_CATALOG_PATH") or None,
    )


_current_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the active settings, loading them from the environment on first use."""
    global _current_settings
    if _current_settings is None:
        _current_settings = load_settings()
    return _current_settings


def set_settings(settings: Settings) -> None:
    """Override the active settings (useful for tests)."""
    global _current_settings
    _current_settings = settings


def reset_settings() -> None:
    global _current_settings
    _current_settings = None
