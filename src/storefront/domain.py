"""Storefront bounded context — Inventory Ledger, Shopping Cart and Orders.

Tracks per-product stock, validates cart lines against it, and advances
orders through ForShipping → Delivered / Cancelled with compensating
restock on cancellation.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
