"""Pydantic request/response schemas for the storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands and the in-process view dataclasses.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "kbd-001",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    # Lower bound is enforced by the cart so the error carries the domain message
    new_quantity: int


class DecreaseCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=1, default=1)


class SelectAllRequest(BaseModel):
    selected: bool = True


class CheckoutRequest(BaseModel):
    """Leave a field out to use the saved shipping details."""

    shipping_address: str | None = None
    shipping_city: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": "221B Baker Street",
                    "shipping_city": "London",
                }
            ]
        }
    }


class ShippingDetailsRequest(BaseModel):
    shipping_address: str
    shipping_city: str


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class CancelOrderRequest(BaseModel):
    reason: str | None = None


# ---------------------------------------------------------------------------
# Inventory Request Schemas
# ---------------------------------------------------------------------------
class RestockRequest(BaseModel):
    quantity: int = Field(ge=1)


class SetStockLevelRequest(BaseModel):
    quantity: int = Field(ge=0)
    reason: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class ShippingDetailsResponse(BaseModel):
    shipping_address: str = ""
    shipping_city: str = ""
    saved: bool = False


class ItemIdResponse(BaseModel):
    item_id: str


class QuantityResponse(BaseModel):
    quantity: int


class OrderIdResponse(BaseModel):
    order_id: str


class TotalsResponse(BaseModel):
    subtotal: float
    shipping_fee: float
    tax_fee: float
    total: float
    item_count: int


class CartLineResponse(BaseModel):
    item_id: str
    product_id: str
    name: str
    unit_price: float
    quantity: int
    selected: bool
    line_total: float
    available: int
    max_addable: int


class CartResponse(BaseModel):
    user_key: str
    lines: list[CartLineResponse]
    totals: TotalsResponse
    selected_count: int


class MaxAddableResponse(BaseModel):
    product_id: str
    max_addable: int


class OrderLineResponse(BaseModel):
    product_id: str
    name: str
    quantity: int
    unit_price: float
    line_total: float


class OrderResponse(BaseModel):
    order_id: str
    remote_order_id: str | None
    status: str
    lines: list[OrderLineResponse]
    item_count: int
    subtotal: float
    shipping_fee: float
    tax_fee: float
    total: float
    shipping_address: str | None = None
    shipping_city: str | None = None
    created_at: datetime
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None


class OrderHistoryResponse(BaseModel):
    active: list[OrderResponse]
    completed: list[OrderResponse]


class StockResponse(BaseModel):
    product_id: str
    available_quantity: int
    status: str


class InventoryReportResponse(BaseModel):
    lines: list[StockResponse]
    critical_count: int


class ReconcileResponse(BaseModel):
    records_changed: int
