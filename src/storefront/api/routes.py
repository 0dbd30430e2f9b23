"""FastAPI routes for the storefront — cart, orders and inventory.

Cart and order endpoints act on behalf of the session user named by the
``X-User-Key`` header; a request without it has no session and is refused.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Header, HTTPException
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CancelOrderRequest,
    CartResponse,
    CheckoutRequest,
    DecreaseCartQuantityRequest,
    InventoryReportResponse,
    ItemIdResponse,
    MaxAddableResponse,
    OrderHistoryResponse,
    OrderIdResponse,
    OrderResponse,
    QuantityResponse,
    ReconcileResponse,
    RestockRequest,
    SelectAllRequest,
    SetStockLevelRequest,
    ShippingDetailsRequest,
    ShippingDetailsResponse,
    StatusResponse,
    StockResponse,
    UpdateCartQuantityRequest,
)
from storefront.cart.items import (
    AddToCart,
    DecreaseCartQuantity,
    RemoveFromCart,
    ToggleCartItemSelection,
    UpdateCartQuantity,
)
from storefront.cart.management import ClearCart, SelectAllCartItems
from storefront.cart.view import cart_view, max_addable
from storefront.inventory.adjustment import SetStockLevel
from storefront.inventory.ledger import get_stock, inventory_report
from storefront.inventory.reconciliation import ReconcileCatalog
from storefront.inventory.restock import RestockProduct
from storefront.inventory.stock import stock_status
from storefront.order.cancellation import CancelOrder
from storefront.order.checkout import Checkout
from storefront.order.delivery import ConfirmDelivery
from storefront.order.history import get_order, list_for_user, order_history
from storefront.order.shipping import SaveShippingDetails, saved_shipping_details


def session_user(x_user_key: str | None = Header(default=None)) -> str:
    """Resolve the session user from the ``X-User-Key`` header."""
    if not x_user_key:
        raise HTTPException(status_code=401, detail="No active session")
    return x_user_key


def _cart_response(user_key) -> CartResponse:
    view = cart_view(user_key)
    return CartResponse(
        user_key=view.user_key,
        lines=[asdict(line) for line in view.lines],
        totals=asdict(view.totals),
        selected_count=view.selected_count,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(user_key: str = Depends(session_user)) -> CartResponse:
    return _cart_response(user_key)


@cart_router.delete("", response_model=StatusResponse)
async def clear_cart(user_key: str = Depends(session_user)) -> StatusResponse:
    current_domain.process(ClearCart(user_key=user_key), asynchronous=False)
    return StatusResponse(status="cleared")


@cart_router.post("/items", status_code=201, response_model=ItemIdResponse)
async def add_cart_item(body: AddToCartRequest, user_key: str = Depends(session_user)) -> ItemIdResponse:
    command = AddToCart(
        user_key=user_key,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    item_id = current_domain.process(command, asynchronous=False)
    return ItemIdResponse(item_id=item_id)


@cart_router.put("/items/{item_id}", response_model=QuantityResponse)
async def update_cart_item_quantity(
    item_id: str, body: UpdateCartQuantityRequest, user_key: str = Depends(session_user)
) -> QuantityResponse:
    """Set a line's quantity. The response carries the quantity actually applied after clamping."""
    command = UpdateCartQuantity(
        user_key=user_key,
        item_id=item_id,
        new_quantity=body.new_quantity,
    )
    applied = current_domain.process(command, asynchronous=False)
    return QuantityResponse(quantity=applied)


@cart_router.post("/items/{item_id}/decrease", response_model=QuantityResponse)
async def decrease_cart_item_quantity(
    item_id: str, body: DecreaseCartQuantityRequest, user_key: str = Depends(session_user)
) -> QuantityResponse:
    command = DecreaseCartQuantity(
        user_key=user_key,
        item_id=item_id,
        quantity=body.quantity,
    )
    remaining = current_domain.process(command, asynchronous=False)
    return QuantityResponse(quantity=remaining)


@cart_router.delete("/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str, user_key: str = Depends(session_user)) -> StatusResponse:
    current_domain.process(RemoveFromCart(user_key=user_key, item_id=item_id), asynchronous=False)
    return StatusResponse(status="removed")


@cart_router.put("/items/{item_id}/toggle", response_model=StatusResponse)
async def toggle_cart_item(item_id: str, user_key: str = Depends(session_user)) -> StatusResponse:
    selected = current_domain.process(
        ToggleCartItemSelection(user_key=user_key, item_id=item_id),
        asynchronous=False,
    )
    return StatusResponse(status="selected" if selected else "deselected")


@cart_router.put("/selection", response_model=StatusResponse)
async def select_all_cart_items(body: SelectAllRequest, user_key: str = Depends(session_user)) -> StatusResponse:
    current_domain.process(SelectAllCartItems(user_key=user_key, selected=body.selected), asynchronous=False)
    return StatusResponse(status="selected" if body.selected else "deselected")


@cart_router.get("/max-addable/{product_id}", response_model=MaxAddableResponse)
async def get_max_addable(product_id: str, user_key: str = Depends(session_user)) -> MaxAddableResponse:
    return MaxAddableResponse(product_id=product_id, max_addable=max_addable(user_key, product_id))


@cart_router.post("/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout(body: CheckoutRequest, user_key: str = Depends(session_user)) -> OrderIdResponse:
    """Commit the selected cart lines into an order."""
    command = Checkout(
        user_key=user_key,
        shipping_address=body.shipping_address,
        shipping_city=body.shipping_city,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=order_id)


@cart_router.get("/shipping", response_model=ShippingDetailsResponse)
async def get_shipping_details(user_key: str = Depends(session_user)) -> ShippingDetailsResponse:
    saved = saved_shipping_details(user_key)
    if saved is None:
        return ShippingDetailsResponse()
    return ShippingDetailsResponse(shipping_address=saved[0], shipping_city=saved[1], saved=True)


@cart_router.put("/shipping", response_model=ShippingDetailsResponse)
async def save_shipping_details(
    body: ShippingDetailsRequest, user_key: str = Depends(session_user)
) -> ShippingDetailsResponse:
    """Save the shipping details later checkouts pre-fill from."""
    command = SaveShippingDetails(
        user_key=user_key,
        shipping_address=body.shipping_address,
        shipping_city=body.shipping_city,
    )
    current_domain.process(command, asynchronous=False)
    return await get_shipping_details(user_key)

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(user_key: str = Depends(session_user)) -> list[OrderResponse]:
    return [OrderResponse(**asdict(view)) for view in list_for_user(user_key)]


@order_router.get("/history", response_model=OrderHistoryResponse)
async def get_order_history(user_key: str = Depends(session_user)) -> OrderHistoryResponse:
    return OrderHistoryResponse(**asdict(order_history(user_key)))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(order_id: str, user_key: str = Depends(session_user)) -> OrderResponse:
    return OrderResponse(**asdict(get_order(order_id, user_key=user_key)))


@order_router.put("/{order_id}/deliver", response_model=StatusResponse)
async def confirm_delivery(order_id: str, user_key: str = Depends(session_user)) -> StatusResponse:
    status = current_domain.process(ConfirmDelivery(order_id=order_id, user_key=user_key), asynchronous=False)
    return StatusResponse(status=status)


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(
    order_id: str, body: CancelOrderRequest | None = None, user_key: str = Depends(session_user)
) -> StatusResponse:
    command = CancelOrder(
        order_id=order_id,
        user_key=user_key,
        reason=body.reason if body else None,
    )
    status = current_domain.process(command, asynchronous=False)
    return StatusResponse(status=status)


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.get("", response_model=InventoryReportResponse)
async def get_inventory_report() -> InventoryReportResponse:
    return InventoryReportResponse(**asdict(inventory_report()))


@inventory_router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_catalog() -> ReconcileResponse:
    changed = current_domain.process(ReconcileCatalog(), asynchronous=False)
    return ReconcileResponse(records_changed=changed)


@inventory_router.get("/{product_id}", response_model=StockResponse)
async def get_product_stock(product_id: str) -> StockResponse:
    available = get_stock(product_id)
    return StockResponse(
        product_id=product_id,
        available_quantity=available,
        status=stock_status(available).value,
    )


@inventory_router.post("/{product_id}/restock", response_model=StockResponse)
async def restock_product(product_id: str, body: RestockRequest) -> StockResponse:
    available = current_domain.process(
        RestockProduct(product_id=product_id, quantity=body.quantity),
        asynchronous=False,
    )
    return StockResponse(
        product_id=product_id,
        available_quantity=available,
        status=stock_status(available).value,
    )


@inventory_router.put("/{product_id}/level", response_model=StockResponse)
async def set_stock_level(product_id: str, body: SetStockLevelRequest) -> StockResponse:
    available = current_domain.process(
        SetStockLevel(product_id=product_id, quantity=body.quantity, reason=body.reason),
        asynchronous=False,
    )
    return StockResponse(
        product_id=product_id,
        available_quantity=available,
        status=stock_status(available).value,
    )
