"""Storefront FastAPI application.

Web server that processes storefront commands synchronously via HTTP. Every
request runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api import (
    cart_router,
    inventory_router,
    order_router,
    register_storefront_exception_handlers,
)
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context, configure_logging


def create_app(domain=storefront) -> FastAPI:
    """Build the FastAPI app around an initialized domain."""
    app = FastAPI(
        title="Storefront API",
        description="Inventory-aware shopping cart and order lifecycle",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request and tag its log events."""
        clear_context()
        add_context(user_key=request.headers.get("x-user-key"), path=request.url.path)
        with domain.domain_context():
            response = await call_next(request)
        return response

    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(inventory_router)
    register_storefront_exception_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app


# ---------------------------------------------------------------------------
# Module-level app for uvicorn
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the domain.toml overlay; STOREFRONT_* variables tune
# pricing and the catalog source.
configure_logging()
storefront.init()

app = create_app()
