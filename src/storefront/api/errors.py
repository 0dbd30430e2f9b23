"""Map storefront domain errors onto HTTP responses.

Protean's own handlers cover the base hierarchy (validation → 400, not found
→ 404). The storefront's conflict and gateway errors subclass those bases, so
they are registered separately; Starlette picks the most specific handler by
walking the exception's MRO.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.exceptions import (
    CheckoutSubmissionFailed,
    ExceedsAvailableStock,
    InsufficientStock,
    InvalidTransition,
    NotFound,
)

STATUS_CODES = {
    InsufficientStock: 409,
    ExceedsAvailableStock: 409,
    InvalidTransition: 409,
    NotFound: 404,
    CheckoutSubmissionFailed: 502,
}


def _handler(status_code):
    async def handle(request: Request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        messages = getattr(exc, "messages", None) or {"error": [str(exc)]}
        return JSONResponse(status_code=status_code, content={"error": messages})

    return handle


def register_storefront_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    for exc_class, status_code in STATUS_CODES.items():
        app.add_exception_handler(exc_class, _handler(status_code))
