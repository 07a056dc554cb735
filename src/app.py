"""Storefront FastAPI application.

Serves the cart, checkout, order administration and analytics routes over
the in-process domain core. Domain errors are mapped to HTTP responses here,
carrying the field-keyed messages as the ``error`` body.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.product.port import ProductNotFound
from shared.config import load_settings
from shared.exceptions import (
    DomainError,
    IllegalTransition,
    OrderNotFound,
    PaymentNotSettled,
)
from shared.logging import add_context, clear_context, configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Clothing storefront — carts, checkout, orders & analytics",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Bind a request id to every log line emitted while serving the request."""
    clear_context()
    add_context(
        request_id=request.headers.get("X-Request-Id") or uuid4().hex,
        method=request.method,
        path=request.url.path,
    )
    try:
        return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------
_STATUS_CODES = {
    OrderNotFound: 404,
    IllegalTransition: 409,
    PaymentNotSettled: 409,
}


def status_code_for(exc: DomainError) -> int:
    for error_class, status_code in _STATUS_CODES.items():
        if isinstance(exc, error_class):
            return status_code
    return 422


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    status_code = status_code_for(exc)
    logger.info(
        "Domain error",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content={"error": exc.messages})


@app.exception_handler(ProductNotFound)
async def product_not_found_handler(request: Request, exc: ProductNotFound):
    return JSONResponse(status_code=404, content={"error": {"product_id": [f"Product {exc} not found"]}})


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from analytics.api.routes import analytics_router  # noqa: E402
from ordering.api.routes import cart_router, checkout_router, order_router  # noqa: E402

app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(order_router)
app.include_router(analytics_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    settings = load_settings()
    return JSONResponse(
        content={
            "status": "ok",
            "environment": settings.environment,
            "currency": settings.currency,
        }
    )
