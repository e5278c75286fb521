"""FastAPI application entry point.

Print shop storefront and back-office API: pricing, cart, checkout,
order tracking and the print schedule.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from printshop import __version__
from printshop.config import settings
from printshop.core.catalog_options import CartValidationError
from printshop.core.order_status import InvalidStatusTransitionError
from printshop.infra.database import close_db_engine, column_exists, verify_db_connection
from printshop.infra.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from printshop.services.order_assembler import CheckoutValidationError
from printshop.services.persistence_gateway import (
    GatewayError,
    MissingPriorityColumnError,
    OrderNotFoundError,
)

# Import routers
from printshop.api.routes.cart import router as cart_router
from printshop.api.routes.checkout import router as checkout_router
from printshop.api.routes.health import router as health_router
from printshop.api.routes.orders import router as orders_router
from printshop.api.routes.pricing import router as pricing_router
from printshop.api.routes.schedule import router as schedule_router
from printshop.api.routes.settings import router as settings_router

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Startup:
    - Verify database connection
    - Warn when orders.print_priority has not been migrated

    Shutdown:
    - Close database connections
    """
    logger.info("Print shop API starting", environment=settings.environment)

    db_ok = await verify_db_connection()
    if not db_ok:
        logger.warning("Database connection failed - will retry on first request")
    elif not await column_exists("orders", "print_priority"):
        logger.warning(
            "orders.print_priority missing - schedule reordering disabled until migrated"
        )

    yield

    logger.info("Print shop API shutting down")
    await close_db_engine()
    logger.info("Cleanup complete")


# Create FastAPI app
app = FastAPI(
    title="Print Shop Engine",
    description="Pricing, fulfillment and print scheduling for a made-to-order 3D print shop",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "dev" else None,
    redoc_url=None,
)

# CORS middleware (mainly for local development)
if settings.environment == "dev":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Bind request context for the handler's log events, then log the outcome."""
    clear_request_context()
    bind_request_context(
        request_id=request.headers.get("x-request-id") or uuid.uuid4().hex[:12],
        method=request.method,
        path=request.url.path,
    )
    started = time.perf_counter()
    response = await call_next(request)
    logger.debug(
        "Request handled",
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


# =============================================================================
# Exception Handlers
# =============================================================================


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "error_type": type(exc).__name__,
        },
    )


@app.exception_handler(CartValidationError)
@app.exception_handler(CheckoutValidationError)
async def validation_exception_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("Request rejected", error=str(exc), path=request.url.path)
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


@app.exception_handler(InvalidStatusTransitionError)
async def transition_exception_handler(request: Request, exc: InvalidStatusTransitionError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(OrderNotFoundError)
async def not_found_exception_handler(request: Request, exc: OrderNotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(MissingPriorityColumnError)
async def missing_column_exception_handler(request: Request, exc: MissingPriorityColumnError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(GatewayError)
async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error("Persistence failure", error=str(exc), path=request.url.path)
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.error(
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "error_type": type(exc).__name__,
        },
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router, tags=["Health"])
app.include_router(pricing_router, prefix="/pricing", tags=["Pricing"])
app.include_router(cart_router, prefix="/cart", tags=["Cart"])
app.include_router(checkout_router, prefix="/checkout", tags=["Checkout"])
app.include_router(orders_router, prefix="/orders", tags=["Orders"])
app.include_router(schedule_router, prefix="/schedule", tags=["Print Schedule"])
app.include_router(settings_router, prefix="/settings", tags=["Settings"])


# =============================================================================
# Root Endpoint
# =============================================================================


@app.get("/")
async def root() -> dict:
    """Root endpoint - basic service info."""
    return {
        "service": "Print Shop Engine",
        "version": __version__,
        "environment": settings.environment,
    }
