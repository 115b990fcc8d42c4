"""
Storefront Orders - Main FastAPI Application.

REST API for checkout, gateway payments and order fulfilment.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api.dependencies import close_dependencies, get_engine
from api.routes import fulfilment, health, orders, payments
from core.domain.exceptions import (
    InvalidStatusTransitionError,
    OrderCreationError,
    OrderNotFoundError,
    OrderValidationError,
    PaymentGatewayError,
    PaymentGatewayUnavailableError,
    PaymentVerificationError,
    PipelineError,
)
from core.infrastructure.database.config import init_database


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Storefront Orders API",
    description="""
    Order & payment transaction pipeline for the storefront.

    Features:
    - Atomic checkout (account, addresses, order, line items)
    - Server-side pricing with weight-tiered shipping
    - Gateway payment intents and signed verification
    - Order status state machine with tracking
    - Transactional customer emails
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()
    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )
    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

def _error_response(request: Request, status_code: int, exc: PipelineError, detail=None, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.kind,
            "detail": detail if detail is not None else exc.message,
            "path": request.url.path,
            **extra,
        },
    )


@app.exception_handler(OrderValidationError)
async def validation_error_handler(request: Request, exc: OrderValidationError):
    return _error_response(request, 400, exc, fields=exc.fields)


@app.exception_handler(OrderNotFoundError)
async def not_found_handler(request: Request, exc: OrderNotFoundError):
    return _error_response(request, 404, exc)


@app.exception_handler(OrderCreationError)
async def creation_error_handler(request: Request, exc: OrderCreationError):
    logger.error(f"Order creation failed: {exc} (cause: {exc.__cause__!r})")
    return _error_response(request, 500, exc, detail="Failed to create order")


@app.exception_handler(PaymentGatewayUnavailableError)
async def gateway_unavailable_handler(request: Request, exc: PaymentGatewayUnavailableError):
    return _error_response(request, 503, exc)


@app.exception_handler(PaymentGatewayError)
async def gateway_error_handler(request: Request, exc: PaymentGatewayError):
    return _error_response(request, 502, exc)


@app.exception_handler(PaymentVerificationError)
async def verification_error_handler(request: Request, exc: PaymentVerificationError):
    return JSONResponse(
        status_code=400,
        content={"verified": False, "detail": exc.message},
    )


@app.exception_handler(InvalidStatusTransitionError)
async def transition_error_handler(request: Request, exc: InvalidStatusTransitionError):
    return _error_response(request, 409, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "detail": "An unexpected error occurred",
            "path": request.url.path
        }
    )


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("🚀 Storefront Orders API starting up...")
    await init_database(get_engine())
    logger.info("📚 Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    await close_dependencies()
    logger.info("👋 Storefront Orders API shutting down...")


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    orders.router,
    prefix="/api/v1/orders",
    tags=["Orders"]
)

app.include_router(
    payments.router,
    prefix="/api/v1/orders",
    tags=["Payments"]
)

app.include_router(
    fulfilment.router,
    prefix="/api/v1/orders",
    tags=["Fulfilment"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Storefront Orders API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
