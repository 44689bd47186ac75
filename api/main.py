"""
Backo - Main FastAPI Application.

REST API for the returns portal: public order lookup, merchant order
listings, store sync and the WooCommerce plugin webhook.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api.routes import health, orders, public, sync, webhooks
from backo_sdk import UpstreamError, redact_secrets
from core.domain.exceptions import BackoError
from core.infrastructure.database.config import close_database, init_database
from core.infrastructure.logging import configure_logging
from core.settings import get_app_settings


settings = get_app_settings()

# Setup logging
configure_logging(settings.runtime.log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Backo - Returns API",
    description="""
    Multi-tenant returns backend.

    Features:
    - Return-portal order lookup across Shopify, WooCommerce and the local cache
    - Shopper identity check by email or phone
    - Merchant order listings reconciled with the local cache
    - Store sync of products and orders
    - WooCommerce plugin webhook
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
    allow_origins=settings.runtime.cors_origins,
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

    # The path may carry the webhook secret, log the method and route prefix only
    path = request.url.path
    if path.startswith("/api/webhook/"):
        path = path.rsplit("/", 1)[0] + "/***"

    logger.info(f"→ {request.method} {path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(f"← {request.method} {path} [{response.status_code}] ({duration:.3f}s)")

    return response


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

@app.exception_handler(BackoError)
async def backo_error_handler(request: Request, exc: BackoError):
    """Expected failures: answer with the status the error carries."""
    logger.info(f"{type(exc).__name__} on {request.method}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    """Platform API failures; the message never contains credentials."""
    message = redact_secrets(str(exc))
    logger.error(f"Upstream failure ({exc.platform or 'unknown'}): {message}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions; the message goes out with secrets masked."""
    message = redact_secrets(str(exc)) or "Server error"
    logger.error(f"Unhandled exception: {message}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={"success": False, "message": message},
    )


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("🚀 Backo API starting up...")
    await init_database()
    logger.info("📚 Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    await close_database()
    logger.info("👋 Backo API shutting down...")


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    public.router,
    prefix="/api/public",
    tags=["Return Portal"]
)

app.include_router(
    orders.router,
    prefix="/api/v1/merchants",
    tags=["Orders"]
)

app.include_router(
    sync.router,
    prefix="/api/v1/merchants",
    tags=["Sync"]
)

app.include_router(
    webhooks.router,
    prefix="/api/webhook",
    tags=["Webhooks"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Backo - Returns API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
