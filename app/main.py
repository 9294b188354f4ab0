# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the BLINNO billing API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    BlinnoException,
    blinno_exception_handler,
    database_exception_handler,
)
from app.routers import health, subscriptions, products, portfolios, tips, fees
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup configuration and shutdown."""
    logger.info(f"Starting BLINNO API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(
        f"Fee absorption: {settings.FEE_ABSORPTION}, "
        f"default currency: {settings.DEFAULT_CURRENCY}"
    )

    yield

    logger.info("Shutting down BLINNO API")


# Create FastAPI application
app = FastAPI(
    title="BLINNO API",
    description="""
## BLINNO Marketplace Billing API

Plans, resource limits and platform fees for the BLINNO creator marketplace.

### Pricing Tracks

| Track | Tiers | Billing |
|-------|-------|---------|
| **Subscription** | free, creator, professional, enterprise | Monthly fee |
| **Percentage** | basic, premium, pro | Commission per sale |

Free and basic tiers may publish 5 products and 3 portfolios; every other
tier is unlimited.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Current user from the Supabase token"},
        {"name": "Subscriptions", "description": "Tier catalog, current plan and limits"},
        {"name": "Products", "description": "Marketplace products (plan-limited)"},
        {"name": "Portfolios", "description": "Creator portfolios (plan-limited)"},
        {"name": "Tips", "description": "Tips to creators"},
        {"name": "Fees", "description": "Platform fee quotes"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(BlinnoException)
async def handle_blinno_exception(request: Request, exc: BlinnoException):
    """Handle custom BLINNO exceptions."""
    return await blinno_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_database_exception(request: Request, exc: SupabaseClientError):
    """Handle failed Supabase calls that weren't absorbed by a service."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return await database_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

API_PREFIX = "/api/v1"

app.include_router(auth_routes.router, prefix=f"{API_PREFIX}/auth", tags=["Auth"])
app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
app.include_router(subscriptions.router, prefix=f"{API_PREFIX}/subscriptions", tags=["Subscriptions"])
app.include_router(products.router, prefix=f"{API_PREFIX}/products", tags=["Products"])
app.include_router(portfolios.router, prefix=f"{API_PREFIX}/portfolios", tags=["Portfolios"])
app.include_router(tips.router, prefix=f"{API_PREFIX}/tips", tags=["Tips"])
app.include_router(fees.router, prefix=f"{API_PREFIX}/fees", tags=["Fees"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Returns API info."""
    return {
        "name": "BLINNO API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }
