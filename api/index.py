"""
Cart Service - Main FastAPI Application

Single entry point for the cart HTTP API.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from core.logging import get_logger
from core.routers import cart_router
from core.routers.deps import shutdown_services

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    logger.info("Cart service starting")
    yield
    await shutdown_services()
    logger.info("Cart service stopped")


app = FastAPI(
    title="Cart Service",
    description="Per-user shopping carts with catalog-validated quantities and idle expiry",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(cart_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "cart"}
