"""
FastAPI Main Application - API entry point.

Run with: uvicorn chowline.interfaces.api.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chowline import __version__
from chowline.config import get_settings

from .deps import cleanup_services, init_services
from .middleware import (
    ErrorHandlerMiddleware,
    LatencyMiddleware,
    RateLimitMiddleware,
    RequestIDMiddleware,
)
from .routes import health, menu

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("Starting Chowline API...")
    logger.info("  Database: %s", settings.db_path)

    await init_services()
    logger.info("  Services initialized")

    yield

    logger.info("Shutting down Chowline API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Chowline API",
        description="Menu discovery for the food marketplace",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters - last added = outermost)
    # 1. Rate limiting
    app.add_middleware(RateLimitMiddleware, requests_per_minute=settings.rate_limit_per_minute)

    # 2. Error handling (catch exceptions from inner layers)
    app.add_middleware(ErrorHandlerMiddleware)

    # 3. Latency tracking
    app.add_middleware(LatencyMiddleware)

    # 4. Request ID (outermost custom - sets the ID before the others run)
    app.add_middleware(RequestIDMiddleware)

    # 5. CORS (framework middleware)
    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:8000",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8000",
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        # Debug: any local dev-server port
        allow_origin_regex=r"http://(localhost|127\.0\.0\.1):\d+" if settings.api_debug else None,
        allow_credentials=True,
        allow_methods=["GET", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(menu.router, prefix="/api/menu-items", tags=["Menu"])

    return app


# Create app instance
app = create_app()
