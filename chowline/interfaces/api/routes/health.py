"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from chowline import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "chowline"}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "Chowline API",
        "version": __version__,
        "description": "Menu discovery for the food marketplace",
        "docs": "/docs",
    }
