"""
API Dependencies - Dependency injection for FastAPI routes.

Provides the repository singleton and the services built on it.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from chowline.adapters.sqlite import SQLiteMenuRepository
from chowline.config import get_settings
from chowline.domains.catalog import MenuCatalog
from chowline.domains.search import ProximitySearchEngine


@lru_cache
def get_menu_repository() -> SQLiteMenuRepository:
    """Get SQLite repository singleton."""
    settings = get_settings()
    return SQLiteMenuRepository(settings.db_path)


def get_search_engine(
    repo: SQLiteMenuRepository = Depends(get_menu_repository),
) -> ProximitySearchEngine:
    """Search engine over the shared repository (stateless, cheap to build)."""
    return ProximitySearchEngine(repo)


def get_menu_catalog(
    repo: SQLiteMenuRepository = Depends(get_menu_repository),
) -> MenuCatalog:
    """Catalog service over the shared repository."""
    return MenuCatalog(repo)


async def init_services() -> None:
    """
    Initialize services on startup.

    This should be called from the FastAPI lifespan handler.
    """
    repo = get_menu_repository()
    await repo.initialize()


async def cleanup_services() -> None:
    """Cleanup services on shutdown."""
    repo = get_menu_repository()
    await repo.close()
