"""
SQLite adapter - Menu catalog storage and seed import.
"""

from .repository import SQLiteMenuRepository
from .seed import import_seed, load_seed_file

__all__ = ["SQLiteMenuRepository", "import_seed", "load_seed_file"]
