"""
Adapters - External service integrations.

All storage access is wrapped here to isolate domains from database details.
"""

from .sqlite import SQLiteMenuRepository

__all__ = [
    "SQLiteMenuRepository",
]
