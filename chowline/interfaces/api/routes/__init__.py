"""
API Routes.
"""

from . import health, menu

__all__ = ["health", "menu"]
