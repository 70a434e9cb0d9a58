"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    ChowlineError,
    ErrorCode,
    NotFoundError,
    SearchError,
    StorageError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "ChowlineError",
    "SearchError",
    "NotFoundError",
    "StorageError",
]
