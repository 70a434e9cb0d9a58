"""
CLI Interface - Command-line tools for Chowline.

Provides commands for:
- Database setup and seed import
- Menu item search
- Serving the API
"""

from .main import app, main

__all__ = ["app", "main"]
