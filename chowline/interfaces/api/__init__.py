"""
API Interface - FastAPI REST API for menu discovery.
"""

from .main import app, create_app

__all__ = ["app", "create_app"]
