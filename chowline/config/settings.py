"""
Settings - Application configuration using Pydantic Settings.

Loads from environment variables (prefix ``CHOWLINE_``) and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Paths
    db_path: Path = Path("data/chowline.db")

    # Search
    search_default_limit: int = 20

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    rate_limit_per_minute: int = 120

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="CHOWLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
