"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # HTTP configuration
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 5000

    # Storage: JSON array file; unset keeps pies in memory
    data_file: str | None = None

    # Logging
    error_log_file: str = "logs/errors.log"
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
