# src/geofx/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and a local .env file with validation.

Files that USE this module:
- geofx.app (builds the engine from settings)
- geofx.adapters.* (timeouts, endpoint keys, cache file path)
- geofx.application.* (TTLs, base currency, override flag)

Files that this module USES:
- geofx.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from geofx.shared.validators import validate_api_key, validate_currency_code


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Currency ---
    base_currency: str = Field(default="usd", alias="BASE_CURRENCY")

    # --- HTTP / positioning ---
    http_timeout_seconds: int = Field(default=8, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)
    geolocation_timeout_seconds: int = Field(default=15, alias="GEOLOCATION_TIMEOUT_SECONDS", ge=1, le=120)
    ipapi_url: str = Field(default="https://ipapi.co/json/", alias="IPAPI_URL")

    # --- Optional provider keys ---
    positionstack_key: str = Field(default="", alias="POSITIONSTACK_KEY")
    fastforex_key: str = Field(default="", alias="FASTFOREX_KEY")

    # --- Cache Settings ---
    location_cache_hours: float = Field(default=2, alias="LOCATION_CACHE_HOURS", gt=0, le=24 * 7)
    rate_cache_minutes: float = Field(default=10, alias="RATE_CACHE_MINUTES", gt=0, le=1440)
    location_cache_file: Path = Field(
        default=Path("./data/location_cache.json"), alias="LOCATION_CACHE_FILE"
    )

    # --- Anchor-market override (off unless product confirms it) ---
    force_anchor_on_african_timezone: bool = Field(
        default=False, alias="FORCE_ANCHOR_ON_AFRICAN_TIMEZONE"
    )

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_stdout: bool = Field(default=True, alias="GEOFX_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def positionstack_access_key(self) -> str:
        """Positionstack key, or the public demo key when none is configured."""
        return self.positionstack_key or "demo"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @field_validator("base_currency")
    @classmethod
    def validate_base_currency(cls, v: str) -> str:
        """Validate base currency against the supported set."""
        if not validate_currency_code(v):
            raise ValueError("BASE_CURRENCY must be a supported currency code")
        return v.lower()

    @field_validator("positionstack_key", "fastforex_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate API key format (empty means not configured)."""
        if v and not validate_api_key(v):
            raise ValueError("Invalid API key format")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return v.upper()


# Global settings instance
settings = Settings()
