"""
Application settings with environment variable support.

Uses Pydantic Settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arbdash.config.constants import (
    DEFAULT_API_URL,
    DEFAULT_DASHBOARD_HOST,
    DEFAULT_DASHBOARD_PORT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TICKER_SIZE,
    DEFAULT_TOP_N,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables prefixed
    with ``ARBDASH_``. The upstream address also honours the plain
    ``API_URL`` / ``NEXT_PUBLIC_API_URL`` names used by existing deployments.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARBDASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # =========================================================================
    # Upstream Service
    # =========================================================================

    api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("ARBDASH_API_URL", "API_URL", "NEXT_PUBLIC_API_URL"),
        description="Base address of the price comparison service",
    )

    request_timeout_s: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        gt=0.0,
        le=120.0,
        description="Total timeout for one snapshot request in seconds",
    )

    # =========================================================================
    # Polling
    # =========================================================================

    poll_interval_s: float = Field(
        default=DEFAULT_POLL_INTERVAL,
        ge=0.1,
        le=300.0,
        description="Seconds between the starts of consecutive refresh attempts",
    )

    # =========================================================================
    # Views
    # =========================================================================

    top_n: int = Field(
        default=DEFAULT_TOP_N,
        ge=1,
        le=50,
        description="Number of top opportunities surfaced as cards",
    )

    ticker_size: int = Field(
        default=DEFAULT_TICKER_SIZE,
        ge=1,
        le=50,
        description="Number of opportunities shown in the ticker",
    )

    # =========================================================================
    # Presentation
    # =========================================================================

    dashboard_host: str = Field(
        default=DEFAULT_DASHBOARD_HOST,
        description="Bind address for the HTTP dashboard adapter",
    )

    dashboard_port: int = Field(
        default=DEFAULT_DASHBOARD_PORT,
        ge=1,
        le=65535,
        description="Port for the HTTP dashboard adapter",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("api_url", mode="after")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) address and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"API URL must start with http:// or https://, got {v!r}")
        return v.rstrip("/")

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def poll_interval_ms(self) -> int:
        """Polling interval in milliseconds."""
        return int(self.poll_interval_s * 1000)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded only once.
    Clear cache with `get_settings.cache_clear()` if needed.
    """
    return Settings()
