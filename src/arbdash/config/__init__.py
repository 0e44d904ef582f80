"""Configuration module for the dashboard."""

from arbdash.config.constants import (
    DEFAULT_API_URL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TICKER_SIZE,
    DEFAULT_TOP_N,
    ENDPOINT_COINS,
)
from arbdash.config.settings import Settings, get_settings


__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_API_URL",
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_TICKER_SIZE",
    "DEFAULT_TOP_N",
    "ENDPOINT_COINS",
]
