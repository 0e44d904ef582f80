"""
Dashboard constants and configuration values.

This module contains all hardcoded values used throughout the dashboard.
Values are organized by category for easy maintenance and auditing.
"""

from typing import Final


# =============================================================================
# Upstream Price Service
# =============================================================================

DEFAULT_API_URL: Final[str] = "http://localhost:8080"

# API Endpoints
ENDPOINT_COINS: Final[str] = "/coins"

# Wire values for the two exchanges
EXCHANGE_BINANCE: Final[str] = "Binance"
EXCHANGE_GATEIO: Final[str] = "Gate.io"


# =============================================================================
# Polling
# =============================================================================

DEFAULT_POLL_INTERVAL: Final[float] = 3.0  # seconds
DEFAULT_REQUEST_TIMEOUT: Final[float] = 10.0  # seconds


# =============================================================================
# Views
# =============================================================================

# Number of cards in the "top opportunities" strip
DEFAULT_TOP_N: Final[int] = 4

# Number of opportunities scrolled through the bottom ticker
DEFAULT_TICKER_SIZE: Final[int] = 8


# =============================================================================
# Precision & Formatting
# =============================================================================

# Price magnitude bands (lower bounds, inclusive)
PRICE_BAND_GROUPED: Final[float] = 1000.0
PRICE_BAND_UNIT: Final[float] = 1.0
PRICE_BAND_MICRO: Final[float] = 0.0001

CURRENCY_PREFIX: Final[str] = "$"

# Spread highlight tiers (strict lower bounds, percent)
SPREAD_TIER_HIGH: Final[float] = 1.0
SPREAD_TIER_MEDIUM: Final[float] = 0.5
SPREAD_TIER_LOW: Final[float] = 0.3

SPREAD_PRECISION: Final[int] = 2


# =============================================================================
# Presentation
# =============================================================================

DEFAULT_DASHBOARD_HOST: Final[str] = "127.0.0.1"
DEFAULT_DASHBOARD_PORT: Final[int] = 8000


# =============================================================================
# Logging & Telemetry
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Maximum log queue size
MAX_LOG_QUEUE_SIZE: Final[int] = 10_000
