"""
Type definitions for the dashboard.

This module contains the dataclasses and enums shared by the feed, the
polling controller and the view layer. Market data types are frozen so a
snapshot handed to a reader can never be patched in place.
"""

from dataclasses import dataclass
from enum import Enum

from arbdash.config.constants import EXCHANGE_BINANCE, EXCHANGE_GATEIO
from arbdash.core.errors import RefreshError


# =============================================================================
# Enums
# =============================================================================


class Exchange(str, Enum):
    """Exchanges compared by the upstream service."""

    BINANCE = EXCHANGE_BINANCE
    GATEIO = EXCHANGE_GATEIO


class ViewMode(str, Enum):
    """Which list the coin table shows."""

    ALL = "all"
    OPPORTUNITIES = "opportunities"


class RefreshStatus(str, Enum):
    """Refresh lifecycle status."""

    LOADING = "loading"  # nothing received yet
    READY = "ready"  # snapshot present, last attempt succeeded
    DEGRADED = "degraded"  # snapshot present, last attempt failed
    FAILED = "failed"  # no snapshot ever, last attempt failed


class SpreadTier(str, Enum):
    """Highlight tier for a spread percentage."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


# =============================================================================
# Market Data Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class CoinQuote:
    """
    One coin priced on both exchanges.

    Spread and opportunity flag are computed upstream and carried as-is.
    """

    symbol: str
    binance_price: float
    gateio_price: float
    spread_percent: float
    cheaper_exchange: Exchange
    pricier_exchange: Exchange
    is_opportunity: bool

    def price_on(self, exchange: Exchange) -> float:
        """Get the price quoted on one exchange."""
        if exchange is Exchange.BINANCE:
            return self.binance_price
        return self.gateio_price

    @property
    def badge(self) -> str:
        """Short avatar text for the coin (first two characters)."""
        return self.symbol[:2]

    @property
    def route(self) -> str:
        """Buy-here-sell-there description."""
        return f"{self.cheaper_exchange.value} → {self.pricier_exchange.value}"


@dataclass(slots=True, frozen=True)
class Snapshot:
    """
    One fetched payload.

    ``opportunities`` arrives sorted by descending spread; the feed
    rejects payloads that break that order. ``updated_at`` is an opaque
    display string.
    """

    opportunities: tuple[CoinQuote, ...]
    all_quotes: tuple[CoinQuote, ...]
    updated_at: str


@dataclass(slots=True, frozen=True)
class SnapshotStats:
    """Aggregate statistics over a snapshot's opportunities."""

    opportunity_count: int = 0
    average_spread: float = 0.0
    max_spread: float = 0.0
    total_tracked_coins: int = 0


# =============================================================================
# Refresh State
# =============================================================================


@dataclass(slots=True, frozen=True)
class RefreshState:
    """
    Controller-owned refresh state.

    Replaced as a whole on every transition, so any reference a reader
    holds stays internally consistent.
    """

    status: RefreshStatus = RefreshStatus.LOADING
    snapshot: Snapshot | None = None
    last_error: RefreshError | None = None
    consecutive_failures: int = 0
    last_success_ms: int | None = None

    @property
    def has_data(self) -> bool:
        """Check if a snapshot is available for display."""
        return self.snapshot is not None

    @property
    def is_stale(self) -> bool:
        """Check if the displayed snapshot is older than the last attempt."""
        return self.status is RefreshStatus.DEGRADED


@dataclass(slots=True)
class PollStats:
    """Counters kept by the polling controller."""

    attempts_started: int = 0
    results_applied: int = 0
    results_discarded: int = 0
    failures: int = 0  # applied failures only
