"""Core module containing the polling controller, errors, and type definitions."""

from arbdash.core.errors import (
    InvalidPriceError,
    NetworkFailure,
    RefreshError,
    ResponseFailure,
    ShapeValidationFailure,
)
from arbdash.core.poller import PollingController
from arbdash.core.types import (
    CoinQuote,
    Exchange,
    PollStats,
    RefreshState,
    RefreshStatus,
    Snapshot,
    SnapshotStats,
    SpreadTier,
    ViewMode,
)


__all__ = [
    "CoinQuote",
    "Exchange",
    "InvalidPriceError",
    "NetworkFailure",
    "PollStats",
    "PollingController",
    "RefreshError",
    "RefreshState",
    "RefreshStatus",
    "ResponseFailure",
    "ShapeValidationFailure",
    "Snapshot",
    "SnapshotStats",
    "SpreadTier",
    "ViewMode",
]
