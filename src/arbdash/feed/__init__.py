"""Inbound feed: HTTP client and payload models for the price service."""

from arbdash.feed.client import SnapshotClient
from arbdash.feed.models import (
    CoinQuotePayload,
    SnapshotPayload,
    parse_snapshot,
    parse_snapshot_json,
)


__all__ = [
    "CoinQuotePayload",
    "SnapshotClient",
    "SnapshotPayload",
    "parse_snapshot",
    "parse_snapshot_json",
]
