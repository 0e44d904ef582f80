"""Utility functions for the dashboard."""

from arbdash.utils.time import (
    LatencyTimer,
    format_age_ms,
    format_duration_us,
    get_timestamp_ms,
)


__all__ = [
    "LatencyTimer",
    "format_age_ms",
    "format_duration_us",
    "get_timestamp_ms",
]
