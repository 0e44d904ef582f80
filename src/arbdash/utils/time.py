"""
Time utilities.

Wall-clock timestamps for refresh bookkeeping and a small timer for
measuring request latency.
"""

import time


def get_timestamp_us() -> int:
    """
    Get current timestamp in microseconds.

    Returns:
        Current Unix timestamp in microseconds.
    """
    return time.time_ns() // 1000


def get_timestamp_ms() -> int:
    """
    Get current timestamp in milliseconds.

    Returns:
        Current Unix timestamp in milliseconds.
    """
    return time.time_ns() // 1_000_000


class LatencyTimer:
    """
    Context manager for measuring operation latency.

    Example:
        >>> with LatencyTimer() as timer:
        ...     do_something()
        >>> print(f"Latency: {timer.latency_us}μs")
    """

    __slots__ = ("start_us", "end_us", "latency_us")

    def __init__(self) -> None:
        self.start_us: int = 0
        self.end_us: int = 0
        self.latency_us: int = 0

    def __enter__(self) -> "LatencyTimer":
        self.start_us = get_timestamp_us()
        return self

    def __exit__(self, *args: object) -> None:
        self.end_us = get_timestamp_us()
        self.latency_us = self.end_us - self.start_us


def format_duration_us(duration_us: int) -> str:
    """
    Format a duration in microseconds for human-readable display.

    Args:
        duration_us: Duration in microseconds.

    Returns:
        Formatted duration string.

    Examples:
        >>> format_duration_us(500)
        '500μs'
        >>> format_duration_us(1500)
        '1.50ms'
        >>> format_duration_us(1500000)
        '1.50s'
    """
    if duration_us < 1000:
        return f"{duration_us}μs"
    elif duration_us < 1_000_000:
        return f"{duration_us / 1000:.2f}ms"
    else:
        return f"{duration_us / 1_000_000:.2f}s"


def format_age_ms(since_ms: int | None, now_ms: int | None = None) -> str:
    """
    Format how long ago a millisecond timestamp was.

    Args:
        since_ms: Past timestamp in milliseconds, or None.
        now_ms: Reference time (defaults to now).

    Returns:
        ``"never"``, ``"just now"`` or e.g. ``"12s ago"`` / ``"3m ago"``.
    """
    if since_ms is None:
        return "never"
    now_ms = get_timestamp_ms() if now_ms is None else now_ms
    seconds = max(0, (now_ms - since_ms) // 1000)
    if seconds < 1:
        return "just now"
    if seconds < 60:
        return f"{seconds}s ago"
    return f"{seconds // 60}m ago"
