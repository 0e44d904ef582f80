"""
View derivation over a snapshot.

Pure functions, recomputed on every call. A snapshot holds at most a
hundred or so coins, so nothing here is cached; statistics in particular
are always derived from the snapshot they describe.
"""

from collections.abc import Sequence

from arbdash.config.constants import DEFAULT_TICKER_SIZE, DEFAULT_TOP_N
from arbdash.core.types import CoinQuote, Snapshot, SnapshotStats, ViewMode


def filter_quotes(quotes: Sequence[CoinQuote], query: str) -> tuple[CoinQuote, ...]:
    """
    Case-insensitive substring search on symbol.

    Args:
        quotes: Quotes to search, in display order.
        query: Search text; empty matches everything.

    Returns:
        Matching quotes in their original order.
    """
    if not query:
        return tuple(quotes)
    needle = query.lower()
    return tuple(q for q in quotes if needle in q.symbol.lower())


def select_view(
    snapshot: Snapshot | None,
    mode: ViewMode,
    query: str = "",
) -> tuple[CoinQuote, ...]:
    """
    Rows for the coin table.

    The search query only narrows the ALL view. The OPPORTUNITIES view
    always shows the full ranked set.
    """
    if snapshot is None:
        return ()
    if mode is ViewMode.OPPORTUNITIES:
        return snapshot.opportunities
    return filter_quotes(snapshot.all_quotes, query)


def top_opportunities(snapshot: Snapshot | None, n: int = DEFAULT_TOP_N) -> tuple[CoinQuote, ...]:
    """First ``n`` opportunities (already ranked by spread)."""
    if snapshot is None or n <= 0:
        return ()
    return snapshot.opportunities[:n]


def ticker_quotes(snapshot: Snapshot | None, n: int = DEFAULT_TICKER_SIZE) -> tuple[CoinQuote, ...]:
    """Opportunities shown in the scrolling ticker."""
    return top_opportunities(snapshot, n)


def compute_stats(snapshot: Snapshot | None) -> SnapshotStats:
    """
    Aggregate statistics over the snapshot's opportunities.

    ``max_spread`` is the first opportunity's spread, which is the maximum
    because the feed only admits opportunities sorted by descending spread.

    Returns:
        Zeroed stats when there is no snapshot or no opportunity.
    """
    if snapshot is None:
        return SnapshotStats()

    opportunities = snapshot.opportunities
    count = len(opportunities)
    if count == 0:
        return SnapshotStats(total_tracked_coins=len(snapshot.all_quotes))

    return SnapshotStats(
        opportunity_count=count,
        average_spread=sum(q.spread_percent for q in opportunities) / count,
        max_spread=opportunities[0].spread_percent,
        total_tracked_coins=len(snapshot.all_quotes),
    )
