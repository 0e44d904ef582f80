"""View layer: derivation functions, formatting, and the dashboard view-model."""

from arbdash.view.derive import (
    compute_stats,
    filter_quotes,
    select_view,
    ticker_quotes,
    top_opportunities,
)
from arbdash.view.formatting import format_price, format_spread, spread_tier
from arbdash.view.model import DashboardView


__all__ = [
    "DashboardView",
    "compute_stats",
    "filter_quotes",
    "format_price",
    "format_spread",
    "select_view",
    "spread_tier",
    "ticker_quotes",
    "top_opportunities",
]
