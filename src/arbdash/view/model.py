"""
Dashboard view-model.

Binds the UI-owned selections (search text, view mode, card count) to
the polling controller's current state. Every accessor reads the latest
state and derives its result on the spot.
"""

from arbdash.config.constants import DEFAULT_TICKER_SIZE, DEFAULT_TOP_N
from arbdash.core.poller import PollingController
from arbdash.core.types import CoinQuote, RefreshState, SnapshotStats, ViewMode
from arbdash.view.derive import (
    compute_stats,
    select_view,
    ticker_quotes,
    top_opportunities,
)


class DashboardView:
    """View accessors a presentation adapter renders from."""

    def __init__(
        self,
        controller: PollingController,
        top_n: int = DEFAULT_TOP_N,
        ticker_size: int = DEFAULT_TICKER_SIZE,
    ) -> None:
        self._controller = controller
        self.top_n = top_n
        self.ticker_size = ticker_size
        self.query = ""
        self.mode = ViewMode.ALL

    @property
    def state(self) -> RefreshState:
        """Current refresh state."""
        return self._controller.state

    def set_query(self, query: str) -> None:
        self.query = query

    def set_mode(self, mode: ViewMode | str) -> None:
        self.mode = ViewMode(mode)

    def rows(self) -> tuple[CoinQuote, ...]:
        """Rows of the coin table for the active mode and query."""
        return select_view(self.state.snapshot, self.mode, self.query)

    def top(self) -> tuple[CoinQuote, ...]:
        """Top opportunity cards."""
        return top_opportunities(self.state.snapshot, self.top_n)

    def ticker(self) -> tuple[CoinQuote, ...]:
        return ticker_quotes(self.state.snapshot, self.ticker_size)

    def stats(self) -> SnapshotStats:
        """Aggregate statistics for the stat cards."""
        return compute_stats(self.state.snapshot)

    def retry(self) -> None:
        """Manual retry from the error affordance."""
        self._controller.retry()
