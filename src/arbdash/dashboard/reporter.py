"""
Terminal dashboard.

Renders the view-model as a boxed text panel: status header, stat cards,
top opportunities, the coin table for the active view, and the ticker.
While no snapshot has ever arrived it shows either a loading banner or
an error panel with a retry hint.
"""

import asyncio
import sys
from typing import TextIO

from arbdash import __version__
from arbdash.core.types import (
    CoinQuote,
    Exchange,
    RefreshState,
    RefreshStatus,
    SpreadTier,
    ViewMode,
)
from arbdash.utils.time import format_age_ms
from arbdash.view.formatting import format_price, format_spread, spread_tier
from arbdash.view.model import DashboardView


STATUS_LABELS = {
    RefreshStatus.LOADING: "LOADING",
    RefreshStatus.READY: "LIVE",
    RefreshStatus.DEGRADED: "STALE",
    RefreshStatus.FAILED: "OFFLINE",
}

TIER_MARKS = {
    SpreadTier.HIGH: "+++",
    SpreadTier.MEDIUM: "++",
    SpreadTier.LOW: "+",
    SpreadTier.NONE: "",
}


class CLIReporter:
    """
    Real-time terminal dashboard.

    Displays a formatted panel with:
    - Refresh status and last update time
    - Opportunity statistics
    - Top-ranked opportunities
    - The coin table (all coins or opportunities only)
    """

    # Box drawing characters
    BOX_TL = "\u2554"  # ╔
    BOX_TR = "\u2557"  # ╗
    BOX_BL = "\u255a"  # ╚
    BOX_BR = "\u255d"  # ╝
    BOX_H = "\u2550"  # ═
    BOX_V = "\u2551"  # ║
    BOX_LT = "\u2560"  # ╠
    BOX_RT = "\u2563"  # ╣
    THIN_V = "\u2502"  # │

    def __init__(
        self,
        view: DashboardView,
        width: int = 96,
        max_rows: int = 20,
        output: TextIO | None = None,
    ) -> None:
        """
        Initialize CLI reporter.

        Args:
            view: View-model to render.
            width: Dashboard width in characters.
            max_rows: Maximum coin table rows shown.
            output: Output stream (default: stdout).
        """
        self._view = view
        self._width = width
        self._max_rows = max_rows
        self._output = output or sys.stdout
        self._running = False
        self._task: asyncio.Task[None] | None = None

    # =========================================================================
    # Layout helpers
    # =========================================================================

    def _pad(self, text: str, width: int) -> str:
        """Pad text to width."""
        return text.ljust(width)[:width]

    def _line(self, content: str = "") -> str:
        """Create a line with borders."""
        inner_width = self._width - 2
        return f"{self.BOX_V}{self._pad(content, inner_width)}{self.BOX_V}"

    def _divider(self) -> str:
        """Create a horizontal divider."""
        return f"{self.BOX_LT}{self.BOX_H * (self._width - 2)}{self.BOX_RT}"

    # =========================================================================
    # Sections
    # =========================================================================

    def _header(self, state: RefreshState) -> list[str]:
        status = STATUS_LABELS[state.status]
        updated = state.snapshot.updated_at if state.snapshot else "--:--:--"
        age = format_age_ms(state.last_success_ms)
        return [
            self._line(f"  ARBDASH v{__version__} | BINANCE vs GATE.IO | {status}"),
            self._line(f"  Last update: {updated} ({age})"),
        ]

    def _error_panel(self, state: RefreshState) -> list[str]:
        detail = str(state.last_error) if state.last_error else "unknown error"
        return [
            self._line("  Could not fetch data. Is the backend running?"),
            self._line(f"  {detail}"),
            self._line("  Press [r] + Enter to retry."),
        ]

    def _stale_notice(self, state: RefreshState) -> list[str]:
        detail = str(state.last_error) if state.last_error else "unknown error"
        failures = state.consecutive_failures
        return [
            self._line(f"  Showing last good data. Refresh failed {failures}x: {detail}"),
        ]

    def _stats(self) -> list[str]:
        stats = self._view.stats()
        row = (
            f"  Opportunities: {stats.opportunity_count:<4}{self.THIN_V} "
            f"Max spread: {format_spread(stats.max_spread):<8}{self.THIN_V} "
            f"Avg spread: {format_spread(stats.average_spread):<8}{self.THIN_V} "
            f"Tracked: {stats.total_tracked_coins}"
        )
        return [self._line(row)]

    def _top(self) -> list[str]:
        top = self._view.top()
        if not top:
            return []

        lines = [self._line("  TOP OPPORTUNITIES")]
        for rank, quote in enumerate(top, start=1):
            lines.append(
                self._line(
                    f"  #{rank} {quote.symbol:<7} {format_spread(quote.spread_percent):>7}  "
                    f"{quote.route:<20} "
                    f"Binance {format_price(quote.binance_price):>14}  "
                    f"Gate.io {format_price(quote.gateio_price):>14}"
                )
            )
        return lines

    def _price_cell(self, quote: CoinQuote, exchange: Exchange) -> str:
        mark = "↓" if quote.cheaper_exchange is exchange else " "
        return f"{format_price(quote.price_on(exchange)):>15}{mark}"

    def _table(self) -> list[str]:
        rows = self._view.rows()
        mode = "OPPORTUNITIES" if self._view.mode is ViewMode.OPPORTUNITIES else "ALL COINS"
        search = f" | search: {self._view.query!r}" if self._view.query else ""
        lines = [
            self._line(f"  {mode} ({len(rows)}){search}"),
            self._line(
                f"  {'#':>3}  {'Coin':<8}{'Binance':>16}{'Gate.io':>16}{'Spread':>9}    Route"
            ),
        ]

        for index, quote in enumerate(rows[: self._max_rows], start=1):
            flag = "*" if quote.is_opportunity else " "
            tier = TIER_MARKS[spread_tier(quote.spread_percent)]
            lines.append(
                self._line(
                    f"  {index:>3}{flag} {quote.symbol:<8}"
                    f"{self._price_cell(quote, Exchange.BINANCE)}"
                    f"{self._price_cell(quote, Exchange.GATEIO)}"
                    f"{format_spread(quote.spread_percent):>9} {tier:<3}"
                    f"{quote.route}"
                )
            )

        if len(rows) > self._max_rows:
            lines.append(self._line(f"  ... {len(rows) - self._max_rows} more"))
        return lines

    def _ticker(self) -> list[str]:
        ticker = self._view.ticker()
        if not ticker:
            return []
        items = "  ·  ".join(f"{q.symbol} {format_spread(q.spread_percent)}" for q in ticker)
        return [self._line(f"  {items}")]

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self) -> str:
        """
        Render the dashboard.

        Returns:
            Formatted dashboard string.
        """
        state = self._view.state
        lines = [f"{self.BOX_TL}{self.BOX_H * (self._width - 2)}{self.BOX_TR}"]
        lines.extend(self._header(state))
        lines.append(self._divider())

        if state.status is RefreshStatus.LOADING:
            lines.append(self._line("  Loading market data..."))
        elif state.status is RefreshStatus.FAILED:
            lines.extend(self._error_panel(state))
        else:
            if state.status is RefreshStatus.DEGRADED:
                lines.extend(self._stale_notice(state))
                lines.append(self._divider())

            lines.extend(self._stats())
            top = self._top()
            if top:
                lines.append(self._divider())
                lines.extend(top)
            lines.append(self._divider())
            lines.extend(self._table())
            ticker = self._ticker()
            if ticker:
                lines.append(self._divider())
                lines.extend(ticker)

        lines.append(self._divider())
        lines.append(self._line("  [a] all  [o] opportunities  [/text] search  [r] retry  [q] quit"))
        lines.append(f"{self.BOX_BL}{self.BOX_H * (self._width - 2)}{self.BOX_BR}")
        return "\n".join(lines)

    def display(self) -> None:
        """Display the dashboard once."""
        # Clear screen and move cursor to top
        self._output.write("\033[2J\033[H")
        self._output.write(self.render())
        self._output.write("\n")
        self._output.flush()

    # =========================================================================
    # Input
    # =========================================================================

    def handle_command(self, command: str) -> bool:
        """
        Apply one line of keyboard input.

        Returns:
            False if the user asked to quit.
        """
        command = command.strip()
        if command == "q":
            return False
        if command == "a":
            self._view.set_mode(ViewMode.ALL)
        elif command == "o":
            self._view.set_mode(ViewMode.OPPORTUNITIES)
        elif command == "r":
            self._view.retry()
        elif command.startswith("/"):
            self._view.set_query(command[1:])
        return True

    # =========================================================================
    # Background loop
    # =========================================================================

    async def run(self, interval: float = 1.0) -> None:
        """
        Run continuous display updates.

        Args:
            interval: Update interval in seconds.
        """
        self._running = True

        while self._running:
            self.display()
            await asyncio.sleep(interval)

    def start(self, interval: float = 1.0) -> asyncio.Task[None]:
        """Start the reporter as a background task."""
        self._task = asyncio.create_task(self.run(interval))
        return self._task

    def stop(self) -> None:
        """Stop the reporter."""
        self._running = False
        if self._task:
            self._task.cancel()
