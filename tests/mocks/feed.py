"""
Fake snapshot sources for testing.

Provides fetch callables whose timing and outcome the test controls,
plus builders for quotes, snapshots and wire payloads.
"""

import asyncio
from collections.abc import Callable, Iterable
from typing import Any

from arbdash.core.types import CoinQuote, Exchange, RefreshState, Snapshot


# =============================================================================
# Builders
# =============================================================================


def make_quote(
    symbol: str,
    spread: float = 0.1,
    binance: float = 100.0,
    gateio: float | None = None,
    opportunity: bool | None = None,
) -> CoinQuote:
    """Build a quote; Gate.io defaults to the higher price."""
    gateio = binance * (1 + spread / 100) if gateio is None else gateio
    cheaper = Exchange.BINANCE if binance < gateio else Exchange.GATEIO
    pricier = Exchange.GATEIO if cheaper is Exchange.BINANCE else Exchange.BINANCE
    return CoinQuote(
        symbol=symbol,
        binance_price=binance,
        gateio_price=gateio,
        spread_percent=spread,
        cheaper_exchange=cheaper,
        pricier_exchange=pricier,
        is_opportunity=spread > 0.3 if opportunity is None else opportunity,
    )


def make_snapshot(
    opportunities: Iterable[CoinQuote] = (),
    all_quotes: Iterable[CoinQuote] | None = None,
    updated_at: str = "12:00:00",
) -> Snapshot:
    """Build a snapshot; ``all_quotes`` defaults to the opportunities."""
    opportunities = tuple(opportunities)
    return Snapshot(
        opportunities=opportunities,
        all_quotes=opportunities if all_quotes is None else tuple(all_quotes),
        updated_at=updated_at,
    )


def quote_payload(
    symbol: str,
    spread: float = 0.1,
    binance: float = 100.0,
    gateio: float = 100.1,
    cheap: str = "Binance",
    expensive: str = "Gate.io",
    opportunity: bool = False,
) -> dict[str, Any]:
    """Build one coin entry in wire format."""
    return {
        "symbol": symbol,
        "binance_fiyat": binance,
        "gateio_fiyat": gateio,
        "fark_yuzde": spread,
        "ucuz_borsa": cheap,
        "pahali_borsa": expensive,
        "arbitraj_firsati": opportunity,
    }


def snapshot_payload(
    opportunities: list[dict[str, Any]] | None = None,
    all_coins: list[dict[str, Any]] | None = None,
    updated_at: str = "14:03:27",
) -> dict[str, Any]:
    """Build a full ``/coins`` body in wire format."""
    if opportunities is None:
        opportunities = [
            quote_payload("BTC", 1.2, 97500.0, 98676.0, opportunity=True),
            quote_payload("ETH", 0.8, 3450.0, 3422.0, "Gate.io", "Binance", opportunity=True),
        ]
    if all_coins is None:
        all_coins = opportunities + [quote_payload("DOGE", 0.05, 0.32, 0.32016)]
    return {
        "firsatlar": opportunities,
        "tum_coinler": all_coins,
        "guncelleme_zamani": updated_at,
    }


# =============================================================================
# Fetch fakes
# =============================================================================


class ScriptedFetch:
    """
    Fetch that answers immediately from a script.

    Each call consumes the next outcome (a Snapshot to return or an
    exception to raise); the last outcome repeats once the script runs out.
    """

    def __init__(self, outcomes: Iterable[Snapshot | BaseException]) -> None:
        self._outcomes = list(outcomes)
        if not self._outcomes:
            raise ValueError("ScriptedFetch needs at least one outcome")
        self.calls = 0

    async def __call__(self) -> Snapshot:
        outcome = self._outcomes[min(self.calls, len(self._outcomes) - 1)]
        self.calls += 1
        await asyncio.sleep(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class ControlledFetch:
    """
    Fetch whose every call blocks until the test resolves it.

    ``calls[i]`` is the future behind the i-th call, in start order.
    """

    def __init__(self) -> None:
        self.calls: list[asyncio.Future[Snapshot]] = []

    async def __call__(self) -> Snapshot:
        future: asyncio.Future[Snapshot] = asyncio.get_running_loop().create_future()
        self.calls.append(future)
        return await future

    def succeed(self, index: int, snapshot: Snapshot) -> None:
        """Resolve call ``index`` with a snapshot."""
        self.calls[index].set_result(snapshot)

    def fail(self, index: int, error: BaseException) -> None:
        """Resolve call ``index`` with an error."""
        self.calls[index].set_exception(error)


class StubController:
    """Stand-in for PollingController exposing only what the view reads."""

    def __init__(self, state: RefreshState | None = None) -> None:
        self.state = state or RefreshState()
        self.retries = 0

    def retry(self) -> None:
        self.retries += 1


# =============================================================================
# Async helpers
# =============================================================================


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Yield to the event loop until ``predicate()`` holds."""

    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_poll(), timeout)


async def settle(rounds: int = 5) -> None:
    """Let pending callbacks and woken tasks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)
