"""
Pytest configuration and shared fixtures.

Provides reusable test fixtures for all test modules.
"""

from typing import Any

import pytest

from arbdash.core.types import CoinQuote, Exchange, Snapshot
from tests.mocks import make_quote, make_snapshot, snapshot_payload


# =============================================================================
# Quote Fixtures
# =============================================================================


@pytest.fixture
def btc_quote() -> CoinQuote:
    """BTC cheaper on Binance, 1.2% spread."""
    return make_quote("BTC", 1.2, binance=97500.0, gateio=98676.0)


@pytest.fixture
def eth_quote() -> CoinQuote:
    """ETH cheaper on Gate.io, 0.8% spread."""
    return CoinQuote(
        symbol="ETH",
        binance_price=3450.0,
        gateio_price=3422.0,
        spread_percent=0.8,
        cheaper_exchange=Exchange.GATEIO,
        pricier_exchange=Exchange.BINANCE,
        is_opportunity=True,
    )


@pytest.fixture
def doge_quote() -> CoinQuote:
    """DOGE below the opportunity threshold."""
    return make_quote("DOGE", 0.05, binance=0.32, gateio=0.32016)


# =============================================================================
# Snapshot Fixtures
# =============================================================================


@pytest.fixture
def snapshot(btc_quote: CoinQuote, eth_quote: CoinQuote, doge_quote: CoinQuote) -> Snapshot:
    """Two opportunities among three tracked coins."""
    return make_snapshot(
        opportunities=[btc_quote, eth_quote],
        all_quotes=[btc_quote, eth_quote, doge_quote],
        updated_at="14:03:27",
    )


@pytest.fixture
def quiet_snapshot(doge_quote: CoinQuote) -> Snapshot:
    """Tracked coins but no opportunity."""
    return make_snapshot(opportunities=[], all_quotes=[doge_quote], updated_at="14:03:30")


@pytest.fixture
def wide_snapshot() -> Snapshot:
    """Twelve ranked opportunities and a few quiet coins."""
    opportunities = [make_quote(f"C{i:02d}", round(3.0 - i * 0.2, 2)) for i in range(12)]
    quiet = [make_quote(sym, 0.1) for sym in ("ADA", "XRP", "DOT")]
    return make_snapshot(opportunities, opportunities + quiet)


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def coins_payload() -> dict[str, Any]:
    """Valid ``/coins`` body matching the ``snapshot`` fixture."""
    return snapshot_payload()
