"""
HTTP dashboard adapter.

Serves the view-model as JSON for a browser front end. The polling
controller lives exactly as long as the application: it is started in
the lifespan handler and released when the server shuts down.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request

from arbdash import __version__
from arbdash.config.settings import Settings, get_settings
from arbdash.core.poller import PollingController
from arbdash.core.types import CoinQuote, RefreshState, ViewMode
from arbdash.view.derive import compute_stats, select_view, ticker_quotes, top_opportunities
from arbdash.view.formatting import format_price, format_spread, spread_tier


logger = logging.getLogger(__name__)

ControllerFactory = Callable[[Settings], PollingController]


# =============================================================================
# Serialization
# =============================================================================


def quote_to_dict(quote: CoinQuote) -> dict[str, Any]:
    """Render one quote with display strings alongside raw values."""
    return {
        "symbol": quote.symbol,
        "badge": quote.badge,
        "binance_price": quote.binance_price,
        "gateio_price": quote.gateio_price,
        "binance_display": format_price(quote.binance_price),
        "gateio_display": format_price(quote.gateio_price),
        "spread_percent": quote.spread_percent,
        "spread_display": format_spread(quote.spread_percent),
        "spread_tier": spread_tier(quote.spread_percent).value,
        "cheaper_exchange": quote.cheaper_exchange.value,
        "pricier_exchange": quote.pricier_exchange.value,
        "route": quote.route,
        "is_opportunity": quote.is_opportunity,
    }


def state_to_dict(state: RefreshState) -> dict[str, Any]:
    """Render refresh status without the snapshot body."""
    error = None
    if state.last_error is not None:
        error = {"kind": state.last_error.kind, "message": str(state.last_error)}
    return {
        "status": state.status.value,
        "has_data": state.has_data,
        "updated_at": state.snapshot.updated_at if state.snapshot else None,
        "last_success_ms": state.last_success_ms,
        "consecutive_failures": state.consecutive_failures,
        "error": error,
    }


# =============================================================================
# Application
# =============================================================================


def create_app(
    settings: Settings | None = None,
    controller_factory: ControllerFactory | None = None,
) -> FastAPI:
    """
    Build the dashboard application.

    Args:
        settings: Settings to use (default: loaded from the environment at startup).
        controller_factory: Builds the polling controller (default: HTTP polling
            of the configured service).
    """
    factory = controller_factory or PollingController.from_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        resolved = settings or get_settings()
        app.state.settings = resolved
        async with factory(resolved) as controller:
            app.state.controller = controller
            logger.info(f"Dashboard polling {resolved.api_url}")
            yield

    app = FastAPI(title="Arbitrage Dashboard", version=__version__, lifespan=lifespan)
    app.get("/api/state")(get_state)
    app.get("/api/view")(get_view)
    app.post("/api/retry")(retry)
    return app


def _controller(request: Request) -> PollingController:
    return request.app.state.controller  # type: ignore[no-any-return]


async def get_state(request: Request) -> dict[str, Any]:
    return state_to_dict(_controller(request).state)


async def get_view(
    request: Request,
    mode: ViewMode = ViewMode.ALL,
    q: str = "",
) -> dict[str, Any]:
    settings: Settings = request.app.state.settings
    state = _controller(request).state
    snapshot = state.snapshot
    stats = compute_stats(snapshot)

    return {
        "state": state_to_dict(state),
        "mode": mode.value,
        "query": q,
        "stats": {
            "opportunity_count": stats.opportunity_count,
            "average_spread": stats.average_spread,
            "max_spread": stats.max_spread,
            "total_tracked_coins": stats.total_tracked_coins,
        },
        "top": [quote_to_dict(c) for c in top_opportunities(snapshot, settings.top_n)],
        "rows": [quote_to_dict(c) for c in select_view(snapshot, mode, q)],
        "ticker": [quote_to_dict(c) for c in ticker_quotes(snapshot, settings.ticker_size)],
    }


async def retry(request: Request) -> dict[str, Any]:
    """Run one refresh now and report the resulting state."""
    controller = _controller(request)
    if not controller.is_running:
        raise HTTPException(status_code=503, detail="Polling is not running")
    await controller.retry()
    return state_to_dict(controller.state)


app = create_app()


def main() -> None:
    import uvicorn

    from arbdash.telemetry.logger import setup_logging

    settings = get_settings()
    async_logger = setup_logging(settings.log_level)

    print(
        f"""
╔═══════════════════════════════════════════════════════════════╗
║              ARBITRAGE DASHBOARD - HTTP ADAPTER               ║
╚═══════════════════════════════════════════════════════════════╝

API:      http://{settings.dashboard_host}:{settings.dashboard_port}/api/view
Upstream: {settings.api_url}
Press Ctrl+C to stop.
    """
    )
    try:
        uvicorn.run(
            create_app(settings),
            host=settings.dashboard_host,
            port=settings.dashboard_port,
            log_level="warning",
        )
    finally:
        async_logger.stop()


if __name__ == "__main__":
    main()
