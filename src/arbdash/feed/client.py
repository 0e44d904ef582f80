"""
Async client for the price comparison service.

Fetches the ``/coins`` snapshot with:
- A single reusable aiohttp session
- Fast JSON parsing with orjson
- A bounded total timeout per request
- Every failure mapped onto the refresh error taxonomy
"""

import asyncio
import logging

import aiohttp
import orjson

from arbdash.config.constants import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT, ENDPOINT_COINS
from arbdash.core.errors import NetworkFailure, ResponseFailure
from arbdash.core.types import Snapshot
from arbdash.feed.models import ServiceError, parse_snapshot_json
from arbdash.utils.time import LatencyTimer, format_duration_us


logger = logging.getLogger(__name__)


class SnapshotClient:
    """
    Async client for the snapshot endpoint.

    Usable directly as the polling controller's fetch callable:
    ``PollingController(client.fetch_snapshot)``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout_s: float = DEFAULT_REQUEST_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Service base address, without trailing slash.
            timeout_s: Total timeout for one request in seconds.
            session: Optional externally owned session (not closed by us).
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._session = session
        self._owns_session = session is None

    @property
    def url(self) -> str:
        """Full snapshot URL."""
        return f"{self._base_url}{ENDPOINT_COINS}"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the client session if we created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def fetch_snapshot(self) -> Snapshot:
        """
        Fetch and validate the current snapshot.

        Returns:
            Parsed snapshot.

        Raises:
            NetworkFailure: On transport errors or timeout.
            ResponseFailure: On a non-success status code.
            ShapeValidationFailure: On malformed JSON or payload shape.
        """
        session = await self._get_session()

        with LatencyTimer() as timer:
            try:
                async with session.get(self.url, timeout=self._timeout) as response:
                    status = response.status
                    body = await response.read()
            except asyncio.TimeoutError as e:
                raise NetworkFailure(f"Request to {self.url} timed out") from e
            except aiohttp.ClientError as e:
                raise NetworkFailure(f"Network error: {e}") from e

        logger.debug(f"GET {self.url} -> {status} in {format_duration_us(timer.latency_us)}")

        if not 200 <= status < 300:
            raise ResponseFailure(self._error_message(status, body), status=status)

        return parse_snapshot_json(body)

    def _error_message(self, status: int, body: bytes) -> str:
        """Build an error message, preferring the service's own explanation."""
        try:
            error = ServiceError.model_validate(orjson.loads(body))
        except (orjson.JSONDecodeError, ValueError):
            return f"API error {status}"
        return f"API error {status}: {error.message}"

    async def __aenter__(self) -> "SnapshotClient":
        """Async context manager entry."""
        await self._get_session()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
