"""
Snapshot polling controller.

Owns the refresh lifecycle: launches a fetch attempt immediately and then
at a fixed rate, folds each result into a new RefreshState, and
guarantees that a slow early response never overwrites a fresher one.

Attempts are numbered when they start. A result is applied only if the
controller is still open and no later-started attempt has already
applied its own result; everything else is counted and dropped.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from arbdash.config.constants import DEFAULT_POLL_INTERVAL
from arbdash.core.errors import RefreshError
from arbdash.core.types import PollStats, RefreshState, RefreshStatus, Snapshot
from arbdash.utils.time import get_timestamp_ms


if TYPE_CHECKING:
    from arbdash.config.settings import Settings


logger = logging.getLogger(__name__)

FetchFn = Callable[[], Awaitable[Snapshot]]
StateCallback = Callable[[RefreshState], None]


class PollingController:
    """
    Periodically refreshes a snapshot and tracks refresh state.

    Must be started from inside a running event loop. Use as an async
    context manager to get deterministic release of the scheduler and
    any in-flight attempt.
    """

    def __init__(
        self,
        fetch: FetchFn,
        interval_s: float = DEFAULT_POLL_INTERVAL,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            fetch: Async callable returning a validated snapshot; raises
                RefreshError subclasses on failure.
            interval_s: Seconds between the starts of consecutive attempts.
            on_close: Optional async hook run once by ``aclose()``, e.g. to
                close the HTTP client behind ``fetch``.
        """
        if interval_s <= 0:
            raise ValueError(f"Polling interval must be positive, got {interval_s}")

        self._fetch = fetch
        self._interval = interval_s
        self._on_close = on_close

        self._state = RefreshState()
        self._stats = PollStats()
        self._callbacks: list[StateCallback] = []

        self._seq = 0
        self._applied_seq = 0
        self._scheduler: asyncio.Task[None] | None = None
        self._inflight: set[asyncio.Task[None]] = set()
        self._started = False
        self._closed = False
        self._released = False

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PollingController":
        """Build a controller polling the configured service over HTTP."""
        from arbdash.feed.client import SnapshotClient

        client = SnapshotClient(settings.api_url, timeout_s=settings.request_timeout_s)
        return cls(client.fetch_snapshot, interval_s=settings.poll_interval_s, on_close=client.close)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Launch the first attempt now and schedule the rest."""
        if self._closed:
            raise RuntimeError("Polling controller is closed")
        if self._started:
            return

        self._started = True
        self._launch()
        self._scheduler = asyncio.create_task(self._schedule(), name="arbdash-poll-scheduler")
        logger.info(f"Polling started (every {self._interval:g}s)")

    def retry(self) -> asyncio.Task[None]:
        """
        Launch one attempt immediately.

        The regular cadence is not reset or delayed.

        Returns:
            The attempt task (awaiting it is optional).
        """
        if self._closed:
            raise RuntimeError("Polling controller is closed")
        logger.info("Manual refresh requested")
        return self._launch()

    def close(self) -> None:
        """
        Stop polling.

        Cancels the scheduler. Attempts already in flight may still finish,
        but their results are discarded: no state change happens after this.
        """
        if self._closed:
            return
        self._closed = True
        if self._scheduler:
            self._scheduler.cancel()
        logger.info("Polling stopped")

    async def aclose(self) -> None:
        """Stop polling and release the scheduler, in-flight attempts and client."""
        self.close()

        for task in self._inflight:
            task.cancel()
        pending = [t for t in (self._scheduler, *self._inflight) if t is not None]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._scheduler = None

        if self._on_close and not self._released:
            self._released = True
            await self._on_close()

    async def __aenter__(self) -> "PollingController":
        """Async context manager entry."""
        self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.aclose()

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """
        Register a callback for applied state transitions.

        Returns:
            A function that removes the callback.
        """
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    # =========================================================================
    # Attempts
    # =========================================================================

    async def _schedule(self) -> None:
        """
        Launch an attempt every interval, measured from attempt start.

        Ticks missed while the loop was blocked are skipped, not replayed:
        one attempt runs on wake-up and the cadence restarts from there.
        """
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self._interval
        while not self._closed:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            self._launch()
            now = loop.time()
            next_at += self._interval
            if next_at <= now:
                next_at = now + self._interval

    def _launch(self) -> asyncio.Task[None]:
        """Number and start one attempt without waiting for it."""
        self._seq += 1
        seq = self._seq
        self._stats.attempts_started += 1

        task = asyncio.create_task(self._attempt(seq), name=f"arbdash-refresh-{seq}")
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _attempt(self, seq: int) -> None:
        """Run one fetch and fold its outcome into state."""
        try:
            snapshot = await self._fetch()
        except RefreshError as e:
            self._apply_failure(seq, e)
        except Exception as e:
            logger.error(f"Unexpected error in refresh #{seq}: {e!r}")
            self._apply_failure(seq, RefreshError(f"Unexpected error: {e}"))
        else:
            self._apply_success(seq, snapshot)

    def _accept(self, seq: int) -> bool:
        """Decide whether attempt ``seq`` may update state."""
        if self._closed:
            self._stats.results_discarded += 1
            logger.debug(f"Discarding refresh #{seq}: controller closed")
            return False

        if seq < self._applied_seq:
            self._stats.results_discarded += 1
            logger.debug(f"Discarding refresh #{seq}: newer #{self._applied_seq} already applied")
            return False

        self._applied_seq = seq
        self._stats.results_applied += 1
        return True

    def _apply_success(self, seq: int, snapshot: Snapshot) -> None:
        if not self._accept(seq):
            return

        self._set_state(
            RefreshState(
                status=RefreshStatus.READY,
                snapshot=snapshot,
                last_error=None,
                consecutive_failures=0,
                last_success_ms=get_timestamp_ms(),
            )
        )

    def _apply_failure(self, seq: int, error: RefreshError) -> None:
        if not self._accept(seq):
            return
        self._stats.failures += 1

        prev = self._state
        status = RefreshStatus.DEGRADED if prev.snapshot is not None else RefreshStatus.FAILED
        logger.warning(f"Refresh #{seq} failed [{error.kind}]: {error}")

        self._set_state(
            replace(
                prev,
                status=status,
                last_error=error,
                consecutive_failures=prev.consecutive_failures + 1,
            )
        )

    def _set_state(self, state: RefreshState) -> None:
        """Swap in a new state and notify subscribers."""
        old = self._state
        self._state = state

        if old.status is not state.status:
            logger.info(f"Refresh status {old.status.value} -> {state.status.value}")

        for callback in list(self._callbacks):
            try:
                callback(state)
            except Exception as e:
                logger.error(f"State callback error: {e}")

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def state(self) -> RefreshState:
        """Current refresh state (immutable; replaced on every transition)."""
        return self._state

    @property
    def stats(self) -> PollStats:
        """Attempt counters."""
        return self._stats

    @property
    def interval_s(self) -> float:
        """Seconds between attempt starts."""
        return self._interval

    @property
    def is_running(self) -> bool:
        """Check if polling is active."""
        return self._started and not self._closed

    @property
    def in_flight(self) -> int:
        """Number of attempts currently awaiting a response."""
        return len(self._inflight)
