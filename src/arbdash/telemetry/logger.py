"""
Queue-based logging setup.

Records from the ``arbdash`` logger tree go through a queue and are
written by a listener thread, so a slow terminal or log file never stalls
the event loop driving the refresh cycle.
"""

import logging
import sys
from datetime import datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue
from typing import TextIO

from arbdash.config.constants import LOG_DATE_FORMAT, LOG_FORMAT, MAX_LOG_QUEUE_SIZE


NOISY_LOGGERS = ("aiohttp", "asyncio", "uvicorn.access")


class MicrosecondFormatter(logging.Formatter):
    """Formatter with microsecond precision timestamps."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime(datefmt or LOG_DATE_FORMAT)
        return f"{stamp}.{int(record.msecs * 1000):06d}"


class AsyncLogger:
    """Queue handler on one logger, drained to console (and file) by a listener thread."""

    def __init__(
        self,
        name: str,
        level: int = logging.INFO,
        log_file: Path | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """
        Args:
            name: Logger to attach to.
            level: Console level; the file, if any, gets everything.
            log_file: Optional log file path.
            stream: Console stream (default: stderr, leaving stdout to the
                terminal dashboard).
        """
        self._logger = logging.getLogger(name)
        self._level = level
        self._log_file = log_file
        self._stream = stream or sys.stderr
        self._queue_handler: QueueHandler | None = None
        self._listener: QueueListener | None = None

    def _sinks(self) -> list[logging.Handler]:
        console = logging.StreamHandler(self._stream)
        console.setLevel(self._level)
        sinks: list[logging.Handler] = [console]

        if self._log_file:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self._log_file)
            file_handler.setLevel(logging.DEBUG)
            sinks.append(file_handler)

        formatter = MicrosecondFormatter(LOG_FORMAT, LOG_DATE_FORMAT)
        for sink in sinks:
            sink.setFormatter(formatter)
        return sinks

    def start(self) -> None:
        """Attach the queue handler and start the listener thread."""
        if self._listener:
            return

        queue: Queue[logging.LogRecord] = Queue(maxsize=MAX_LOG_QUEUE_SIZE)
        self._queue_handler = QueueHandler(queue)
        self._logger.addHandler(self._queue_handler)
        self._logger.setLevel(logging.DEBUG if self._log_file else self._level)

        self._listener = QueueListener(queue, *self._sinks(), respect_handler_level=True)
        self._listener.start()

    def stop(self) -> None:
        """Flush pending records, detach the handler and close the sinks."""
        if self._listener:
            self._listener.stop()
            for sink in self._listener.handlers:
                sink.close()
            self._listener = None
        if self._queue_handler:
            self._logger.removeHandler(self._queue_handler)
            self._queue_handler = None


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> AsyncLogger:
    """
    Route ``arbdash`` logging through the queue and quiet third-party loggers.

    Returns:
        Started AsyncLogger; call ``stop()`` on shutdown.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    async_logger = AsyncLogger("arbdash", level=numeric_level, log_file=log_file, stream=stream)
    async_logger.start()

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return async_logger
