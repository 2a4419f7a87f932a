"""
``logging`` integration: a handler that batches records and periodically
hands them to a ``GoogleAnalyticsSink``.

The handler owns the batching cadence and the retry policy; the sink only
translates and sends.
"""

import logging
import queue
import threading
from typing import List, Optional, Sequence

from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from galog.config import SinkOptions
from galog.constants import DEFAULT_MAX_QUEUE_SIZE
from galog.errors import (
    NetworkConnectionError,
    RequestTimeoutError,
    ServerError,
    TooManyRequestsError,
)
from galog.events import Event, event_from_record
from galog.log_codes import (
    HANDLER_BATCH_FAILED,
    HANDLER_FLUSH,
    HANDLER_QUEUE_FULL,
    HANDLER_RECORD_DROPPED,
    HANDLER_RETRY_EXHAUSTED,
)
from galog.sink import GoogleAnalyticsSink

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    NetworkConnectionError,
    RequestTimeoutError,
    TooManyRequestsError,
    ServerError,
)

# Records from these loggers are never shipped, the handler would feed itself
EXCLUDED_LOGGERS = ("galog", "httpx", "httpcore")


class GoogleAnalyticsHandler(logging.Handler):
    """
    Logging handler shipping records to Google Analytics in batches.

    Records are queued and flushed by a background thread every
    ``flush_period`` seconds, as soon as ``batch_size_limit`` records are
    waiting, and right away for the very first record. Payloads failing with
    a transient error are retried ``retry_count`` times.

    Args:
        options: Sink options, used to build the sink when none is given.
        sink: A ready sink.
        level: Handler level.
        excluded_loggers: Logger name prefixes that are never shipped.
        max_queue_size: Records waiting beyond this are dropped.
    """

    def __init__(
        self,
        options: Optional[SinkOptions] = None,
        sink: Optional[GoogleAnalyticsSink] = None,
        level: int = logging.NOTSET,
        excluded_loggers: Sequence[str] = EXCLUDED_LOGGERS,
        max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE,
    ):
        super().__init__(level)
        if sink is None:
            if options is None:
                raise ValueError("Either options or sink must be provided")
            sink = GoogleAnalyticsSink(options)

        self.sink = sink
        self.flush_period = sink.options.flush_period
        self.batch_size_limit = sink.options.batch_size_limit
        self.retry_count = sink.options.retry_count
        self.excluded_loggers = tuple(excluded_loggers)

        self._queue: "queue.Queue[Event]" = queue.Queue(maxsize=max_queue_size)
        self._wake = threading.Event()
        self._stopping = threading.Event()
        self._flush_lock = threading.Lock()
        self._first_event = True

        self._worker = threading.Thread(
            target=self._run, name="galog-flush", daemon=True
        )
        self._worker.start()

    def _is_excluded(self, name: str) -> bool:
        return any(
            name == prefix or name.startswith(prefix + ".")
            for prefix in self.excluded_loggers
        )

    def emit(self, record: logging.LogRecord) -> None:
        if self._is_excluded(record.name):
            return
        if self._stopping.is_set():
            logger.debug(HANDLER_RECORD_DROPPED, extra={"logger": record.name})
            return

        try:
            event = event_from_record(record)
        except Exception:
            self.handleError(record)
            return

        try:
            self._queue.put_nowait(event)
        except queue.Full:
            logger.warning(HANDLER_QUEUE_FULL, extra={"logger": record.name})
            self._wake.set()
            return

        if self._first_event or self._queue.qsize() >= self.batch_size_limit:
            self._first_event = False
            self._wake.set()

    def _run(self) -> None:
        while not self._stopping.is_set():
            self._wake.wait(self.flush_period)
            self._wake.clear()
            if self._stopping.is_set():
                break
            self._drain()

    def _next_batch(self) -> List[Event]:
        batch: List[Event] = []
        while len(batch) < self.batch_size_limit:
            try:
                batch.append(self._queue.get_nowait())
            except queue.Empty:
                break
        return batch

    def _drain(self) -> None:
        with self._flush_lock:
            while True:
                batch = self._next_batch()
                if not batch:
                    return
                logger.debug(HANDLER_FLUSH, extra={"count": len(batch)})
                try:
                    payloads = self.sink.build_payloads(batch)
                except Exception:
                    logger.error(
                        HANDLER_BATCH_FAILED, extra={"count": len(batch)}, exc_info=True
                    )
                    continue
                for payload in payloads:
                    self._deliver(payload)

    def _deliver(self, payload: str) -> None:
        retrying = Retrying(
            stop=stop_after_attempt(self.retry_count + 1),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=10.0),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        try:
            retrying(self.sink.send_payload, payload)
        except RetryError as retry_exc:
            exc = retry_exc.last_attempt.exception()
            logger.error(
                HANDLER_RETRY_EXHAUSTED,
                extra={"attempts": self.retry_count + 1, "error": repr(exc)},
            )
        except Exception as exc:
            logger.error(HANDLER_RETRY_EXHAUSTED, extra={"attempts": 1, "error": repr(exc)})

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def flush(self) -> None:
        """
        Send every queued record now, from the calling thread.
        """
        self._drain()

    def close(self) -> None:
        if not self._stopping.is_set():
            self._stopping.set()
            self._wake.set()
            self._worker.join(timeout=self.flush_period + 1.0)
            try:
                self._drain()
            finally:
                self.sink.close()
        super().close()


def add_google_analytics_handler(
    options: SinkOptions,
    logger_: Optional[logging.Logger] = None,
    level: int = logging.INFO,
) -> GoogleAnalyticsHandler:
    """
    Attach a ``GoogleAnalyticsHandler`` to ``logger_`` (root by default).

    Returns:
        The attached handler; call ``close()`` on shutdown to flush it.
    """
    handler = GoogleAnalyticsHandler(options=options, level=level)
    (logger_ or logging.getLogger()).addHandler(handler)
    return handler
