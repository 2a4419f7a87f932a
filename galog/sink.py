"""
Google Analytics sink: translate a batch of events and ship every payload.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from galog.config import (
    SinkOptions,
    require_api_secret,
    require_measurement_id,
    resolve_client_id,
)
from galog.constants import CONTENT_TYPE_JSON
from galog.errors import DeliveryError
from galog.events import Event
from galog.log_codes import (
    DELIVERY_BATCH_FAILED,
    DELIVERY_SLICE_FAILED,
    DELIVERY_SLICE_SENT,
)
from galog.translate import PayloadEncoder, translate
from galog.transport import AsyncMeasurementClient, MeasurementClient

if TYPE_CHECKING:
    from galog.transport import AsyncTransport, Transport

logger = logging.getLogger(__name__)


class GoogleAnalyticsSink:
    """
    Sends batches of events to the GA4 Measurement Protocol.

    The sink holds no event state: each ``emit_batch`` call translates the
    events it is given, sends one request per slice, and reports failures
    once every slice has been attempted.

    Args:
        options: Sink options. ``measurement_id`` and ``api_secret`` are
            required; ``client_id`` is resolved when missing.
        transport: Object with ``send(body, content_type)``. Defaults to a
            ``MeasurementClient`` built from the options.
        async_transport: Object with ``async send(body, content_type)``,
            used by ``emit_batch_async``. Built lazily when missing.

    Raises:
        ConfigurationError: If the measurement id or the API secret is missing.
    """

    def __init__(
        self,
        options: SinkOptions,
        transport: Optional["Transport"] = None,
        async_transport: Optional["AsyncTransport"] = None,
    ):
        measurement_id = require_measurement_id(options.measurement_id)
        api_secret = require_api_secret(options.api_secret)

        self.options = options.model_copy(
            update={
                "measurement_id": measurement_id,
                "api_secret": api_secret,
                "client_id": resolve_client_id(options.client_id),
            }
        )
        self.encoder = PayloadEncoder(self.options)
        self._owns_transport = transport is None
        self.transport = transport or MeasurementClient(
            endpoint=self.options.endpoint,
            measurement_id=measurement_id,
            api_secret=api_secret,
            timeout=self.options.request_timeout,
        )
        self._owns_async_transport = async_transport is None
        self._async_transport = async_transport

    @property
    def client_id(self) -> str:
        return self.options.client_id  # type: ignore[return-value]

    def build_payloads(self, events: Iterable[Event]) -> List[str]:
        return translate(events, self.options, encoder=self.encoder)

    def send_payload(self, payload: str) -> None:
        """
        Send one already translated payload through the transport.
        """
        self.transport.send(payload.encode("utf-8"), CONTENT_TYPE_JSON)

    def emit_batch(self, events: Iterable[Event]) -> int:
        """
        Translate and send ``events`` one slice after the other.

        Returns:
            Number of payloads sent. Zero when no event passed the filter,
            in which case the transport is not called.

        Raises:
            DeliveryError: If any slice failed; raised after all were attempted.
        """
        payloads = self.build_payloads(events)
        failures: List[Tuple[int, BaseException]] = []

        for index, payload in enumerate(payloads):
            try:
                self.send_payload(payload)
            except Exception as exc:
                logger.warning(
                    DELIVERY_SLICE_FAILED, extra={"slice": index, "error": repr(exc)}
                )
                failures.append((index, exc))
            else:
                logger.debug(DELIVERY_SLICE_SENT, extra={"slice": index})

        self._raise_failures(failures, len(payloads))
        return len(payloads)

    async def emit_batch_async(self, events: Iterable[Event]) -> int:
        """
        Translate ``events`` and send all slices concurrently.

        Same contract as ``emit_batch``.
        """
        payloads = self.build_payloads(events)
        if not payloads:
            return 0

        transport = self._get_async_transport()
        results = await asyncio.gather(
            *(transport.send(p.encode("utf-8"), CONTENT_TYPE_JSON) for p in payloads),
            return_exceptions=True,
        )

        failures: List[Tuple[int, BaseException]] = []
        for index, result in enumerate(results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    DELIVERY_SLICE_FAILED, extra={"slice": index, "error": repr(result)}
                )
                failures.append((index, result))
            else:
                logger.debug(DELIVERY_SLICE_SENT, extra={"slice": index})

        self._raise_failures(failures, len(payloads))
        return len(payloads)

    def _get_async_transport(self) -> "AsyncTransport":
        if self._async_transport is None:
            self._async_transport = AsyncMeasurementClient(
                endpoint=self.options.endpoint,
                measurement_id=self.options.measurement_id,  # type: ignore[arg-type]
                api_secret=self.options.api_secret,  # type: ignore[arg-type]
                timeout=self.options.request_timeout,
            )
        return self._async_transport

    def _raise_failures(self, failures: List[Tuple[int, BaseException]], total: int) -> None:
        if not failures:
            return
        logger.error(
            DELIVERY_BATCH_FAILED, extra={"failed": len(failures), "total": total}
        )
        raise DeliveryError(failures, total) from failures[0][1]

    def close(self) -> None:
        if self._owns_transport and isinstance(self.transport, MeasurementClient):
            self.transport.close()

    async def aclose(self) -> None:
        self.close()
        if self._owns_async_transport and isinstance(
            self._async_transport, AsyncMeasurementClient
        ):
            await self._async_transport.aclose()
            self._async_transport = None

    def __enter__(self) -> "GoogleAnalyticsSink":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
