"""
HTTP transport for the GA4 Measurement Protocol.

Each payload is one POST to ``{endpoint}?measurement_id=...&api_secret=...``.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from galog.constants import CONTENT_TYPE_JSON, REQUEST_TIMEOUT
from galog.meta import get_meta_http_headers

from .http_utils import map_async_transport_errors, map_transport_errors

logger = logging.getLogger(__name__)


def build_params(measurement_id: str, api_secret: str) -> Dict[str, str]:
    return {"measurement_id": measurement_id, "api_secret": api_secret}


class MeasurementClient:
    """
    Synchronous Measurement Protocol client.

    Args:
        endpoint: Collection URL.
        measurement_id: GA4 measurement id.
        api_secret: Measurement Protocol API secret.
        timeout: Request timeout in seconds.
        http_client: Pre-built httpx client, mainly for tests.
    """

    def __init__(
        self,
        endpoint: str,
        measurement_id: str,
        api_secret: str,
        timeout: Optional[float] = REQUEST_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
    ):
        self.endpoint = endpoint
        self._params = build_params(measurement_id, api_secret)
        self._timeout = timeout
        self._http_client = http_client or httpx.Client(
            timeout=timeout, headers=get_meta_http_headers()
        )

    @map_transport_errors
    def send(self, body: bytes, content_type: str = CONTENT_TYPE_JSON) -> httpx.Response:
        """
        POST one payload.

        Raises:
            TransportError: On network failures and non-2xx answers.
        """
        logger.debug("POST %s (%d bytes)", self.endpoint, len(body))
        return self._http_client.post(
            self.endpoint,
            params=self._params,
            content=body,
            headers={"Content-Type": content_type},
        )

    def close(self) -> None:
        self._http_client.close()

    def __enter__(self) -> "MeasurementClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncMeasurementClient:
    """
    Asynchronous Measurement Protocol client, for concurrent slice dispatch.
    """

    def __init__(
        self,
        endpoint: str,
        measurement_id: str,
        api_secret: str,
        timeout: Optional[float] = REQUEST_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.endpoint = endpoint
        self._params = build_params(measurement_id, api_secret)
        self._http_client = http_client or httpx.AsyncClient(
            timeout=timeout, headers=get_meta_http_headers()
        )

    @map_async_transport_errors
    async def send(self, body: bytes, content_type: str = CONTENT_TYPE_JSON) -> httpx.Response:
        logger.debug("POST %s (%d bytes)", self.endpoint, len(body))
        return await self._http_client.post(
            self.endpoint,
            params=self._params,
            content=body,
            headers={"Content-Type": content_type},
        )

    async def aclose(self) -> None:
        await self._http_client.aclose()
