from typing import Any, Awaitable, Protocol, runtime_checkable

from .client import AsyncMeasurementClient, MeasurementClient


@runtime_checkable
class Transport(Protocol):
    def send(self, body: bytes, content_type: str) -> Any: ...


@runtime_checkable
class AsyncTransport(Protocol):
    def send(self, body: bytes, content_type: str) -> Awaitable[Any]: ...


__all__ = [
    "AsyncMeasurementClient",
    "AsyncTransport",
    "MeasurementClient",
    "Transport",
]
