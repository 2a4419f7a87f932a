from datetime import datetime, timezone
from typing import Any, Dict, Optional

import pytest

from galog.config import SinkOptions
from galog.constants import ENV_API_SECRET, ENV_CLIENT_ID, ENV_ENDPOINT, ENV_MEASUREMENT_ID, ENV_REQUEST_TIMEOUT
from galog.events import ErrorInfo, Event, LogLevel, PropertyValue

FIXED_TIMESTAMP = datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O")


@pytest.fixture(autouse=True)
def clean_galog_env(monkeypatch):
    """
    Keep the developer's GALOG_* variables out of the tests.
    """
    for name in (ENV_MEASUREMENT_ID, ENV_API_SECRET, ENV_CLIENT_ID, ENV_ENDPOINT, ENV_REQUEST_TIMEOUT):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_options():
    """
    Factory for options with a fixed identity.
    """

    def _make(**overrides: Any) -> SinkOptions:
        values: Dict[str, Any] = {
            "measurement_id": "mid",
            "api_secret": "secret",
            "client_id": "cid",
        }
        values.update(overrides)
        return SinkOptions(**values)

    return _make


@pytest.fixture
def make_event():
    """
    Factory for events with a fixed timestamp.
    """

    def _make(
        message: str = "Test message",
        level: LogLevel = LogLevel.INFORMATION,
        error: Optional[ErrorInfo] = None,
        properties: Optional[Dict[str, PropertyValue]] = None,
        timestamp: datetime = FIXED_TIMESTAMP,
    ) -> Event:
        return Event(
            timestamp=timestamp,
            level=level,
            message=message,
            error=error,
            properties=properties or {},
        )

    return _make
