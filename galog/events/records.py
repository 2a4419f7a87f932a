import logging
from datetime import datetime, timezone
from typing import Dict, FrozenSet

from .conversion import to_property_value
from .types import ErrorInfo, Event, LogLevel, PropertyValue

# Attributes every LogRecord carries; anything else arrived through ``extra=``
STANDARD_RECORD_ATTRIBUTES: FrozenSet[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def record_properties(record: logging.LogRecord) -> Dict[str, PropertyValue]:
    """
    Collect the ``extra=`` attributes of a record, in the order they were set.
    """
    return {
        name: to_property_value(value)
        for name, value in vars(record).items()
        if name not in STANDARD_RECORD_ATTRIBUTES and not name.startswith("_")
    }


def event_from_record(record: logging.LogRecord) -> Event:
    """
    Build an ``Event`` out of a stdlib ``LogRecord``.
    """
    error = None
    if record.exc_info and record.exc_info[1] is not None:
        error = ErrorInfo.from_exception(record.exc_info[1])

    return Event(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=LogLevel.from_logging(record.levelno),
        message=record.getMessage(),
        error=error,
        properties=record_properties(record),
    )
