"""
Telemetry event model.

Property values form a closed tagged union: every value carries a
``PropertyKind`` and consumers dispatch on it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union


def format_timestamp(value: datetime) -> str:
    """
    Render a datetime as an extended ISO-8601 UTC string, e.g.
    ``2024-05-01T10:00:00.000000Z``. Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc = value.astimezone(timezone.utc)
    return utc.replace(tzinfo=None).isoformat(timespec="microseconds") + "Z"


class LogLevel(str, Enum):
    """
    Severity of an event, rendered by name in the ``level`` parameter.
    """

    VERBOSE = "Verbose"
    DEBUG = "Debug"
    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"
    FATAL = "Fatal"

    @classmethod
    def from_logging(cls, levelno: int) -> "LogLevel":
        """
        Map a stdlib ``logging`` level number to a ``LogLevel``.
        """
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFORMATION
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.VERBOSE


class PropertyKind(Enum):
    SCALAR = "scalar"
    STRUCTURE = "structure"
    DICTIONARY = "dictionary"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class ScalarValue:
    """
    A single value: None, str, bool, int, float, Decimal, date/time, UUID or
    anything else that renders as text.
    """

    value: Any = None

    @property
    def kind(self) -> PropertyKind:
        return PropertyKind.SCALAR

    def to_native(self) -> Any:
        value = self.value
        if isinstance(value, Enum):
            return ScalarValue(value.value).to_native()
        if value is None or isinstance(value, (str, bool, int, float)):
            return value
        if isinstance(value, datetime):
            return format_timestamp(value)
        if isinstance(value, (date, time)):
            return value.isoformat()
        return str(value)

    def render(self) -> str:
        return _dumps(self.to_native())


@dataclass(frozen=True)
class StructureValue:
    """
    Named fields, in declaration order.
    """

    fields: Tuple[Tuple[str, "PropertyValue"], ...] = ()
    type_tag: Optional[str] = None

    @property
    def kind(self) -> PropertyKind:
        return PropertyKind.STRUCTURE

    def to_native(self) -> Any:
        return {name: value.to_native() for name, value in self.fields}

    def render(self) -> str:
        rendered = _dumps(self.to_native())
        if self.type_tag:
            return f"{self.type_tag} {rendered}"
        return rendered


@dataclass(frozen=True)
class DictionaryValue:
    """
    Key/value entries whose keys are scalars.
    """

    entries: Tuple[Tuple[ScalarValue, "PropertyValue"], ...] = ()

    @property
    def kind(self) -> PropertyKind:
        return PropertyKind.DICTIONARY

    def to_native(self) -> Any:
        return {scalar_text(key): value.to_native() for key, value in self.entries}

    def render(self) -> str:
        return _dumps(self.to_native())


@dataclass(frozen=True)
class SequenceValue:
    """
    Ordered values.
    """

    items: Tuple["PropertyValue", ...] = ()

    @property
    def kind(self) -> PropertyKind:
        return PropertyKind.SEQUENCE

    def to_native(self) -> Any:
        return [item.to_native() for item in self.items]

    def render(self) -> str:
        return _dumps(self.to_native())


PropertyValue = Union[ScalarValue, StructureValue, DictionaryValue, SequenceValue]


def scalar_text(scalar: ScalarValue) -> str:
    """
    Plain text of a scalar, used for dictionary keys. Strings are not quoted.
    """
    native = scalar.to_native()
    if native is None:
        return ""
    if isinstance(native, str):
        return native
    return _dumps(native)


def _dumps(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)


@dataclass(frozen=True)
class ErrorInfo:
    type_name: str
    message: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        return cls(type_name=type(exc).__name__, message=str(exc))


@dataclass(frozen=True)
class Event:
    """
    One structured telemetry record.

    Args:
        timestamp: When the event happened. Naive datetimes are taken as UTC.
        level: Severity.
        message: Rendered message text.
        error: Optional error carried by the event.
        properties: Property name to typed value, in insertion order.
    """

    timestamp: datetime
    level: LogLevel = LogLevel.INFORMATION
    message: str = ""
    error: Optional[ErrorInfo] = None
    properties: Mapping[str, PropertyValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))
