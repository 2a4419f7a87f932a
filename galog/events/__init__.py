from .conversion import to_property_value
from .records import event_from_record
from .types import (
    DictionaryValue,
    ErrorInfo,
    Event,
    LogLevel,
    PropertyKind,
    PropertyValue,
    ScalarValue,
    SequenceValue,
    StructureValue,
)

__all__ = [
    "DictionaryValue",
    "ErrorInfo",
    "Event",
    "LogLevel",
    "PropertyKind",
    "PropertyValue",
    "ScalarValue",
    "SequenceValue",
    "StructureValue",
    "event_from_record",
    "to_property_value",
]
