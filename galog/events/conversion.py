import dataclasses
from collections.abc import Mapping, Set
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any
from uuid import UUID

from galog.constants import MAX_FLATTEN_DEPTH

from .types import (
    DictionaryValue,
    PropertyValue,
    ScalarValue,
    SequenceValue,
    StructureValue,
)

SCALAR_TYPES = (
    str,
    bytes,
    bool,
    int,
    float,
    Decimal,
    Fraction,
    datetime,
    date,
    time,
    UUID,
    Enum,
)


def to_property_value(obj: Any, max_depth: int = MAX_FLATTEN_DEPTH) -> PropertyValue:
    """
    Capture an arbitrary Python object as a property value.

    Mappings become dictionaries, dataclasses and plain objects become
    structures, lists/tuples/sets become sequences. Once ``max_depth`` is
    reached the remaining object is captured as a scalar text, which also
    bounds self-referencing containers.
    """
    return _capture(obj, max_depth)


def _capture(obj: Any, depth: int) -> PropertyValue:
    if isinstance(obj, (ScalarValue, StructureValue, DictionaryValue, SequenceValue)):
        return obj

    if obj is None or isinstance(obj, SCALAR_TYPES):
        if isinstance(obj, bytes):
            return ScalarValue(obj.decode("utf-8", errors="replace"))
        return ScalarValue(obj)

    if depth <= 0:
        return ScalarValue(str(obj))

    if isinstance(obj, Mapping):
        return DictionaryValue(
            entries=tuple(
                (_capture_key(key), _capture(value, depth - 1))
                for key, value in obj.items()
            )
        )

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return StructureValue(
            fields=tuple(
                (f.name, _capture(getattr(obj, f.name), depth - 1))
                for f in dataclasses.fields(obj)
            ),
            type_tag=type(obj).__name__,
        )

    if isinstance(obj, Set):
        # Sets have no order; sort their rendering to keep output stable
        items = sorted((_capture(item, depth - 1) for item in obj), key=lambda v: v.render())
        return SequenceValue(items=tuple(items))

    if isinstance(obj, (list, tuple)):
        return SequenceValue(items=tuple(_capture(item, depth - 1) for item in obj))

    attributes = getattr(obj, "__dict__", None)
    if isinstance(attributes, dict) and attributes:
        return StructureValue(
            fields=tuple(
                (name, _capture(value, depth - 1))
                for name, value in attributes.items()
                if not name.startswith("_")
            ),
            type_tag=type(obj).__name__,
        )

    return ScalarValue(str(obj))


def _capture_key(key: Any) -> ScalarValue:
    if isinstance(key, ScalarValue):
        return key
    if key is None or isinstance(key, SCALAR_TYPES):
        return ScalarValue(key)
    return ScalarValue(str(key))
