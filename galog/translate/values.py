import math
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, NamedTuple, Union
from uuid import UUID

from galog.events.types import format_timestamp

JsonScalar = Union[str, bool, int, float, None]

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class MappedValue(NamedTuple):
    value: JsonScalar
    is_null: bool = False


NULL = MappedValue(value=None, is_null=True)


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length]


class ValueMapper:
    """
    Turn a scalar into a JSON-ready value with canonical formatting.

    Args:
        max_length: Upper bound on the length of produced strings.
    """

    def __init__(self, max_length: int):
        self.max_length = max_length

    def text(self, value: str) -> str:
        return truncate(value, self.max_length)

    def map(self, value: Any) -> MappedValue:
        if value is None:
            return NULL

        if isinstance(value, Enum):
            return self.map(value.value)

        if isinstance(value, str):
            return MappedValue(self.text(str(value)))

        if isinstance(value, bool):
            return MappedValue(value)

        if isinstance(value, int):
            number = int(value)
            if INT64_MIN <= number <= INT64_MAX:
                return MappedValue(number)
            return MappedValue(self.text(str(number)))

        if isinstance(value, (float, Decimal, Fraction)):
            try:
                number = float(value)
            except OverflowError:
                number = math.inf
            if math.isfinite(number):
                return MappedValue(number)
            return MappedValue(self.text(str(value)))

        if isinstance(value, datetime):
            return MappedValue(self.text(format_timestamp(value)))

        if isinstance(value, (date, time)):
            return MappedValue(self.text(value.isoformat()))

        if isinstance(value, UUID):
            return MappedValue(self.text(str(value)))

        if isinstance(value, bytes):
            return MappedValue(self.text(value.decode("utf-8", errors="replace")))

        return MappedValue(self.text(str(value)))
