from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

import pytest

from galog.translate.values import ValueMapper, truncate


class Color(Enum):
    RED = "red"


class Opaque:
    def __str__(self) -> str:
        return "opaque-object-text"


@pytest.mark.unit
class TestValueMapper:
    def setup_method(self):
        self.mapper = ValueMapper(max_length=10)

    def test_none_is_null(self):
        mapped = self.mapper.map(None)
        assert mapped.is_null
        assert mapped.value is None

    def test_string_is_truncated(self):
        assert self.mapper.map("123456789012345").value == "1234567890"

    def test_short_string_untouched(self):
        mapped = self.mapper.map("abc")
        assert mapped.value == "abc"
        assert not mapped.is_null

    def test_booleans_stay_booleans(self):
        assert self.mapper.map(True).value is True
        assert self.mapper.map(False).value is False

    def test_integers(self):
        assert self.mapper.map(42).value == 42
        assert self.mapper.map(-(2 ** 63)).value == -(2 ** 63)

    def test_integer_outside_int64_becomes_text(self):
        mapped = ValueMapper(max_length=300).map(2 ** 70)
        assert mapped.value == str(2 ** 70)

    def test_decimal_and_float_widen_to_float(self):
        assert self.mapper.map(Decimal("1.5")).value == 1.5
        assert isinstance(self.mapper.map(Decimal("1.5")).value, float)
        assert self.mapper.map(0.25).value == 0.25

    def test_non_finite_float_becomes_text(self):
        assert self.mapper.map(float("nan")).value == "nan"
        assert self.mapper.map(float("inf")).value == "inf"

    def test_aware_datetime_rendered_as_utc(self):
        value = datetime(2024, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        mapped = ValueMapper(max_length=300).map(value)
        assert mapped.value == "2024-05-01T10:00:00.000000Z"

    def test_naive_datetime_taken_as_utc(self):
        mapped = ValueMapper(max_length=300).map(datetime(2024, 5, 1, 10, 0, 0, 123456))
        assert mapped.value == "2024-05-01T10:00:00.123456Z"

    def test_date_and_time(self):
        mapper = ValueMapper(max_length=300)
        assert mapper.map(date(2024, 5, 1)).value == "2024-05-01"
        assert mapper.map(time(8, 30)).value == "08:30:00"

    def test_uuid_is_lowercase_hyphenated(self):
        value = UUID("12345678-ABCD-5678-ABCD-567812345678")
        mapped = ValueMapper(max_length=300).map(value)
        assert mapped.value == "12345678-abcd-5678-abcd-567812345678"

    def test_enum_maps_its_value(self):
        assert self.mapper.map(Color.RED).value == "red"

    def test_fallback_uses_text_rendering(self):
        assert self.mapper.map(Opaque()).value == "opaque-obj"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text, max_length, expected",
    [
        ("", 3, ""),
        ("abc", 3, "abc"),
        ("abcd", 3, "abc"),
    ],
)
def test_truncate(text, max_length, expected):
    assert truncate(text, max_length) == expected
