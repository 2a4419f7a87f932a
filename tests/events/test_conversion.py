from dataclasses import dataclass
from decimal import Decimal

import pytest

from galog.events import PropertyKind, ScalarValue, to_property_value


@dataclass
class Request:
    method: str
    path: str


class Session:
    def __init__(self):
        self.user = "ann"
        self.tags = ["a", "b"]
        self._secret = "hidden"


@pytest.mark.unit
class TestToPropertyValue:
    @pytest.mark.parametrize("obj", [None, "x", True, 3, 1.5, Decimal("2.5")])
    def test_scalars(self, obj):
        value = to_property_value(obj)
        assert value.kind is PropertyKind.SCALAR
        assert value.value == obj

    def test_bytes_are_decoded(self):
        assert to_property_value(b"abc") == ScalarValue("abc")

    def test_mapping_becomes_dictionary(self):
        value = to_property_value({"a": 1, 2: "b"})
        assert value.kind is PropertyKind.DICTIONARY
        assert [key.value for key, _ in value.entries] == ["a", 2]

    def test_dataclass_becomes_structure(self):
        value = to_property_value(Request(method="GET", path="/"))
        assert value.kind is PropertyKind.STRUCTURE
        assert value.type_tag == "Request"
        assert [name for name, _ in value.fields] == ["method", "path"]

    def test_plain_object_skips_private_attributes(self):
        value = to_property_value(Session())
        assert value.kind is PropertyKind.STRUCTURE
        assert [name for name, _ in value.fields] == ["user", "tags"]

    def test_list_and_tuple_become_sequences(self):
        assert to_property_value([1, 2]).kind is PropertyKind.SEQUENCE
        assert to_property_value((1, 2)).kind is PropertyKind.SEQUENCE

    def test_set_rendering_is_stable(self):
        first = to_property_value({"b", "a", "c"})
        assert first.kind is PropertyKind.SEQUENCE
        assert [item.value for item in first.items] == ["a", "b", "c"]

    def test_self_referencing_list_is_bounded(self):
        cyclic = []
        cyclic.append(cyclic)

        value = to_property_value(cyclic, max_depth=3)

        depth = 0
        while value.kind is PropertyKind.SEQUENCE:
            value = value.items[0]
            depth += 1
        assert depth == 3
        assert value.kind is PropertyKind.SCALAR

    def test_existing_property_values_pass_through(self):
        scalar = ScalarValue(1)
        assert to_property_value(scalar) is scalar
