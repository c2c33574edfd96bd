"""Tests for flyyer_variables.coercion module."""

from datetime import date, datetime, time, timezone

import pytest
from jsonschema import Draft7Validator

from flyyer_variables.coercion import TypeCoercer

is_type = Draft7Validator.TYPE_CHECKER.is_type


def coerce(value, type, mode=True, **schema):
    return TypeCoercer.coerce(value, {"type": type, **schema}, is_type, mode)


class TestCoerce:
    """Test TypeCoercer.coerce."""

    @pytest.mark.parametrize(
        "value,type,expected",
        [
            ("2", "integer", 2),
            ("2.0", "integer", 2),
            (" 3 ", "number", 3),
            ("1.5", "number", 1.5),
            ("-4e2", "number", -400.0),
            (True, "integer", 1),
            (False, "number", 0),
            (None, "number", 0),
            (12, "string", "12"),
            (2.0, "string", "2"),
            (1.25, "string", "1.25"),
            (True, "string", "true"),
            (None, "string", ""),
            ("true", "boolean", True),
            ("false", "boolean", False),
            (1, "boolean", True),
            (0, "boolean", False),
            (None, "boolean", False),
            ("", "null", None),
            (0, "null", None),
            (False, "null", None),
        ],
    )
    def test_scalar_rules(self, value, type, expected):
        """Test the scalar coercion rules."""
        result = coerce(value, type)

        assert result == expected
        assert result.__class__ is expected.__class__

    @pytest.mark.parametrize(
        "value,type",
        [
            ("foo", "integer"),
            ("1.5", "integer"),
            ("", "number"),
            ("nan", "number"),
            ("inf", "number"),
            ("1_000", "number"),
            ("yes", "boolean"),
            (2, "boolean"),
            ("x", "null"),
            ({"a": 1}, "string"),
            ([1, 2], "string"),
        ],
    )
    def test_unconvertible_values_are_kept(self, value, type):
        """Test that values without a safe conversion are returned unchanged."""
        assert coerce(value, type) is value

    def test_matching_type_is_untouched(self):
        """Test that values already of a declared type are not converted."""
        assert coerce("2", ["string", "integer"]) == "2"
        assert coerce(2, "number") == 2

    def test_union_tries_types_in_order(self):
        """Test that the first applicable type wins."""
        assert coerce("2", ["boolean", "integer"]) == 2
        assert coerce(1, ["boolean", "string"]) is True

    def test_disabled(self):
        """Test that nothing happens without a mode."""
        assert coerce("2", "integer", mode=False) == "2"

    def test_nullable_none(self):
        """Test that None is kept for nullable fragments."""
        assert coerce(None, "string", nullable=True) is None

    def test_untyped_schema(self):
        """Test that schemas without a type are not coerced."""
        assert TypeCoercer.coerce("2", {"minimum": 1}, is_type, True) == "2"
        assert TypeCoercer.coerce("2", True, is_type, True) == "2"


class TestArrayMode:
    """Test the array coercion mode."""

    def test_wraps_scalars(self):
        """Test that scalars are wrapped into arrays."""
        assert coerce("a", "array", mode="array") == ["a"]
        assert coerce(None, "array", mode="array") == [None]
        assert coerce("a", "array", mode=True) == "a"

    def test_unwraps_single_item(self):
        """Test that one-item arrays are unwrapped for scalar types."""
        assert coerce(["3"], "integer", mode="array") == 3
        assert coerce([3], "integer", mode="array") == 3
        assert coerce([1, 2], "integer", mode="array") == [1, 2]

    def test_objects_are_not_wrapped(self):
        """Test that objects are never wrapped."""
        value = {"a": 1}
        assert coerce(value, "array", mode="array") is value


class TestHelpers:
    """Test coercion helpers."""

    @pytest.mark.parametrize(
        "text,expected",
        [("10", 10), ("-1", -1), ("0.5", 0.5), ("1e3", 1000.0), ("abc", None), ("  ", None)],
    )
    def test_parse_number(self, text, expected):
        """Test numeric string parsing."""
        assert TypeCoercer.parse_number(text) == expected

    def test_schema_types(self):
        """Test extraction of declared types."""
        assert TypeCoercer.schema_types({"type": "string"}) == ["string"]
        assert TypeCoercer.schema_types({"type": ["string", "foo"]}) == ["string"]
        assert TypeCoercer.schema_types({"$ref": "#/a", "type": "string"}) == []
        assert TypeCoercer.schema_types(None) == []

    def test_serialize_default(self):
        """Test that defaults become JSON-compatible copies."""
        moment = datetime(2021, 12, 30, 20, 20, 39, tzinfo=timezone.utc)
        default = {
            "at": moment,
            "days": (date(2021, 12, 30),),
            "alarm": time(8, 30),
            "tags": ["a"],
        }

        result = TypeCoercer.serialize_default(default)

        assert result == {
            "at": "2021-12-30T20:20:39+00:00",
            "days": ["2021-12-30"],
            "alarm": "08:30:00+00:00",
            "tags": ["a"],
        }
        assert result["tags"] is not default["tags"]

    def test_serialize_naive_datetime(self):
        """Test that naive datetimes get the local offset."""
        moment = datetime(2021, 12, 30, 20, 20, 39)

        result = TypeCoercer.serialize_default(moment)

        assert result == moment.astimezone().isoformat()
        assert datetime.fromisoformat(result).utcoffset() is not None
