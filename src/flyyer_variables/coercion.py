"""Type coercion rules for the validation engine.

Coercion converts a loosely typed value toward the ``type`` declared by its
schema when the conversion is safe. It only runs when the value does not
already match one of the declared types, and a value that cannot be
converted is returned unchanged so validation reports it.

| to        | from                                                        |
|-----------|-------------------------------------------------------------|
| string    | number, boolean (``"true"``/``"false"``), ``None`` -> ``""`` |
| number    | numeric string, boolean -> 1/0, ``None`` -> 0                |
| integer   | integral numeric string, boolean -> 1/0, ``None`` -> 0       |
| boolean   | ``"true"``/1 -> True, ``"false"``/0/``None`` -> False        |
| null      | ``""``, 0, False -> None                                     |
| array     | any scalar -> ``[scalar]`` (``"array"`` mode only)           |

In ``"array"`` mode a single-item list is also unwrapped before the scalar
rules are tried.
"""

import copy
import math
from collections.abc import Callable, Mapping
from datetime import date, datetime, time, timezone
from typing import Any

from ._types import CoerceMode

COERCIBLE_TYPES = ("string", "number", "integer", "boolean", "null")
JSON_TYPES = ("string", "number", "integer", "boolean", "null", "array", "object")

_FAILED = object()


class TypeCoercer:
    """Utility class for schema-driven type coercion."""

    @staticmethod
    def schema_types(schema: Any) -> list[str]:
        """Return the JSON types declared by a schema fragment."""
        if not isinstance(schema, Mapping) or "$ref" in schema:
            return []
        declared = schema.get("type")
        if isinstance(declared, str):
            declared = [declared]
        if not isinstance(declared, list):
            return []
        return [t for t in declared if t in JSON_TYPES]

    @staticmethod
    def coerce(
        value: Any,
        schema: Any,
        is_type: Callable[[Any, str], bool],
        mode: CoerceMode,
    ) -> Any:
        """Coerce ``value`` toward the types declared by ``schema``.

        Args:
            value: The value to coerce
            schema: The schema fragment the value is validated against
            is_type: Type check of the validator (value, json type) -> bool
            mode: False, True or "array"

        Returns:
            The coerced value, or ``value`` itself when no rule applies
        """
        types = TypeCoercer.schema_types(schema)
        if not mode or not types:
            return value
        if any(is_type(value, t) for t in types):
            return value
        if value is None and isinstance(schema, Mapping) and schema.get("nullable") is True:
            return value

        candidate = value
        if mode == "array" and isinstance(value, list) and len(value) == 1:
            candidate = value[0]
            if any(is_type(candidate, t) for t in types):
                return candidate

        for target in types:
            if target in COERCIBLE_TYPES or (target == "array" and mode == "array"):
                result = TypeCoercer.coerce_to(candidate, target)
                if result is not _FAILED:
                    return result
        return value

    @staticmethod
    def coerce_to(value: Any, target: str) -> Any:
        """Apply a single coercion rule; returns a sentinel when it does not apply."""
        if target == "string":
            if isinstance(value, bool):
                return "true" if value else "false"
            if isinstance(value, (int, float)):
                return TypeCoercer.number_to_string(value)
            if value is None:
                return ""

        elif target in ("number", "integer"):
            if isinstance(value, bool):
                return int(value)
            if value is None:
                return 0
            if isinstance(value, str):
                number = TypeCoercer.parse_number(value)
                if number is None:
                    return _FAILED
                if target == "integer":
                    if isinstance(number, float):
                        if not number.is_integer():
                            return _FAILED
                        return int(number)
                return number

        elif target == "boolean":
            if value == "false" or value is None or _is_number(value, 0):
                return False
            if value == "true" or _is_number(value, 1):
                return True

        elif target == "null":
            if value == "" or value is False or _is_number(value, 0):
                return None

        elif target == "array":
            if value is None or isinstance(value, (str, int, float, bool)):
                return [value]

        return _FAILED

    @staticmethod
    def parse_number(text: str) -> int | float | None:
        """Parse a numeric string, or return None if it is not one."""
        text = text.strip()
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return number

    @staticmethod
    def serialize_default(value: Any) -> Any:
        """Return a JSON-compatible copy of a schema ``default``.

        Dates and times become ISO 8601 strings, so ``DateTime(default=now)``
        fills in a string that validates against its own format. Naive
        datetimes are read as local time and naive times as UTC, since
        ``date-time`` and ``time`` require an offset.
        """
        if isinstance(value, Mapping):
            return {key: TypeCoercer.serialize_default(item) for key, item in value.items()}
        elif isinstance(value, (list, tuple)):
            return [TypeCoercer.serialize_default(item) for item in value]
        elif isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.astimezone()
            return value.isoformat()
        elif isinstance(value, time):
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
            return value.isoformat()
        elif isinstance(value, date):
            return value.isoformat()
        else:
            return copy.deepcopy(value)

    @staticmethod
    def number_to_string(value: int | float) -> str:
        """Format a number the way JSON serializers do (``2.0`` -> ``"2"``)."""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)


def _is_number(value: Any, expected: int) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == expected
