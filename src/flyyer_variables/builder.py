"""Schema builder primitives.

Each constructor returns a plain JSON-Schema dictionary (a schema fragment).
Fragments carry an inert ``kind`` tag naming the constructor and, when
wrapped, a ``modifier`` tag. The validation engine registers both keywords as
no-ops; ``Strict`` removes them for consumers that reject unknown keywords.

Options are given as an optional mapping and/or keyword arguments. Keyword
arguments override the mapping, and both override what the constructor
computes:

    >>> from flyyer_variables import variable as V
    >>> schema = V.Object({
    ...     "title": V.String(description="Displayed on https://flyyer.io"),
    ...     "description": V.Optional(V.String()),
    ...     "count": V.Integer({"default": 1}),
    ... })
    >>> schema["required"]
    ['title', 'count']
"""

import copy
import enum
import math
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from ._types import SchemaFragment, SchemaOptions, SchemaType

OPTIONAL_MODIFIERS = ("Optional", "ReadonlyOptional")
TAG_KEYWORDS = ("kind", "modifier")

# Keywords holding a mapping of names to subschemas
MAP_KEYWORDS = ("properties", "patternProperties", "definitions", "dependencies")
# Keywords holding a subschema or a list of subschemas
SCHEMA_KEYWORDS = (
    "items",
    "additionalItems",
    "additionalProperties",
    "contains",
    "propertyNames",
    "not",
    "if",
    "then",
    "else",
    "allOf",
    "anyOf",
    "oneOf",
)


def merge(options: SchemaOptions | None, extra: Mapping[str, Any]) -> dict[str, Any]:
    """Merge an options mapping with keyword options (keywords win)."""
    merged = dict(options) if options else {}
    merged.update(extra)
    return merged


def _json_type(value: Any) -> SchemaType:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    raise TypeError(f"Unsupported literal value: {type(value).__name__}")


def is_numeric_key(key: Any) -> bool:
    """Whether ``key`` is a numeric reverse-mapping entry of an enum mapping."""
    if isinstance(key, bool):
        return False
    if isinstance(key, (int, float)):
        return True
    if not isinstance(key, str):
        return False
    try:
        number = float(key)
    except ValueError:
        return False
    return not math.isnan(number)


def enum_items(enum_like: type[enum.Enum] | Mapping[Any, Any]) -> list[tuple[Any, Any]]:
    """Return the (key, value) pairs of an enum class or mapping, in order.

    Keys that are purely numeric are dropped: they are reverse-mapping
    entries (value -> name) that some enum representations generate.
    """
    if isinstance(enum_like, type) and issubclass(enum_like, enum.Enum):
        return [(member.name, member.value) for member in enum_like]
    if isinstance(enum_like, Mapping):
        return [(key, value) for key, value in enum_like.items() if not is_numeric_key(key)]
    raise TypeError(f"Expected an Enum subclass or a mapping, got {type(enum_like).__name__}")


def String(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    return {"kind": "String", "type": "string", **merge(options, kwargs)}


def Number(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    return {"kind": "Number", "type": "number", **merge(options, kwargs)}


def Integer(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    return {"kind": "Integer", "type": "integer", **merge(options, kwargs)}


def Boolean(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    return {"kind": "Boolean", "type": "boolean", **merge(options, kwargs)}


def Null(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    return {"kind": "Null", "type": "null", **merge(options, kwargs)}


def Literal(value: Any, options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """A fragment accepting exactly ``value``."""
    return {"kind": "Literal", "const": value, "type": _json_type(value), **merge(options, kwargs)}


def Enum(
    enum_like: type[enum.Enum] | Mapping[Any, Any],
    options: SchemaOptions | None = None,
    **kwargs: Any,
) -> SchemaFragment:
    """A fragment accepting the values of an enum.

    Args:
        enum_like: An ``enum.Enum`` subclass or a mapping of labels to values
        options: Extra fragment options

    Returns:
        A fragment with ``enum`` set to the values, in definition order
    """
    values = [value for _, value in enum_items(enum_like)]
    types = []
    for value in values:
        json_type = "number" if _json_type(value) in ("integer", "number") else _json_type(value)
        if json_type not in types:
            types.append(json_type)
    schema_type: str | list[str] = types[0] if len(types) == 1 else types
    return {"kind": "Enum", "type": schema_type, "enum": values, **merge(options, kwargs)}


def Union(
    items: Iterable[SchemaFragment], options: SchemaOptions | None = None, **kwargs: Any
) -> SchemaFragment:
    return {"kind": "Union", "anyOf": list(items), **merge(options, kwargs)}


def Array(
    items: SchemaFragment, options: SchemaOptions | None = None, **kwargs: Any
) -> SchemaFragment:
    return {"kind": "Array", "type": "array", "items": items, **merge(options, kwargs)}


def Object(
    properties: Mapping[str, SchemaFragment],
    options: SchemaOptions | None = None,
    **kwargs: Any,
) -> SchemaFragment:
    """An object fragment.

    Properties wrapped with ``Optional`` or ``ReadonlyOptional`` are left out
    of ``required``; every other property is required. ``additionalProperties``
    is only emitted when passed as an option.
    """
    required = [
        name
        for name, fragment in properties.items()
        if fragment.get("modifier") not in OPTIONAL_MODIFIERS
    ]
    schema: SchemaFragment = {"kind": "Object", "type": "object", "properties": dict(properties)}
    if required:
        schema["required"] = required
    schema.update(merge(options, kwargs))
    return schema


def Optional(fragment: SchemaFragment) -> SchemaFragment:
    """Mark a property as optional: it may be absent from the object."""
    return {**fragment, "modifier": "Optional"}


def ReadonlyOptional(fragment: SchemaFragment) -> SchemaFragment:
    return {**fragment, "modifier": "ReadonlyOptional"}


def Readonly(fragment: SchemaFragment) -> SchemaFragment:
    return {**fragment, "modifier": "Readonly"}


def walk_fragments(schema: Any) -> Iterator[SchemaFragment]:
    """Yield ``schema`` and every nested schema fragment, depth first."""
    if not isinstance(schema, Mapping):
        return
    yield schema
    for key, value in schema.items():
        if key in MAP_KEYWORDS and isinstance(value, Mapping):
            for child in value.values():
                yield from walk_fragments(child)
        elif key in SCHEMA_KEYWORDS:
            children = value if isinstance(value, list) else [value]
            for child in children:
                yield from walk_fragments(child)


def Strict(fragment: SchemaFragment) -> SchemaFragment:
    """Return a deep copy of ``fragment`` without ``kind``/``modifier`` tags."""

    def strip(node: Any) -> Any:
        if not isinstance(node, Mapping):
            return copy.deepcopy(node)
        result = {}
        for key, value in node.items():
            if key in TAG_KEYWORDS:
                continue
            if key in MAP_KEYWORDS and isinstance(value, Mapping):
                result[key] = {name: strip(child) for name, child in value.items()}
            elif key in SCHEMA_KEYWORDS and isinstance(value, list):
                result[key] = [strip(child) for child in value]
            elif key in SCHEMA_KEYWORDS:
                result[key] = strip(value)
            else:
                result[key] = copy.deepcopy(value)
        return result

    return strip(fragment)
