"""Schema helpers for template variables.

Import this module as a namespace; it exposes the builder primitives and the
semantic string helpers side by side:

    >>> from flyyer_variables import variable as V
    >>> schema = V.Object({
    ...     "title": V.String(description="Displayed on https://flyyer.io"),
    ...     "image": V.Optional(V.Image(examples=["https://flyyer.io/logo.png"])),
    ...     "color": V.ColorHex(default="#FFFFFF"),
    ...     "background": V.Nullable(V.Image()),
    ... })

Helpers set their semantic markers (``type``, ``format``,
``contentMediaType``) first and spread caller options afterwards, so a caller
can override a marker explicitly, e.g. ``V.Image(format="uri")``. Overriding
a marker may change what the detection predicates report for the fragment.

``Optional`` and ``Nullable`` are different: an optional property may be
absent (and is hidden by editors), a nullable property stays required and
visible but accepts ``None``.
"""

import enum
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ._types import SchemaFragment, SchemaOptions
from .builder import (
    Array,
    Boolean,
    Enum,
    Integer,
    Literal,
    Null,
    Number,
    Object,
    Optional,
    Readonly,
    ReadonlyOptional,
    Strict,
    String,
    Union,
    enum_items,
    merge,
)
from .exceptions import InvalidSchemaError, MissingArgumentError
from .models import SchemaFragmentModel

__all__ = [
    # Builder primitives
    "Array",
    "Boolean",
    "Enum",
    "Integer",
    "Literal",
    "Null",
    "Number",
    "Object",
    "Optional",
    "Readonly",
    "ReadonlyOptional",
    "Strict",
    "String",
    "Union",
    # Semantic helpers
    "URL",
    "Image",
    "Font",
    "Email",
    "Date",
    "Time",
    "DateTime",
    "ColorHex",
    "Nullable",
    "EnumKeys",
    # Predicates
    "is_nullable",
    "is_image",
    "is_url",
    "is_font",
    "is_email",
    "is_date",
    "is_time",
    "is_date_time",
    "is_color_hex",
]


def _string(markers: dict[str, Any], options: SchemaOptions | None, kwargs: Any) -> SchemaFragment:
    return {"kind": "String", "type": "string", **markers, **merge(options, kwargs)}


def URL(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """A URL, absolute or relative."""
    return _string({"format": "uri-reference"}, options, kwargs)


def Image(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """An image URL. Editors may offer a file upload for it."""
    return _string({"format": "uri-reference", "contentMediaType": "image/*"}, options, kwargs)


def Font(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """A font family name, such as ``"Inter"``."""
    return _string({"contentMediaType": "font/*"}, options, kwargs)


def Email(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    return _string({"format": "email"}, options, kwargs)


def Date(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """A full date, ``YYYY-MM-DD``."""
    return _string({"format": "date"}, options, kwargs)


def Time(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """A time with offset, ``HH:MM:SS+00:00``."""
    return _string({"format": "time"}, options, kwargs)


def DateTime(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """An RFC 3339 date-time."""
    return _string({"format": "date-time"}, options, kwargs)


def ColorHex(options: SchemaOptions | None = None, **kwargs: Any) -> SchemaFragment:
    """A hex color: ``#RGB``, ``#RGBA``, ``#RRGGBB`` or ``#RRGGBBAA``.

    ``color-hex`` is not a standard JSON-Schema format; ``Validator``
    registers a checker for it.
    """
    return _string({"format": "color-hex"}, options, kwargs)


def Nullable(fragment: SchemaFragment) -> SchemaFragment:
    """Allow ``None`` on top of what ``fragment`` accepts."""
    return {**fragment, "nullable": True}


def EnumKeys(
    enum_like: type[enum.Enum] | Mapping[Any, Any],
    options: SchemaOptions | None = None,
    **kwargs: Any,
) -> SchemaFragment:
    """A string fragment accepting the keys (labels) of an enum.

    Purely numeric keys are skipped. ``type`` and ``enum`` cannot be
    overridden by options.

    Args:
        enum_like: An ``enum.Enum`` subclass or a mapping of labels to values
        options: Extra fragment options

    Returns:
        A fragment whose ``enum`` lists the keys in iteration order
    """
    keys = [key for key, _ in enum_items(enum_like)]
    return {**merge(options, kwargs), "kind": "EnumKeys", "type": "string", "enum": keys}


def _view(fragment: Mapping[str, Any]) -> SchemaFragmentModel:
    try:
        return SchemaFragmentModel.model_validate(dict(fragment))
    except ValidationError as e:
        raise InvalidSchemaError(f"Malformed schema fragment: {e}") from e


def _has_format(fragment: Mapping[str, Any] | None, format: str) -> bool:
    if fragment is None:
        return False
    view = _view(fragment)
    return view.type == "string" and view.format == format and view.content_media_type is None


def is_nullable(fragment: Mapping[str, Any] | None) -> bool:
    if fragment is None:
        return False
    return _view(fragment).nullable is True


def is_image(fragment: Mapping[str, Any] | None) -> bool:
    if fragment is None:
        return False
    view = _view(fragment)
    return view.type == "string" and view.content_media_type == "image/*"


def is_url(fragment: Mapping[str, Any]) -> bool:
    """Whether ``fragment`` was produced by ``URL``.

    Raises:
        MissingArgumentError: If ``fragment`` is None
    """
    if fragment is None:
        raise MissingArgumentError("is_url() requires a schema fragment, got None")
    return _has_format(fragment, "uri-reference")


def is_font(fragment: Mapping[str, Any]) -> bool:
    """Whether ``fragment`` was produced by ``Font``.

    Raises:
        MissingArgumentError: If ``fragment`` is None
    """
    if fragment is None:
        raise MissingArgumentError("is_font() requires a schema fragment, got None")
    view = _view(fragment)
    return view.type == "string" and view.content_media_type == "font/*"


def is_email(fragment: Mapping[str, Any] | None) -> bool:
    return _has_format(fragment, "email")


def is_date(fragment: Mapping[str, Any] | None) -> bool:
    return _has_format(fragment, "date")


def is_time(fragment: Mapping[str, Any] | None) -> bool:
    return _has_format(fragment, "time")


def is_date_time(fragment: Mapping[str, Any] | None) -> bool:
    return _has_format(fragment, "date-time")


def is_color_hex(fragment: Mapping[str, Any] | None) -> bool:
    return _has_format(fragment, "color-hex")
