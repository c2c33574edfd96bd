"""Pydantic models for flyyer-variables.

This module contains the option models read by the validation facade, the
typed view over schema fragments used by the detection predicates, and the
structured error descriptor produced by the validation engine.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ._types import CoerceMode, RemoveAdditionalMode


class VariablesBaseModel(BaseModel):
    """Base model for flyyer-variables Pydantic models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable
    - populate_by_name=True: Fields accept both their name and their alias
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class SchemaFragmentModel(BaseModel):
    """Typed view over a schema fragment.

    Only the fields inspected by the detection predicates are declared; every
    other keyword of the fragment is kept as an extra field. ``type`` is left
    unchecked so predicates answer False for unusual types. ``nullable`` must
    be a real boolean: ``"yes"`` or ``1`` are rejected, not read as True.

    Attributes:
        type: The JSON type, or a list of types for unions.
        format: Semantic string subtype (email, uri-reference, color-hex...).
        content_media_type: MIME pattern such as ``image/*`` or ``font/*``.
        nullable: Whether ``None`` is accepted on top of ``type``.
        kind: Builder tag of the constructor that produced the fragment.
        modifier: Builder modifier tag (Optional, Readonly...).

    Example:
        >>> view = SchemaFragmentModel.model_validate(
        ...     {"type": "string", "contentMediaType": "image/*"}
        ... )
        >>> view.content_media_type
        'image/*'
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    type: Any = None
    format: str | None = None
    content_media_type: str | None = Field(default=None, alias="contentMediaType")
    nullable: bool | None = Field(default=None, strict=True)
    kind: str | None = None
    modifier: str | None = None


class ValidatorOptions(VariablesBaseModel):
    """Options for the validation engine.

    Both snake_case names and the camelCase aliases are accepted, so option
    dictionaries written for other JSON-Schema engines keep working.

    Attributes:
        coerce_types: ``False`` disables coercion, ``True`` coerces scalars,
            ``"array"`` additionally wraps/unwraps single-item arrays.
        use_defaults: Fill absent properties with their schema ``default``.
        remove_additional: ``True`` strips undeclared keys where
            ``additionalProperties`` is false, ``"all"`` strips every
            undeclared key, ``"failing"`` also strips keys failing an
            ``additionalProperties`` subschema.
        all_errors: Collect every error instead of stopping at the first.
        strict: Reject unknown schema keywords at compile time.
    """

    coerce_types: CoerceMode = Field(default="array", alias="coerceTypes")
    use_defaults: bool = Field(default=True, alias="useDefaults")
    remove_additional: RemoveAdditionalMode = Field(default=True, alias="removeAdditional")
    all_errors: bool = Field(default=True, alias="allErrors")
    strict: bool = False


class FormatOptions(VariablesBaseModel):
    """Options for the string-format plugin.

    Attributes:
        formats: Names of the standard formats to check. ``None`` enables
            every format the engine knows. Custom formats such as
            ``color-hex`` are always registered.
    """

    formats: list[str] | None = None


class ValidationIssue(VariablesBaseModel):
    """A structured validation error.

    Attributes:
        instance_path: JSON pointer to the failing value ("" for the root).
        schema_path: JSON pointer to the failing keyword in the schema.
        keyword: The keyword that failed (type, format, required...).
        message: Human readable reason.
        params: Value of the failing keyword.
        schema_fragment: The schema fragment that rejected the value.
    """

    instance_path: str = Field(alias="instancePath")
    schema_path: str = Field(alias="schemaPath")
    keyword: str
    message: str
    params: Any = None
    schema_fragment: Any = None
