"""Validation facade for template variables."""

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, TypeGuard, TypeVar

from .config import DEFAULT_FORMAT_OPTIONS, DEFAULT_OPTIONS, merge_options
from .engine import CompiledSchema, SchemaEngine
from .exceptions import MissingSchemaError
from .formats import COLOR_HEX, build_format_checker
from .loaders import load_schema_from_file
from .models import FormatOptions, ValidationIssue, ValidatorOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Key of the compiled root schema inside the engine
SCHEMA_KEY = "schema"


@dataclass
class ParseResult(Generic[T]):
    """Outcome of ``Validator.parse``.

    ``data`` is always returned, even when ``is_valid`` is False: it then
    holds the partially coerced, non-conforming copy of the input.
    """

    data: T
    is_valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)


class Validator(Generic[T]):
    """Validates and coerces template variables against a schema.

    The schema is compiled once, at construction. By default the validator
    coerces types (``"2"`` becomes ``2`` for an integer), fills absent
    properties with their ``default``, strips undeclared properties where
    ``additionalProperties`` is false and collects every error.

    ``parse`` works on a deep copy of its input and never raises on bad data.
    ``validate`` works in place: it mutates the object it is given.

    Example:
        >>> from flyyer_variables import variable as V
        >>> schema = V.Object({"number": V.Optional(V.Integer(default=32))})
        >>> validator = Validator(schema)
        >>> validator.parse({}).data
        {'number': 32}
        >>> validator.parse({"number": "2"}).data
        {'number': 2}
    """

    def __init__(
        self,
        schema: Mapping[str, Any],
        options: ValidatorOptions | Mapping[str, Any] | None = None,
        format_options: FormatOptions | Mapping[str, Any] | None = None,
    ):
        """Initialize the validator and compile the schema.

        Args:
            schema: The root schema fragment
            options: Engine options, merged over DEFAULT_OPTIONS
            format_options: Format plugin options, merged over DEFAULT_FORMAT_OPTIONS

        Raises:
            InvalidOptionsError: If options are malformed
            InvalidSchemaError: If the schema cannot be compiled
        """
        self.options = merge_options(DEFAULT_OPTIONS, options)
        self.format_options = merge_options(DEFAULT_FORMAT_OPTIONS, format_options)

        self.engine = SchemaEngine(self.options, build_format_checker(self.format_options))
        self.engine.add_keyword("kind")
        self.engine.add_keyword("modifier")
        self.engine.add_format("color-hex", COLOR_HEX)
        self.engine.add_schema(schema, SCHEMA_KEY)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        options: ValidatorOptions | Mapping[str, Any] | None = None,
        format_options: FormatOptions | Mapping[str, Any] | None = None,
    ) -> "Validator[Any]":
        """Create a Validator from a YAML or JSON schema file.

        Args:
            path: Path to the schema file
            options: Engine options
            format_options: Format plugin options

        Returns:
            Validator instance

        Raises:
            InvalidSchemaError: If the file cannot be read as a Draft 7 schema
        """
        return cls(load_schema_from_file(path), options=options, format_options=format_options)

    def get_schema(self) -> CompiledSchema:
        """Return the compiled root schema.

        Raises:
            MissingSchemaError: If the schema was not compiled
        """
        compiled = self.engine.get_schema(SCHEMA_KEY)
        if compiled is None:
            raise MissingSchemaError("Missing schema")
        return compiled

    def parse(self, instance: Any) -> ParseResult[Any]:
        """Validate a copy of ``instance``, applying defaults and coercion.

        Args:
            instance: The variables to parse; never mutated

        Returns:
            ParseResult with the processed copy, the outcome and the errors
        """
        compiled = self.get_schema()
        data = copy.deepcopy(instance)
        is_valid = compiled(data)
        errors = list(compiled.errors or [])
        if not is_valid:
            logger.debug(f"Parsed invalid variables with {len(errors)} error(s)")
        return ParseResult(data=data, is_valid=is_valid, errors=errors)

    def validate(self, instance: object) -> TypeGuard[T]:
        """Validate ``instance`` in place.

        Defaults are filled, types coerced and undeclared properties stripped
        directly on ``instance``. Copy shared or immutable data before calling.

        Args:
            instance: The variables to validate

        Returns:
            True if ``instance`` conforms to the schema
        """
        return self.get_schema()(instance)
