"""Validation engine built on ``jsonschema`` (Draft 7).

The engine compiles schemas into reusable ``CompiledSchema`` callables. While
validating, it mutates the instance according to ``ValidatorOptions``:

- absent properties receive a JSON-compatible copy of their ``default``
- values are coerced toward their declared ``type`` (see ``coercion``)
- undeclared properties are stripped where ``additionalProperties`` allows it

Keywords that mutate (``additionalProperties``, ``patternProperties``,
``properties``, ``items``) run before the other keywords of the same schema,
so ``required`` sees filled-in defaults and ``type`` sees coerced values.
"""

import itertools
import logging
import re
from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping, MutableSequence
from typing import Any

from jsonschema import Draft7Validator, FormatChecker, validators
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError

from .builder import walk_fragments
from .coercion import TypeCoercer
from .exceptions import InvalidSchemaError
from .formats import as_checker
from .models import ValidationIssue, ValidatorOptions

logger = logging.getLogger(__name__)

KeywordFunc = Callable[
    [Any, Any, Any, Mapping[str, Any]], Iterable[JsonSchemaValidationError] | None
]

MUTATING_KEYWORDS = ("additionalProperties", "patternProperties", "properties", "items")

# Keywords without validation semantics in Draft 7
ANNOTATION_KEYWORDS = frozenset(
    {
        "$schema",
        "$id",
        "$comment",
        "title",
        "description",
        "default",
        "examples",
        "readOnly",
        "writeOnly",
        "definitions",
        "contentMediaType",
        "contentEncoding",
        "nullable",
    }
)


def noop_keyword(validator: Any, value: Any, instance: Any, schema: Mapping[str, Any]) -> None:
    """A keyword that never fails."""
    return None


def json_pointer(path: Iterable[Any]) -> str:
    """Build a JSON pointer from a path of keys and indexes."""
    tokens = [str(token).replace("~", "~0").replace("/", "~1") for token in path]
    if not tokens:
        return ""
    return "/" + "/".join(tokens)


def to_issue(error: JsonSchemaValidationError) -> ValidationIssue:
    """Convert a jsonschema error into a ValidationIssue."""
    return ValidationIssue(
        instance_path=json_pointer(error.absolute_path),
        schema_path=json_pointer(error.absolute_schema_path),
        keyword=str(error.validator),
        message=error.message,
        params=error.validator_value,
        schema_fragment=error.schema,
    )


def _keyword_order(schema: Mapping[str, Any]) -> Iterable[tuple[str, Any]]:
    # Draft 7 ignores the siblings of $ref
    if "$ref" in schema:
        return [("$ref", schema["$ref"])]
    rank = {keyword: index for index, keyword in enumerate(MUTATING_KEYWORDS)}
    return sorted(schema.items(), key=lambda item: rank.get(item[0], len(rank)))


def _additional_keys(instance: Mapping[str, Any], schema: Mapping[str, Any]) -> list[str]:
    properties = schema.get("properties") or {}
    patterns = list((schema.get("patternProperties") or {}).keys())
    return [
        key
        for key in instance
        if key not in properties and not any(re.search(pattern, key) for pattern in patterns)
    ]


class CompiledSchema:
    """A compiled schema, callable on instances.

    After each call, ``errors`` holds the ordered list of ``ValidationIssue``
    objects of that call, or None when the instance was valid.
    """

    def __init__(self, validator: Any, all_errors: bool = True):
        self._validator = validator
        self._all_errors = all_errors
        self.errors: list[ValidationIssue] | None = None

    @property
    def schema(self) -> Any:
        return self._validator.schema

    def __call__(self, instance: Any) -> bool:
        found = self._validator.iter_errors(instance)
        if not self._all_errors:
            found = itertools.islice(found, 1)
        issues = [to_issue(error) for error in found]
        self.errors = issues or None
        return not issues


class SchemaEngine:
    """Compiles and stores schemas.

    Example:
        >>> engine = SchemaEngine(ValidatorOptions())
        >>> engine.add_keyword("kind")
        >>> compiled = engine.add_schema({"type": "object"}, "root")
        >>> compiled({})
        True
    """

    def __init__(self, options: ValidatorOptions, format_checker: FormatChecker | None = None):
        self.options = options
        self.format_checker = format_checker if format_checker is not None else FormatChecker()
        self._keywords: dict[str, KeywordFunc] = {}
        self._schemas: dict[str, CompiledSchema] = {}

    def add_keyword(self, name: str, func: KeywordFunc | None = None) -> None:
        """Register a keyword. Without ``func`` the keyword is inert."""
        if name in Draft7Validator.VALIDATORS:
            raise InvalidSchemaError(f"Keyword '{name}' is already defined")
        self._keywords[name] = func or noop_keyword
        logger.debug(f"Registered keyword: {name}")

    def add_format(self, name: str, checker: re.Pattern[str] | Callable[[object], bool]) -> None:
        """Register a string format checked by a regex or a predicate."""
        self.format_checker.checks(name)(as_checker(checker))
        logger.debug(f"Registered format: {name}")

    def add_schema(self, schema: Any, key: str) -> CompiledSchema:
        """Compile ``schema`` and store it under ``key``.

        Raises:
            InvalidSchemaError: If the key is taken, the schema is not valid
                Draft 7, or strict mode finds unknown keywords
        """
        if key in self._schemas:
            raise InvalidSchemaError(f"Schema with key '{key}' already exists")

        validator_class = self._validator_class()
        try:
            validator_class.check_schema(schema)
        except SchemaError as e:
            raise InvalidSchemaError(f"Invalid schema: {e.message}") from e
        if self.options.strict:
            self._check_keywords(schema)

        compiled = CompiledSchema(
            validator_class(schema, format_checker=self.format_checker),
            all_errors=self.options.all_errors,
        )
        self._schemas[key] = compiled
        logger.debug(f"Compiled schema '{key}'")
        return compiled

    def get_schema(self, key: str) -> CompiledSchema | None:
        return self._schemas.get(key)

    def _check_keywords(self, schema: Any) -> None:
        known = set(Draft7Validator.VALIDATORS) | ANNOTATION_KEYWORDS | set(self._keywords)
        unknown = sorted(
            {keyword for fragment in walk_fragments(schema) for keyword in fragment} - known
        )
        if unknown:
            raise InvalidSchemaError(f"Unknown keywords in strict mode: {', '.join(unknown)}")

    def _coerce(self, validator: Any, value: Any, schema: Any) -> Any:
        return TypeCoercer.coerce(value, schema, validator.is_type, self.options.coerce_types)

    def _strip_additional(
        self, validator: Any, instance: MutableMapping[str, Any], schema: Mapping[str, Any]
    ) -> None:
        mode = self.options.remove_additional
        if not mode:
            return
        additional = schema.get("additionalProperties", True)
        for key in _additional_keys(instance, schema):
            if mode == "all" or additional is False:
                del instance[key]
            elif (
                mode == "failing"
                and isinstance(additional, Mapping)
                and not validator.evolve(schema=additional).is_valid(instance[key])
            ):
                del instance[key]

    def _validator_class(self) -> Any:
        base = Draft7Validator.VALIDATORS
        options = self.options

        def properties(
            validator: Any, properties: Any, instance: Any, schema: Mapping[str, Any]
        ) -> Iterator[JsonSchemaValidationError]:
            if validator.is_type(instance, "object") and isinstance(instance, MutableMapping):
                if options.remove_additional == "all" and "additionalProperties" not in schema:
                    self._strip_additional(validator, instance, schema)
                for name, subschema in properties.items():
                    if name in instance:
                        instance[name] = self._coerce(validator, instance[name], subschema)
                    elif (
                        options.use_defaults
                        and isinstance(subschema, Mapping)
                        and "default" in subschema
                    ):
                        instance[name] = TypeCoercer.serialize_default(subschema["default"])
            yield from base["properties"](validator, properties, instance, schema)

        def additional_properties(
            validator: Any, additional: Any, instance: Any, schema: Mapping[str, Any]
        ) -> Iterator[JsonSchemaValidationError]:
            if validator.is_type(instance, "object") and isinstance(instance, MutableMapping):
                if isinstance(additional, Mapping):
                    for key in _additional_keys(instance, schema):
                        instance[key] = self._coerce(validator, instance[key], additional)
                self._strip_additional(validator, instance, schema)
            yield from base["additionalProperties"](validator, additional, instance, schema)

        def pattern_properties(
            validator: Any, patterns: Any, instance: Any, schema: Mapping[str, Any]
        ) -> Iterator[JsonSchemaValidationError]:
            if validator.is_type(instance, "object") and isinstance(instance, MutableMapping):
                for pattern, subschema in patterns.items():
                    for key in list(instance):
                        if re.search(pattern, key):
                            instance[key] = self._coerce(validator, instance[key], subschema)
            yield from base["patternProperties"](validator, patterns, instance, schema)

        def items(
            validator: Any, items: Any, instance: Any, schema: Mapping[str, Any]
        ) -> Iterator[JsonSchemaValidationError]:
            if validator.is_type(instance, "array") and isinstance(instance, MutableSequence):
                if isinstance(items, Mapping):
                    for index, item in enumerate(instance):
                        instance[index] = self._coerce(validator, item, items)
                elif isinstance(items, list):
                    for index, (item, subschema) in enumerate(zip(instance, items)):
                        instance[index] = self._coerce(validator, item, subschema)
            yield from base["items"](validator, items, instance, schema)

        def type_(
            validator: Any, types: Any, instance: Any, schema: Mapping[str, Any]
        ) -> Iterator[JsonSchemaValidationError]:
            if instance is None and schema.get("nullable") is True:
                return
            yield from base["type"](validator, types, instance, schema)

        keywords = {
            **base,
            "properties": properties,
            "additionalProperties": additional_properties,
            "patternProperties": pattern_properties,
            "items": items,
            "type": type_,
            **self._keywords,
        }
        return validators.create(
            meta_schema=Draft7Validator.META_SCHEMA,
            validators=keywords,
            type_checker=Draft7Validator.TYPE_CHECKER,
            format_checker=Draft7Validator.FORMAT_CHECKER,
            id_of=Draft7Validator.ID_OF,
            applicable_validators=_keyword_order,
        )
