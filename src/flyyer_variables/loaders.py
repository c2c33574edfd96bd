"""Reading variable schemas stored as YAML or JSON documents.

A template may ship its schema as a file instead of building it with
``variable``. Documents are parsed, then checked against the Draft 7
meta-schema, so a broken file is reported as ``InvalidSchemaError`` before a
``Validator`` compiles it.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from ._types import SchemaFragment
from .exceptions import InvalidSchemaError

logger = logging.getLogger(__name__)

PARSERS: dict[str, Callable[[str], Any]] = {"yaml": yaml.safe_load, "json": json.loads}

SUFFIXES = {".yaml": "yaml", ".yml": "yaml", ".json": "json"}


def load_schema(content: str, format: str = "yaml") -> SchemaFragment:
    """Parse a schema document and check it against the Draft 7 meta-schema.

    Raises:
        InvalidSchemaError: If ``format`` is unknown, the document does not
            parse, is not an object or is not a valid schema
    """
    parse = PARSERS.get(format)
    if parse is None:
        raise InvalidSchemaError(
            f"Unknown schema format '{format}', expected one of: {', '.join(PARSERS)}"
        )

    try:
        document = parse(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise InvalidSchemaError(f"Schema document is not valid {format}: {e}") from e

    if not isinstance(document, dict):
        raise InvalidSchemaError(
            f"Schema document must be an object, got {type(document).__name__}"
        )
    try:
        Draft7Validator.check_schema(document)
    except SchemaError as e:
        raise InvalidSchemaError(f"Invalid schema: {e.message}") from e
    return document


def load_schema_from_file(path: str | Path) -> SchemaFragment:
    """Read a ``.yaml``, ``.yml`` or ``.json`` schema file.

    Missing files raise ``FileNotFoundError`` from ``Path.read_text``.
    """
    path = Path(path)
    format = SUFFIXES.get(path.suffix.lower())
    if format is None:
        raise InvalidSchemaError(
            f"Cannot tell the schema format of '{path.name}' from its suffix, "
            f"expected one of: {', '.join(SUFFIXES)}"
        )

    logger.debug(f"Loading {format} schema from {path}")
    return load_schema(path.read_text(encoding="utf-8"), format)
