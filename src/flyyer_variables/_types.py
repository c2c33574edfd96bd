"""Type definitions for flyyer-variables."""

from collections.abc import Mapping
from typing import Any, Literal

# Schema fragments are plain JSON-Schema dictionaries
SchemaFragment = dict[str, Any]

# Caller-supplied options, merged into a fragment
SchemaOptions = Mapping[str, Any]

SchemaType = Literal["string", "number", "integer", "boolean", "array", "object", "null"]
CoerceMode = bool | Literal["array"]
RemoveAdditionalMode = bool | Literal["all", "failing"]

