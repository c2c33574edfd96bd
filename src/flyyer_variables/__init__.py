"""flyyer-variables - Schemas and validation for template variables.

This package lets templates declare the variables they accept as a
JSON-Schema, and validates incoming variables against it:
- Builder primitives (``Object``, ``String``, ``Integer``...) producing
  JSON-Schema dictionaries
- Semantic string helpers (``Image``, ``Font``, ``URL``, ``Email``,
  ``Date``, ``Time``, ``DateTime``, ``ColorHex``) that editors use to pick
  the right input widget
- A ``Validator`` that coerces types, fills defaults and strips unknown
  properties

## Quick Examples

### Declaring variables
```python
from flyyer_variables import variable as V

schema = V.Object({
    "title": V.String(description="Displayed on https://flyyer.io"),
    "description": V.Optional(V.String()),
    "image": V.Optional(V.Image(examples=["https://flyyer.io/logo.png"])),
    "color": V.ColorHex(default="#FFFFFF"),
})
```

### Parsing variables
```python
from flyyer_variables import Validator

validator = Validator(schema)
result = validator.parse({"title": "Hello", "extra": 1})
if result.is_valid:
    render(result.data)
else:
    for error in result.errors:
        print(error.instance_path, error.message)
```
"""

from . import variable
from .config import DEFAULT_FORMAT_OPTIONS, DEFAULT_OPTIONS
from .core import ParseResult, Validator
from .engine import CompiledSchema, SchemaEngine
from .exceptions import (
    InvalidOptionsError,
    InvalidSchemaError,
    MissingArgumentError,
    MissingSchemaError,
    VariablesError,
)
from .loaders import load_schema, load_schema_from_file
from .models import FormatOptions, ValidationIssue, ValidatorOptions

__all__ = [
    # Schema helpers namespace
    "variable",
    # Validation facade
    "Validator",
    "ParseResult",
    "ValidationIssue",
    # Engine
    "SchemaEngine",
    "CompiledSchema",
    # Configuration
    "ValidatorOptions",
    "FormatOptions",
    "DEFAULT_OPTIONS",
    "DEFAULT_FORMAT_OPTIONS",
    # Exceptions
    "VariablesError",
    "MissingSchemaError",
    "MissingArgumentError",
    "InvalidSchemaError",
    "InvalidOptionsError",
    # Loaders
    "load_schema",
    "load_schema_from_file",
]

__version__ = "2.1.3"
