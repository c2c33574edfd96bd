"""Default configuration for the validation facade.

Defaults are plain constants, read when a ``Validator`` is constructed.
"""

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from .exceptions import InvalidOptionsError
from .models import FormatOptions, ValidatorOptions, VariablesBaseModel

logger = logging.getLogger(__name__)

DEFAULT_OPTIONS = ValidatorOptions(
    coerce_types="array",
    use_defaults=True,
    remove_additional=True,
    all_errors=True,
    strict=False,
)

DEFAULT_FORMAT_OPTIONS = FormatOptions()

M = TypeVar("M", bound=VariablesBaseModel)


def merge_options(defaults: M, overrides: M | Mapping[str, Any] | None) -> M:
    """Merge caller options over defaults.

    Args:
        defaults: The default options model
        overrides: A model of the same type, a mapping of option names
                   (snake_case or camelCase) or None

    Returns:
        A new options model

    Raises:
        InvalidOptionsError: If an option is unknown or has the wrong type
    """
    if overrides is None:
        return defaults
    if isinstance(overrides, type(defaults)):
        return overrides
    if not isinstance(overrides, Mapping):
        raise InvalidOptionsError(
            f"Expected a mapping or {type(defaults).__name__}, got {type(overrides).__name__}"
        )

    # Normalize camelCase aliases to field names so each option has one key
    model_type = type(defaults)
    aliases = {
        info.alias: name for name, info in model_type.model_fields.items() if info.alias
    }
    merged = defaults.model_dump()
    merged.update({aliases.get(key, key): value for key, value in overrides.items()})
    try:
        options = model_type.model_validate(merged)
    except ValidationError as e:
        raise InvalidOptionsError(f"Invalid {model_type.__name__}: {e}") from e

    logger.debug(f"Merged {model_type.__name__}: {options.model_dump()}")
    return options
