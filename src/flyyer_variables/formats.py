"""String formats checked by the validation engine.

Standard formats come from ``jsonschema``'s Draft 7 format checker. Install
``jsonschema[format-nongpl]`` so ``date-time``, ``time`` and
``uri-reference`` are actually checked; formats without a checker pass.
``email`` is checked with a full address pattern instead of jsonschema's
bare ``"@"`` test.
"""

import logging
import re
from collections.abc import Callable

from jsonschema import Draft7Validator, FormatChecker

from .models import FormatOptions

logger = logging.getLogger(__name__)

COLOR_HEX = re.compile(r"^#?([0-9A-F]{3}|[0-9A-F]{4}|[0-9A-F]{6}|[0-9A-F]{8})$", re.IGNORECASE)

EMAIL = re.compile(
    r"^[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$",
    re.IGNORECASE,
)

# Standard formats checked with a stricter pattern than jsonschema's own
STRICT_FORMATS: dict[str, re.Pattern[str]] = {"email": EMAIL}

# Formats registered on top of the standard ones
CUSTOM_FORMATS: dict[str, re.Pattern[str]] = {"color-hex": COLOR_HEX}


def as_checker(checker: re.Pattern[str] | Callable[[object], bool]) -> Callable[[object], bool]:
    """Turn a regex or a predicate into a format check function.

    Non-string instances always pass; ``type`` is responsible for them.
    """
    if isinstance(checker, re.Pattern):
        pattern = checker

        def check(instance: object) -> bool:
            if not isinstance(instance, str):
                return True
            return pattern.search(instance) is not None

        return check

    def check_callable(instance: object) -> bool:
        if not isinstance(instance, str):
            return True
        return bool(checker(instance))

    return check_callable


def build_format_checker(options: FormatOptions) -> FormatChecker:
    """Build the format checker for a validator.

    Args:
        options: Format plugin options

    Returns:
        A FormatChecker with the enabled standard formats and the custom ones
    """
    standard = Draft7Validator.FORMAT_CHECKER
    if options.formats is None:
        enabled = list(standard.checkers)
    else:
        unknown = [name for name in options.formats if name not in standard.checkers]
        if unknown:
            logger.debug(f"No checker available for formats: {unknown}")
        enabled = [name for name in options.formats if name in standard.checkers]

    checker = FormatChecker(formats=())
    for name in enabled:
        if name in STRICT_FORMATS:
            checker.checks(name)(as_checker(STRICT_FORMATS[name]))
        else:
            func, raises = standard.checkers[name]
            checker.checks(name, raises)(func)
    for name, pattern in CUSTOM_FORMATS.items():
        checker.checks(name)(as_checker(pattern))

    logger.debug(f"Format checker enabled for: {sorted(checker.checkers)}")
    return checker
