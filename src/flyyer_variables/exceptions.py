"""Exceptions raised by flyyer-variables.

Only misuse raises. Data that fails validation is reported through
``ParseResult.errors`` and never as an exception.
"""


class VariablesError(Exception):
    """Base class for every error raised by this package."""

    pass


class MissingSchemaError(VariablesError):
    """Raised when a compiled schema is requested but was never compiled."""

    pass


class MissingArgumentError(VariablesError, TypeError):
    """Raised when a required argument is ``None``."""

    pass


class InvalidSchemaError(VariablesError, ValueError):
    """Raised when a schema cannot be compiled by the validation engine."""

    pass


class InvalidOptionsError(VariablesError, ValueError):
    """Raised when validator or format options are malformed."""

    pass
