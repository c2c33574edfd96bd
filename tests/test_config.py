"""Tests for flyyer_variables.config module."""

import pytest
from pydantic import ValidationError

from flyyer_variables.config import DEFAULT_FORMAT_OPTIONS, DEFAULT_OPTIONS, merge_options
from flyyer_variables.exceptions import InvalidOptionsError
from flyyer_variables.models import FormatOptions, ValidatorOptions


class TestDefaults:
    """Test the default options."""

    def test_default_options(self):
        """Test the documented defaults."""
        assert DEFAULT_OPTIONS.coerce_types == "array"
        assert DEFAULT_OPTIONS.use_defaults is True
        assert DEFAULT_OPTIONS.remove_additional is True
        assert DEFAULT_OPTIONS.all_errors is True
        assert DEFAULT_OPTIONS.strict is False
        assert DEFAULT_FORMAT_OPTIONS.formats is None

    def test_options_are_frozen(self):
        """Test that defaults cannot be changed in place."""
        with pytest.raises(ValidationError):
            DEFAULT_OPTIONS.strict = True  # type: ignore[misc]


class TestMergeOptions:
    """Test merge_options."""

    def test_none_returns_defaults(self):
        """Test that no overrides means the defaults."""
        assert merge_options(DEFAULT_OPTIONS, None) is DEFAULT_OPTIONS

    def test_model_replaces_defaults(self):
        """Test that a full options model is used as-is."""
        options = ValidatorOptions(strict=True)
        assert merge_options(DEFAULT_OPTIONS, options) is options

    def test_partial_mapping(self):
        """Test that a partial mapping keeps the other defaults."""
        options = merge_options(DEFAULT_OPTIONS, {"all_errors": False})

        assert options.all_errors is False
        assert options.coerce_types == "array"
        assert DEFAULT_OPTIONS.all_errors is True

    def test_camel_case_aliases(self):
        """Test that camelCase names are accepted."""
        options = merge_options(
            DEFAULT_OPTIONS, {"coerceTypes": True, "removeAdditional": "all", "allErrors": False}
        )

        assert options.coerce_types is True
        assert options.remove_additional == "all"
        assert options.all_errors is False

    def test_format_options(self):
        """Test merging of format options."""
        options = merge_options(DEFAULT_FORMAT_OPTIONS, {"formats": ["email", "date"]})

        assert isinstance(options, FormatOptions)
        assert options.formats == ["email", "date"]

    def test_unknown_option(self):
        """Test that unknown options are rejected."""
        with pytest.raises(InvalidOptionsError, match="Invalid ValidatorOptions"):
            merge_options(DEFAULT_OPTIONS, {"verbose": True})

    def test_invalid_value(self):
        """Test that invalid option values are rejected."""
        with pytest.raises(InvalidOptionsError):
            merge_options(DEFAULT_OPTIONS, {"coerceTypes": "always"})

    def test_invalid_type(self):
        """Test that non-mapping overrides are rejected."""
        with pytest.raises(InvalidOptionsError, match="Expected a mapping"):
            merge_options(DEFAULT_OPTIONS, ["strict"])  # type: ignore[arg-type]

    def test_invalid_options_is_value_error(self):
        """Test that InvalidOptionsError can be caught as ValueError."""
        with pytest.raises(ValueError):
            merge_options(DEFAULT_FORMAT_OPTIONS, {"formats": "email"})
