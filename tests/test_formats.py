"""Tests for flyyer_variables.formats module."""

import re

import pytest

from flyyer_variables.formats import COLOR_HEX, EMAIL, as_checker, build_format_checker
from flyyer_variables.models import FormatOptions


class TestColorHex:
    """Test the color-hex pattern."""

    @pytest.mark.parametrize(
        "value", ["#cc33AA", "#cc33AAFF", "#FFAA33", "#fff", "#FFFA", "fa3", "000000"]
    )
    def test_valid(self, value):
        """Test accepted colors."""
        assert COLOR_HEX.search(value)

    @pytest.mark.parametrize(
        "value", ["#cc33AA00000", "#ZZZZZZ", "#ff", "#fffff", "red", "", "##fff"]
    )
    def test_invalid(self, value):
        """Test rejected colors."""
        assert COLOR_HEX.search(value) is None


class TestEmail:
    """Test the email pattern."""

    @pytest.mark.parametrize(
        "value", ["patricio@flyyer.io", "first.last+tag@mail.example.com", "A@B.CO"]
    )
    def test_valid(self, value):
        """Test accepted addresses."""
        assert EMAIL.search(value)

    @pytest.mark.parametrize(
        "value", ["hello world@", "hello world", "@flyyer.io", "a@b", "a b@flyyer.io", "a@-b.io"]
    )
    def test_invalid(self, value):
        """Test rejected addresses."""
        assert EMAIL.search(value) is None


class TestAsChecker:
    """Test as_checker."""

    def test_regex(self):
        """Test a regex checker."""
        check = as_checker(re.compile(r"^a"))

        assert check("abc") is True
        assert check("cba") is False
        assert check(12) is True

    def test_callable(self):
        """Test a predicate checker."""
        check = as_checker(lambda value: len(value) < 3)

        assert check("ab") is True
        assert check("abc") is False
        assert check(None) is True


class TestBuildFormatChecker:
    """Test build_format_checker."""

    def test_all_formats(self):
        """Test that every standard format and color-hex are enabled."""
        checker = build_format_checker(FormatOptions())

        assert {"email", "date", "time", "date-time", "uri-reference", "color-hex"} <= set(
            checker.checkers
        )
        assert checker.conforms("2021-12-30", "date")
        assert not checker.conforms("2021-12-32", "date")
        assert checker.conforms("20:20:39+00:00", "time")
        assert checker.conforms("2021-12-30T20:20:39Z", "date-time")
        assert not checker.conforms("2021-12-30 20:20", "date-time")
        assert checker.conforms("#FFAA33", "color-hex")
        assert not checker.conforms("hello world@", "email")

    def test_selected_formats(self):
        """Test that only the selected standard formats are enabled."""
        checker = build_format_checker(FormatOptions(formats=["email", "unknown"]))

        assert set(checker.checkers) == {"email", "color-hex"}
        assert checker.conforms("not a date", "date")

    def test_unknown_format_passes(self):
        """Test that formats without a checker pass."""
        checker = build_format_checker(FormatOptions())
        assert checker.conforms("anything", "not-a-format")
