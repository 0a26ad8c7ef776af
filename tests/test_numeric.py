"""Tests for numeric.py - Rounding, parsing and display formatting."""

import math

import pytest

from calckit.numeric import (
    format_for_display,
    number_to_string,
    parse_operand,
    round_result,
)


class TestRoundResult:
    """Tests for round_result function."""

    def test_rounds_to_eight_decimals(self):
        assert round_result(1 / 3) == 0.33333333
        assert round_result(2 / 3) == 0.66666667

    def test_removes_float_noise(self):
        assert round_result(0.1 + 0.2) == 0.3

    def test_negative_values(self):
        assert round_result(-1 / 3) == -0.33333333

    @pytest.mark.parametrize(
        "value", [0.0, 1 / 3, -2 / 3, math.pi, 123456.789012345, 1e-9]
    )
    def test_idempotent(self, value):
        """Test rounding twice gives the same result as rounding once."""
        once = round_result(value)
        assert round_result(once) == once

    def test_non_finite_passthrough(self):
        assert math.isnan(round_result(float("nan")))
        assert round_result(float("inf")) == float("inf")
        assert round_result(float("-inf")) == float("-inf")

    def test_huge_values_unchanged(self):
        assert round_result(1e300) == 1e300


class TestNumberToString:
    """Tests for number_to_string function."""

    def test_integral_values(self):
        assert number_to_string(8.0) == "8"
        assert number_to_string(-2.0) == "-2"
        assert number_to_string(0.0) == "0"
        assert number_to_string(-0.0) == "0"

    def test_fractions(self):
        assert number_to_string(0.5) == "0.5"
        assert number_to_string(3.14159265) == "3.14159265"

    def test_small_values_avoid_exponent(self):
        assert number_to_string(1e-8) == "0.00000001"
        assert number_to_string(-2.5e-5) == "-0.000025"

    def test_non_finite(self):
        assert number_to_string(float("nan")) == "NaN"
        assert number_to_string(float("inf")) == "Infinity"
        assert number_to_string(float("-inf")) == "-Infinity"


class TestParseOperand:
    """Tests for parse_operand function."""

    def test_numbers(self):
        assert parse_operand("42") == 42
        assert parse_operand("0.5") == 0.5
        assert parse_operand(".5") == 0.5
        assert parse_operand("5.") == 5
        assert parse_operand("-3") == -3

    def test_not_numbers(self):
        assert parse_operand("") is None
        assert parse_operand(".") is None
        assert parse_operand("-") is None
        assert parse_operand("NaN") is None

    def test_infinity_parses(self):
        assert parse_operand("-Infinity") == float("-inf")


class TestFormatForDisplay:
    """Tests for format_for_display function."""

    def test_groups_integer_part(self):
        assert format_for_display("1234567") == "1,234,567"

    def test_fraction_kept_verbatim(self):
        assert format_for_display("1234.5000") == "1,234.5000"
        assert format_for_display("1234.") == "1,234."

    def test_small_numbers(self):
        assert format_for_display("0") == "0"
        assert format_for_display("0.25") == "0.25"

    def test_negative(self):
        assert format_for_display("-1234.5") == "-1,234.5"
        assert format_for_display("-0.5") == "-0.5"

    def test_non_numeric_integer_part(self):
        assert format_for_display("") == ""
        assert format_for_display(".") == "."
        assert format_for_display(".5") == ".5"
        assert format_for_display("-") == ""
        assert format_for_display("NaN") == ""

    def test_infinity(self):
        assert format_for_display("Infinity") == "∞"
        assert format_for_display("-Infinity") == "-∞"

    def test_custom_separator(self):
        assert format_for_display("9876543.21", thousands_separator="'") == "9'876'543.21"
