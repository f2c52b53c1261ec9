"""
Tests for tax ID and amount normalization.
"""

import math

import pytest

from resolution_qc.normalizers import (
    format_amount,
    has_value,
    is_valid_amount,
    normalize_amount,
    normalize_tax_id,
    tax_ids_match,
)


class TestNormalizeTaxId:
    """Tests for tax ID canonicalization."""

    def test_strips_dots_and_hyphen(self):
        assert normalize_tax_id("76.123.456-7") == "761234567"

    def test_punctuation_variants_are_equal(self):
        assert normalize_tax_id("76.123.456-7") == normalize_tax_id("76123456-7")
        assert normalize_tax_id("76 123 456-7") == normalize_tax_id("761234567")

    def test_check_digit_lowercased(self):
        assert normalize_tax_id("76.123.456-K") == "76123456k"

    @pytest.mark.parametrize("value", ["76.123.456-7", " 9.876.543-k ", "", "76_123_456/7"])
    def test_idempotent(self, value):
        once = normalize_tax_id(value)
        assert normalize_tax_id(once) == once

    @pytest.mark.parametrize("value", [None, "", 761234567])
    def test_absent_is_empty(self, value):
        assert normalize_tax_id(value) == ""

    def test_match_ignores_punctuation(self):
        assert tax_ids_match("76.123.456-K", "76123456k") is True

    def test_absent_ids_never_match(self):
        assert tax_ids_match("", "") is False
        assert tax_ids_match(None, None) is False

    def test_different_ids_do_not_match(self):
        assert tax_ids_match("76.123.456-7", "76.123.456-8") is False


class TestNormalizeAmount:
    """Tests for amount parsing."""

    def test_plain_number_unchanged(self):
        assert normalize_amount(1190000) == 1190000
        assert normalize_amount(1190000.5) == 1190000.5

    def test_chilean_format(self):
        assert normalize_amount("$1.190.000") == 1190000

    def test_decimal_comma(self):
        assert normalize_amount("1.190.000,50") == 1190000.5

    def test_whitespace_and_symbol(self):
        assert normalize_amount(" $ 1.190.000 ") == 1190000

    def test_other_currency_symbols(self):
        assert normalize_amount("€2.500") == 2500

    def test_negative(self):
        assert normalize_amount("-1.000") == -1000

    @pytest.mark.parametrize("value", [
        "abc", "", "$", "1e5", "12abc", None, True, [], float("inf"),
        "1" * 5000, "1" * 400 + ",5",
    ])
    def test_unparseable_is_nan(self, value):
        result = normalize_amount(value)
        assert math.isnan(result)
        assert is_valid_amount(result) is False

    def test_valid_amount(self):
        assert is_valid_amount(normalize_amount("0")) is True

    def test_large_integer_string_kept_exact(self):
        assert normalize_amount("1" * 400) == int("1" * 400)


class TestFormatAmount:
    """Tests for amount rendering in messages."""

    def test_thousands_grouped_with_dots(self):
        assert format_amount(1190000) == "$1.190.000"

    def test_decimals_with_comma(self):
        assert format_amount(1234.5) == "$1.234,5"

    def test_small_amount(self):
        assert format_amount(500) == "$500"

    def test_integral_float(self):
        assert format_amount(2000000.0) == "$2.000.000"

    def test_integer_too_large_for_float(self):
        assert format_amount(10 ** 400).startswith("$10.000.000")
        assert format_amount(10 ** 30) == "$1" + ".000" * 10


class TestHasValue:
    """Tests for field presence."""

    @pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
    def test_absent(self, value):
        assert has_value(value) is False

    @pytest.mark.parametrize("value", ["x", 0, 0.0, False])
    def test_present(self, value):
        assert has_value(value) is True
