# Test type: Unit Test
# Validation to be executed: Validates helper utility functions — currency
#   rounding, annual-to-monthly conversion and input sanitisation.
# Command: pytest test/test_unit_helpers.py -v

"""Unit tests for salarycalc.utils.helpers module."""

from salarycalc.utils.helpers import (
    monthly,
    round_currency,
    round_half_up,
    sanitize_city,
    sanitize_company,
)


class TestRoundCurrency:
    def test_two_decimals(self):
        assert round_currency(2316.6666667) == 2316.67

    def test_exact_value(self):
        assert round_currency(145.0) == 145.0


class TestMonthly:
    def test_divides_by_twelve(self):
        assert monthly(600_000) == 50_000


class TestSanitizeCity:
    def test_plain_city(self):
        assert sanitize_city("Mumbai") == "Mumbai"

    def test_whitespace_stripped(self):
        assert sanitize_city("  Pune  ") == "Pune"

    def test_markup_removed(self):
        assert sanitize_city("<b>Pune</b>") == "Pune"

    def test_digits_and_symbols_removed(self):
        assert sanitize_city("Delhi123;--") == "Delhi--"

    def test_empty(self):
        assert sanitize_city(None) == ""
        assert sanitize_city("") == ""

    def test_truncated(self):
        assert len(sanitize_city("A" * 150)) == 100


class TestSanitizeCompany:
    def test_keeps_ampersand_and_digits(self):
        assert sanitize_company("Tata Consultancy Services & Co. 2") == "Tata Consultancy Services & Co. 2"

    def test_drops_quotes_and_semicolons(self):
        assert sanitize_company('Acme"; DROP') == "Acme DROP"

    def test_truncated(self):
        assert len(sanitize_company("x" * 300)) == 200


class TestRoundHalfUp:
    def test_ties_round_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(0.5) == 1

    def test_below_tie(self):
        assert round_half_up(12.49) == 12

    def test_integer_unchanged(self):
        assert round_half_up(40.0) == 40
