"""
Testes de leitura e formatação de valores pt-BR.
"""

import math

import pytest

from margem_real.utils.formatting import (
    format_brl,
    format_currency,
    format_input_value,
    format_percentage,
    format_percentage_direct,
    normalize_number,
    to_finite,
)


class TestNormalizeNumber:
    """Texto digitado em pt-BR -> float."""

    def test_thousands_and_decimal_comma(self):
        assert normalize_number("1.234,56") == pytest.approx(1234.56)

    def test_multiple_thousand_separators(self):
        assert normalize_number("100.000,00") == 100000

    def test_currency_symbol_is_stripped(self):
        assert normalize_number("R$ 2.500,00") == 2500

    def test_empty_and_none_are_zero(self):
        assert normalize_number("") == 0
        assert normalize_number(None) == 0

    def test_numbers_pass_through(self):
        assert normalize_number(42.5) == 42.5
        assert normalize_number(7) == 7

    def test_bare_minus_is_zero(self):
        assert normalize_number("-") == 0

    def test_malformed_fragments_are_zero(self):
        assert normalize_number("abc") == 0
        assert normalize_number(",") == 0
        assert normalize_number("--5") == 0

    def test_negative_value(self):
        assert normalize_number("-1.500,25") == pytest.approx(-1500.25)

    def test_plain_integer_text(self):
        assert normalize_number("5000") == 5000

    @pytest.mark.parametrize(
        "text",
        ["1.234,56", "100.000,00", "R$ 87,10", "12", "", "0,00005", "10.000.000.000.000.000,00"],
    )
    def test_idempotent_on_own_output(self, text):
        once = normalize_number(text)
        assert normalize_number(str(once)) == pytest.approx(once)

    @pytest.mark.parametrize("text,expected", [("5e-05", 5e-05), ("1e+16", 1e16), ("-2.5E3", -2500.0)])
    def test_exponent_notation(self, text, expected):
        assert normalize_number(text) == expected

    def test_exponent_overflow_is_zero(self):
        assert normalize_number("1e999") == 0


class TestToFinite:

    def test_nan_and_inf_become_zero(self):
        assert to_finite(math.nan) == 0
        assert to_finite(math.inf) == 0

    def test_garbage_becomes_zero(self):
        assert to_finite("abc") == 0
        assert to_finite(None) == 0


class TestFormatCurrency:

    def test_grouping_and_decimal_comma(self):
        assert format_brl(1234.56) == "R$ 1.234,56"

    def test_large_value(self):
        assert format_brl(150000.5) == "R$ 150.000,50"

    def test_negative_value(self):
        assert format_brl(-21000) == "-R$ 21.000,00"

    def test_none_and_non_finite_are_zero(self):
        assert format_brl(None) == "R$ 0,00"
        assert format_brl(math.nan) == "R$ 0,00"

    def test_tiny_negative_does_not_render_negative_zero(self):
        assert format_brl(-0.001) == "R$ 0,00"

    def test_alias(self):
        assert format_currency is format_brl


class TestFormatPercentage:

    def test_input_in_hundred_units(self):
        assert format_percentage(78.125) == "78,13%"

    def test_zero(self):
        assert format_percentage(0) == "0,00%"

    def test_none_is_zero(self):
        assert format_percentage(None) == "0,00%"

    def test_direct_variant_uses_same_units(self):
        assert format_percentage_direct(5.0) == "5,00%"
        assert format_percentage_direct(21.875) == "21,88%"


class TestFormatInputValue:

    def test_zero_is_blank(self):
        assert format_input_value(0) == ""

    def test_strips_symbol(self):
        assert format_input_value(1234.5) == "1.234,50"

    def test_round_trips_through_normalizer(self):
        assert normalize_number(format_input_value(100000)) == 100000
