"""Tests for numeric normalization."""

import math

import pytest


class TestNormalizePrice:
    """Test normalize_price with explicit separators."""

    def test_us_format(self):
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("$1,234.56", ",", r"\.") == 1234.56
        assert normalize_price("$100.00", ",", r"\.") == 100.0

    def test_european_format(self):
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("1.234,56 €", r"\.", ",") == 1234.56
        assert normalize_price("€1.234.567,89", r"\.", ",") == 1234567.89

    def test_space_thousands(self):
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("1 234,56", r"\s", ",") == 1234.56

    def test_whole_amount_is_int(self):
        from timeismoney.extractors.normalize import normalize_price

        result = normalize_price("$100")
        assert result == 100
        assert isinstance(result, int)

    def test_out_of_range_is_nan(self):
        from timeismoney.extractors.normalize import normalize_price

        assert math.isnan(normalize_price("$" + ",".join(["999"] * 150)))
        assert math.isnan(normalize_price("9" * 400 + ".50"))

    def test_long_fraction_keeps_precision(self):
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("1" * 30 + ".005") == float("1" * 30 + ".01")

    def test_multiple_decimal_points_merge(self):
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("123.45.67") == 123.46

    def test_signs_are_dropped(self):
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("-$100.00") == 100.0
        assert normalize_price("$-100.00") == 100.0

    def test_no_digits(self):
        from timeismoney.extractors.normalize import normalize_price

        assert math.isnan(normalize_price(""))
        assert math.isnan(normalize_price("abc"))
        assert math.isnan(normalize_price(None))

    def test_compiled_patterns(self):
        import re
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("1.234,56", re.compile(r"\."), re.compile(",")) == 1234.56

    def test_rounds_half_up(self):
        from timeismoney.extractors.normalize import normalize_price

        assert normalize_price("0.125") == 0.13
        assert normalize_price("2.675") == 2.68


class TestNormalizeAmount:
    """Test format auto-detection."""

    def test_detect_format(self):
        from timeismoney.extractors.normalize import detect_price_format

        assert detect_price_format("1.234,56") == "european"
        assert detect_price_format("1.234") == "european"
        assert detect_price_format("1 234") == "french"
        assert detect_price_format("1,234.56") == "us"

    @pytest.mark.parametrize("raw,expected", [
        ("1,234.56", 1234.56),
        ("1.234,56", 1234.56),
        ("1 234,56", 1234.56),
        ("89,99", 89.99),
        ("19.99", 19.99),
        ("100", 100.0),
    ])
    def test_auto(self, raw, expected):
        from timeismoney.extractors.normalize import normalize_amount

        assert normalize_amount(raw) == expected

    def test_invalid(self):
        from timeismoney.extractors.normalize import normalize_amount

        assert normalize_amount("") is None
        assert normalize_amount(None) is None
        assert normalize_amount("abc") is None

    def test_amount_string_settings(self):
        from timeismoney.extractors.normalize import normalize_amount_string

        assert normalize_amount_string("1,234.56") == "1234.56"
        assert normalize_amount_string("1.234,56", "spacesAndDots", "comma") == "1234.56"
        assert normalize_amount_string("1 234,56", "spacesAndDots", "comma") == "1234.56"


class TestParseLeadingFloat:
    """Test wage amount parsing."""

    def test_numbers(self):
        from timeismoney.extractors.normalize import parse_leading_float

        assert parse_leading_float("20") == 20.0
        assert parse_leading_float(" 20.5 per hour") == 20.5
        assert parse_leading_float("41600") == 41600.0
        assert parse_leading_float("-15") == -15.0
        assert parse_leading_float(25) == 25.0

    def test_not_numbers(self):
        from timeismoney.extractors.normalize import parse_leading_float

        assert math.isnan(parse_leading_float("abc"))
        assert math.isnan(parse_leading_float(None))
        assert math.isnan(parse_leading_float(True))
        assert math.isnan(parse_leading_float(10 ** 400))
        assert math.isnan(parse_leading_float(""))
