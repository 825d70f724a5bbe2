"""Tests for the top-level price annotation."""

import re

import pytest

FORMATTERS = {"thousands": re.compile(","), "decimal": re.compile(r"\.")}
EUROPEAN = {"thousands": re.compile(r"\."), "decimal": re.compile(",")}
WAGE = {"amount": "20", "frequency": "hourly"}


class TestConvertPriceToTimeString:
    """Test annotation of price strings."""

    def test_basic(self):
        from timeismoney.converter import convert_price_to_time_string

        assert convert_price_to_time_string("$100.00", FORMATTERS, WAGE) == "$100.00 (5h 0m)"
        assert convert_price_to_time_string("$30.00", FORMATTERS, WAGE) == "$30.00 (1h 30m)"

    def test_verbose(self):
        from timeismoney.converter import convert_price_to_time_string

        result = convert_price_to_time_string("$30.00", FORMATTERS, WAGE, use_compact_format=False)
        assert result == "$30.00 (1 hour, 30 minutes)"

    def test_yearly_wage(self):
        from timeismoney.converter import convert_price_to_time_string

        wage = {"amount": "41600", "frequency": "yearly"}
        assert convert_price_to_time_string("$100.00", FORMATTERS, wage) == "$100.00 (5h 0m)"

    def test_european_separators(self):
        from timeismoney.converter import convert_price_to_time_string

        result = convert_price_to_time_string("$1.234.567,89", EUROPEAN, WAGE)
        assert result == "$1.234.567,89 (61728h 24m)"

    def test_culture_string(self):
        from timeismoney.converter import convert_price_to_time_string

        assert convert_price_to_time_string("1.234,56 €", "de-DE", WAGE) == "1.234,56 € (61h 44m)"

    def test_formatters_object(self):
        from timeismoney.converter import convert_price_to_time_string
        from timeismoney.models import Formatters

        assert convert_price_to_time_string("$100.00", Formatters(), WAGE) == "$100.00 (5h 0m)"

    def test_wage_config_object(self):
        from timeismoney.converter import convert_price_to_time_string
        from timeismoney.models import WageConfig

        assert convert_price_to_time_string("$100.00", FORMATTERS, WageConfig("20")) == "$100.00 (5h 0m)"

    def test_annotation_follows_price(self):
        from timeismoney.converter import convert_price_to_time_string

        assert convert_price_to_time_string("SALE: $19.99!", FORMATTERS, WAGE) == "SALE: $19.99 (1h 0m)!"
        assert convert_price_to_time_string("Total $40.00 today", FORMATTERS, WAGE) == "Total $40.00 (2h 0m) today"

    def test_first_price_only(self):
        from timeismoney.converter import convert_price_to_time_string

        result = convert_price_to_time_string("From $19.99 to $29.99", FORMATTERS, WAGE)
        assert result == "From $19.99 (1h 0m) to $29.99"

    @pytest.mark.parametrize("formatters", [
        {"decimal": re.compile(r"\.")},
        {"thousands": re.compile(",")},
        {"thousands": None, "decimal": None},
        {},
    ])
    def test_malformed_formatters_use_defaults(self, formatters):
        from timeismoney.converter import convert_price_to_time_string

        assert convert_price_to_time_string("$100.00", formatters, WAGE) == "$100.00 (5h 0m)"


class TestUnchanged:
    """Inputs that must come back exactly as given."""

    @pytest.mark.parametrize("price_string", [None, "", "   ", "$", "€", "not a price", "Room 101"])
    def test_no_price(self, price_string):
        from timeismoney.converter import convert_price_to_time_string

        assert convert_price_to_time_string(price_string, FORMATTERS, WAGE) == price_string

    def test_no_formatters(self):
        from timeismoney.converter import convert_price_to_time_string

        assert convert_price_to_time_string("$100.00", None, WAGE) == "$100.00"

    @pytest.mark.parametrize("wage", [
        None,
        {},
        {"frequency": "hourly"},
        {"amount": None, "frequency": "hourly"},
        {"amount": "0", "frequency": "hourly"},
        {"amount": 0, "frequency": "yearly"},
        {"amount": "abc", "frequency": "hourly"},
        {"amount": "-20", "frequency": "hourly"},
        42,
        "20",
    ])
    @pytest.mark.parametrize("price_string", ["$100.00", "SALE: $19.99!", "€5", "1.234,56 €"])
    def test_malformed_wage(self, wage, price_string):
        from timeismoney.converter import convert_price_to_time_string

        assert convert_price_to_time_string(price_string, FORMATTERS, wage) == price_string

    def test_already_annotated(self):
        from timeismoney.converter import convert_price_to_time_string

        annotated = "$100.00 (5h 0m)"
        assert convert_price_to_time_string(annotated, FORMATTERS, WAGE) == annotated

    def test_idempotent(self):
        from timeismoney.converter import convert_price_to_time_string

        once = convert_price_to_time_string("SALE: $19.99!", FORMATTERS, WAGE)
        twice = convert_price_to_time_string(once, FORMATTERS, WAGE)
        assert twice == once

    def test_repeatable(self):
        from timeismoney.converter import convert_price_to_time_string

        first = convert_price_to_time_string("$1,234.56", FORMATTERS, WAGE)
        second = convert_price_to_time_string("$1,234.56", FORMATTERS, WAGE)
        assert first == second == "$1,234.56 (61h 44m)"

    def test_internal_error_returns_input(self, monkeypatch):
        from timeismoney import converter

        def boom(*args, **kwargs):
            raise RuntimeError("pattern failure")

        monkeypatch.setattr(converter, "first_price_span", boom)
        assert converter.convert_price_to_time_string("$100.00", FORMATTERS, WAGE) == "$100.00"


class TestConvertPrice:
    """Test the result-returning form."""

    def test_converted(self):
        from timeismoney.converter import convert_price, ConversionStatus
        from timeismoney.models import TimeDuration

        result = convert_price("$100.00", FORMATTERS, WAGE)
        assert result.status is ConversionStatus.CONVERTED
        assert result.converted is True
        assert result.text == "$100.00 (5h 0m)"
        assert result.matched == "$100.00"
        assert result.duration == TimeDuration(5, 0)

    def test_unchanged(self):
        from timeismoney.converter import convert_price, ConversionStatus

        result = convert_price("not a price", FORMATTERS, WAGE)
        assert result.status is ConversionStatus.UNCHANGED
        assert result.text == "not a price"
        assert result.duration is None

    def test_malformed(self):
        from timeismoney.converter import convert_price, ConversionStatus

        result = convert_price("$100.00", FORMATTERS, {"amount": "abc"})
        assert result.status is ConversionStatus.MALFORMED
        assert result.text == "$100.00"

    def test_bad_wage_type(self):
        from timeismoney.converter import convert_price, ConversionStatus

        result = convert_price("$100.00", FORMATTERS, ["20"])
        assert result.status is ConversionStatus.MALFORMED

    def test_invalid_separator_pattern(self):
        from timeismoney.converter import convert_price, ConversionStatus

        result = convert_price("$100.00", {"thousands": "[", "decimal": r"\."}, WAGE)
        assert result.status is ConversionStatus.MALFORMED
        assert result.text == "$100.00"
        assert "separator" in result.reason

    def test_out_of_range_amount(self):
        from timeismoney.converter import convert_price, convert_price_to_time_string

        huge = "$" + ",".join(["999"] * 150)
        result = convert_price(huge, {}, WAGE)
        assert result.converted is False
        assert result.text == huge
        assert convert_price_to_time_string(huge, FORMATTERS, WAGE) == huge

    def test_compact_format_defaults_to_config(self, monkeypatch):
        from timeismoney.config import config
        from timeismoney.converter import convert_price

        monkeypatch.setattr(config, "compact_format", False)
        assert convert_price("$30.00", FORMATTERS, WAGE).text == "$30.00 (1 hour, 30 minutes)"
        assert convert_price("$30.00", FORMATTERS, WAGE, use_compact_format=True).text == "$30.00 (1h 30m)"
