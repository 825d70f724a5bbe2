"""Tests for the price pattern library."""

import pytest


class TestPatternTable:
    """Test the static pattern table."""

    def test_every_kind_has_patterns(self):
        from timeismoney.patterns import PATTERNS, PatternKind

        assert set(PATTERNS) == set(PatternKind)
        assert all(PATTERNS[kind] for kind in PatternKind)

    def test_get_pattern(self):
        from timeismoney.patterns import get_pattern, PatternKind

        pattern = get_pattern("price.currency_before")
        assert pattern is not None
        assert pattern.kind is PatternKind.CURRENCY_BEFORE
        assert pattern.confidence == 0.9
        assert get_pattern("price.nope") is None

    def test_list_patterns(self):
        from timeismoney.patterns import list_patterns, PATTERNS, PatternKind

        assert len(list_patterns()) == sum(len(p) for p in PATTERNS.values())
        assert all(p.kind is PatternKind.THOUSANDS for p in list_patterns(PatternKind.THOUSANDS))

    def test_confidences_in_range(self):
        from timeismoney.patterns import list_patterns

        for pattern in list_patterns():
            assert 0.0 <= pattern.confidence <= 1.0

    def test_examples_match(self):
        from timeismoney.patterns import list_patterns

        for pattern in list_patterns():
            for example in pattern.examples:
                matches = pattern.match(example["input"])
                assert matches, f"{pattern.name} did not match {example['input']!r}"
                assert matches[0].value == float(example["expected"]), pattern.name

    def test_to_dict(self):
        from timeismoney.patterns import get_pattern

        data = get_pattern("price.contextual").to_dict()
        assert data["kind"] == "contextual"
        assert data["source"] == "contextual"


class TestMatchText:
    """Test running the whole library over text."""

    def test_empty_input(self):
        from timeismoney.patterns import match_text

        assert match_text("") == []
        assert match_text(None) == []
        assert match_text(123) == []

    def test_no_price(self):
        from timeismoney.patterns import match_text

        assert match_text("not a price") == []
        assert match_text("Room 101") == []

    def test_currency_before(self):
        from timeismoney.patterns import match_text
        from timeismoney.models import MatchSource

        matches = match_text("$100.00")
        assert matches[0].value == 100.0
        assert matches[0].currency == "$"
        assert matches[0].confidence == 0.9
        assert matches[0].source is MatchSource.TEXT_PATTERN
        assert matches[0].original_text == "$100.00"

    def test_currency_after(self):
        from timeismoney.patterns import match_text

        matches = match_text("596.62€")
        assert matches[0].value == 596.62
        assert matches[0].currency == "€"
        assert matches[0].confidence == 0.85

    def test_currency_codes(self):
        from timeismoney.patterns import match_text

        before = match_text("USD 100.00")
        assert before[0].value == 100.0
        assert before[0].currency_code == "USD"

        after = match_text("25.50 EUR")
        assert after[0].value == 25.5
        assert after[0].currency_code == "EUR"

    def test_comma_thousands(self):
        from timeismoney.patterns import match_text

        matches = match_text("$2,500,000")
        assert any(m.pattern == "price.comma_thousands" and m.value == 2500000 for m in matches)

    def test_space_thousands(self):
        from timeismoney.patterns import match_text

        matches = match_text("£1 234 567")
        assert any(m.pattern == "price.space_thousands" and m.value == 1234567 for m in matches)

    def test_nbsp_thousands(self):
        from timeismoney.patterns import match_text

        matches = match_text("1\u00a0234,56 \u20ac")
        assert any(m.value == 1234.56 for m in matches)

    def test_contextual(self):
        from timeismoney.patterns import match_text
        from timeismoney.models import MatchSource

        matches = match_text("Under $20")
        contextual = [m for m in matches if m.source is MatchSource.CONTEXTUAL]
        assert len(contextual) == 1
        assert contextual[0].value == 20.0
        assert contextual[0].confidence == 0.7
        assert contextual[0].original_text == "Under $20"

    def test_multiple_prices(self):
        from timeismoney.patterns import match_text

        matches = [m for m in match_text("From $19.99 to $29.99") if m.pattern == "price.currency_before"]
        assert [m.value for m in matches] == [19.99, 29.99]

    def test_ordered_by_position(self):
        from timeismoney.patterns import match_text

        matches = match_text("€5 and $10")
        starts = [m.start for m in matches]
        assert starts == sorted(starts)

    def test_restrict_kinds(self):
        from timeismoney.patterns import match_text, PatternKind

        matches = match_text("Under $20", kinds=[PatternKind.CONTEXTUAL])
        assert [m.pattern for m in matches] == ["price.contextual"]


class TestFirstPriceSpan:
    """Test locating the price the converter annotates."""

    def test_first_price(self):
        from timeismoney.patterns import first_price_span

        match = first_price_span("SALE: $19.99!")
        assert match.original_text == "$19.99"
        assert match.end == 12

    def test_widest_at_earliest_start(self):
        from timeismoney.patterns import first_price_span

        assert first_price_span("From $19.99 to $29.99").original_text == "From $19.99"

    def test_none(self):
        from timeismoney.patterns import first_price_span

        assert first_price_span("nothing here") is None
        assert first_price_span("$") is None


class TestOutOfRangeAmounts:
    """Amounts too large for a float produce no matches instead of errors."""

    HUGE = "$" + ",".join(["999"] * 150)

    def test_match_text(self):
        from timeismoney.patterns import match_text

        assert match_text(self.HUGE) == []
        assert match_text("Was " + self.HUGE + ", now $5.00")[0].value == 5.0

    def test_first_price_span(self):
        from timeismoney.patterns import first_price_span

        assert first_price_span(self.HUGE) is None

    def test_pattern_match(self):
        from timeismoney.patterns import get_pattern

        assert get_pattern("price.comma_thousands").match(self.HUGE) == []


class TestSplitComponents:
    """Test reconstruction of prices split across elements."""

    def test_cents_after_symbol(self):
        from timeismoney.patterns import match_split_components
        from timeismoney.models import MatchSource

        matches = match_split_components(["449€", "00"])
        assert len(matches) == 1
        assert matches[0].value == 449.0
        assert matches[0].currency == "€"
        assert matches[0].confidence == 0.95
        assert matches[0].source is MatchSource.DOM_STRUCTURE

    def test_multi_part(self):
        from timeismoney.patterns import match_split_components

        matches = match_split_components(["$", "25", ".99"])
        assert len(matches) == 1
        assert matches[0].value == 25.99
        assert matches[0].original_text == "$25.99"
        assert matches[0].confidence == 0.8

    def test_currency_code(self):
        from timeismoney.patterns import match_split_components

        matches = match_split_components(["USD", "100.00"])
        assert matches[0].value == 100.0
        assert matches[0].currency == "USD"
        assert matches[0].confidence == 0.85

    def test_amount_symbol_cents(self):
        from timeismoney.patterns import match_split_components

        matches = match_split_components(["449", "€", "00"])
        assert len(matches) == 1
        assert matches[0].value == 449.0
        assert matches[0].confidence == 0.9

    @pytest.mark.parametrize("parts", [
        [],
        ["$"],
        ["abc", "def"],
        "449€ 00",
        None,
    ])
    def test_no_match(self, parts):
        from timeismoney.patterns import match_split_components

        assert match_split_components(parts) == []
