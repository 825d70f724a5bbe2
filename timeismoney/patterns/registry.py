"""
Price Pattern Registry

Fixed library of named price patterns. Every pattern belongs to one
PatternKind and the PATTERNS table maps each kind to its patterns, so
the set of matchers is known at import time.

Usage:
    from timeismoney.patterns import match_text, get_pattern

    matches = match_text("From $19.99 to $29.99")
    pattern = get_pattern("price.currency_before")
    pattern.match("$100.00")
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from ..extractors.normalize import normalize_amount, normalize_price
from ..models import Formatters, MatchSource, PriceMatch

logger = logging.getLogger(__name__)


SYMBOL = r"US\$|[$€£¥₹₽]"
CODE = r"USD|EUR|GBP|JPY|INR|RUB|CAD|AUD|CHF"
AMOUNT = r"\d{1,3}(?:[,.]\d{3})+(?:[.,]\d{1,2})?|\d+(?:[.,]\d{1,2})?"


class PatternKind(str, Enum):
    CURRENCY_BEFORE = "currency-before"
    CURRENCY_AFTER = "currency-after"
    CURRENCY_CODE = "currency-code"
    THOUSANDS = "thousands"
    SPACED = "spaced"
    CONTEXTUAL = "contextual"


@dataclass
class PricePattern:
    """A named regex that turns text into price candidates."""

    name: str
    kind: PatternKind
    pattern: str
    confidence: float
    source: MatchSource = MatchSource.TEXT_PATTERN
    description: str = ""
    examples: List[Dict[str, str]] = field(default_factory=list)
    flags: int = 0
    thousands: Optional[str] = None
    decimal: Optional[str] = None

    _compiled: Optional[Pattern] = field(default=None, repr=False)

    def __post_init__(self):
        self._compile()

    def _compile(self):
        """Compile the pattern."""
        try:
            self._compiled = re.compile(self.pattern, self.flags)
        except re.error as e:
            logger.error(f"Invalid pattern '{self.name}': {e}")
            self._compiled = None

    def _value(self, amount: str, formatters: Optional[Formatters]) -> Optional[float]:
        if self.thousands or self.decimal:
            value = normalize_price(amount, self.thousands, self.decimal)
        elif formatters is not None:
            value = normalize_price(amount, formatters.thousands, formatters.decimal)
        else:
            value = normalize_amount(amount)
        if value is None:
            return None
        try:
            return float(value)
        except (OverflowError, ValueError):
            logger.debug(f"Amount out of range in '{self.name}': {amount[:20]}...")
            return None

    def match(self, text: str, formatters: Optional[Formatters] = None) -> List[PriceMatch]:
        """Find every occurrence of this pattern in text."""
        if not self._compiled or not text or not isinstance(text, str):
            return []

        matches = []
        for m in self._compiled.finditer(text):
            price = PriceMatch.create(
                value=self._value(m.group("amount"), formatters),
                currency=m.group("currency"),
                original_text=m.group(0),
                confidence=self.confidence,
                source=self.source,
                pattern=self.name,
                start=m.start(),
                end=m.end(),
            )
            if price is not None:
                matches.append(price)
        return matches

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "pattern": self.pattern,
            "confidence": self.confidence,
            "source": self.source.value,
            "description": self.description,
            "examples": self.examples,
        }


def _p(name: str, kind: PatternKind, pattern: str, confidence: float, **kwargs) -> PricePattern:
    return PricePattern(name=name, kind=kind, pattern=pattern, confidence=confidence, **kwargs)


PATTERNS: Dict[PatternKind, Tuple[PricePattern, ...]] = {
    PatternKind.CURRENCY_BEFORE: (
        _p(
            "price.currency_before",
            PatternKind.CURRENCY_BEFORE,
            rf"(?P<currency>{SYMBOL})-?(?P<amount>{AMOUNT})(?!\d)",
            0.9,
            description="Currency symbol directly before the amount",
            examples=[{"input": "$100.00", "expected": "100.00"}, {"input": "€89,99", "expected": "89.99"}],
        ),
    ),
    PatternKind.CURRENCY_AFTER: (
        _p(
            "price.currency_after",
            PatternKind.CURRENCY_AFTER,
            rf"(?<![\d.,])(?P<amount>{AMOUNT})(?P<currency>{SYMBOL})",
            0.85,
            description="Currency symbol directly after the amount",
            examples=[{"input": "596.62€", "expected": "596.62"}],
        ),
    ),
    PatternKind.CURRENCY_CODE: (
        _p(
            "price.code_before",
            PatternKind.CURRENCY_CODE,
            rf"\b(?P<currency>{CODE})\s?(?P<amount>{AMOUNT})(?!\d)",
            0.85,
            description="ISO currency code before the amount",
            examples=[{"input": "USD 100.00", "expected": "100.00"}],
        ),
        _p(
            "price.code_after",
            PatternKind.CURRENCY_CODE,
            rf"(?<![\d.,])(?P<amount>{AMOUNT})\s?(?P<currency>{CODE})\b",
            0.85,
            description="ISO currency code after the amount",
            examples=[{"input": "25.50 EUR", "expected": "25.50"}],
        ),
    ),
    PatternKind.THOUSANDS: (
        _p(
            "price.comma_thousands",
            PatternKind.THOUSANDS,
            rf"(?P<currency>{SYMBOL})\s?(?P<amount>\d{{1,3}}(?:,\d{{3}})+(?:\.\d{{1,2}})?)(?![\d,])",
            0.9,
            thousands=r",",
            decimal=r"\.",
            description="Comma thousands separators ($2,500,000)",
            examples=[{"input": "$2,500,000", "expected": "2500000"}],
        ),
        _p(
            "price.dot_thousands",
            PatternKind.THOUSANDS,
            rf"(?P<currency>{SYMBOL})\s?(?P<amount>\d{{1,3}}(?:\.\d{{3}})+(?:,\d{{1,2}})?)(?![\d.])",
            0.85,
            thousands=r"\.",
            decimal=r",",
            description="Dot thousands separators (€1.234.567)",
            examples=[{"input": "€1.234.567", "expected": "1234567"}],
        ),
        _p(
            "price.dot_thousands_suffix",
            PatternKind.THOUSANDS,
            rf"(?<![\d.,])(?P<amount>\d{{1,3}}(?:\.\d{{3}})+(?:,\d{{1,2}})?)\s?(?P<currency>{SYMBOL})",
            0.85,
            thousands=r"\.",
            decimal=r",",
            description="Dot thousands with trailing symbol (1.234,56 €)",
            examples=[{"input": "1.234,56 €", "expected": "1234.56"}],
        ),
        _p(
            "price.space_thousands",
            PatternKind.THOUSANDS,
            rf"(?P<currency>{SYMBOL})\s?(?P<amount>\d{{1,3}}(?:[ \u00a0\u202f]\d{{3}})+(?:,\d{{1,2}})?)(?!\d)",
            0.8,
            thousands=r"\s",
            decimal=r",",
            description="Space thousands separators (£1 234 567)",
            examples=[{"input": "£1 234 567", "expected": "1234567"}],
        ),
        _p(
            "price.space_thousands_suffix",
            PatternKind.THOUSANDS,
            rf"(?<![\d.,])(?P<amount>\d{{1,3}}(?:[ \u00a0\u202f]\d{{3}})+(?:,\d{{1,2}})?)\s?(?P<currency>{SYMBOL})",
            0.8,
            thousands=r"\s",
            decimal=r",",
            description="Space thousands with trailing symbol (1 234,56 €)",
            examples=[{"input": "1 234,56 €", "expected": "1234.56"}],
        ),
    ),
    PatternKind.SPACED: (
        _p(
            "price.space_before_currency",
            PatternKind.SPACED,
            rf"(?<![\d.,])(?P<amount>{AMOUNT})\s+(?P<currency>{SYMBOL})",
            0.85,
            description="Amount, space, currency symbol (272.46 €)",
            examples=[{"input": "272.46 €", "expected": "272.46"}],
        ),
        _p(
            "price.space_after_currency",
            PatternKind.SPACED,
            rf"(?P<currency>{SYMBOL})\s+(?P<amount>{AMOUNT})(?!\d)",
            0.85,
            description="Currency symbol, space, amount (€ 14,32)",
            examples=[{"input": "€ 14,32", "expected": "14.32"}],
        ),
    ),
    PatternKind.CONTEXTUAL: (
        _p(
            "price.contextual",
            PatternKind.CONTEXTUAL,
            rf"\b(?P<context>from|under|starting\s+at|as\s+low\s+as)\s+(?P<currency>{SYMBOL})\s?(?P<amount>{AMOUNT})(?!\d)",
            0.7,
            source=MatchSource.CONTEXTUAL,
            flags=re.IGNORECASE,
            description="Price qualified by a phrase (Under $20, from €2.99)",
            examples=[{"input": "Under $20", "expected": "20"}, {"input": "Starting at $5.99", "expected": "5.99"}],
        ),
    ),
}

_BY_NAME: Dict[str, PricePattern] = {
    pattern.name: pattern for patterns in PATTERNS.values() for pattern in patterns
}


def get_pattern(name: str) -> Optional[PricePattern]:
    """Get a pattern by name."""
    return _BY_NAME.get(name)


def list_patterns(kind: PatternKind = None) -> List[PricePattern]:
    """List patterns, optionally filtered by kind."""
    if kind is not None:
        return list(PATTERNS.get(kind, ()))
    return [p for patterns in PATTERNS.values() for p in patterns]


def match_text(
    text: str,
    kinds: Iterable[PatternKind] = None,
    formatters: Optional[Formatters] = None,
) -> List[PriceMatch]:
    """
    Run the pattern library over text.

    Args:
        text: Text to scan
        kinds: Restrict to these pattern kinds (all by default)
        formatters: Separator rules for patterns without fixed separators

    Returns:
        Matches ordered by position, strongest first at the same position
    """
    if not text or not isinstance(text, str):
        return []

    selected = list(kinds) if kinds is not None else list(PatternKind)
    matches: List[PriceMatch] = []
    for kind in selected:
        for pattern in PATTERNS.get(kind, ()):
            matches.extend(pattern.match(text, formatters))

    matches.sort(key=lambda m: (m.start if m.start is not None else 0, -m.confidence))
    if not matches:
        logger.debug(f"No price pattern matched: {text[:50]!r}")
    return matches


def first_price_span(text: str, formatters: Optional[Formatters] = None) -> Optional[PriceMatch]:
    """
    The earliest price in text, widest match first.

    Used by the converter to decide where the annotation goes.
    """
    matches = match_text(text, formatters=formatters)
    if not matches:
        return None
    return min(matches, key=lambda m: (m.start, -(m.end - m.start), -m.confidence))

