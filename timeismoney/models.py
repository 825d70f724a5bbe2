"""
Data Model

Value objects shared by the pattern library, the DOM analyzer,
the candidate selector and the converter. All of them are immutable
and live for a single scan-and-annotate call.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Pattern, Union


class MatchSource(str, Enum):
    """Where a price candidate came from."""

    TEXT_PATTERN = "text-pattern"
    DOM_ATTRIBUTE = "dom-attribute"
    DOM_STRUCTURE = "dom-structure"
    CONTEXTUAL = "contextual"


# Lower number wins ties in the candidate selector
SOURCE_PRIORITY: Dict[MatchSource, int] = {
    MatchSource.DOM_ATTRIBUTE: 0,
    MatchSource.DOM_STRUCTURE: 1,
    MatchSource.TEXT_PATTERN: 2,
    MatchSource.CONTEXTUAL: 3,
}


CURRENCY_CODES: Dict[str, str] = {
    "US$": "USD",
    "$": "USD",
    "¢": "USD",
    "€": "EUR",
    "£": "GBP",
    "¥": "JPY",
    "₹": "INR",
    "₽": "RUB",
    "USD": "USD",
    "EUR": "EUR",
    "GBP": "GBP",
    "JPY": "JPY",
    "CNY": "JPY",
    "INR": "INR",
    "RUB": "RUB",
    "CAD": "CAD",
    "AUD": "AUD",
    "CHF": "CHF",
}


@dataclass(frozen=True)
class PriceMatch:
    """One candidate price found in page content."""

    value: float
    currency: str
    original_text: str
    confidence: float
    source: MatchSource = MatchSource.TEXT_PATTERN
    pattern: str = ""
    start: Optional[int] = None
    end: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence out of range: {self.confidence}")
        if not isinstance(self.value, (int, float)) or not math.isfinite(self.value):
            raise ValueError(f"price value is not finite: {self.value!r}")
        if self.value < 0:
            raise ValueError(f"price value is negative: {self.value}")

    @classmethod
    def create(cls, **kwargs) -> Optional["PriceMatch"]:
        """Build a match, returning None for invalid candidates."""
        try:
            return cls(**kwargs)
        except (TypeError, ValueError, OverflowError):
            return None

    @property
    def currency_code(self) -> Optional[str]:
        key = self.currency.strip()
        return CURRENCY_CODES.get(key) or CURRENCY_CODES.get(key.upper())

    def with_confidence(self, confidence: float, source: MatchSource = None) -> Optional["PriceMatch"]:
        """Copy of this match re-tagged by a different strategy."""
        return PriceMatch.create(
            value=self.value,
            currency=self.currency,
            original_text=self.original_text,
            confidence=confidence,
            source=source or self.source,
            pattern=self.pattern,
            start=self.start,
            end=self.end,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "currency": self.currency,
            "currency_code": self.currency_code,
            "original_text": self.original_text,
            "confidence": self.confidence,
            "source": self.source.value,
            "pattern": self.pattern,
        }


class Frequency(str, Enum):
    HOURLY = "hourly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Any) -> "Frequency":
        """Unknown or missing frequencies mean hourly."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.HOURLY


@dataclass(frozen=True)
class WageConfig:
    """User wage settings, as entered in the options page."""

    amount: Optional[str]
    frequency: Frequency = Frequency.HOURLY
    currency_code: str = "USD"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WageConfig":
        amount = data.get("amount")
        currency = data.get("currencyCode") or data.get("currency_code") or "USD"
        return cls(
            amount=None if amount is None else str(amount),
            frequency=Frequency.parse(data.get("frequency")),
            currency_code=str(currency).upper(),
        )

    @classmethod
    def coerce(cls, value: Union["WageConfig", Mapping[str, Any]]) -> "WageConfig":
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls.from_mapping(value)
        raise TypeError(f"unsupported wage info: {type(value).__name__}")

    @property
    def hourly_rate(self) -> float:
        from .converter import calculate_hourly_wage
        return calculate_hourly_wage(self.frequency, self.amount)

    @property
    def is_usable(self) -> bool:
        rate = self.hourly_rate
        return math.isfinite(rate) and rate > 0


@dataclass(frozen=True)
class TimeDuration:
    """Work time equivalent of a price."""

    hours: Union[int, float]
    minutes: Union[int, float]

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.hours) and math.isfinite(self.minutes)

    @property
    def total_minutes(self) -> float:
        return self.hours * 60 + self.minutes


DEFAULT_THOUSANDS = re.compile(r",")
DEFAULT_DECIMAL = re.compile(r"\.")

# thousands, decimal
CULTURE_SEPARATORS: Dict[str, tuple] = {
    "en": (r",", r"\."),
    "ja": (r",", r"\."),
    "zh": (r",", r"\."),
    "de": (r"\.", r","),
    "es": (r"\.", r","),
    "it": (r"\.", r","),
    "nl": (r"\.", r","),
    "pt": (r"\.", r","),
    "fr": (r"\s", r","),
    "pl": (r"\s", r","),
    "ru": (r"\s", r","),
}

SETTINGS_THOUSANDS: Dict[str, str] = {
    "commas": r",",
    "spacesAndDots": r"[\s.]",
}

SETTINGS_DECIMAL: Dict[str, str] = {
    "dot": r"\.",
    "comma": r",",
}


def _compile(value: Any, default: Pattern) -> Pattern:
    if isinstance(value, re.Pattern):
        return value
    if isinstance(value, str) and value:
        return re.compile(value)
    return default


@dataclass(frozen=True)
class Formatters:
    """Thousands and decimal separator rules for numeric normalization."""

    thousands: Pattern = field(default=DEFAULT_THOUSANDS)
    decimal: Pattern = field(default=DEFAULT_DECIMAL)

    @classmethod
    def for_culture(cls, culture: str) -> "Formatters":
        language = (culture or "en").replace("_", "-").split("-")[0].lower()
        thousands, decimal = CULTURE_SEPARATORS.get(language, CULTURE_SEPARATORS["en"])
        return cls(re.compile(thousands), re.compile(decimal))

    @classmethod
    def from_settings(cls, thousands: str = "commas", decimal: str = "dot") -> "Formatters":
        return cls(
            _compile(SETTINGS_THOUSANDS.get(thousands), DEFAULT_THOUSANDS),
            _compile(SETTINGS_DECIMAL.get(decimal), DEFAULT_DECIMAL),
        )

    @classmethod
    def coerce(cls, value: Any) -> "Formatters":
        """
        Accept a Formatters, a mapping of regexes or a culture string.

        Missing or malformed separators fall back to the defaults.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.for_culture(value)
        if isinstance(value, Mapping):
            return cls(
                _compile(value.get("thousands"), DEFAULT_THOUSANDS),
                _compile(value.get("decimal"), DEFAULT_DECIMAL),
            )
        return cls()
