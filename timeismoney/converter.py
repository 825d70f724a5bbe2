"""
Price to work-time conversion.

Wage math, time formatting and the top-level annotate-or-fallback call
used by the page scanner:

    convert_price_to_time_string("$100.00", {"thousands": ",", "decimal": r"\."},
                                 {"amount": "20", "frequency": "hourly"})
    # '$100.00 (5h 0m)'
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from .config import config
from .extractors.normalize import normalize_price, parse_leading_float
from .models import Formatters, Frequency, TimeDuration, WageConfig
from .patterns import first_price_span

logger = logging.getLogger(__name__)

WORK_HOURS_PER_YEAR = 2080

_COMPACT_ANNOTATION = re.compile(r"\s\(-?\d+h -?\d+m\)")
_VERBOSE_ANNOTATION = re.compile(
    r"\s\(-?\d+(?:\.\d+)? (?:hours?|minutes?)(?:, -?\d+(?:\.\d+)? minutes?)?\)"
)

Number = Union[int, float]


def calculate_hourly_wage(frequency: Any, amount: Any) -> float:
    """
    Hourly rate for a wage.

    Yearly amounts are spread over 2080 work hours. Missing or unknown
    frequencies mean hourly. Non-numeric amounts give NaN.
    """
    value = parse_leading_float(amount)
    if Frequency.parse(frequency) is Frequency.YEARLY:
        return value / WORK_HOURS_PER_YEAR
    return value


def convert_to_time(price: Number, hourly_rate: Number) -> TimeDuration:
    """
    Work time needed to earn price at hourly_rate.

    Hours are floored, minutes rounded half-up and a 60 carries into
    the hour, so (-30, 20) is -2h 30m. A zero rate gives infinite hours
    and NaN minutes; callers must not annotate non-finite durations.
    """
    try:
        price = float(price)
        hourly_rate = float(hourly_rate)
    except (TypeError, ValueError, OverflowError):
        return TimeDuration(math.nan, math.nan)

    if math.isnan(price) or math.isnan(hourly_rate):
        return TimeDuration(math.nan, math.nan)

    if hourly_rate == 0:
        if price == 0:
            return TimeDuration(math.nan, math.nan)
        return TimeDuration(math.copysign(math.inf, price) * math.copysign(1.0, hourly_rate), math.nan)

    total_hours = price / hourly_rate
    if not math.isfinite(total_hours):
        return TimeDuration(total_hours, math.nan)

    hours = math.floor(total_hours)
    minutes = math.floor((total_hours - hours) * 60 + 0.5)
    if minutes == 60:
        hours += 1
        minutes = 0

    return TimeDuration(hours, minutes)


def _number(value: Any) -> str:
    # 5.0 -> "5", nan -> "NaN"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def format_time_snippet(hours: Number, minutes: Number) -> str:
    """Verbose form: "2 hours, 30 minutes"; zero parts are left out."""
    hour_text = "hour" if hours in (1, -1) else "hours"
    minute_text = "minute" if minutes in (1, -1) else "minutes"

    if hours == 0:
        return f"{_number(minutes)} {minute_text}"
    if minutes == 0:
        return f"{_number(hours)} {hour_text}"
    return f"{_number(hours)} {hour_text}, {_number(minutes)} {minute_text}"


def format_time_compact(hours: Number, minutes: Number) -> str:
    return f"{_number(hours)}h {_number(minutes)}m"


def format_price_with_time(
    price_string: Optional[str],
    hours: Number,
    minutes: Number,
    use_compact_format: bool = True,
) -> str:
    """Append the time in parentheses: "$30.00 (1h 30m)"."""
    if use_compact_format:
        time_text = format_time_compact(hours, minutes)
    else:
        time_text = format_time_snippet(hours, minutes)
    price_text = "null" if price_string is None else str(price_string)
    return f"{price_text} ({time_text})"


def has_time_annotation(text: Optional[str]) -> bool:
    """True if text already carries a work-time annotation."""
    if not text or not isinstance(text, str):
        return False
    return bool(_COMPACT_ANNOTATION.search(text) or _VERBOSE_ANNOTATION.search(text))


class ConversionStatus(str, Enum):
    CONVERTED = "converted"
    UNCHANGED = "unchanged"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of convert_price. text is always safe to display."""

    status: ConversionStatus
    text: Optional[str]
    matched: Optional[str] = None
    duration: Optional[TimeDuration] = None
    reason: str = ""

    @property
    def converted(self) -> bool:
        return self.status is ConversionStatus.CONVERTED

    @classmethod
    def unchanged(cls, text, reason: str) -> "ConversionResult":
        return cls(ConversionStatus.UNCHANGED, text, reason=reason)

    @classmethod
    def malformed(cls, text, reason: str) -> "ConversionResult":
        return cls(ConversionStatus.MALFORMED, text, reason=reason)


def convert_price(
    price_string: Optional[str],
    formatters: Any,
    wage_info: Any,
    use_compact_format: Optional[bool] = None,
) -> ConversionResult:
    """
    Annotate the first price in price_string with its work time.

    Args:
        price_string: Text containing a price ("SALE: $19.99!")
        formatters: Formatters, a {"thousands", "decimal"} mapping or a culture string
        wage_info: WageConfig or a {"amount", "frequency"} mapping
        use_compact_format: "1h 30m" instead of "1 hour, 30 minutes";
            None uses config.compact_format

    Returns:
        ConversionResult; its text is the original string unless converted
    """
    if not price_string or not isinstance(price_string, str):
        return ConversionResult.unchanged(price_string, "empty input")
    if formatters is None:
        return ConversionResult.unchanged(price_string, "no formatters")
    if wage_info is None:
        return ConversionResult.unchanged(price_string, "no wage info")
    if has_time_annotation(price_string):
        return ConversionResult.unchanged(price_string, "already annotated")
    if use_compact_format is None:
        use_compact_format = config.compact_format

    try:
        wage = WageConfig.coerce(wage_info)
    except TypeError as e:
        return ConversionResult.malformed(price_string, str(e))

    hourly_rate = wage.hourly_rate
    if not math.isfinite(hourly_rate) or hourly_rate <= 0:
        logger.debug(f"Unusable wage {wage.amount!r} ({wage.frequency.value})")
        return ConversionResult.malformed(price_string, "unusable wage")

    try:
        separators = Formatters.coerce(formatters)
    except re.error as e:
        logger.debug(f"Invalid separator pattern: {e}")
        return ConversionResult.malformed(price_string, f"invalid separator pattern: {e}")

    match = first_price_span(price_string, separators)
    if match is None:
        logger.debug(f"No price in {price_string[:50]!r}")
        return ConversionResult.unchanged(price_string, "no price")

    price = normalize_price(match.original_text, separators.thousands, separators.decimal)
    try:
        usable = math.isfinite(price)
    except OverflowError:
        usable = False
    if not usable:
        return ConversionResult.malformed(price_string, "price did not normalize")

    duration = convert_to_time(price, hourly_rate)
    if not duration.is_finite:
        return ConversionResult.malformed(price_string, "non-finite duration")

    end = match.end if match.end is not None else len(price_string)
    annotated = format_price_with_time(price_string[:end], duration.hours, duration.minutes, use_compact_format)
    return ConversionResult(
        ConversionStatus.CONVERTED,
        annotated + price_string[end:],
        matched=match.original_text,
        duration=duration,
    )


def convert_price_to_time_string(
    price_string: Optional[str],
    formatters: Any,
    wage_info: Any,
    use_compact_format: Optional[bool] = None,
) -> Optional[str]:
    """
    Annotated price string, or price_string unchanged.

    Never raises: any failure returns the input as is.
    """
    try:
        return convert_price(price_string, formatters, wage_info, use_compact_format).text
    except Exception as e:
        logger.exception(f"Error converting price {price_string!r}: {e}")
        return price_string
