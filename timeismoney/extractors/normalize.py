"""
Numeric normalization for price strings.

Turns locale-formatted amounts ("1.234,56", "1 234,56", "1,234.56")
into plain numbers.
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional, Pattern, Union

from ..models import DEFAULT_DECIMAL, DEFAULT_THOUSANDS, SETTINGS_DECIMAL, SETTINGS_THOUSANDS

_THOUSANDS_MARK = "@"
_DECIMAL_MARK = "~"
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _as_pattern(value: Union[str, Pattern, None], default: Pattern) -> Pattern:
    if isinstance(value, re.Pattern):
        return value
    if isinstance(value, str) and value:
        return re.compile(value)
    return default


def parse_leading_float(value) -> float:
    """
    Parse the leading number of a value, NaN when there is none.

    "20" -> 20.0, " 20.5 per hour" -> 20.5, "abc" -> nan, None -> nan
    """
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.nan
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return math.nan
    try:
        return float(match.group(1))
    except ValueError:
        return math.nan


def normalize_price(
    price_string: str,
    thousands: Union[str, Pattern, None] = None,
    decimal: Union[str, Pattern, None] = None,
) -> Union[int, float]:
    """
    Normalize a price string with explicit separator rules.

    The first decimal separator is the decimal point, later ones are
    merged into the fraction, and the result is rounded half-up to
    two places ("123.45.67" -> 123.46). Signs and currency markers
    are dropped. Returns NaN when no digits are present or the amount
    is beyond float range.

    Args:
        price_string: Raw price text, e.g. "$1,234.56"
        thousands: Regex (or pattern string) matching thousands separators
        decimal: Regex (or pattern string) matching the decimal separator

    Returns:
        int for whole amounts, float otherwise
    """
    if not isinstance(price_string, str):
        return math.nan

    thousands = _as_pattern(thousands, DEFAULT_THOUSANDS)
    decimal = _as_pattern(decimal, DEFAULT_DECIMAL)

    cleaned = re.sub(r"[^\d.,\s]", "", price_string).strip()
    marked = thousands.sub(_THOUSANDS_MARK, cleaned)
    marked = decimal.sub(_DECIMAL_MARK, marked)

    head, sep, tail = marked.partition(_DECIMAL_MARK)
    if sep:
        marked = head + "." + tail.replace(_DECIMAL_MARK, "")

    normalized = re.sub(r"[^\d.]", "", marked)
    if not re.search(r"\d", normalized):
        return math.nan

    try:
        value = Decimal(normalized)
    except InvalidOperation:
        return math.nan

    # Amounts beyond float range are not prices
    if not math.isfinite(float(value)):
        return math.nan

    if "." not in normalized:
        return int(value)

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(normalized) + 2)
        return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def detect_price_format(text: str) -> str:
    """Guess the separator convention: european, french or us."""
    if re.search(r"\d,\d{2}$", text):
        return "european"
    if re.fullmatch(r"\d{1,3}(?:\.\d{3})+", text):
        return "european"
    if re.search(r"\d+\s\d{3}", text):
        return "french"
    return "us"


def normalize_amount(raw: str, fmt: str = "auto") -> Optional[float]:
    """
    Normalize an amount whose separator convention may be unknown.

    Args:
        raw: Amount text without currency ("1.234,56")
        fmt: "auto", "european", "french" or "us"

    Returns:
        Amount as float or None
    """
    if not raw or not isinstance(raw, str):
        return None

    text = re.sub(r"\s", " ", raw.strip())
    if not re.search(r"\d", text):
        return None

    if fmt == "auto":
        fmt = detect_price_format(text)

    if fmt == "european":
        text = text.replace(".", "").replace(" ", "").replace(",", ".", 1)
    elif fmt == "french":
        text = re.sub(r"\s", "", text).replace(".", "").replace(",", ".", 1)
    else:
        text = text.replace(",", "").replace(" ", "")

    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def normalize_amount_string(amount: str, thousands: str = "commas", decimal: str = "dot") -> str:
    """
    Apply the settings-page separator vocabulary to an amount string.

    Result is ready for float().
    """
    result = amount
    pattern = SETTINGS_THOUSANDS.get(thousands)
    if pattern:
        result = re.sub(pattern, "", result)
    if decimal == "comma" and SETTINGS_DECIMAL.get(decimal):
        result = result.replace(",", ".", 1)
    return result
