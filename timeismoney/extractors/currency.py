"""
Function: detect_price_currency

Map currency symbols and codes found in price text to ISO codes.
"""

import logging
import re
from typing import Iterable, List, Optional

from ..models import PriceMatch

logger = logging.getLogger(__name__)

# Order matters: "US$" before "$", ¥ is ambiguous (JPY/CNY) and reported as JPY
CURRENCY_PATTERNS = [
    (re.compile(r"US\$|\$|\bUSD\b"), "USD"),
    (re.compile(r"€|\bEUR\b"), "EUR"),
    (re.compile(r"£|\bGBP\b"), "GBP"),
    (re.compile(r"¥|\bJPY\b|\bCNY\b"), "JPY"),
    (re.compile(r"₹|\bINR\b"), "INR"),
    (re.compile(r"₽|\bRUB\b"), "RUB"),
    (re.compile(r"\bCAD\b"), "CAD"),
    (re.compile(r"\bAUD\b"), "AUD"),
    (re.compile(r"\bCHF\b"), "CHF"),
    (re.compile(r"¢"), "USD"),
]

CURRENCY_SYMBOLS = "$€£¥₹₽"
CURRENCY_ISO_CODES = ("USD", "EUR", "GBP", "JPY", "INR", "RUB", "CAD", "AUD", "CHF")


def detect_price_currency(text: str) -> Optional[str]:
    """
    Detect the currency of a price string.

    Args:
        text: Price text ("$19.99", "20 EUR")

    Returns:
        ISO currency code or None
    """
    if not text or not isinstance(text, str):
        return None

    for pattern, code in CURRENCY_PATTERNS:
        if pattern.search(text):
            return code

    return None


def filter_by_currency(matches: Iterable[PriceMatch], currency_code: Optional[str]) -> List[PriceMatch]:
    """
    Keep matches priced in the user's currency.

    Matches whose currency cannot be identified are kept.
    """
    matches = list(matches)
    if not currency_code:
        return matches

    target = currency_code.upper()
    kept = []
    for match in matches:
        code = match.currency_code or detect_price_currency(match.original_text)
        if code is None:
            logger.debug(f"Could not detect currency for price: {match.original_text}")
            kept.append(match)
        elif code == target:
            kept.append(match)
        else:
            logger.debug(f"Filtering out {match.original_text} ({code}) - user currency is {target}")
    return kept
