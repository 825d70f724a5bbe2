"""
Extractor Functions

Numeric normalization and currency detection used by the pattern
library, the DOM analyzer and the converter.
"""

from .normalize import (
    normalize_price,
    normalize_amount,
    normalize_amount_string,
    detect_price_format,
    parse_leading_float,
)
from .currency import (
    detect_price_currency,
    filter_by_currency,
    CURRENCY_SYMBOLS,
    CURRENCY_ISO_CODES,
)

__all__ = [
    'normalize_price',
    'normalize_amount',
    'normalize_amount_string',
    'detect_price_format',
    'parse_leading_float',
    'detect_price_currency',
    'filter_by_currency',
    'CURRENCY_SYMBOLS',
    'CURRENCY_ISO_CODES',
]
