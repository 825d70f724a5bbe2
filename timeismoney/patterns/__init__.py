"""
Price Pattern Library

A closed set of regex patterns that find prices in text. Each pattern
is tagged with a PatternKind and a confidence.
"""

from .registry import (
    PatternKind,
    PricePattern,
    PATTERNS,
    get_pattern,
    list_patterns,
    match_text,
    first_price_span,
)
from .split import match_split_components

__all__ = [
    'PatternKind',
    'PricePattern',
    'PATTERNS',
    'get_pattern',
    'list_patterns',
    'match_text',
    'first_price_span',
    'match_split_components',
]
