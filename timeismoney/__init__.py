"""
TimeIsMoney - Prices as Work Time

Finds currency prices in page text and DOM fragments and annotates
them with the work time they cost at the user's wage.
"""

from .models import (
    MatchSource,
    PriceMatch,
    Frequency,
    WageConfig,
    TimeDuration,
    Formatters,
)
from .patterns import match_text, PatternKind
from .dom import analyze_element, get_element_context
from .selector import extract_prices, select_candidates, rank_candidates, SelectionResult
from .converter import (
    calculate_hourly_wage,
    convert_to_time,
    format_time_snippet,
    format_time_compact,
    format_price_with_time,
    has_time_annotation,
    convert_price,
    convert_price_to_time_string,
    ConversionResult,
    ConversionStatus,
)
from .config import config, Config, DEFAULT_SETTINGS

__all__ = [
    'MatchSource',
    'PriceMatch',
    'Frequency',
    'WageConfig',
    'TimeDuration',
    'Formatters',
    'match_text',
    'PatternKind',
    'analyze_element',
    'get_element_context',
    'extract_prices',
    'select_candidates',
    'rank_candidates',
    'SelectionResult',
    'calculate_hourly_wage',
    'convert_to_time',
    'format_time_snippet',
    'format_time_compact',
    'format_price_with_time',
    'has_time_annotation',
    'convert_price',
    'convert_price_to_time_string',
    'ConversionResult',
    'ConversionStatus',
    'config',
    'Config',
    'DEFAULT_SETTINGS',
]
