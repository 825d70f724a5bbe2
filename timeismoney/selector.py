"""
Candidate Selector

Merges price candidates from the pattern library, the DOM analyzer and
any extra matchers, then thresholds, de-duplicates, ranks and filters
them by the user's currency.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Union

from bs4 import Tag

from .config import config
from .dom import analyze_element, element_text
from .extractors import filter_by_currency
from .models import Formatters, PriceMatch, SOURCE_PRIORITY
from .patterns import match_text
from .safety import normalize_whitespace, safe_call, sanitize_text

logger = logging.getLogger(__name__)

Matcher = Callable[[Union[Tag, str]], Iterable[PriceMatch]]


@dataclass
class SelectionResult:
    """The chosen price plus the full ranked list for debugging."""

    best: Optional[PriceMatch] = None
    ranked: List[PriceMatch] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.best is not None


def _rank_key(match: PriceMatch):
    return (-match.confidence, SOURCE_PRIORITY[match.source])


def rank_candidates(matches: Iterable[Optional[PriceMatch]], min_confidence: Optional[float] = None) -> List[PriceMatch]:
    """
    Threshold, de-duplicate and sort candidates.

    Duplicates (same text and value) keep their strongest copy. Ties in
    confidence go to the more reliable source.
    """
    if min_confidence is None:
        min_confidence = config.min_confidence

    strongest = {}
    for match in matches:
        if match is None or match.confidence < min_confidence:
            continue
        key = (normalize_whitespace(match.original_text), match.value)
        current = strongest.get(key)
        if current is None or _rank_key(match) < _rank_key(current):
            strongest[key] = match

    return sorted(strongest.values(), key=_rank_key)


def select_candidates(
    matches: Iterable[Optional[PriceMatch]],
    target_currency: Optional[str] = None,
    min_confidence: Optional[float] = None,
) -> SelectionResult:
    """
    Rank candidates and keep those in the target currency.

    Args:
        matches: Candidates from any source
        target_currency: ISO code of the user's currency (no filtering if None)
        min_confidence: Candidates below this are dropped (config.min_confidence if None)

    Returns:
        SelectionResult with the best candidate (or None) and the ranked list
    """
    ranked = rank_candidates(matches, min_confidence)
    if target_currency:
        ranked = filter_by_currency(ranked, target_currency)

    best = ranked[0] if ranked else None
    if best is None:
        logger.debug("No price candidate survived selection")
    return SelectionResult(best=best, ranked=ranked)


def extract_prices(
    element_or_text: Union[Tag, str],
    target_currency: Optional[str] = None,
    extra_matchers: Sequence[Matcher] = (),
    formatters: Optional[Formatters] = None,
    min_confidence: Optional[float] = None,
    max_depth: Optional[int] = None,
    max_nodes: Optional[int] = None,
) -> SelectionResult:
    """
    Find the price of an element or a piece of text.

    Tags get both a text pass and a DOM structure pass; strings are
    treated as plain text. Extra matchers receive the original input
    and a failing matcher only loses its own candidates.
    """
    if max_depth is None:
        max_depth = config.max_dom_depth
    if max_nodes is None:
        max_nodes = config.max_dom_nodes

    candidates: List[PriceMatch] = []

    if isinstance(element_or_text, Tag):
        text = element_text(element_or_text, max_depth, max_nodes)
        candidates.extend(match_text(text, formatters=formatters))
        candidates.extend(analyze_element(element_or_text, formatters, max_depth, max_nodes))
    elif isinstance(element_or_text, str):
        candidates.extend(match_text(sanitize_text(element_or_text), formatters=formatters))
    else:
        return SelectionResult()

    for matcher in extra_matchers:
        found = safe_call(matcher, element_or_text, default=(), error_prefix="Extra matcher")
        candidates.extend(m for m in (found or ()) if isinstance(m, PriceMatch))

    return select_candidates(candidates, target_currency, min_confidence)
