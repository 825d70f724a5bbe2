"""
DOM Price Analyzer

Recovers prices that pages do not write as one contiguous string:
structured data attributes, accessible names, split sibling elements.
Falls back to the text content of the element.

Strategies run in order and the first one that finds anything wins:

    1. data-price / data-item-price attributes      0.95
    2. aria-label, title and .a-offscreen text      0.90
    3. split symbol / whole / fraction elements     0.90
    4. plain text through the pattern library       <= 0.80

Usage:
    from timeismoney.dom import analyze_element

    analyze_element('<span data-price="19.99" data-currency="USD"></span>')
"""

import logging
import re
from typing import Iterator, List, Optional, Tuple, Union

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ..extractors.normalize import normalize_amount
from ..models import Formatters, MatchSource, PriceMatch
from ..patterns import match_split_components, match_text
from ..patterns.registry import CODE, SYMBOL
from ..safety import normalize_whitespace, safe_call, safe_extract, sanitize_text

logger = logging.getLogger(__name__)

MAX_DEPTH = 10
MAX_NODES = 500

DATA_PRICE_ATTRIBUTES = ("data-price", "data-item-price")
ACCESSIBLE_ATTRIBUTES = ("aria-label", "title")
SKIPPED_TAGS = ("script", "style", "template")

_CURRENCY_TOKEN = re.compile(rf"{SYMBOL}|\b(?:{CODE})\b", re.IGNORECASE)
_SPLIT_EURO = re.compile(r"(\d+)\s*€\s+(\d{2})(?!\d)")
_PLAIN_AMOUNT = re.compile(r"\d{1,3}(?:[,.]\d{3})*(?:[.,]\d{2})?|\d+(?:[.,]\d{2})?")


def to_element(element: Union[Tag, str, None]) -> Optional[Tag]:
    """Accept a Tag or an HTML fragment; return the element to analyze."""
    if isinstance(element, BeautifulSoup):
        return element.find(True)
    if isinstance(element, Tag):
        return element
    if isinstance(element, str) and element.strip():
        return BeautifulSoup(element, "html.parser").find(True)
    return None


def _walk(element: Tag, max_depth: int, max_nodes: int) -> Iterator[Tuple[Union[Tag, NavigableString], int]]:
    # Document-order walk over tags and strings; only tags count toward max_nodes
    stack = [(element, 0)]
    seen = 0
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Tag):
            seen += 1
            if seen > max_nodes:
                logger.debug(f"Node limit {max_nodes} reached in <{element.name}>")
                return
            yield node, depth
            if depth < max_depth and node.name not in SKIPPED_TAGS:
                stack.extend((child, depth + 1) for child in reversed(list(node.children)))
        elif isinstance(node, NavigableString) and not isinstance(node, Comment):
            yield node, depth


def iter_elements(element: Tag, max_depth: int = MAX_DEPTH, max_nodes: int = MAX_NODES) -> Iterator[Tag]:
    """
    Yield element and its descendants in document order.

    Elements deeper than max_depth below element are not visited and
    at most max_nodes elements are yielded.
    """
    if not isinstance(element, Tag):
        return
    for node, _ in _walk(element, max_depth, max_nodes):
        if isinstance(node, Tag):
            yield node


def element_text(element: Tag, max_depth: int = MAX_DEPTH, max_nodes: int = MAX_NODES) -> str:
    """Text content of element, bounded like iter_elements."""
    if not isinstance(element, Tag):
        return ""
    parts = [str(node) for node, _ in _walk(element, max_depth, max_nodes) if isinstance(node, NavigableString)]
    return normalize_whitespace(sanitize_text("".join(parts)))


def _classes(element: Tag) -> List[str]:
    value = element.get("class") or []
    return value.split() if isinstance(value, str) else list(value)


def _first_with_class(element: Tag, class_name: str, max_depth: int, max_nodes: int) -> Optional[Tag]:
    for node in iter_elements(element, max_depth, max_nodes):
        if class_name in _classes(node):
            return node
    return None


def _best_in(text: str, confidence: float, source: MatchSource, formatters: Optional[Formatters]) -> Optional[PriceMatch]:
    matches = match_text(sanitize_text(text), formatters=formatters)
    if not matches:
        return None
    return matches[0].with_confidence(confidence, source)


# Strategy 1

def from_data_attributes(element: Tag, formatters=None, max_depth=MAX_DEPTH, max_nodes=MAX_NODES) -> List[PriceMatch]:
    """Structured price attributes, e.g. data-price="19.99" data-currency="USD"."""
    prices = []
    for node in iter_elements(element, max_depth, max_nodes):
        for attr in DATA_PRICE_ATTRIBUTES:
            raw = node.get(attr)
            if not raw or not isinstance(raw, str):
                continue
            currency = node.get("data-currency")
            if not currency:
                found = _CURRENCY_TOKEN.search(raw)
                currency = found.group(0) if found else None
            if not currency:
                logger.debug(f"Ignoring {attr}={raw!r}: no currency")
                continue

            price = PriceMatch.create(
                value=normalize_amount(re.sub(r"[^\d.,\s]", "", raw)),
                currency=currency.strip(),
                original_text=raw,
                confidence=0.95,
                source=MatchSource.DOM_ATTRIBUTE,
                pattern=f"dom.{attr}",
            )
            if price is not None:
                prices.append(price)
    return prices


# Strategy 2

def from_accessible_text(element: Tag, formatters=None, max_depth=MAX_DEPTH, max_nodes=MAX_NODES) -> List[PriceMatch]:
    """Accessible names and screen-reader-only text."""
    prices = []
    for node in iter_elements(element, max_depth, max_nodes):
        texts = [node.get(attr) for attr in ACCESSIBLE_ATTRIBUTES]
        if "a-offscreen" in _classes(node):
            texts.append(element_text(node, max_depth, max_nodes))

        for text in texts:
            if not text or not isinstance(text, str) or not _CURRENCY_TOKEN.search(text):
                continue
            price = _best_in(text, 0.9, MatchSource.DOM_ATTRIBUTE, formatters)
            if price is not None:
                prices.append(price)
    return prices


# Strategy 3

def _amazon_split(element: Tag, max_depth: int, max_nodes: int) -> Optional[PriceMatch]:
    symbol = _first_with_class(element, "a-price-symbol", max_depth, max_nodes)
    whole = _first_with_class(element, "a-price-whole", max_depth, max_nodes)
    fraction = _first_with_class(element, "a-price-fraction", max_depth, max_nodes)
    if not (symbol and whole and fraction):
        return None

    currency = element_text(symbol)
    whole_text = re.sub(r"\D", "", element_text(whole))
    fraction_text = re.sub(r"\D", "", element_text(fraction))
    if not whole_text:
        return None

    amount = f"{whole_text}.{fraction_text or '00'}"
    return PriceMatch.create(
        value=float(amount),
        currency=currency,
        original_text=f"{currency}{amount}",
        confidence=0.9,
        source=MatchSource.DOM_STRUCTURE,
        pattern="dom.amazon_split",
    )


def _woocommerce_split(element: Tag, max_depth: int, max_nodes: int) -> Optional[PriceMatch]:
    # <bdi>6.26<span class="woocommerce-Price-currencySymbol">$</span></bdi>
    symbol = _first_with_class(element, "woocommerce-Price-currencySymbol", max_depth, max_nodes)
    if symbol is None or symbol.parent is None:
        return None

    currency = element_text(symbol)
    full_text = element_text(symbol.parent, max_depth, max_nodes)
    if not currency:
        return None

    amount = full_text.replace(currency, "", 1).strip()
    if not _PLAIN_AMOUNT.fullmatch(amount):
        return None

    return PriceMatch.create(
        value=normalize_amount(amount),
        currency=currency,
        original_text=full_text,
        confidence=0.9,
        source=MatchSource.DOM_STRUCTURE,
        pattern="dom.woocommerce",
    )


def _adjacent_children(element: Tag, max_depth: int, max_nodes: int) -> List[PriceMatch]:
    # ["$", "25", ".99"], ["449€", "00"], ["USD", "100.00"]
    prices = []
    for node in iter_elements(element, max_depth, max_nodes):
        children = [child for child in node.children if isinstance(child, Tag)]
        if not 2 <= len(children) <= 4:
            continue
        parts = [element_text(child) for child in children]
        if not all(parts):
            continue
        for match in match_split_components(parts):
            price = match.with_confidence(0.9, MatchSource.DOM_STRUCTURE)
            if price is not None:
                prices.append(price)
    return prices


def _split_euro_text(element: Tag, max_depth: int, max_nodes: int) -> Optional[PriceMatch]:
    # "449€ 00" rendered with the cents in a separate element
    text = element_text(element, max_depth, max_nodes)
    m = _SPLIT_EURO.search(text)
    if not m:
        return None
    return PriceMatch.create(
        value=float(f"{m.group(1)}.{m.group(2)}"),
        currency="€",
        original_text=m.group(0),
        confidence=0.9,
        source=MatchSource.DOM_STRUCTURE,
        pattern="dom.split_euro",
    )


def from_split_structure(element: Tag, formatters=None, max_depth=MAX_DEPTH, max_nodes=MAX_NODES) -> List[PriceMatch]:
    """Prices assembled from separate symbol, whole and fraction elements."""
    prices = [
        _amazon_split(element, max_depth, max_nodes),
        _woocommerce_split(element, max_depth, max_nodes),
        _split_euro_text(element, max_depth, max_nodes),
    ]
    prices.extend(_adjacent_children(element, max_depth, max_nodes))
    return [p for p in prices if p is not None]


# Strategy 4

def from_text_content(element: Tag, formatters=None, max_depth=MAX_DEPTH, max_nodes=MAX_NODES) -> List[PriceMatch]:
    """Plain text through the pattern library, confidence capped at 0.8."""
    text = element_text(element, max_depth, max_nodes)
    prices = []
    for match in match_text(text, formatters=formatters):
        price = match.with_confidence(min(match.confidence, 0.8))
        if price is not None:
            prices.append(price)
    return prices


def analyze_element(
    element: Union[Tag, str],
    formatters: Optional[Formatters] = None,
    max_depth: int = MAX_DEPTH,
    max_nodes: int = MAX_NODES,
) -> List[PriceMatch]:
    """
    Find prices in a DOM element.

    Args:
        element: BeautifulSoup Tag or HTML fragment
        formatters: Separator rules for text matching (auto-detected if None)
        max_depth: Deepest descendant level visited
        max_nodes: Most elements visited per walk

    Returns:
        Matches from the first strategy that found any, or []
    """
    root = safe_call(to_element, element, default=None, error_prefix="DOM analyzer")
    if root is None:
        return []

    strategies = (
        ("data-attributes", from_data_attributes),
        ("accessible-text", from_accessible_text),
        ("split-structure", from_split_structure),
        ("text-content", from_text_content),
    )

    for name, strategy in strategies:
        result = safe_extract(strategy, root, formatters, max_depth, max_nodes)
        if not result.success:
            logger.warning(f"DOM strategy {name} failed ({result.error_type}): {result.error}")
            continue
        found = result.value
        if found:
            logger.debug(f"DOM strategy {name} found {len(found)} price(s) in <{root.name}>")
            return found

    logger.warning(f"No price structure found in <{root.name}>")
    return []
