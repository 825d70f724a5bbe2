"""
Element context scoring.

How price-like are an element's surroundings? Looks at ancestor
containers, class names, data attributes, aria labels and semantic
hints (cart, shipping, tax...).
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

MAX_ANCESTOR_DEPTH = 10

PRICE_CONTAINER_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (r"price", r"cost", r"amount", r"currency", r"money", r"pricing", r"checkout", r"cart", r"total")
]

PRICE_CLASS_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (r"price", r"cost", r"amount", r"currency", r"money", r"sale", r"current", r"original", r"regular")
]

PRICE_DATA_ATTRIBUTES = (
    "data-price",
    "data-amount",
    "data-value",
    "data-cost",
    "data-currency",
    "data-currency-code",
    "data-original-price",
)

SEMANTIC_CONTEXTS = {
    "cart": re.compile(r"cart|basket|checkout", re.IGNORECASE),
    "shipping": re.compile(r"shipping|delivery|freight", re.IGNORECASE),
    "tax": re.compile(r"tax|vat|gst", re.IGNORECASE),
    "comparison": re.compile(r"compare|\bvs\b|versus", re.IGNORECASE),
    "product": re.compile(r"product|item|goods", re.IGNORECASE),
}

PRICE_TYPE_PATTERNS = {
    "sale": re.compile(r"sale|discount|special", re.IGNORECASE),
    "original": re.compile(r"original|regular|was|before", re.IGNORECASE),
    "current": re.compile(r"current|now|today", re.IGNORECASE),
    "shipping": re.compile(r"shipping|delivery|freight", re.IGNORECASE),
    "tax": re.compile(r"tax|vat|gst", re.IGNORECASE),
}

CURRENCY_HINTS = (
    (re.compile(r"usd|dollar", re.IGNORECASE), "USD"),
    (re.compile(r"eur|euro", re.IGNORECASE), "EUR"),
    (re.compile(r"gbp|pound", re.IGNORECASE), "GBP"),
)


@dataclass
class ElementContext:
    """Price-likeness of an element's surroundings."""

    confidence: float = 0.0
    price_container: Optional[Tag] = field(default=None, repr=False)
    container_depth: int = 0
    sibling_count: int = 0
    price_classes: List[str] = field(default_factory=list)
    data_attributes: List[str] = field(default_factory=list)
    aria_labels: List[str] = field(default_factory=list)
    container_type: Optional[str] = None
    price_type: Optional[str] = None
    currency_hint: Optional[str] = None

    @property
    def has_parent_container(self) -> bool:
        return self.price_container is not None

    @property
    def has_price_classes(self) -> bool:
        return bool(self.price_classes)

    @property
    def has_data_attributes(self) -> bool:
        return bool(self.data_attributes)

    @property
    def has_semantic_context(self) -> bool:
        return self.container_type is not None or self.price_type is not None

    @property
    def indicator_count(self) -> int:
        return sum([
            self.has_parent_container,
            self.has_price_classes,
            self.has_data_attributes,
            self.has_semantic_context,
        ])


def _class_string(element: Tag) -> str:
    value = element.get("class") or []
    return value if isinstance(value, str) else " ".join(value)


def _identity(element: Tag) -> str:
    return f"{_class_string(element)} {element.get('id') or ''}".lower()


def _ancestors(element: Tag, limit: int):
    current = element.parent
    depth = 1
    while current is not None and not isinstance(current, BeautifulSoup) and depth <= limit:
        yield current, depth
        current = current.parent
        depth += 1


def is_price_container(element: Tag) -> bool:
    combined = _identity(element)
    return any(p.search(combined) for p in PRICE_CONTAINER_PATTERNS)


def is_price_related(element: Tag) -> bool:
    classes = _class_string(element)
    return any(p.search(classes) for p in PRICE_CLASS_PATTERNS)


def _score(context: ElementContext) -> float:
    confidence = 0.0
    if context.has_parent_container:
        confidence += 0.4
    if context.has_price_classes:
        confidence += 0.4
    if context.has_data_attributes:
        confidence += 0.3
    if context.has_semantic_context:
        confidence += 0.25
    if context.aria_labels:
        confidence += 0.3

    count = context.indicator_count
    if count >= 3:
        confidence += 0.15
    elif count == 2:
        confidence += 0.1
    elif count == 1:
        confidence += 0.05

    if context.has_parent_container and context.container_depth <= 2:
        confidence += 0.15
    if context.sibling_count:
        confidence += min(0.15, context.sibling_count * 0.075)

    return min(1.0, max(0.0, confidence))


def get_element_context(element: Optional[Tag], max_depth: int = 5) -> ElementContext:
    """
    Score how likely element sits in a price context.

    Args:
        element: BeautifulSoup Tag
        max_depth: Ancestor levels searched for a price container
                   (never more than MAX_ANCESTOR_DEPTH)

    Returns:
        ElementContext, with confidence 0 for non-elements
    """
    if not isinstance(element, Tag) or isinstance(element, BeautifulSoup):
        return ElementContext()

    context = ElementContext()
    limit = max(0, min(max_depth, MAX_ANCESTOR_DEPTH))

    for ancestor, depth in _ancestors(element, limit):
        if is_price_container(ancestor):
            context.price_container = ancestor
            context.container_depth = depth
            break

    if element.parent is not None and not isinstance(element.parent, BeautifulSoup):
        siblings = [s for s in element.parent.children if isinstance(s, Tag) and s is not element]
        context.sibling_count = sum(1 for s in siblings if is_price_related(s))

    context.price_classes = [
        cls for cls in _class_string(element).split()
        if any(p.search(cls) for p in PRICE_CLASS_PATTERNS)
    ]
    context.data_attributes = [name for name in element.attrs if name in PRICE_DATA_ATTRIBUTES]
    if element.get("aria-label"):
        context.aria_labels.append(element["aria-label"])

    # Semantic hints come from the element itself and its ancestors
    chain = [element] + [a for a, _ in _ancestors(element, MAX_ANCESTOR_DEPTH)]
    for node in chain:
        combined = _identity(node)
        if context.container_type is None:
            for kind, pattern in SEMANTIC_CONTEXTS.items():
                if pattern.search(combined):
                    context.container_type = kind
                    break
        if context.currency_hint is None:
            for pattern, code in CURRENCY_HINTS:
                if pattern.search(combined):
                    context.currency_hint = code
                    break
        if context.container_type and context.currency_hint:
            break

    element_classes = _class_string(element)
    for kind, pattern in PRICE_TYPE_PATTERNS.items():
        if pattern.search(element_classes):
            context.price_type = kind
            break

    context.confidence = _score(context)
    return context
