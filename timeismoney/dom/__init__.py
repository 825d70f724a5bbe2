"""
DOM Structure Analyzer

Price detection over BeautifulSoup trees: attribute, split-element and
text strategies, plus context scoring for candidate elements.
"""

from .analyzer import (
    analyze_element,
    iter_elements,
    element_text,
    to_element,
    MAX_DEPTH,
    MAX_NODES,
)
from .context import get_element_context, ElementContext, MAX_ANCESTOR_DEPTH

__all__ = [
    'analyze_element',
    'iter_elements',
    'element_text',
    'to_element',
    'MAX_DEPTH',
    'MAX_NODES',
    'get_element_context',
    'ElementContext',
    'MAX_ANCESTOR_DEPTH',
]
