"""
Text Sanitization

Clean text taken from DOM nodes before it reaches the price patterns.
"""

import re
import html
from typing import Optional

# nbsp and narrow nbsp are common thousands separators, keep them as spaces
_SPACES = re.compile("[\u00a0\u2007\u202f]")
_ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def sanitize_text(text: Optional[str], max_length: int = 10000) -> str:
    """
    Sanitize text for price matching.

    - None and non-strings become strings ("" for None)
    - HTML entities are decoded
    - Control and zero-width characters are removed
    - Non-breaking spaces become plain spaces
    - Output is truncated to max_length

    Returns:
        Clean text (never None)
    """
    if text is None:
        return ""

    if not isinstance(text, str):
        text = str(text)

    text = html.unescape(text)
    text = _CONTROL.sub("", text)
    text = _ZERO_WIDTH.sub("", text)
    text = _SPACES.sub(" ", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    if len(text) > max_length:
        text = text[:max_length]

    return text


def normalize_whitespace(text: Optional[str]) -> str:
    """Collapse all whitespace runs to single spaces."""
    if not text:
        return ""
    return " ".join(text.split())
