"""
Safety Module

Error containment and text cleanup for DOM-derived input.
"""

from .wrapper import safe_call, safe_extract, ExtractionResult
from .sanitize import sanitize_text, normalize_whitespace

__all__ = [
    'safe_call',
    'safe_extract',
    'ExtractionResult',
    'sanitize_text',
    'normalize_whitespace',
]
