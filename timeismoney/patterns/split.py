"""
Pattern: Split Price Components

Rebuilds a price that a page renders as separate pieces of text,
e.g. ["449€", "00"] or ["$", "25", ".99"].
"""

import re
from typing import List, Optional, Sequence

from ..models import MatchSource, PriceMatch

_SYMBOL = r"US\$|[$€£¥₹₽]"


def _build(value: str, currency: str, reconstructed: str, confidence: float, name: str) -> Optional[PriceMatch]:
    try:
        amount = float(value)
    except ValueError:
        return None
    return PriceMatch.create(
        value=amount,
        currency=currency,
        original_text=reconstructed,
        confidence=confidence,
        source=MatchSource.DOM_STRUCTURE,
        pattern=name,
    )


def _symbol_then_cents(parts: Sequence[str]) -> Optional[PriceMatch]:
    # ["449€", "00"]
    first, second = parts
    whole = re.fullmatch(rf"(\d+)\s*({_SYMBOL})", first)
    cents = re.fullmatch(r"(\d{2})", second)
    if whole and cents:
        return _build(f"{whole.group(1)}.{cents.group(1)}", whole.group(2), f"{first} {second}", 0.95, "split.cents")
    return None


def _code_then_amount(parts: Sequence[str]) -> Optional[PriceMatch]:
    # ["USD", "100.00"]
    first, second = parts
    code = re.fullmatch(r"(USD|EUR|GBP|JPY)", first, re.IGNORECASE)
    amount = re.fullmatch(r"(\d+(?:\.\d{2})?)", second)
    if code and amount:
        return _build(amount.group(1), code.group(1).upper(), f"{first} {second}", 0.85, "split.currency_code")
    return None


def _multi_part(parts: Sequence[str]) -> Optional[PriceMatch]:
    # ["$", "25", ".99"]
    currency = re.fullmatch(rf"({_SYMBOL})", parts[0])
    if not currency:
        return None
    amount = re.fullmatch(r"(\d+(?:\.\d{2})?)", "".join(parts[1:]))
    if amount:
        return _build(amount.group(1), currency.group(1), "".join(parts), 0.8, "split.multi_part")
    return None


def _amount_symbol_cents(parts: Sequence[str]) -> Optional[PriceMatch]:
    # ["449", "€", "00"]
    first, second, third = parts
    if re.fullmatch(r"\d+", first) and re.fullmatch(rf"{_SYMBOL}", second) and re.fullmatch(r"\d{2}", third):
        return _build(f"{first}.{third}", second, f"{first}{second} {third}", 0.9, "split.ambiguous")
    return None


def match_split_components(parts: Sequence[str]) -> List[PriceMatch]:
    """
    Reconstruct prices from text fragments.

    Args:
        parts: Stripped text of sibling elements, in document order

    Returns:
        Reconstructed price matches (possibly empty)
    """
    if not isinstance(parts, (list, tuple)) or len(parts) < 2:
        return []

    parts = [str(p).strip() for p in parts]
    candidates = []

    if len(parts) == 2:
        candidates.append(_symbol_then_cents(parts))
        candidates.append(_code_then_amount(parts))
    if len(parts) >= 3:
        candidates.append(_multi_part(parts))
    if len(parts) == 3:
        candidates.append(_amount_symbol_cents(parts))

    return [c for c in candidates if c is not None]
