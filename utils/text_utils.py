"""
Text utilities for handling Spanish text with accents.

Used to compare requested list items against catalog product names.
"""

import re
import unicodedata
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9 ]")
_WHITESPACE = re.compile(r"\s+")


def strip_accents(text: str) -> str:
    """
    Remove accent marks while keeping the base letters.

    - "Lápiz" → "Lapiz"
    - "Compás" → "Compas"
    - "Señalador" → "Senalador"
    """
    # NFD decomposition separates base chars from accents
    decomposed = unicodedata.normalize("NFD", text)

    # Accent marks are combining characters in Unicode category 'Mn'
    return "".join(c for c in decomposed if unicodedata.category(c) != "Mn")


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for diacritic- and punctuation-insensitive comparison.

    Handles Spanish accents and catalog punctuation:
    - "Lápiz Negro HB (x12)" → "lapiz negro hb x12"
    - "Plasticola  250g." → "plasticola 250g"
    - "Témpera/Acrílico" → "tempera acrilico"

    Args:
        text: Requested item text or catalog product name

    Returns:
        Lowercase ASCII string with single spaces, or "" for empty input
    """
    if not text:
        return ""

    lowered = strip_accents(text.lower())
    cleaned = _NON_ALNUM.sub(" ", lowered)
    return _WHITESPACE.sub(" ", cleaned).strip()


def words(text: Optional[str], min_length: int = 1) -> list[str]:
    """Split normalized text into words of at least min_length characters."""
    return [w for w in normalize_text(text).split(" ") if len(w) >= min_length]
