"""
Keyword expansion for the catalog pre-filter.

Turns requested list items into the set of keywords used to score catalog
products: the item's own words, plus catalog vocabulary from the expansion
table for exact phrase hits and for typos (edit distance).
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

import structlog
from rapidfuzz.distance import Levenshtein

from config.keyword_expansions import KEYWORD_EXPANSIONS, NOISE_PREFIXES
from models.quote import RequestedItem
from utils.text_utils import normalize_text, words

logger = structlog.get_logger(__name__)

MIN_KEYWORD_LENGTH = 3

# "2", "12u", "3 unidades", "x2", "2x", "x 10" at the start of an item
LEADING_QUANTITY = re.compile(
    r"^(?:x\s*\d+|\d+\s*(?:x|u|un|uni|unid|unidad|unidades)?)(?:\s+|$)"
)


def fuzzy_tolerance(key: str) -> int:
    """Allowed edit distance for a table key: 1 up to 4 chars, 2 up to 7, else 3."""
    if len(key) <= 4:
        return 1
    if len(key) <= 7:
        return 2
    return 3


@dataclass(frozen=True)
class KeywordExpansionTable:
    """
    Expansion table injected into KeywordExpansionService.

    Attributes:
        expansions: normalized phrase -> catalog phrases
        noise_prefixes: normalized prefixes stripped before tokenizing
    """
    expansions: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    noise_prefixes: tuple[str, ...] = ()

    @classmethod
    def build(
        cls,
        expansions: Mapping[str, Iterable[str]],
        noise_prefixes: Iterable[str] = ()
    ) -> "KeywordExpansionTable":
        """
        Build a table, normalizing keys, targets and prefixes.

        Duplicate keys after normalization have their targets merged.
        """
        merged: dict[str, tuple[str, ...]] = {}
        for key, targets in expansions.items():
            norm_key = normalize_text(key)
            if not norm_key:
                continue
            norm_targets = tuple(t for t in (normalize_text(t) for t in targets) if t)
            existing = merged.get(norm_key, ())
            merged[norm_key] = existing + tuple(t for t in norm_targets if t not in existing)

        prefixes = {normalize_text(p) for p in noise_prefixes}
        prefixes.discard("")
        # Longest first so "unidades de" is tried before "un"
        ordered = tuple(sorted(prefixes, key=lambda p: (-len(p), p)))

        return cls(expansions=merged, noise_prefixes=ordered)

    @classmethod
    def default(cls) -> "KeywordExpansionTable":
        """Table built from config/keyword_expansions.py."""
        return cls.build(KEYWORD_EXPANSIONS, NOISE_PREFIXES)


class KeywordExpansionService:
    """
    Expand requested items into catalog keywords.

    Deterministic and side-effect free: the same items always give the same
    keyword set.
    """

    def __init__(self, table: Optional[KeywordExpansionTable] = None):
        self.table = table or KeywordExpansionTable.default()

    # ===================
    # CLEANING
    # ===================

    def strip_noise(self, text: str) -> str:
        """
        Remove leading quantities and packaging prefixes.

        Examples:
            "2 paquetes de fibras" → "fibras"
            "caja de 12 lapices de colores" → "lapices de colores"
            "box of crayons" → "crayons"

        Args:
            text: Normalized item text

        Returns:
            Normalized text without the noise prefix
        """
        cleaned = text
        while cleaned:
            before = cleaned

            match = LEADING_QUANTITY.match(cleaned)
            if match:
                cleaned = cleaned[match.end():]

            for prefix in self.table.noise_prefixes:
                if cleaned == prefix:
                    cleaned = ""
                    break
                if cleaned.startswith(prefix + " "):
                    cleaned = cleaned[len(prefix) + 1:]
                    break

            if cleaned.startswith("de "):
                cleaned = cleaned[3:]

            if cleaned == before:
                break

        return cleaned.strip()

    # ===================
    # EXPANSION
    # ===================

    def expand_text(self, text: str) -> set[str]:
        """
        Keywords for a single requested item text.

        Args:
            text: Item text as written in the list

        Returns:
            Set of normalized keywords
        """
        original = normalize_text(text)
        cleaned = self.strip_noise(original)

        tokens = words(cleaned, MIN_KEYWORD_LENGTH)
        keywords: set[str] = set(tokens)

        # Phrase hits on either the cleaned or the original text
        for key, targets in self.table.expansions.items():
            if key in cleaned or key in original:
                keywords.update(targets)

        # Typos: edit distance against every key
        for token in tokens:
            for key, targets in self.table.expansions.items():
                tolerance = fuzzy_tolerance(key)
                if abs(len(key) - len(token)) > tolerance:
                    continue
                distance = Levenshtein.distance(token, key, score_cutoff=tolerance)
                if distance <= tolerance:
                    keywords.add(key)
                    keywords.update(targets)

        return keywords

    def expand_keywords(self, items: Iterable[RequestedItem]) -> frozenset[str]:
        """
        Keywords for all requested items combined.

        Args:
            items: Requested list items

        Returns:
            De-duplicated union of each item's keywords
        """
        keywords: set[str] = set()
        item_count = 0
        for item in items:
            keywords.update(self.expand_text(item.item))
            item_count += 1

        logger.debug(
            "keywords_expanded",
            items=item_count,
            keywords=len(keywords)
        )
        return frozenset(keywords)
