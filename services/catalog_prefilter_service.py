"""
Catalog pre-filter.

The matcher has a bounded context budget, so the full catalog (thousands of
products) cannot be sent. This service scores every product against the
expanded keywords of the whole list and returns a bounded shortlist.

Scoring per product:
    single_score       single-word keywords that are a substring of a name
                       word, or contain one
    multi_score        3 × multi-word keywords contained in the name
    primary_bonus      single_score restricted to the primary name (the text
                       before the first "+" or "/", so bundled accessories
                       do not score)
    starts_with_bonus  3 if the name starts with a single-word keyword
"""

import re
from typing import Iterable, Optional, Sequence

import structlog

from models.catalog import CatalogProduct, ScoredProduct
from models.quote import RequestedItem
from services.keyword_expansion_service import KeywordExpansionService, MIN_KEYWORD_LENGTH
from utils.text_utils import normalize_text, words

logger = structlog.get_logger(__name__)

MULTI_WORD_WEIGHT = 3
STARTS_WITH_BONUS = 3

PRIMARY_NAME_SEPARATOR = re.compile(r"[+/]")


def primary_name(name: str) -> str:
    """
    Product name before the first "+" or "/".

    "Set de Témperas x 6 + Pincel" → "set de temperas x 6"
    """
    return normalize_text(PRIMARY_NAME_SEPARATOR.split(name, maxsplit=1)[0])


def _name_words(normalized_name: str) -> list[str]:
    return words(normalized_name)


def _count_word_hits(keywords: Iterable[str], name_words: Sequence[str]) -> int:
    # A short name word ("de", "x", "n") would be contained in almost any
    # keyword, so it only scores by containing the keyword ("a4", "n3", "hb")
    return sum(
        1 for k in keywords
        if any(k in w or (len(w) >= MIN_KEYWORD_LENGTH and w in k) for w in name_words)
    )


class CatalogPreFilterService:
    """
    Score the catalog against a requested list and build the shortlist.

    Thresholds:
        max_results: hard cap on shortlist size
        min_scored: below this many scored products, backfill
        backfill_target: backfill tops the shortlist up to this size
    """

    def __init__(
        self,
        expansion_service: Optional[KeywordExpansionService] = None,
        max_results: int = 300,
        min_scored: int = 50,
        backfill_target: int = 100
    ):
        self.expansion_service = expansion_service or KeywordExpansionService()
        self.max_results = max_results
        self.min_scored = min_scored
        self.backfill_target = backfill_target

    def score_product(
        self,
        product: CatalogProduct,
        single_keywords: Sequence[str],
        multi_keywords: Sequence[str]
    ) -> int:
        """
        Relevance score of one product.

        Args:
            product: Catalog product
            single_keywords: Keywords without spaces
            multi_keywords: Keywords with spaces (phrases)

        Returns:
            Non-negative score, 0 = not relevant
        """
        name = normalize_text(product.name)
        name_words = _name_words(name)
        primary_words = _name_words(primary_name(product.name))

        single_score = _count_word_hits(single_keywords, name_words)
        multi_score = MULTI_WORD_WEIGHT * sum(1 for k in multi_keywords if k in name)
        primary_bonus = _count_word_hits(single_keywords, primary_words)
        starts_with_bonus = (
            STARTS_WITH_BONUS if any(name.startswith(k) for k in single_keywords) else 0
        )

        return single_score + multi_score + primary_bonus + starts_with_bonus

    def pre_filter(
        self,
        items: Sequence[RequestedItem],
        catalog: Iterable[CatalogProduct]
    ) -> list[ScoredProduct]:
        """
        Build the shortlist for a requested list.

        An empty list scores nothing and falls through to the backfill,
        returning up to backfill_target arbitrary products.

        Args:
            items: Requested list items (all of them, scoring is shared)
            catalog: Catalog products in catalog order

        Returns:
            At most max_results scored products, best first
        """
        keywords = self.expansion_service.expand_keywords(items)
        # Sorted so scoring does not depend on set iteration order
        single_keywords = sorted(k for k in keywords if " " not in k)
        multi_keywords = sorted(k for k in keywords if " " in k)

        scored: list[ScoredProduct] = []
        unscored: list[CatalogProduct] = []
        for product in catalog:
            score = self.score_product(product, single_keywords, multi_keywords)
            if score > 0:
                scored.append(ScoredProduct(product=product, score=score))
            else:
                unscored.append(product)

        # Stable sort: ties keep catalog order
        scored.sort(key=lambda sp: sp.score, reverse=True)

        shortlist = scored
        backfilled = 0
        if len(scored) < self.min_scored:
            backfill_count = max(self.backfill_target - len(scored), 0)
            backfill = [ScoredProduct(product=p, score=0) for p in unscored[:backfill_count]]
            backfilled = len(backfill)
            shortlist = scored + backfill

        shortlist = shortlist[:self.max_results]

        logger.info(
            "prefilter_completed",
            items=len(items),
            keywords=len(keywords),
            scored=len(scored),
            backfilled=backfilled,
            shortlist=len(shortlist)
        )
        return shortlist
