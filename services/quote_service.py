"""
Quote pipeline.

requested items → pre-filter → matching request → Claude matcher →
reconcile → catalog references → overrides → summary

Uploads run list extraction first (text files through the text reader,
photos through Claude vision).
"""

from typing import Optional, Sequence

import structlog

from config.catalog import Catalog
from config.settings import settings
from exceptions import ListExtractionError
from models.quote import MatchedItem, QuoteResponse, RequestedItem
from services.catalog_prefilter_service import CatalogPreFilterService
from services.claude_matcher_service import (
    ClaudeMatcherService,
    ImageInput,
    get_claude_matcher_service,
)
from services.list_extraction_service import (
    ListExtractionService,
    base_media_type,
    get_list_extraction_service,
)
from services.match_request_service import MatchRequestBuilder
from services.override_rule_service import OverrideRuleEngine, resolve_catalog_references
from services.quote_summary_service import summarize
from utils.text_utils import normalize_text

logger = structlog.get_logger(__name__)


def _apply_requested_quantity(row: MatchedItem, item: RequestedItem) -> None:
    if row.quantity != item.quantity:
        logger.debug(
            "matcher_quantity_corrected",
            item=item.item,
            returned=row.quantity,
            requested=item.quantity
        )
        row.quantity = item.quantity
        row.recompute_subtotal()


def reconcile_with_request(
    items: Sequence[RequestedItem],
    matched: Sequence[MatchedItem]
) -> list[MatchedItem]:
    """
    Make sure every requested item appears in the quote, in the requested
    quantity.

    The matcher is asked for one row per item, in order, but long lists
    sometimes come back short. When rows are missing, requested items with
    no row (compared by normalized text, counting repeats) are appended as
    unmatched, at most as many as there are missing rows. The matcher may
    reword an item, so a full-length answer is kept row for row.

    The requested quantity wins over the matcher's: a full-length answer
    takes it by position, a short answer by normalized text.

    Args:
        items: Items sent to the matcher
        matched: Rows the matcher returned

    Returns:
        Matcher rows followed by an unmatched row per omitted item
    """
    shortfall = len(items) - len(matched)
    if shortfall == 0:
        for item, row in zip(items, matched):
            _apply_requested_quantity(row, item)
        return list(matched)
    if shortfall < 0:
        return list(matched)

    rows_by_key: dict[str, list[MatchedItem]] = {}
    for row in matched:
        rows_by_key.setdefault(normalize_text(row.requested_item), []).append(row)

    omitted: list[RequestedItem] = []
    for item in items:
        rows = rows_by_key.get(normalize_text(item.item))
        if rows:
            _apply_requested_quantity(rows.pop(0), item)
        else:
            omitted.append(item)

    logger.warning(
        "matcher_items_missing",
        requested=len(items),
        returned=len(matched),
        missing=[item.item for item in omitted[:shortfall]]
    )

    return list(matched) + [
        MatchedItem(
            requested_item=item.item,
            quantity=item.quantity,
            matched=False,
            notes=item.notes
        )
        for item in omitted[:shortfall]
    ]


class QuoteService:
    """
    Build quotes for school-supply lists.

    Collaborators are injected for tests; defaults come from settings and
    the process-wide catalog.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        prefilter: Optional[CatalogPreFilterService] = None,
        request_builder: Optional[MatchRequestBuilder] = None,
        matcher: Optional[ClaudeMatcherService] = None,
        override_engine: Optional[OverrideRuleEngine] = None,
        extraction_service: Optional[ListExtractionService] = None
    ):
        if catalog is None:
            from config.catalog import get_catalog
            catalog = get_catalog()
        self.catalog = catalog
        self.prefilter = prefilter or CatalogPreFilterService(
            max_results=settings.shortlist_max_results,
            min_scored=settings.shortlist_min_scored,
            backfill_target=settings.shortlist_backfill_target
        )
        self.request_builder = request_builder or MatchRequestBuilder(
            max_catalog_chars=settings.prompt_max_catalog_chars
        )
        self.matcher = matcher or get_claude_matcher_service()
        self.override_engine = override_engine or OverrideRuleEngine(catalog)
        self.extraction_service = extraction_service or get_list_extraction_service()

    # ===================
    # QUOTE
    # ===================

    async def build_quote(
        self,
        items: Sequence[RequestedItem],
        image: Optional[ImageInput] = None
    ) -> QuoteResponse:
        """
        Quote an already-extracted list.

        Args:
            items: Requested items in list order
            image: Photo of the list, passed to the matcher as context

        Returns:
            QuoteResponse with per-item matches and the summary

        Raises:
            MatcherError: Matching failed (see subclasses)
        """
        items = list(items)
        logger.info("quote_started", items=len(items), with_image=image is not None)

        shortlist = self.prefilter.pre_filter(items, self.catalog)

        if not items:
            logger.info("quote_empty_list", shortlist=len(shortlist))
            return QuoteResponse(summary=summarize([]), items=[])

        request = self.request_builder.build(shortlist, items)
        matched = await self.matcher.match(request, image=image)

        matched = reconcile_with_request(items, matched)
        matched = resolve_catalog_references(matched, self.catalog)
        matched = self.override_engine.apply(matched)

        summary = summarize(matched)
        logger.info(
            "quote_completed",
            total_items=summary.total_items,
            found_items=summary.found_items,
            in_store_items=summary.in_store_items,
            not_found_items=summary.not_found_items,
            coverage_percent=summary.coverage_percent
        )
        return QuoteResponse(summary=summary, items=matched)

    async def extract_items(
        self,
        content: bytes,
        content_type: Optional[str]
    ) -> tuple[list[RequestedItem], Optional[ImageInput]]:
        """
        Read the requested items from an uploaded file.

        Returns:
            Tuple of (items, image) where image is set for photo uploads

        Raises:
            UnsupportedFileTypeError: Unknown file type
            ListExtractionError: Nothing readable in the file
        """
        text = self.extraction_service.extract_text(content, content_type)

        if text is None:
            image = ImageInput(data=content, media_type=base_media_type(content_type))
            items = await self.matcher.extract_items_from_image(image)
        else:
            image = None
            items = await self.matcher.extract_items_from_text(text)

        if not items:
            raise ListExtractionError("No items found in the list")
        return items, image

    async def quote_upload(
        self,
        content: bytes,
        content_type: Optional[str]
    ) -> QuoteResponse:
        """
        Quote an uploaded list file.

        Args:
            content: File bytes
            content_type: Upload media type

        Returns:
            QuoteResponse
        """
        items, image = await self.extract_items(content, content_type)
        return await self.build_quote(items, image=image)


# Singleton instance
_quote_service: Optional[QuoteService] = None


def get_quote_service() -> QuoteService:
    """Get or create QuoteService instance."""
    global _quote_service
    if _quote_service is None:
        _quote_service = QuoteService()
    return _quote_service
