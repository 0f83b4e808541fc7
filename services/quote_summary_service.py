"""
Quote summary aggregation.

Buckets:
    found      matched, can be bought online
    in_store   matched, only sold at the physical store
    not_found  no catalog product

The estimated total only counts found items: in-store products are priced
per sheet/meter at the counter, so the online total leaves them out.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from models.quote import MatchedItem, QuoteSummary


def coverage_percent(covered: int, total: int) -> int:
    """
    Share of the list we can supply, as a whole percentage.

    Half rounds up (2 of 3 → 67, 1 of 8 → 13). An empty list is 0.
    """
    if total <= 0:
        return 0
    ratio = Decimal(100 * covered) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def summarize(items: Sequence[MatchedItem]) -> QuoteSummary:
    """
    Build the quote summary.

    Args:
        items: Final matched items (after overrides)

    Returns:
        QuoteSummary
    """
    found = [i for i in items if i.matched and not i.in_store_only]
    in_store = [i for i in items if i.matched and i.in_store_only]
    not_found = [i for i in items if not i.matched]

    return QuoteSummary(
        total_items=len(items),
        found_items=len(found),
        in_store_items=len(in_store),
        not_found_items=len(not_found),
        coverage_percent=coverage_percent(len(found) + len(in_store), len(items)),
        estimated_total=sum((i.subtotal for i in found), Decimal("0"))
    )
