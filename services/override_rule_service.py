"""
Override rule engine and catalog reference resolution.

Runs after the matcher. Resolution first makes every matched item point at
a real catalog product; the override rules then force known-good answers for
items the matcher keeps getting wrong.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import structlog

from config.catalog import Catalog
from config.override_rules import OVERRIDE_RULES
from models.catalog import CatalogProduct
from models.override import OverrideRule
from models.quote import MatchedItem

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ShadowedExample:
    """An example that does not reach the rule it documents."""
    rule: str
    example: str
    captured_by: Optional[str]


def first_matching_rule(
    rules: Sequence[OverrideRule],
    requested_item: str
) -> Optional[OverrideRule]:
    """First rule whose pattern matches, or None."""
    for rule in rules:
        if rule.matches(requested_item):
            return rule
    return None


def find_shadowed_examples(
    rules: Sequence[OverrideRule] = OVERRIDE_RULES
) -> list[ShadowedExample]:
    """
    Check rule ordering against the rules' own examples.

    An example is shadowed when the first matching rule is not the rule that
    lists it (an earlier, more general rule captures it) or when no rule
    matches it at all.

    Returns:
        Shadowed examples, empty when the ordering is consistent
    """
    shadowed: list[ShadowedExample] = []
    for rule in rules:
        for example in rule.examples:
            winner = first_matching_rule(rules, example)
            if winner is not rule:
                shadowed.append(ShadowedExample(
                    rule=rule.name,
                    example=example,
                    captured_by=winner.name if winner else None
                ))
    return shadowed


def find_missing_targets(
    catalog: Catalog,
    rules: Sequence[OverrideRule] = OVERRIDE_RULES
) -> list[OverrideRule]:
    """Rules whose target product is not in the catalog."""
    return [rule for rule in rules if catalog.find_by_name(rule.target_name) is None]


def resolve_catalog_references(
    items: Sequence[MatchedItem],
    catalog: Catalog
) -> list[MatchedItem]:
    """
    Re-anchor matched items on real catalog products.

    The matcher echoes SKU, name and ID from the prompt, and sometimes gets
    one of them wrong. Lookup order is SKU, exact name, then ID. On a hit
    the catalog's id, sku, name, slug and price replace the matcher's. When
    nothing resolves the item becomes unmatched.

    Args:
        items: Matched items from the matcher (mutated in place)
        catalog: Store catalog

    Returns:
        The same items
    """
    for item in items:
        if not item.matched:
            continue

        product: Optional[CatalogProduct] = (
            catalog.find_by_sku(item.catalog_sku)
            or catalog.find_by_name(item.catalog_name)
            or catalog.find_by_id(item.catalog_id)
        )

        if product is None:
            logger.warning(
                "catalog_lookup_miss",
                requested_item=item.requested_item,
                catalog_id=item.catalog_id,
                catalog_sku=item.catalog_sku,
                catalog_name=item.catalog_name
            )
            item.mark_unmatched()
            continue

        if product.id != item.catalog_id:
            logger.debug(
                "catalog_reference_corrected",
                requested_item=item.requested_item,
                reported_id=item.catalog_id,
                resolved_id=product.id
            )
        item.assign_product(product)

    return list(items)


class OverrideRuleEngine:
    """
    Apply hardcoded corrections to matched items.

    For each item only the first matching rule applies. Targets are looked
    up by name when applied, so a rule pointing at a product that left the
    catalog degrades to a logged warning instead of a stale ID.
    """

    def __init__(
        self,
        catalog: Catalog,
        rules: Sequence[OverrideRule] = OVERRIDE_RULES
    ):
        self.catalog = catalog
        self.rules = tuple(rules)

    def apply(self, items: Sequence[MatchedItem]) -> list[MatchedItem]:
        """
        Apply the rules in place.

        Applying twice gives the same result as applying once.

        Args:
            items: Matched items (mutated in place)

        Returns:
            The same items
        """
        applied = 0
        for item in items:
            rule = first_matching_rule(self.rules, item.requested_item)
            if rule is None:
                continue

            product = self.catalog.find_by_name(rule.target_name)
            if product is None:
                logger.warning(
                    "override_target_missing",
                    rule=rule.name,
                    target_name=rule.target_name,
                    requested_item=item.requested_item
                )
                item.recompute_subtotal()
                continue

            previous_id = item.catalog_id
            item.assign_product(product, in_store_only=rule.in_store_only)
            applied += 1

            if previous_id != product.id:
                logger.info(
                    "override_applied",
                    rule=rule.name,
                    requested_item=item.requested_item,
                    previous_id=previous_id,
                    catalog_id=product.id
                )

        logger.debug("overrides_completed", items=len(items), applied=applied)
        return list(items)

