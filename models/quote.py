"""
Quote schemas: requested list items, matched items and the quote summary.

MatchedItem is created from the matcher's JSON, mutated in place by the
override engine, then read by the aggregator. All mutations go through the
helpers below so that subtotal == unit_price * quantity always holds.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator

from models.base import CamelSchema, Money
from models.catalog import CatalogProduct


class Confidence(str, Enum):
    """How sure the matcher is about a match."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def coerce_quantity(v) -> int:
    """Missing, zero or unparseable quantities mean one unit."""
    if v is None or v == "":
        return 1
    try:
        v = int(float(v))
    except (TypeError, ValueError, OverflowError):
        return 1
    return v if v >= 1 else 1


class RequestedItem(CamelSchema):
    """
    One line of the uploaded school-supply list.

    Created by list extraction; quantity defaults to 1 when the list
    does not say.
    """

    item: str = Field(..., min_length=1, description="Item as written in the list")
    quantity: int = Field(1, ge=1, description="Requested units")
    notes: Optional[str] = Field(None, description="Extra details (color, size, brand)")

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v):
        return coerce_quantity(v)

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class MatchedItem(CamelSchema):
    """
    A requested item resolved (or not) against the catalog.

    Invariants:
        - subtotal == unit_price * quantity
        - matched is False → catalog fields are None, unit_price == subtotal == 0
    """

    requested_item: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)
    matched: bool = False
    catalog_id: Optional[int] = None
    catalog_sku: Optional[str] = None
    catalog_name: Optional[str] = None
    catalog_slug: Optional[str] = None
    unit_price: Money = Decimal("0")
    subtotal: Money = Decimal("0")
    confidence: Confidence = Confidence.LOW
    in_store_only: bool = False
    notes: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def default_quantity(cls, v):
        """The matcher answers 0 or null for rows it could not match."""
        return coerce_quantity(v)

    @field_validator("catalog_sku", "catalog_name", "catalog_slug", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("unit_price", mode="before")
    @classmethod
    def null_price(cls, v):
        return Decimal("0") if v is None or v == "" else v

    @field_validator("confidence", mode="before")
    @classmethod
    def coerce_confidence(cls, v):
        """The matcher sometimes answers 'High', 'alta' or nothing at all."""
        if isinstance(v, Confidence):
            return v
        value = str(v or "").strip().lower()
        aliases = {"alta": "high", "media": "medium", "baja": "low"}
        value = aliases.get(value, value)
        if value in {c.value for c in Confidence}:
            return value
        return Confidence.LOW

    @model_validator(mode="after")
    def enforce_invariants(self) -> "MatchedItem":
        if not self.matched:
            self._clear_reference()
        self.recompute_subtotal()
        return self

    # ===================
    # MUTATION HELPERS
    # ===================

    def _clear_reference(self) -> None:
        self.catalog_id = None
        self.catalog_sku = None
        self.catalog_name = None
        self.catalog_slug = None
        self.unit_price = Decimal("0")
        self.in_store_only = False

    def recompute_subtotal(self) -> None:
        """Recalculate subtotal from unit price and quantity."""
        self.subtotal = Decimal(self.unit_price) * self.quantity

    def assign_product(
        self,
        product: CatalogProduct,
        in_store_only: Optional[bool] = None
    ) -> None:
        """
        Point this item at a catalog product.

        Args:
            product: Catalog product to take id/sku/name/slug/price from
            in_store_only: Override the in-store flag (None keeps current value)
        """
        self.matched = True
        self.catalog_id = product.id
        self.catalog_sku = product.sku
        self.catalog_name = product.name
        self.catalog_slug = product.slug
        self.unit_price = product.price
        if in_store_only is not None:
            self.in_store_only = in_store_only
        self.recompute_subtotal()

    def mark_unmatched(self) -> None:
        """Drop the catalog reference and zero the price."""
        self.matched = False
        self._clear_reference()
        self.recompute_subtotal()


class QuoteSummary(CamelSchema):
    """Totals shown at the top of the quote."""

    total_items: int = 0
    found_items: int = 0
    in_store_items: int = 0
    not_found_items: int = 0
    coverage_percent: int = Field(0, ge=0, le=100)
    estimated_total: Money = Decimal("0")


class QuoteResponse(CamelSchema):
    """Response for POST /api/quotes."""

    success: bool = True
    summary: QuoteSummary
    items: list[MatchedItem]


class QuoteItemsRequest(CamelSchema):
    """Request body for quoting an already-extracted list."""

    items: list[RequestedItem] = Field(default_factory=list)
