"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    CamelSchema,
    Money,
)
from models.catalog import (
    CatalogProduct,
    CatalogProductResponse,
    ScoredProduct,
)
from models.quote import (
    Confidence,
    RequestedItem,
    MatchedItem,
    QuoteSummary,
    QuoteResponse,
    QuoteItemsRequest,
)
from models.override import OverrideRule

__all__ = [
    # Base
    "BaseSchema",
    "CamelSchema",
    "Money",

    # Catalog
    "CatalogProduct",
    "CatalogProductResponse",
    "ScoredProduct",

    # Quote
    "Confidence",
    "RequestedItem",
    "MatchedItem",
    "QuoteSummary",
    "QuoteResponse",
    "QuoteItemsRequest",

    # Overrides
    "OverrideRule",
]
