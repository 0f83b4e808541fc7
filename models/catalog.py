"""
Catalog schemas.

Products are loaded once at startup (see config/catalog.py) and are
immutable for the lifetime of the process.
"""

from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from models.base import BaseSchema, CamelSchema, Money


class CatalogProduct(BaseSchema):
    """
    A product from the store catalog.

    stock == 0 means the product cannot be fulfilled online.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        from_attributes=True,
    )

    id: int = Field(..., description="Catalog product ID (unique)")
    sku: Optional[str] = Field(None, description="Store SKU (unique when present)")
    name: str = Field(..., min_length=1, description="Human-readable product name")
    price: Money = Field(..., ge=0, description="Unit price")
    stock: int = Field(0, ge=0, description="Units available online")
    slug: Optional[str] = Field(None, description="URL-safe identifier")

    @field_validator("sku", "slug", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Store exports use empty strings and numbers for missing/numeric SKUs."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("stock", mode="before")
    @classmethod
    def stock_not_negative(cls, v):
        """Unlimited/unknown stock comes through as null; negative counts as sold out."""
        if v is None or v == "":
            return 0
        v = int(v)
        return max(v, 0)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0


class ScoredProduct(BaseSchema):
    """Catalog product with a pre-filter relevance score (per request only)."""

    product: CatalogProduct
    score: int = Field(0, ge=0)


class CatalogProductResponse(CamelSchema):
    """Catalog product as exposed by GET /api/catalog."""

    id: int
    sku: Optional[str] = None
    name: str
    price: Money = Decimal("0")
    stock: int = 0
    slug: Optional[str] = None
