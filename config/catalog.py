"""
Catalog loading and read-only access.

The catalog is read from a static JSON export once per process and shared
by every request. It is exposed only through tuples and read-only mappings,
so concurrent requests can use it without locking.
"""

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from exceptions import CatalogLoadError
from models.catalog import CatalogProduct
from utils.text_utils import normalize_text

logger = structlog.get_logger(__name__)

BACKEND_DIR = Path(__file__).parent.parent


class Catalog:
    """
    Immutable view over the store catalog.

    Indexes:
        by_id: product ID → product
        by_sku: SKU → product
        by_name: exact name → product
        by_normalized_name: normalize_text(name) → product (first one wins)
    """

    def __init__(self, products: Iterable[CatalogProduct], source: str = "<memory>"):
        self._products: tuple[CatalogProduct, ...] = tuple(products)

        by_id: dict[int, CatalogProduct] = {}
        by_sku: dict[str, CatalogProduct] = {}
        by_name: dict[str, CatalogProduct] = {}
        by_normalized_name: dict[str, CatalogProduct] = {}

        for product in self._products:
            if product.id in by_id:
                raise CatalogLoadError(source, "duplicate product id", {"id": product.id})
            by_id[product.id] = product

            if product.sku:
                if product.sku in by_sku:
                    raise CatalogLoadError(source, "duplicate SKU", {"sku": product.sku})
                by_sku[product.sku] = product

            by_name.setdefault(product.name, product)
            by_normalized_name.setdefault(normalize_text(product.name), product)

        self.by_id: Mapping[int, CatalogProduct] = MappingProxyType(by_id)
        self.by_sku: Mapping[str, CatalogProduct] = MappingProxyType(by_sku)
        self.by_name: Mapping[str, CatalogProduct] = MappingProxyType(by_name)
        self.by_normalized_name: Mapping[str, CatalogProduct] = MappingProxyType(by_normalized_name)

    @property
    def products(self) -> tuple[CatalogProduct, ...]:
        return self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self):
        return iter(self._products)

    def find_by_name(self, name: Optional[str]) -> Optional[CatalogProduct]:
        """Exact name first, then accent/punctuation-insensitive name."""
        if not name:
            return None
        product = self.by_name.get(name.strip())
        if product is not None:
            return product
        return self.by_normalized_name.get(normalize_text(name))

    def find_by_sku(self, sku: Optional[str]) -> Optional[CatalogProduct]:
        if not sku:
            return None
        return self.by_sku.get(str(sku).strip())

    def find_by_id(self, product_id: Optional[int]) -> Optional[CatalogProduct]:
        if product_id is None:
            return None
        return self.by_id.get(product_id)


def resolve_catalog_path(path: str) -> Path:
    """Relative paths are relative to the backend directory."""
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = BACKEND_DIR / candidate
    return candidate


def load_catalog(path: str) -> Catalog:
    """
    Load and validate the catalog JSON file.

    Args:
        path: Path to a JSON array of product objects

    Returns:
        Catalog

    Raises:
        CatalogLoadError: If the file is missing, malformed or has duplicates
    """
    catalog_file = resolve_catalog_path(path)
    logger.info("loading_catalog", path=str(catalog_file))

    try:
        raw = json.loads(catalog_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CatalogLoadError(str(catalog_file), "file not found")
    except json.JSONDecodeError as e:
        raise CatalogLoadError(str(catalog_file), "invalid JSON", {"error": str(e)})

    if not isinstance(raw, list):
        raise CatalogLoadError(str(catalog_file), "expected a JSON array of products")

    products = []
    for index, row in enumerate(raw):
        try:
            products.append(CatalogProduct.model_validate(row))
        except PydanticValidationError as e:
            raise CatalogLoadError(
                str(catalog_file),
                f"invalid product at index {index}",
                {"errors": e.errors(include_url=False)}
            )

    catalog = Catalog(products, source=str(catalog_file))

    logger.info(
        "catalog_loaded",
        products=len(catalog),
        in_stock=sum(1 for p in catalog if p.in_stock),
        with_sku=len(catalog.by_sku)
    )
    return catalog


@lru_cache()
def get_catalog() -> Catalog:
    """
    Get the process-wide catalog.

    Loaded on first call, then cached. Call reset_catalog() to reload.
    """
    return load_catalog(settings.catalog_path)


def check_catalog() -> dict:
    """
    Check catalog health.

    Returns:
        dict: Catalog status with details
    """
    try:
        catalog = get_catalog()
        return {
            "status": "healthy",
            "products_count": len(catalog),
            "in_stock_count": sum(1 for p in catalog if p.in_stock),
        }
    except CatalogLoadError as e:
        return {
            "status": "unhealthy",
            "error": e.message
        }


def reset_catalog():
    """
    Reset the cached catalog.

    Call this after replacing the catalog file.
    """
    get_catalog.cache_clear()
    logger.info("catalog_reset")
