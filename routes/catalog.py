"""
Catalog routes.

Read-only view of the store catalog used for matching.
"""

from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
import structlog

from config.catalog import get_catalog
from exceptions import AppError
from models.catalog import CatalogProductResponse

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/catalog", tags=["Catalog"])


def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


@router.get("", response_model=list[CatalogProductResponse])
async def list_catalog(
    in_stock: Optional[bool] = Query(None, description="Only products with (or without) online stock")
):
    """
    List catalog products in catalog order.

    Query parameters:
    - in_stock: true for products sold online, false for out-of-stock ones
    """
    try:
        products = get_catalog().products
        if in_stock is not None:
            products = [p for p in products if p.in_stock == in_stock]
        return [CatalogProductResponse.model_validate(p) for p in products]

    except Exception as e:
        return handle_error(e)
