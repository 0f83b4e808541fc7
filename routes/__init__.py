"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.quotes import router as quotes_router
from routes.catalog import router as catalog_router

__all__ = [
    "quotes_router",
    "catalog_router",
]
