"""
Configuration module.

Exports:
    settings: Application settings instance
    get_settings: Function to get settings (for dependency injection)
    get_catalog: Function to get the process-wide read-only catalog
    check_catalog: Health check function
"""

from config.settings import settings, get_settings, Settings
from config.catalog import (
    Catalog,
    get_catalog,
    load_catalog,
    check_catalog,
    reset_catalog,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",
    "Settings",

    # Catalog
    "Catalog",
    "get_catalog",
    "load_catalog",
    "check_catalog",
    "reset_catalog",
]
