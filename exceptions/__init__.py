"""
Custom exceptions module.

Raise these from services; routes turn them into JSON with handle_error().
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    ExternalServiceError,

    # List extraction
    ListExtractionError,
    UnsupportedFileTypeError,
    FileTooLargeError,

    # Matcher
    MatcherError,
    MatcherParseError,
    MatcherTransientError,
    MatcherNotConfiguredError,

    # Catalog
    CatalogLoadError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "ExternalServiceError",

    # List extraction
    "ListExtractionError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",

    # Matcher
    "MatcherError",
    "MatcherParseError",
    "MatcherTransientError",
    "MatcherNotConfiguredError",

    # Catalog
    "CatalogLoadError",
]
