"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and optional details.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "MATCHER_PARSE_ERROR")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None,
        code: Optional[str] = None,
        status_code: int = 503
    ):
        super().__init__(
            code=code or f"{service.upper()}_ERROR",
            message=message,
            status_code=status_code,
            details={"service": service, **(details or {})}
        )


# ===================
# LIST EXTRACTION ERRORS
# ===================

class ListExtractionError(ValidationError):
    """The uploaded list could not be read."""

    def __init__(self, message: str = "Could not read your list", details: Optional[dict] = None):
        super().__init__(
            code="LIST_EXTRACTION_FAILED",
            message=message,
            details=details
        )


class UnsupportedFileTypeError(AppError):
    """Uploaded file type is not supported (415)."""

    def __init__(self, content_type: Optional[str]):
        super().__init__(
            code="UNSUPPORTED_FILE_TYPE",
            message="Unsupported file format",
            status_code=415,
            details={"content_type": content_type}
        )


class FileTooLargeError(AppError):
    """Uploaded file exceeds the size limit (413)."""

    def __init__(self, size: int, max_size: int):
        super().__init__(
            code="FILE_TOO_LARGE",
            message=f"File exceeds the {max_size // (1024 * 1024)} MB limit",
            status_code=413,
            details={"size": size, "max_size": max_size}
        )


# ===================
# MATCHER ERRORS
# ===================

class MatcherError(ExternalServiceError):
    """Matching service failed (non-transient)."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        code: str = "MATCHER_ERROR",
        status_code: int = 503
    ):
        super().__init__(
            service="matcher",
            message=message,
            details=details,
            code=code,
            status_code=status_code
        )


class MatcherParseError(MatcherError):
    """Matcher response could not be interpreted as the expected list."""

    def __init__(self, reason: str, details: Optional[dict] = None):
        super().__init__(
            message="Could not interpret matching results",
            details={"reason": reason, **(details or {})},
            code="MATCHER_PARSE_ERROR",
            status_code=502
        )


class MatcherTransientError(MatcherError):
    """Matcher kept failing with rate limits/overload after all retries."""

    def __init__(self, attempts: int, last_error: str):
        super().__init__(
            message="Could not reach the matching service",
            details={"attempts": attempts, "last_error": last_error},
            code="MATCHER_UNAVAILABLE",
            status_code=503
        )


class MatcherNotConfiguredError(MatcherError):
    """No API key configured for the matching service."""

    def __init__(self):
        super().__init__(
            message="Matching service not configured. Set ANTHROPIC_API_KEY.",
            code="MATCHER_NOT_CONFIGURED",
            status_code=503
        )


# ===================
# CATALOG ERRORS
# ===================

class CatalogLoadError(AppError):
    """Catalog file missing or invalid (500)."""

    def __init__(self, path: str, message: str, details: Optional[dict] = None):
        super().__init__(
            code="CATALOG_LOAD_FAILED",
            message=f"Catalog could not be loaded: {message}",
            status_code=500,
            details={"path": path, **(details or {})}
        )
