"""
Quote routes.

Upload a school-supply list (text, PDF, Word or photo) and get it priced
against the store catalog.
"""

from typing import Optional

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import JSONResponse
import structlog

from config.settings import settings
from exceptions import AppError, FileTooLargeError, UnsupportedFileTypeError, ValidationError
from models.quote import QuoteItemsRequest, QuoteResponse
from services.list_extraction_service import get_list_extraction_service
from services.quote_service import get_quote_service

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/quotes", tags=["Quotes"])

# Not a registered HTTP status; nginx uses it for "client closed request"
CLIENT_CLOSED_REQUEST = 499


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


async def _client_gone(request: Request, **context) -> bool:
    """Best effort: drop the result if the client already left."""
    if await request.is_disconnected():
        logger.info("quote_client_disconnected", **context)
        return True
    return False


# ===================
# QUOTE ROUTES
# ===================

@router.post("", response_model=QuoteResponse)
async def quote_list(
    request: Request,
    lista: Optional[UploadFile] = File(None, description="School-supply list file")
):
    """
    Quote an uploaded list.

    Accepts text/plain, PDF, DOCX and JPEG/PNG/WebP/GIF photos up to the
    configured size limit (10 MB by default).
    """
    try:
        if lista is None:
            raise ValidationError("No file received", code="FILE_REQUIRED")

        if not get_list_extraction_service().is_supported(lista.content_type):
            raise UnsupportedFileTypeError(lista.content_type)

        content = await lista.read()
        if len(content) > settings.max_upload_bytes:
            raise FileTooLargeError(len(content), settings.max_upload_bytes)

        logger.info(
            "quote_upload_received",
            filename=lista.filename,
            content_type=lista.content_type,
            file_size=len(content)
        )

        quote = await get_quote_service().quote_upload(content, lista.content_type)

        if await _client_gone(request, filename=lista.filename):
            return JSONResponse(status_code=CLIENT_CLOSED_REQUEST, content=None)
        return quote

    except Exception as e:
        return handle_error(e)


@router.post("/items", response_model=QuoteResponse)
async def quote_items(request: Request, body: QuoteItemsRequest):
    """
    Quote a list that was already extracted.

    Body: {"items": [{"item": "birome azul", "quantity": 2}]}
    """
    try:
        quote = await get_quote_service().build_quote(body.items)

        if await _client_gone(request, items=len(body.items)):
            return JSONResponse(status_code=CLIENT_CLOSED_REQUEST, content=None)
        return quote

    except Exception as e:
        return handle_error(e)
