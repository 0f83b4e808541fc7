"""
List text extraction.

Turns an uploaded list file into plain text for the extraction prompt.
Images are not read here: they go straight to Claude vision.

Supported:
    text/plain   UTF-8, latin-1 fallback (Windows notepad exports)
    PDF          pdfplumber, native text only
    DOCX         python-docx, paragraphs then table cells
"""

from io import BytesIO
from typing import Optional

import pdfplumber
import structlog
from docx import Document

from config.settings import settings
from exceptions import ListExtractionError, UnsupportedFileTypeError
from services.claude_matcher_service import IMAGE_MEDIA_TYPES, media_type_is_image

logger = structlog.get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain"
DOCX_MEDIA_TYPES = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    # Some browsers label .docx uploads as the legacy Word type
    "application/msword",
)

SUPPORTED_MEDIA_TYPES = (TEXT_MEDIA_TYPE, PDF_MEDIA_TYPE) + DOCX_MEDIA_TYPES + IMAGE_MEDIA_TYPES


def base_media_type(content_type: Optional[str]) -> str:
    """'text/plain; charset=utf-8' → 'text/plain'"""
    return (content_type or "").split(";", 1)[0].strip().lower()


class ListExtractionService:
    """Extract raw text from uploaded list files."""

    def __init__(self, min_text_chars: Optional[int] = None):
        self.min_text_chars = (
            settings.min_extracted_text_chars if min_text_chars is None else min_text_chars
        )

    def is_supported(self, content_type: Optional[str]) -> bool:
        return base_media_type(content_type) in SUPPORTED_MEDIA_TYPES

    def extract_text(self, content: bytes, content_type: Optional[str]) -> Optional[str]:
        """
        Extract the list text from an uploaded file.

        Args:
            content: File bytes
            content_type: Upload media type

        Returns:
            Extracted text, or None for images (read by the vision model)

        Raises:
            UnsupportedFileTypeError: Unknown media type
            ListExtractionError: File unreadable or text too short
        """
        media_type = base_media_type(content_type)

        if media_type_is_image(media_type):
            return None

        if media_type == TEXT_MEDIA_TYPE:
            text = self._decode_text(content)
        elif media_type == PDF_MEDIA_TYPE:
            text = self._extract_with_pdfplumber(content)
        elif media_type in DOCX_MEDIA_TYPES:
            text = self._extract_with_docx(content)
        else:
            logger.warning("unsupported_file_type", content_type=content_type)
            raise UnsupportedFileTypeError(content_type)

        text = text.strip()
        logger.info(
            "list_text_extracted",
            media_type=media_type,
            file_size=len(content),
            text_length=len(text)
        )

        if len(text) < self.min_text_chars:
            raise ListExtractionError(
                "Could not read text from the file",
                details={"media_type": media_type, "text_length": len(text)}
            )
        return text

    # ===================
    # FORMAT READERS
    # ===================

    def _decode_text(self, content: bytes) -> str:
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError:
            logger.debug("text_not_utf8_using_latin1")
            return content.decode("latin-1")

    def _extract_with_pdfplumber(self, pdf_bytes: bytes) -> str:
        """
        Extract text using pdfplumber.

        Scanned lists have no text layer and come back empty; the caller
        reports them as unreadable (users can upload a photo instead).
        """
        all_text = ""
        try:
            with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        all_text += page_text + "\n"
        except Exception as e:
            logger.error("pdf_extraction_failed", error=str(e))
            raise ListExtractionError("Could not open the PDF", details={"error": str(e)})
        return all_text

    def _extract_with_docx(self, docx_bytes: bytes) -> str:
        """Paragraph text, then one line per table row (lists are often tables)."""
        try:
            doc = Document(BytesIO(docx_bytes))
        except Exception as e:
            logger.error("docx_extraction_failed", error=str(e))
            raise ListExtractionError(
                "Could not open the Word document (save it as .docx)",
                details={"error": str(e)}
            )

        lines: list[str] = []
        for para in doc.paragraphs:
            text = para.text.strip()
            if text:
                lines.append(text)

        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                row_text = " ".join(c for c in cells if c)
                if row_text:
                    lines.append(row_text)

        return "\n".join(lines)


# Singleton instance
_list_extraction_service: Optional[ListExtractionService] = None


def get_list_extraction_service() -> ListExtractionService:
    """Get or create ListExtractionService instance."""
    global _list_extraction_service
    if _list_extraction_service is None:
        _list_extraction_service = ListExtractionService()
    return _list_extraction_service
