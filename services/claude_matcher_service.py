"""
Claude service for list extraction and catalog matching.

Claude is used twice per quote:
    1. Extraction: read the uploaded list (text or photo) into items
    2. Matching: pick a catalog product for every item from the shortlist

Responses are free text: code fences are stripped, the array between the
first "[" and the last "]" is parsed and every element is validated into
a typed model. Rate limits and overload are retried with a
bounded delay table; everything else propagates immediately.
"""

import asyncio
import base64
import json
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

import anthropic
import structlog
from pydantic import ValidationError as PydanticValidationError

from config.settings import settings
from exceptions import (
    MatcherError,
    MatcherNotConfiguredError,
    MatcherParseError,
    MatcherTransientError,
)
from models.quote import MatchedItem, RequestedItem
from services.match_request_service import MatchRequest

logger = structlog.get_logger(__name__)

# 529 is Anthropic's "overloaded"
TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504, 529})

IMAGE_MEDIA_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

_CODE_FENCE = re.compile(r"```(?:json|JSON)?")


# ===================
# RESPONSE PARSING
# ===================

def extract_json_array(response_text: str) -> list:
    """
    Locate and parse the JSON array in a model response.

    Handles ```json fences and chatter before/after the array.

    Args:
        response_text: Raw response text

    Returns:
        Parsed list

    Raises:
        MatcherParseError: If no valid JSON array is found
    """
    cleaned = _CODE_FENCE.sub("", response_text or "").strip()

    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start == -1 or end <= start:
        logger.error("json_array_not_found", response_preview=cleaned[:500])
        raise MatcherParseError("no JSON array in response", {"preview": cleaned[:200]})

    try:
        data = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as e:
        logger.error("json_parse_failed", response_preview=cleaned[:500], error=str(e))
        raise MatcherParseError("invalid JSON array", {"error": str(e), "preview": cleaned[:200]})

    if not isinstance(data, list):
        raise MatcherParseError("response is not a JSON array")
    return data


def parse_matched_items(response_text: str) -> list[MatchedItem]:
    """
    Parse the matcher response into MatchedItems.

    Every element must be an object with at least requestedItem; anything
    else rejects the whole response.

    Raises:
        MatcherParseError: If the response or any element is invalid
    """
    rows = extract_json_array(response_text)

    items: list[MatchedItem] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise MatcherParseError("array element is not an object", {"index": index})
        try:
            items.append(MatchedItem.model_validate(row))
        except PydanticValidationError as e:
            raise MatcherParseError(
                "invalid matched item",
                {"index": index, "errors": e.errors(include_url=False, include_context=False)}
            )
    return items


def parse_requested_items(response_text: str) -> list[RequestedItem]:
    """
    Parse the extraction response into RequestedItems.

    Rows with an empty item description are dropped (blank list lines);
    rows that are not objects reject the response.

    Raises:
        MatcherParseError: If the response is not a valid array of objects
    """
    rows = extract_json_array(response_text)

    items: list[RequestedItem] = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            raise MatcherParseError("array element is not an object", {"index": index})
        if not str(row.get("item") or "").strip():
            logger.warning("extracted_item_blank", index=index)
            continue
        try:
            items.append(RequestedItem.model_validate(row))
        except PydanticValidationError as e:
            raise MatcherParseError(
                "invalid extracted item",
                {"index": index, "errors": e.errors(include_url=False, include_context=False)}
            )
    return items


# ===================
# RETRY POLICY
# ===================

def is_transient(error: Exception) -> bool:
    """Rate limits, overload, 5xx and connection problems are worth retrying."""
    if isinstance(error, anthropic.APIConnectionError):
        return True
    if isinstance(error, anthropic.APIStatusError):
        return error.status_code in TRANSIENT_STATUS_CODES
    return False


def server_retry_after(error: Exception) -> Optional[float]:
    """Seconds from a retry-after header, if the server sent one."""
    response = getattr(error, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    value = headers.get("retry-after")
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if seconds >= 0 else None


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry for transient Claude failures.

    Attributes:
        max_attempts: Total attempts including the first
        delays: Wait before retry 1, 2, 3...; the last value repeats
        max_delay: Cap for server-supplied retry-after values
    """
    max_attempts: int = 4
    delays: tuple[float, ...] = (2.0, 4.0, 8.0)
    max_delay: float = 30.0

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        return cls(
            max_attempts=settings.matcher_max_attempts,
            delays=tuple(settings.matcher_retry_delays),
            max_delay=settings.matcher_max_retry_delay
        )

    def delay_for(self, retry_number: int, error: Exception) -> float:
        """
        Seconds to wait before the given retry (1-based).

        Rate-limit responses honor the server's retry-after when present.
        """
        if isinstance(error, anthropic.RateLimitError):
            suggested = server_retry_after(error)
            if suggested is not None:
                return min(suggested, self.max_delay)
        if not self.delays:
            return 0.0
        index = min(retry_number - 1, len(self.delays) - 1)
        return self.delays[index]


@dataclass(frozen=True)
class ImageInput:
    """Photo of a list, sent to Claude as a base64 image block."""
    data: bytes
    media_type: str

    def to_content_block(self) -> dict:
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": self.media_type,
                "data": base64.b64encode(self.data).decode("utf-8")
            }
        }


# ===================
# PROMPTS
# ===================

EXTRACTION_INSTRUCTIONS = """Extraé cada ítem con su cantidad. Devolvé SOLO un JSON válido con este formato:
[{"item": "nombre del producto", "quantity": número, "notes": "detalles extra si hay"}]

Si no hay cantidad especificada, usá 1.
Ignorá encabezados, nombres de colegios, grados, fechas y texto irrelevante.
Respondé SOLO con el JSON, sin texto adicional."""

TEXT_EXTRACTION_PROMPT = """Analizá el siguiente texto que es una lista de útiles escolares.
{instructions}

TEXTO DE LA LISTA:
{text}"""

IMAGE_EXTRACTION_PROMPT = """Esta es una foto de una lista de útiles escolares.
Leé todos los productos que aparecen, incluyendo texto manuscrito o impreso.
{instructions}"""


class ClaudeMatcherService:
    """
    Claude client for list extraction and catalog matching.

    The client is created from settings unless one is injected (tests pass a
    mock with an async messages.create).
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        retry_policy: Optional[RetryPolicy] = None,
        model: Optional[str] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        if client is not None:
            self.client = client
        elif settings.matcher_configured:
            # Retries are ours (RetryPolicy), not the SDK's
            self.client = anthropic.AsyncAnthropic(
                api_key=settings.anthropic_api_key,
                timeout=settings.matcher_timeout_seconds,
                max_retries=0
            )
        else:
            self.client = None
        self.retry_policy = retry_policy or RetryPolicy.from_settings()
        self.model = model or settings.matcher_model
        self._sleep = sleep

    @property
    def available(self) -> bool:
        return self.client is not None

    # ===================
    # API CALL
    # ===================

    async def _create_message(self, content: Any, max_tokens: int, operation: str) -> str:
        """
        Send one message, retrying transient failures.

        Returns:
            Response text

        Raises:
            MatcherNotConfiguredError: No API key
            MatcherTransientError: Still failing after max_attempts
            MatcherError: Non-transient API failure
        """
        if self.client is None:
            raise MatcherNotConfiguredError()

        policy = self.retry_policy
        attempt = 0
        while True:
            attempt += 1
            try:
                response = await self.client.messages.create(
                    model=self.model,
                    max_tokens=max_tokens,
                    messages=[{"role": "user", "content": content}]
                )
                text = "".join(
                    block.text for block in response.content
                    if getattr(block, "type", "text") == "text"
                )
                logger.debug(
                    "claude_response_received",
                    operation=operation,
                    attempt=attempt,
                    response_length=len(text)
                )
                return text

            except anthropic.APIError as e:
                if not is_transient(e):
                    logger.error(
                        "claude_api_error",
                        operation=operation,
                        error=str(e),
                        error_type=type(e).__name__
                    )
                    raise MatcherError(
                        f"Claude API error: {e}",
                        details={"operation": operation, "error_type": type(e).__name__}
                    ) from e

                if attempt >= policy.max_attempts:
                    logger.error(
                        "claude_retries_exhausted",
                        operation=operation,
                        attempts=attempt,
                        error=str(e)
                    )
                    raise MatcherTransientError(attempt, str(e)) from e

                delay = policy.delay_for(attempt, e)
                logger.warning(
                    "claude_retrying",
                    operation=operation,
                    attempt=attempt,
                    delay_seconds=delay,
                    error_type=type(e).__name__
                )
                await self._sleep(delay)

    # ===================
    # EXTRACTION
    # ===================

    async def extract_items_from_text(self, text: str) -> list[RequestedItem]:
        """
        Extract list items from plain text.

        Args:
            text: Text extracted from the uploaded file

        Returns:
            Requested items in list order
        """
        logger.info("list_extraction_started", source="text", text_length=len(text))
        prompt = TEXT_EXTRACTION_PROMPT.format(instructions=EXTRACTION_INSTRUCTIONS, text=text)
        response_text = await self._create_message(
            prompt, settings.extraction_max_tokens, "extract_text"
        )
        items = parse_requested_items(response_text)
        logger.info("list_extraction_completed", source="text", items=len(items))
        return items

    async def extract_items_from_image(self, image: ImageInput) -> list[RequestedItem]:
        """
        Extract list items from a photo using Claude vision.

        Args:
            image: Uploaded image bytes and media type

        Returns:
            Requested items in list order
        """
        logger.info("list_extraction_started", source="image", image_size=len(image.data))
        content = [
            image.to_content_block(),
            {"type": "text", "text": IMAGE_EXTRACTION_PROMPT.format(instructions=EXTRACTION_INSTRUCTIONS)},
        ]
        response_text = await self._create_message(
            content, settings.extraction_max_tokens, "extract_image"
        )
        items = parse_requested_items(response_text)
        logger.info("list_extraction_completed", source="image", items=len(items))
        return items

    # ===================
    # MATCHING
    # ===================

    async def match(
        self,
        request: MatchRequest,
        image: Optional[ImageInput] = None
    ) -> list[MatchedItem]:
        """
        Match requested items against the shortlist.

        Args:
            request: Prompt built by MatchRequestBuilder
            image: Optional photo of the original list for extra context

        Returns:
            Matched items as reported by Claude (not yet overridden)

        Raises:
            MatcherParseError: Response could not be interpreted
            MatcherTransientError: Rate limited/overloaded after all retries
        """
        logger.info(
            "matching_started",
            catalog_products=request.products_included,
            prompt_length=len(request.prompt),
            with_image=image is not None
        )

        content: Any = request.prompt
        if image is not None:
            content = [image.to_content_block(), {"type": "text", "text": request.prompt}]

        response_text = await self._create_message(content, settings.matcher_max_tokens, "match")
        items = parse_matched_items(response_text)

        logger.info(
            "matching_completed",
            items=len(items),
            matched=sum(1 for i in items if i.matched)
        )
        return items


def media_type_is_image(content_type: Optional[str]) -> bool:
    return (content_type or "").lower() in IMAGE_MEDIA_TYPES


# Singleton instance
_claude_matcher: Optional[ClaudeMatcherService] = None


def get_claude_matcher_service() -> ClaudeMatcherService:
    """Get or create ClaudeMatcherService instance."""
    global _claude_matcher
    if _claude_matcher is None:
        _claude_matcher = ClaudeMatcherService()
    return _claude_matcher
