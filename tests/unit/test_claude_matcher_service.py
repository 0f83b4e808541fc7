"""
Unit tests for Claude Matcher Service.

Tests:
1. Defensive response parsing
2. Retry policy (transient vs permanent errors, delays)
3. Matching and extraction calls against a fake client
"""

import asyncio
from decimal import Decimal

import anthropic
import httpx
import pytest

from exceptions import (
    MatcherError,
    MatcherNotConfiguredError,
    MatcherParseError,
    MatcherTransientError,
)
from models.quote import Confidence, RequestedItem
from services.claude_matcher_service import (
    ClaudeMatcherService,
    ImageInput,
    RetryPolicy,
    extract_json_array,
    is_transient,
    media_type_is_image,
    parse_matched_items,
    parse_requested_items,
    server_retry_after,
)
from services.match_request_service import MatchRequestBuilder

API_URL = "https://api.anthropic.com/v1/messages"


def api_status_error(cls, status_code: int, headers: dict = None):
    """Build an Anthropic status error the way the SDK does."""
    response = httpx.Response(
        status_code,
        headers=headers or {},
        request=httpx.Request("POST", API_URL),
    )
    return cls(f"Error code: {status_code}", response=response, body=None)


def rate_limited(retry_after: str = None):
    headers = {"retry-after": retry_after} if retry_after is not None else {}
    return api_status_error(anthropic.RateLimitError, 429, headers)


def overloaded():
    return api_status_error(anthropic.InternalServerError, 529)


def connection_error():
    return anthropic.APIConnectionError(request=httpx.Request("POST", API_URL))


def bad_request():
    return api_status_error(anthropic.BadRequestError, 400)


MATCH_RESPONSE = """[
  {"requestedItem": "birome", "quantity": 2, "matched": true, "catalogId": 1,
   "catalogSku": "BIC-AZ", "catalogName": "Bolígrafo Bic Cristal Azul",
   "unitPrice": 450, "subtotal": 900, "confidence": "high"}
]"""


@pytest.fixture
def match_request():
    return MatchRequestBuilder().build([], [RequestedItem(item="birome", quantity=2)])


# ===================
# TEST 1: PARSING
# ===================

class TestExtractJsonArray:
    """Tests for extract_json_array function."""

    def test_plain_array(self):
        assert extract_json_array('[{"a": 1}]') == [{"a": 1}]

    def test_code_fence(self):
        """```json fences are stripped."""
        text = '```json\n[{"item": "regla"}]\n```'
        assert extract_json_array(text) == [{"item": "regla"}]

    def test_chatter_around_array(self):
        """Text before and after the array is ignored."""
        text = 'Acá está el resultado:\n[{"item": "regla"}]\nEspero que sirva.'
        assert extract_json_array(text) == [{"item": "regla"}]

    def test_no_array(self):
        """A response without an array is a parse error."""
        with pytest.raises(MatcherParseError) as exc_info:
            extract_json_array("No encontré productos.")
        assert exc_info.value.code == "MATCHER_PARSE_ERROR"
        assert exc_info.value.status_code == 502

    def test_invalid_json(self):
        with pytest.raises(MatcherParseError):
            extract_json_array('[{"item": "regla",}')

    def test_empty_response(self):
        with pytest.raises(MatcherParseError):
            extract_json_array("")


class TestParseMatchedItems:
    """Tests for parse_matched_items function."""

    def test_parses_camel_case(self):
        """Matcher JSON becomes MatchedItems."""
        items = parse_matched_items(MATCH_RESPONSE)

        assert len(items) == 1
        item = items[0]
        assert item.requested_item == "birome"
        assert item.matched is True
        assert item.catalog_id == 1
        assert item.unit_price == Decimal("450")
        assert item.subtotal == Decimal("900")
        assert item.confidence == Confidence.HIGH

    def test_subtotal_recomputed(self):
        """The matcher's arithmetic is not trusted."""
        text = ('[{"requestedItem": "regla", "quantity": 3, "matched": true, "catalogId": 7, '
                '"unitPrice": 500, "subtotal": 999}]')
        assert parse_matched_items(text)[0].subtotal == Decimal("1500")

    def test_unmatched_fields_nulled(self):
        """matched:false clears any catalog reference the matcher left behind."""
        text = ('[{"requestedItem": "colorante vegetal", "quantity": 1, "matched": false, '
                '"catalogId": 99, "catalogName": "Algo", "unitPrice": 300, "subtotal": 300}]')
        item = parse_matched_items(text)[0]

        assert item.matched is False
        assert item.catalog_id is None
        assert item.catalog_name is None
        assert item.unit_price == Decimal("0")
        assert item.subtotal == Decimal("0")

    def test_unmatched_zero_quantity_parses(self):
        text = '[{"requestedItem": "colorante vegetal", "quantity": 0, "matched": false, "catalogId": null}]'
        [item] = parse_matched_items(text)

        assert item.quantity == 1
        assert item.subtotal == Decimal("0")

    @pytest.mark.parametrize("raw,expected", [
        ("High", Confidence.HIGH),
        ("media", Confidence.MEDIUM),
        ("baja", Confidence.LOW),
        ("seguro", Confidence.LOW),
        (None, Confidence.LOW),
    ])
    def test_confidence_coerced(self, raw, expected):
        text = f'[{{"requestedItem": "regla", "matched": false, "confidence": {json_value(raw)}}}]'
        assert parse_matched_items(text)[0].confidence == expected

    def test_element_not_object(self):
        """A non-object element rejects the response with its index."""
        with pytest.raises(MatcherParseError) as exc_info:
            parse_matched_items('[{"requestedItem": "regla"}, "birome"]')
        assert exc_info.value.details["index"] == 1

    def test_missing_requested_item(self):
        with pytest.raises(MatcherParseError) as exc_info:
            parse_matched_items('[{"matched": true, "catalogId": 1}]')
        assert exc_info.value.details["index"] == 0


def json_value(value):
    return "null" if value is None else f'"{value}"'


class TestParseRequestedItems:
    """Tests for parse_requested_items function."""

    def test_defaults_and_blank_rows(self):
        """Missing quantity is 1; blank items are skipped."""
        text = ('[{"item": "birome azul", "quantity": 2, "notes": "trazo fino"}, '
                '{"item": "  "}, {"item": "regla", "quantity": null}, {"item": "goma", "quantity": "3"}]')

        items = parse_requested_items(text)

        assert [(i.item, i.quantity) for i in items] == [("birome azul", 2), ("regla", 1), ("goma", 3)]
        assert items[0].notes == "trazo fino"

    def test_zero_quantity_is_one(self):
        assert parse_requested_items('[{"item": "regla", "quantity": 0}]')[0].quantity == 1


# ===================
# TEST 2: RETRY POLICY
# ===================

class TestTransientClassification:
    """Tests for is_transient and server_retry_after."""

    @pytest.mark.parametrize("error_factory", [rate_limited, overloaded, connection_error])
    def test_transient_errors(self, error_factory):
        assert is_transient(error_factory()) is True

    def test_bad_request_not_transient(self):
        assert is_transient(bad_request()) is False

    def test_plain_exception_not_transient(self):
        assert is_transient(ValueError("boom")) is False

    def test_retry_after_header(self):
        assert server_retry_after(rate_limited("3")) == 3.0
        assert server_retry_after(rate_limited()) is None
        assert server_retry_after(rate_limited("soon")) is None


class TestRetryPolicy:
    """Tests for RetryPolicy.delay_for."""

    def test_delay_table(self):
        """Delays follow the table; the last value repeats."""
        policy = RetryPolicy(max_attempts=6, delays=(2.0, 4.0, 8.0))
        error = overloaded()
        assert [policy.delay_for(n, error) for n in (1, 2, 3, 4)] == [2.0, 4.0, 8.0, 8.0]

    def test_rate_limit_honors_retry_after(self):
        policy = RetryPolicy()
        assert policy.delay_for(1, rate_limited("1")) == 1.0

    def test_retry_after_capped(self):
        policy = RetryPolicy(max_delay=30.0)
        assert policy.delay_for(1, rate_limited("120")) == 30.0

    def test_empty_table(self):
        assert RetryPolicy(delays=()).delay_for(1, overloaded()) == 0.0


# ===================
# TEST 3: API CALLS
# ===================

class TestMatch:
    """Tests for ClaudeMatcherService.match with retries."""

    def test_success_first_try(self, matcher, fake_claude_client, recording_sleep, match_request):
        fake_claude_client.queue(MATCH_RESPONSE)

        items = asyncio.run(matcher.match(match_request))

        assert items[0].catalog_name == "Bolígrafo Bic Cristal Azul"
        assert fake_claude_client.messages.create.await_count == 1
        assert recording_sleep.delays == []

    def test_sends_prompt_to_model(self, matcher, fake_claude_client, match_request):
        fake_claude_client.queue(MATCH_RESPONSE)

        asyncio.run(matcher.match(match_request))

        kwargs = fake_claude_client.messages.create.await_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"][0]["content"] == match_request.prompt

    def test_retries_rate_limit_then_succeeds(self, matcher, fake_claude_client, recording_sleep, match_request):
        """A 429 is retried after the server's retry-after."""
        fake_claude_client.queue(rate_limited("1"), MATCH_RESPONSE)

        items = asyncio.run(matcher.match(match_request))

        assert len(items) == 1
        assert fake_claude_client.messages.create.await_count == 2
        assert recording_sleep.delays == [1.0]

    def test_succeeds_on_last_attempt(self, matcher, fake_claude_client, recording_sleep, match_request):
        """Three overloads then success: four attempts, delays 2, 4, 8."""
        fake_claude_client.queue(overloaded(), overloaded(), connection_error(), MATCH_RESPONSE)

        items = asyncio.run(matcher.match(match_request))

        assert len(items) == 1
        assert fake_claude_client.messages.create.await_count == 4
        assert recording_sleep.delays == [2.0, 4.0, 8.0]

    def test_gives_up_after_max_attempts(self, matcher, fake_claude_client, recording_sleep, match_request):
        """Four transient failures raise MatcherTransientError."""
        fake_claude_client.queue(overloaded(), overloaded(), overloaded(), overloaded())

        with pytest.raises(MatcherTransientError) as exc_info:
            asyncio.run(matcher.match(match_request))

        assert exc_info.value.code == "MATCHER_UNAVAILABLE"
        assert exc_info.value.details["attempts"] == 4
        assert fake_claude_client.messages.create.await_count == 4
        assert recording_sleep.delays == [2.0, 4.0, 8.0]

    def test_permanent_error_not_retried(self, matcher, fake_claude_client, recording_sleep, match_request):
        """A 400 propagates immediately as MatcherError."""
        fake_claude_client.queue(bad_request())

        with pytest.raises(MatcherError) as exc_info:
            asyncio.run(matcher.match(match_request))

        assert not isinstance(exc_info.value, MatcherTransientError)
        assert fake_claude_client.messages.create.await_count == 1
        assert recording_sleep.delays == []

    def test_parse_error_not_retried(self, matcher, fake_claude_client, match_request):
        """Garbage output is a parse error, not a retry."""
        fake_claude_client.queue("Lo siento, no puedo ayudar con eso.")

        with pytest.raises(MatcherParseError):
            asyncio.run(matcher.match(match_request))

        assert fake_claude_client.messages.create.await_count == 1

    def test_with_image_sends_image_block(self, matcher, fake_claude_client, match_request):
        fake_claude_client.queue(MATCH_RESPONSE)
        image = ImageInput(data=b"\x89PNG", media_type="image/png")

        asyncio.run(matcher.match(match_request, image=image))

        content = fake_claude_client.messages.create.await_args.kwargs["messages"][0]["content"]
        assert content[0]["type"] == "image"
        assert content[0]["source"]["media_type"] == "image/png"
        assert content[1] == {"type": "text", "text": match_request.prompt}

    def test_not_configured(self, matcher, match_request):
        matcher.client = None
        assert matcher.available is False

        with pytest.raises(MatcherNotConfiguredError):
            asyncio.run(matcher.match(match_request))


class TestExtraction:
    """Tests for list extraction calls."""

    def test_extract_from_text(self, matcher, fake_claude_client):
        fake_claude_client.queue('[{"item": "birome azul", "quantity": 2}, {"item": "regla"}]')

        items = asyncio.run(matcher.extract_items_from_text("2 biromes azules\n1 regla"))

        assert [(i.item, i.quantity) for i in items] == [("birome azul", 2), ("regla", 1)]
        prompt = fake_claude_client.messages.create.await_args.kwargs["messages"][0]["content"]
        assert "2 biromes azules" in prompt

    def test_extract_from_image(self, matcher, fake_claude_client):
        fake_claude_client.queue('```json\n[{"item": "plasticola", "quantity": 1}]\n```')
        image = ImageInput(data=b"\xff\xd8\xff", media_type="image/jpeg")

        items = asyncio.run(matcher.extract_items_from_image(image))

        assert items[0].item == "plasticola"
        content = fake_claude_client.messages.create.await_args.kwargs["messages"][0]["content"]
        assert content[0]["type"] == "image"
        assert content[0]["source"]["data"] == "/9j/"

    def test_media_type_is_image(self):
        assert media_type_is_image("image/jpeg") is True
        assert media_type_is_image("IMAGE/PNG") is True
        assert media_type_is_image("application/pdf") is False
        assert media_type_is_image(None) is False
