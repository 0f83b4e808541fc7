"""
API tests for the quote and catalog endpoints.

The quote service is patched; these tests cover request handling,
error responses and JSON shape, not matching.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from config.settings import settings
from exceptions import MatcherTransientError
from models.quote import QuoteResponse
from services.quote_summary_service import summarize
from tests.factories import MatchedItemFactory


@pytest.fixture
def quote_response() -> QuoteResponse:
    items = [
        MatchedItemFactory.create(
            requested_item="birome", quantity=2, catalog_id=1001,
            catalog_sku="BIC-CR-AZ", catalog_name="Bolígrafo Bic Cristal Azul", unit_price="450"
        ),
        MatchedItemFactory.create_unmatched(requested_item="colorante vegetal"),
    ]
    return QuoteResponse(summary=summarize(items), items=items)


@pytest.fixture
def mock_quote_service(quote_response):
    service = MagicMock()
    service.quote_upload = AsyncMock(return_value=quote_response)
    service.build_quote = AsyncMock(return_value=quote_response)
    with patch("routes.quotes.get_quote_service", return_value=service):
        yield service


def upload(test_client, content=b"2 biromes\n1 regla", content_type="text/plain", filename="lista.txt"):
    return test_client.post("/api/quotes", files={"lista": (filename, content, content_type)})


# ===================
# POST /api/quotes
# ===================

class TestQuoteUpload:
    """Tests for POST /api/quotes."""

    def test_success(self, test_client, mock_quote_service):
        response = upload(test_client)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["summary"]["totalItems"] == 2
        assert data["summary"]["coveragePercent"] == 50
        assert data["summary"]["estimatedTotal"] == 900.0
        assert data["items"][0]["catalogName"] == "Bolígrafo Bic Cristal Azul"
        assert data["items"][1]["matched"] is False
        assert data["items"][1]["catalogId"] is None
        mock_quote_service.quote_upload.assert_awaited_once()
        content, content_type = mock_quote_service.quote_upload.await_args.args
        assert content == b"2 biromes\n1 regla"
        assert content_type == "text/plain"

    def test_missing_file(self, test_client, mock_quote_service):
        response = test_client.post("/api/quotes", data={"nota": "sin archivo"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "FILE_REQUIRED"
        mock_quote_service.quote_upload.assert_not_awaited()

    def test_unsupported_type(self, test_client, mock_quote_service):
        response = upload(test_client, content=b"PK\x03\x04", content_type="application/zip", filename="lista.zip")

        assert response.status_code == 415
        assert response.json()["error"]["code"] == "UNSUPPORTED_FILE_TYPE"
        mock_quote_service.quote_upload.assert_not_awaited()

    def test_file_too_large(self, test_client, mock_quote_service):
        with patch.object(settings, "max_upload_bytes", 8):
            response = upload(test_client)

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"

    def test_photo_accepted(self, test_client, mock_quote_service):
        response = upload(test_client, content=b"\xff\xd8\xff\xe0", content_type="image/jpeg", filename="lista.jpg")

        assert response.status_code == 200

    def test_matcher_unavailable(self, test_client, mock_quote_service):
        mock_quote_service.quote_upload.side_effect = MatcherTransientError(4, "overloaded")

        response = upload(test_client)

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "MATCHER_UNAVAILABLE"

    def test_unexpected_error(self, test_client, mock_quote_service):
        mock_quote_service.quote_upload.side_effect = RuntimeError("boom")

        response = upload(test_client)

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"

    def test_client_gone(self, test_client, mock_quote_service):
        with patch("routes.quotes._client_gone", new=AsyncMock(return_value=True)):
            response = upload(test_client)

        assert response.status_code == 499


# ===================
# POST /api/quotes/items
# ===================

class TestQuoteItems:
    """Tests for POST /api/quotes/items."""

    def test_success(self, test_client, mock_quote_service):
        response = test_client.post(
            "/api/quotes/items",
            json={"items": [{"item": "birome", "quantity": 2}, {"item": "colorante vegetal"}]}
        )

        assert response.status_code == 200
        items = mock_quote_service.build_quote.await_args.args[0]
        assert [(i.item, i.quantity) for i in items] == [("birome", 2), ("colorante vegetal", 1)]

    def test_invalid_body(self, test_client, mock_quote_service):
        response = test_client.post("/api/quotes/items", json={"items": [{"quantity": 2}]})

        assert response.status_code == 422


# ===================
# CATALOG AND HEALTH
# ===================

class TestCatalogEndpoint:
    """Tests for GET /api/catalog."""

    def test_list(self, test_client, store_catalog_rows):
        response = test_client.get("/api/catalog")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == len(store_catalog_rows)
        assert data[0]["id"] == store_catalog_rows[0]["id"]
        assert data[0]["name"] == store_catalog_rows[0]["name"]

    def test_filter_out_of_stock(self, test_client, store_catalog_rows):
        response = test_client.get("/api/catalog", params={"in_stock": "false"})

        data = response.json()
        assert len(data) == sum(1 for row in store_catalog_rows if not row.get("stock"))
        assert all(p["stock"] == 0 for p in data)


class TestHealth:
    """Tests for / and /health."""

    def test_root(self, test_client):
        response = test_client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["quotes"] == "/api/quotes"

    def test_health(self, test_client, store_catalog_rows):
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["catalog"]["status"] == "healthy"
        assert data["catalog"]["products_count"] == len(store_catalog_rows)
        assert "configured" in data["matcher"]
