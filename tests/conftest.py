"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import json
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from config.catalog import Catalog, load_catalog
from services.claude_matcher_service import ClaudeMatcherService, RetryPolicy
from services.keyword_expansion_service import KeywordExpansionService, KeywordExpansionTable
from tests.factories import CatalogProductFactory

CATALOG_FILE = backend_dir / "data" / "catalog.json"


# ===================
# FAKE CLAUDE CLIENT
# ===================

def make_message(text: str) -> SimpleNamespace:
    """Object shaped like an Anthropic Messages API response."""
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=text)])


class FakeClaudeClient:
    """
    Stand-in for anthropic.AsyncAnthropic.

    Each call to messages.create returns (or raises) the next queued
    response. Strings are wrapped as text responses, exceptions are raised.

    Usage:
        client = FakeClaudeClient('[{"item": "birome", "quantity": 2}]')
        client.messages.create.await_count  # number of API calls
    """

    def __init__(self, *responses):
        self.messages = MagicMock()
        self.messages.create = AsyncMock(side_effect=self._next)
        self._responses = list(responses)

    def queue(self, *responses):
        self._responses.extend(responses)

    async def _next(self, **kwargs):
        if not self._responses:
            raise AssertionError("FakeClaudeClient: no response queued")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return make_message(response)


class RecordingSleep:
    """Async sleep replacement that records delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


# ===================
# FIXTURES
# ===================

@pytest.fixture
def store_catalog() -> Catalog:
    """The catalog shipped in data/catalog.json."""
    return load_catalog(str(CATALOG_FILE))


@pytest.fixture
def store_catalog_rows() -> list:
    """Raw rows of data/catalog.json."""
    return json.loads(CATALOG_FILE.read_text(encoding="utf-8"))


@pytest.fixture
def small_catalog() -> Catalog:
    """
    A handful of products for scorer and resolution tests.

    Usage:
        def test_something(small_catalog):
            product = small_catalog.find_by_sku("BIC-AZ")
    """
    CatalogProductFactory.reset_counter()
    return Catalog([
        CatalogProductFactory.create(id=1, sku="BIC-AZ", name="Bolígrafo Bic Cristal Azul", price="450", stock=100),
        CatalogProductFactory.create(id=2, sku="BIC-NE", name="Bolígrafo Bic Cristal Negro", price="450", stock=0),
        CatalogProductFactory.create(id=3, sku="PEL-PLU", name="Lapicera Pluma Pelikan Azul", price="8900", stock=5),
        CatalogProductFactory.create(id=4, sku="PLA-90", name="Adhesivo Vinílico Plasticola 90 g", price="1100", stock=40),
        CatalogProductFactory.create(id=5, sku=None, name="Papel Afiche x Pliego", price="350", stock=0),
        CatalogProductFactory.create(id=6, sku="TEM-6P", name="Témperas x 6 + Pincel", price="3900", stock=8),
        CatalogProductFactory.create(id=7, sku="CAL-FX", name="Calculadora Científica Casio", price="24000", stock=2),
    ])


@pytest.fixture
def minimal_expansion_table() -> KeywordExpansionTable:
    """Small expansion table so tests do not depend on the full vocabulary."""
    return KeywordExpansionTable.build(
        {
            "birome": ("boligrafo",),
            "plasticola": ("adhesivo vinilico",),
            "fibras": ("marcadores",),
            "goma eva": ("goma eva",),
        },
        noise_prefixes=("paquete de", "caja de", "set de", "box of"),
    )


@pytest.fixture
def expansion_service(minimal_expansion_table) -> KeywordExpansionService:
    return KeywordExpansionService(minimal_expansion_table)


@pytest.fixture
def fake_claude_client() -> FakeClaudeClient:
    """Fake Claude client with nothing queued; call .queue(...) in the test."""
    return FakeClaudeClient()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def matcher(fake_claude_client, recording_sleep) -> ClaudeMatcherService:
    """ClaudeMatcherService wired to the fake client, retries without waiting."""
    return ClaudeMatcherService(
        client=fake_claude_client,
        retry_policy=RetryPolicy(max_attempts=4, delays=(2.0, 4.0, 8.0), max_delay=30.0),
        model="test-model",
        sleep=recording_sleep,
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/catalog")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)
