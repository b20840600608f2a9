"""Integration tests for FastAPI endpoints.

Services run against the in-memory fakes from conftest via dependency
overrides; no external provider is contacted.
"""

import asyncio
import hashlib
import hmac
import json
import time
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from catalog_rag.adapters.inbound.api import deps
from catalog_rag.adapters.inbound.api.main import app
from catalog_rag.config.settings import settings
from catalog_rag.core.domain import Product
from catalog_rag.core.domain.exceptions import (
    EmbeddingAPIError,
    LLMConnectionError,
    QdrantQueryError,
)
from catalog_rag.core.services import GenerationService, IngestionService, RetrievalService

pytestmark = pytest.mark.integration

WEBHOOK_SECRET = "whsec_api_test"


def _signed(payload: str) -> dict[str, str]:
    timestamp = int(time.time())
    digest = hmac.new(
        WEBHOOK_SECRET.encode(), f"{timestamp}.{payload}".encode(), hashlib.sha256
    ).hexdigest()
    return {"stripe-signature": f"t={timestamp},v1={digest}", "content-type": "application/json"}


@pytest.fixture
def services(embedder, vector_store, llm):
    retrieval = RetrievalService(embedder, vector_store)
    return {
        "ingestion": IngestionService(embedder, vector_store),
        "retrieval": retrieval,
        "generation": GenerationService(retrieval, llm),
    }


@pytest.fixture
def client(services, vector_store, monkeypatch):
    """Create test client with dependencies pointing at in-memory fakes."""
    monkeypatch.setattr(settings, "stripe_webhook_secret", WEBHOOK_SECRET)
    app.dependency_overrides[deps.get_vector_store] = lambda: vector_store
    app.dependency_overrides[deps.get_ingestion_service] = lambda: services["ingestion"]
    app.dependency_overrides[deps.get_retrieval_service] = lambda: services["retrieval"]
    app.dependency_overrides[deps.get_generation_service] = lambda: services["generation"]
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def indexed(client, services, widget):
    """Index the widget plus two other products through the ingestion service."""
    products = [
        widget,
        Product(id="p2", name="Gizmo", description="A red gizmo", metadata={"color": "red"}),
        Product(id="p3", name="Sprocket", description="Steel sprocket", metadata={"teeth": "32"}),
    ]
    for product in products:
        asyncio.run(services["ingestion"].ingest(product))
    return products


class TestHealthEndpoints:
    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_readiness_reports_product_count(self, client, indexed):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["vector_store"] == "connected (3 products)"

    def test_readiness_reports_store_errors(self, client):
        broken = AsyncMock()
        broken.count.side_effect = QdrantQueryError("down")
        app.dependency_overrides[deps.get_vector_store] = lambda: broken

        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["vector_store"].startswith("error:")


class TestProductEndpoint:
    def test_returns_product_and_similar_products(self, client, indexed):
        response = client.get("/products/p1")

        assert response.status_code == 200
        data = response.json()
        assert data["product"] == {
            "name": "Widget",
            "description": "A widget",
            "product_metadata": {"color": "red"},
        }
        ids = [match["id"] for match in data["similar_products"]]
        assert set(ids) == {"p2", "p3"}
        scores = [match["score"] for match in data["similar_products"]]
        assert scores == sorted(scores, reverse=True)

    def test_unknown_product_is_404(self, client):
        response = client.get("/products/prod_missing")

        assert response.status_code == 404
        data = response.json()
        assert data["error"]["type"] == "ProductNotFoundError"
        assert data["error"]["code"] == "CR_NF_002"
        assert data["context"]["product_id"] == "prod_missing"


class TestAskEndpoint:
    @pytest.mark.parametrize("body", [{}, {"question": ""}, {"question": "   "}])
    def test_missing_question_returns_message(self, client, llm, body):
        response = client.post("/ask", json=body)

        assert response.status_code == 200
        assert response.json() == {"message": "Please tell me your question."}
        assert llm.calls == []

    def test_no_body_returns_message(self, client):
        response = client.post("/ask")

        assert response.status_code == 200
        assert response.json() == {"message": "Please tell me your question."}

    def test_returns_raw_generation_output(self, client, indexed, llm):
        response = client.post("/ask", json={"question": "What color is the widget?"})

        assert response.status_code == 200
        assert response.json() == {
            "answer": "The widget is red.",
            "model": "fake-model",
            "usage": {"total_token_count": 42},
        }
        assert "- color: red" in llm.calls[0][0].content

    def test_upstream_failure_is_502(self, client, services):
        services["generation"].llm = AsyncMock()
        services["generation"].llm.generate.side_effect = LLMConnectionError("model unreachable")

        response = client.post("/ask", json={"question": "anything"})

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "CR_LLM_002"


class TestWebhookEndpoint:
    def test_product_created_is_indexed(self, client, vector_store, stripe_product_payload):
        payload = json.dumps(
            {"id": "evt_1", "type": "product.created", "data": {"object": stripe_product_payload}}
        )

        response = client.post("/webhook", content=payload, headers=_signed(payload))

        assert response.status_code == 200
        entry = vector_store.entries["prod_NWjs8kKbJWmuuc"]
        assert entry.metadata["name"] == "Gold Plan"

    def test_other_event_types_are_acknowledged(self, client, vector_store, stripe_product_payload):
        payload = json.dumps(
            {"id": "evt_2", "type": "product.updated", "data": {"object": stripe_product_payload}}
        )

        response = client.post("/webhook", content=payload, headers=_signed(payload))

        assert response.status_code == 200
        assert vector_store.entries == {}

    def test_missing_signature_is_400(self, client, vector_store):
        response = client.post("/webhook", content="{}")

        assert response.status_code == 400
        assert response.text == ""

    def test_missing_secret_is_400(self, client, monkeypatch):
        monkeypatch.setattr(settings, "stripe_webhook_secret", "")
        payload = "{}"

        response = client.post("/webhook", content=payload, headers=_signed(payload))

        assert response.status_code == 400

    def test_bad_signature_is_400(self, client, vector_store, stripe_product_payload):
        payload = json.dumps(
            {"id": "evt_3", "type": "product.created", "data": {"object": stripe_product_payload}}
        )
        headers = _signed(payload)
        headers["stripe-signature"] = headers["stripe-signature"][:-4] + "0000"

        response = client.post("/webhook", content=payload, headers=headers)

        assert response.status_code == 400
        assert "Webhook signature verification failed." in response.text
        assert vector_store.entries == {}

    def test_ingestion_failure_is_500(self, client, services, stripe_product_payload):
        failing = AsyncMock()
        failing.embed.side_effect = EmbeddingAPIError("quota exhausted")
        services["ingestion"].embedder = failing
        payload = json.dumps(
            {"id": "evt_4", "type": "product.created", "data": {"object": stripe_product_payload}}
        )

        response = client.post("/webhook", content=payload, headers=_signed(payload))

        assert response.status_code == 500
        assert response.text == "quota exhausted"


class TestAPIDocumentation:
    def test_openapi_schema(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        schema = response.json()
        assert schema["info"]["title"] == "Catalog RAG API"
        for path in ("/products/{product_id}", "/ask", "/webhook", "/health"):
            assert path in schema["paths"]
