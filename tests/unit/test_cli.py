"""Tests for the Typer CLI against in-memory fakes."""

import asyncio
import json

import pytest
from typer.testing import CliRunner

from catalog_rag.adapters.inbound.api import deps
from catalog_rag.adapters.inbound.cli.commands import app
from catalog_rag.core.services import GenerationService, IngestionService, RetrievalService

pytestmark = pytest.mark.unit

runner = CliRunner()


@pytest.fixture
def wired(monkeypatch, embedder, vector_store, llm):
    retrieval = RetrievalService(embedder, vector_store)
    ingestion = IngestionService(embedder, vector_store)
    generation = GenerationService(retrieval, llm)
    monkeypatch.setattr(deps, "get_vector_store", lambda: vector_store)
    monkeypatch.setattr(deps, "get_ingestion_service", lambda: ingestion)
    monkeypatch.setattr(deps, "get_retrieval_service", lambda: retrieval)
    monkeypatch.setattr(deps, "get_generation_service", lambda: generation)
    return ingestion


def test_ingest_indexes_products_from_file(wired, vector_store, tmp_path, stripe_product_payload):
    second = dict(stripe_product_payload, id="prod_2", name="Silver Plan")
    path = tmp_path / "products.json"
    path.write_text(json.dumps([stripe_product_payload, second]), encoding="utf-8")

    result = runner.invoke(app, ["ingest", str(path)])

    assert result.exit_code == 0, result.output
    assert "Indexed 2/2 products" in result.output
    assert set(vector_store.entries) == {"prod_NWjs8kKbJWmuuc", "prod_2"}


def test_ingest_reports_unreadable_file(wired, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{nope", encoding="utf-8")

    result = runner.invoke(app, ["ingest", str(path)])

    assert result.exit_code == 1
    assert "Could not read products" in result.output


def test_similar_lists_matches(wired, widget):
    asyncio.run(wired.ingest(widget))

    result = runner.invoke(app, ["similar", "p1"])

    assert result.exit_code == 0, result.output
    assert "Widget" in result.output


def test_similar_unknown_product_shows_error_code(wired):
    result = runner.invoke(app, ["similar", "missing"])

    assert result.exit_code == 1
    assert "CR_NF_002" in result.output


def test_ask_blank_question_prints_message(wired, llm):
    result = runner.invoke(app, ["ask", "   "])

    assert result.exit_code == 0
    assert "Please tell me your question." in result.output
    assert llm.calls == []


def test_ask_prints_answer(wired, widget):
    asyncio.run(wired.ingest(widget))

    result = runner.invoke(app, ["ask", "What color is the widget?"])

    assert result.exit_code == 0, result.output
    assert "The widget is red." in result.output
