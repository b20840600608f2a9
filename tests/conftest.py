"""
Pytest configuration and shared fixtures.
"""

import hashlib
import math
import re
from typing import Any

import pytest

from catalog_rag.core.domain import ChatMessage, IndexedEntry, Product, QueryMatch
from catalog_rag.core.domain.exceptions import (
    DimensionMismatchError,
    EmptyTextError,
    InvalidFilterError,
)
from catalog_rag.core.ports import EmbeddingPort, LLMPort, VectorStorePort

TEST_DIMENSION = 64


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP layer)")


class FakeEmbedder(EmbeddingPort):
    """Deterministic bag-of-words embedder: each token bumps one hashed bucket."""

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self._dimension = dimension
        self.calls: list[str] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise EmptyTextError("Cannot embed empty text")
        self.calls.append(text)
        vector = [0.0] * self._dimension
        for token in re.findall(r"[a-z0-9]+", text.lower()):
            bucket = int(hashlib.md5(token.encode()).hexdigest(), 16) % self._dimension
            vector[bucket] += 1.0
        norm = math.sqrt(sum(v * v for v in vector)) or 1.0
        return [v / norm for v in vector]


class InMemoryVectorStore(VectorStorePort):
    """Brute-force cosine store with overwrite-on-insert semantics."""

    def __init__(self, dimension: int = TEST_DIMENSION) -> None:
        self._dimension = dimension
        self.entries: dict[str, IndexedEntry] = {}
        self.queries: list[dict[str, Any]] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    def _check(self, vector: list[float]) -> None:
        if len(vector) != self._dimension:
            raise DimensionMismatchError(
                "dimension mismatch", context={"expected": self._dimension, "actual": len(vector)}
            )

    @staticmethod
    def _matches_filter(metadata: dict[str, Any], filter_metadata: dict[str, Any] | None) -> bool:
        for key, condition in (filter_metadata or {}).items():
            for operator, value in condition.items():
                if operator == "$eq" and metadata.get(key) != value:
                    return False
                if operator == "$ne" and metadata.get(key) == value:
                    return False
                if operator not in ("$eq", "$ne"):
                    raise InvalidFilterError(f"Unsupported filter operator {operator}")
        return True

    async def insert(self, entry: IndexedEntry) -> None:
        self._check(entry.values)
        self.entries[entry.id] = IndexedEntry(
            id=entry.id, values=list(entry.values), metadata=dict(entry.metadata)
        )

    async def get_by_id(self, entry_id: str) -> IndexedEntry | None:
        return self.entries.get(entry_id)

    async def query(
        self,
        vector: list[float],
        top_k: int,
        filter_metadata: dict[str, Any] | None = None,
        return_metadata: bool = True,
    ) -> list[QueryMatch]:
        self._check(vector)
        self.queries.append({"top_k": top_k, "filter": filter_metadata})
        scored = []
        for entry in self.entries.values():
            if not self._matches_filter(entry.metadata, filter_metadata):
                continue
            score = sum(a * b for a, b in zip(vector, entry.values))
            scored.append(
                QueryMatch(
                    id=entry.id,
                    score=score,
                    metadata=dict(entry.metadata) if return_metadata else None,
                )
            )
        scored.sort(key=lambda m: m.score, reverse=True)
        return scored[:top_k]

    async def count(self) -> int:
        return len(self.entries)


class FakeLLM(LLMPort):
    """Records the messages it receives and returns a canned structured answer."""

    def __init__(self, answer: str = "The widget is red.") -> None:
        self.answer = answer
        self.calls: list[list[ChatMessage]] = []

    async def generate(self, messages: list[ChatMessage]) -> dict[str, Any]:
        self.calls.append(list(messages))
        return {"answer": self.answer, "model": "fake-model", "usage": {"total_token_count": 42}}


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def vector_store():
    return InMemoryVectorStore()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def widget():
    """The product from the catalog walkthrough."""
    return Product(
        id="p1",
        name="Widget",
        description="A widget",
        metadata={"color": "red"},
    )


@pytest.fixture
def stripe_product_payload():
    """Stripe product object as delivered in a product.created event."""
    return {
        "id": "prod_NWjs8kKbJWmuuc",
        "object": "product",
        "active": True,
        "name": "Gold Plan",
        "description": "Premium subscription with priority support",
        "metadata": {"tier": "gold", "seats": "10"},
    }
