"""Retrieval pipeline: similar products by id or by free text."""

import logging

from ..domain import IndexedEntry, QueryMatch
from ..domain.exceptions import InvalidInputError, ProductNotFoundError
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_store_port import VectorStorePort

logger = logging.getLogger(__name__)


class RetrievalService:
    """Queries the vector store and returns matches in the store's order."""

    def __init__(self, embedder: EmbeddingPort, vector_store: VectorStorePort) -> None:
        """Initialize the retriever.

        Args:
            embedder: Embeds free-text queries.
            vector_store: Index holding product entries.
        """
        self.embedder = embedder
        self.vector_store = vector_store

    @staticmethod
    def _check_k(k: int) -> None:
        if k < 1:
            raise InvalidInputError("k must be at least 1", context={"k": k})

    async def get_product(self, product_id: str) -> IndexedEntry:
        """Fetch the indexed entry for a product.

        Raises:
            ProductNotFoundError: If nothing is indexed under ``product_id``.
        """
        entry = await self.vector_store.get_by_id(product_id)
        if entry is None:
            raise ProductNotFoundError(
                f"Product {product_id} is not indexed",
                context={"product_id": product_id},
            )
        return entry

    async def retrieve_similar_to_record(
        self, product_id: str, k: int, exclude_self: bool = True
    ) -> list[QueryMatch]:
        """Find products similar to an indexed product.

        Self-exclusion filters on ``name``, so every product sharing the
        source product's name is excluded as well.

        Args:
            product_id: Product whose stored vector is the query.
            k: Maximum number of matches.
            exclude_self: Drop matches named like the source product.

        Returns:
            Matches exactly as ordered by the store.
        """
        self._check_k(k)
        entry = await self.get_product(product_id)
        return await self._similar_to_entry(entry, k, exclude_self)

    async def lookup_with_similar(
        self, product_id: str, k: int, exclude_self: bool = True
    ) -> tuple[IndexedEntry, list[QueryMatch]]:
        """Fetch a product and its similar products with a single lookup."""
        self._check_k(k)
        entry = await self.get_product(product_id)
        return entry, await self._similar_to_entry(entry, k, exclude_self)

    async def _similar_to_entry(
        self, entry: IndexedEntry, k: int, exclude_self: bool
    ) -> list[QueryMatch]:
        filter_metadata = None
        if exclude_self:
            filter_metadata = {"name": {"$ne": str(entry.metadata.get("name", ""))}}

        matches = await self.vector_store.query(
            entry.values,
            top_k=k,
            filter_metadata=filter_metadata,
            return_metadata=True,
        )
        logger.debug("Found %d products similar to %s", len(matches), entry.id)
        return matches

    async def retrieve_similar_to_text(self, text: str, k: int) -> list[QueryMatch]:
        """Embed ``text`` and return its nearest products in store order."""
        self._check_k(k)
        vector = await self.embedder.embed(text)
        matches = await self.vector_store.query(vector, top_k=k, return_metadata=True)
        logger.debug("Found %d products for text query", len(matches))
        return matches
