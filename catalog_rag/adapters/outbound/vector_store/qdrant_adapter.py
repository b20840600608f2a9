"""Qdrant vector store implementing the vector store port.

Product ids (``prod_...``) are not valid Qdrant point ids, so each point is
keyed by a UUIDv5 of the product id and the original id travels in the
payload under ``product_id``. Re-inserting a product overwrites its point.
"""

import asyncio
import logging
import uuid
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from qdrant_client import AsyncQdrantClient

from ....core.domain import IndexedEntry, QueryMatch
from ....core.domain.exceptions import (
    DimensionMismatchError,
    InvalidFilterError,
    QdrantConnectionError,
    QdrantQueryError,
)
from ....core.ports.vector_store_port import VectorStorePort

logger = logging.getLogger(__name__)

PRODUCT_ID_KEY = "product_id"
# Payload fields that get a keyword index for filtering
INDEXED_FIELDS = ("name",)
_POINT_NAMESPACE = uuid.UUID("6f1c3a52-8f0e-4c1b-9a57-4b0f4d8e2c11")


def point_id_for(product_id: str) -> str:
    """Deterministic Qdrant point id for a product id."""
    return str(uuid.uuid5(_POINT_NAMESPACE, product_id))


def build_filter(filter_metadata: dict[str, Any] | None) -> Any:
    """Translate ``{"field": {"$eq"|"$ne": value}}`` into a Qdrant filter.

    A bare value is shorthand for ``$eq``.

    Raises:
        InvalidFilterError: For unknown operators or non-scalar values.
    """
    if not filter_metadata:
        return None

    from qdrant_client import models

    must: list[Any] = []
    must_not: list[Any] = []
    for key, condition in filter_metadata.items():
        operations = condition if isinstance(condition, dict) else {"$eq": condition}
        for operator, value in operations.items():
            if not isinstance(value, str | int | bool):
                raise InvalidFilterError(
                    f"Filter on {key} needs a scalar value",
                    context={"field": key, "operator": operator},
                )
            field_condition = models.FieldCondition(
                key=key, match=models.MatchValue(value=value)
            )
            if operator == "$eq":
                must.append(field_condition)
            elif operator == "$ne":
                must_not.append(field_condition)
            else:
                raise InvalidFilterError(
                    f"Unsupported filter operator {operator}",
                    context={"field": key, "operator": operator},
                )

    return models.Filter(must=must or None, must_not=must_not or None)


class QdrantAdapter(VectorStorePort):
    """Qdrant-backed product index using cosine distance.

    Qdrant stores cosine vectors L2-normalized, so ``get_by_id`` returns the
    unit-length form of what was inserted.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        collection_name: str = "products",
        dimension: int = 768,
    ) -> None:
        """Initialize the Qdrant vector store.

        Args:
            url: Qdrant cluster URL; empty for an in-process ``:memory:`` store.
            api_key: Qdrant API key.
            collection_name: Collection holding product points.
            dimension: Vector size of the collection.
        """
        self.url = url
        self.api_key = api_key
        self.collection_name = collection_name
        self._dimension = dimension
        self._client: "AsyncQdrantClient | None" = None
        self._collection_ready = False
        self._collection_lock = asyncio.Lock()

    @property
    def dimension(self) -> int:
        return self._dimension

    async def _get_client(self) -> "AsyncQdrantClient":
        """Get or create the Qdrant client and make sure the collection exists."""
        if self._client is None:
            try:
                from qdrant_client import AsyncQdrantClient

                if self.url:
                    self._client = AsyncQdrantClient(url=self.url, api_key=self.api_key or None)
                    logger.info("Connected to Qdrant at: %s", self.url)
                else:
                    self._client = AsyncQdrantClient(location=":memory:")
                    logger.info("Using in-process Qdrant (no QDRANT_URL configured)")
            except Exception as e:
                raise QdrantConnectionError(
                    f"Failed to connect to Qdrant at {self.url or ':memory:'}",
                    cause=e,
                    context={"url": self.url},
                ) from e

        if not self._collection_ready:
            async with self._collection_lock:
                if not self._collection_ready:
                    await self._ensure_collection(self._client)
        return self._client

    async def _ensure_collection(self, client: "AsyncQdrantClient") -> None:
        from qdrant_client import models

        try:
            if not await client.collection_exists(self.collection_name):
                logger.info("Creating collection %s", self.collection_name)
                await client.create_collection(
                    collection_name=self.collection_name,
                    vectors_config=models.VectorParams(
                        size=self._dimension,
                        distance=models.Distance.COSINE,
                    ),
                )
                for field_name in INDEXED_FIELDS:
                    await client.create_payload_index(
                        collection_name=self.collection_name,
                        field_name=field_name,
                        field_schema=models.PayloadSchemaType.KEYWORD,
                    )
        except Exception as e:
            raise QdrantConnectionError(
                f"Failed to prepare collection {self.collection_name}",
                cause=e,
                context={"url": self.url, "collection": self.collection_name},
            ) from e
        self._collection_ready = True

    async def ensure_collection(self) -> None:
        """Create the collection and its payload indexes when missing."""
        await self._get_client()

    def _check_dimension(self, vector: list[float], operation: str) -> None:
        if len(vector) != self._dimension:
            raise DimensionMismatchError(
                f"Vector has {len(vector)} dimensions, index expects {self._dimension}",
                context={"operation": operation, "expected": self._dimension, "actual": len(vector)},
            )

    async def insert(self, entry: IndexedEntry) -> None:
        """Upsert one entry; an existing entry with the same id is overwritten."""
        self._check_dimension(entry.values, "insert")

        from qdrant_client import models

        client = await self._get_client()
        point = models.PointStruct(
            id=point_id_for(entry.id),
            vector=list(entry.values),
            payload={**entry.metadata, PRODUCT_ID_KEY: entry.id},
        )
        try:
            await client.upsert(collection_name=self.collection_name, points=[point], wait=True)
        except Exception as e:
            raise QdrantQueryError(
                f"Failed to upsert product {entry.id}",
                cause=e,
                context={"product_id": entry.id, "collection": self.collection_name},
            ) from e
        logger.debug("Upserted product %s into %s", entry.id, self.collection_name)

    async def get_by_id(self, entry_id: str) -> IndexedEntry | None:
        client = await self._get_client()
        try:
            records = await client.retrieve(
                collection_name=self.collection_name,
                ids=[point_id_for(entry_id)],
                with_payload=True,
                with_vectors=True,
            )
        except Exception as e:
            raise QdrantQueryError(
                f"Failed to retrieve product {entry_id}",
                cause=e,
                context={"product_id": entry_id, "collection": self.collection_name},
            ) from e

        if not records:
            return None

        record = records[0]
        payload = dict(record.payload or {})
        product_id = payload.pop(PRODUCT_ID_KEY, entry_id)
        vector = record.vector
        if isinstance(vector, dict):
            # Named vectors; this collection only ever has the default one
            vector = next(iter(vector.values()), [])
        return IndexedEntry(id=product_id, values=list(vector or []), metadata=payload)

    async def query(
        self,
        vector: list[float],
        top_k: int,
        filter_metadata: dict[str, Any] | None = None,
        return_metadata: bool = True,
    ) -> list[QueryMatch]:
        """Nearest products to ``vector``, highest cosine similarity first.

        Args:
            vector: Query embedding.
            top_k: Maximum number of matches.
            filter_metadata: Optional ``$eq``/``$ne`` filter.
            return_metadata: Whether matches carry their stored metadata.

        Returns:
            List of QueryMatch objects in Qdrant's order.
        """
        self._check_dimension(vector, "query")
        qdrant_filter = build_filter(filter_metadata)

        client = await self._get_client()
        try:
            response = await client.query_points(
                collection_name=self.collection_name,
                query=list(vector),
                limit=top_k,
                query_filter=qdrant_filter,
                with_payload=True if return_metadata else [PRODUCT_ID_KEY],
            )
        except Exception as e:
            raise QdrantQueryError(
                "Failed to query products",
                cause=e,
                context={"collection": self.collection_name, "top_k": top_k},
            ) from e

        matches = []
        for point in response.points:
            payload = dict(point.payload or {})
            product_id = str(payload.pop(PRODUCT_ID_KEY, point.id))
            matches.append(
                QueryMatch(
                    id=product_id,
                    score=float(point.score),
                    metadata=payload if return_metadata else None,
                )
            )
        return matches

    async def count(self) -> int:
        client = await self._get_client()
        try:
            result = await client.count(collection_name=self.collection_name, exact=True)
        except Exception as e:
            raise QdrantQueryError(
                "Failed to count products",
                cause=e,
                context={"collection": self.collection_name},
            ) from e
        return result.count

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            self._collection_ready = False
