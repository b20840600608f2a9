"""Vector Store Port Interface."""

from abc import ABC, abstractmethod
from typing import Any

from ..domain import IndexedEntry, QueryMatch


class VectorStorePort(ABC):
    """Abstract interface for nearest-neighbour stores.

    Filters use the ``{"field": {"$eq": value}}`` / ``{"field": {"$ne": value}}``
    dialect over scalar metadata fields. Query results are ordered by
    descending similarity.
    """

    @property
    @abstractmethod
    def dimension(self) -> int: ...

    @abstractmethod
    async def insert(self, entry: IndexedEntry) -> None:
        """Insert an entry, overwriting any entry with the same id."""
        ...

    @abstractmethod
    async def get_by_id(self, entry_id: str) -> IndexedEntry | None:
        """Fetch an entry with its vector, or None when absent.

        Stores using cosine distance may hand back the vector L2-normalized.
        """
        ...

    @abstractmethod
    async def query(
        self,
        vector: list[float],
        top_k: int,
        filter_metadata: dict[str, Any] | None = None,
        return_metadata: bool = True,
    ) -> list[QueryMatch]:
        """Return at most ``top_k`` matches, most similar first."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Number of indexed entries."""
        ...
