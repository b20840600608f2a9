"""Embedding Port Interface."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Abstract interface for embedding providers.

    Implementations return vectors of a fixed length (``dimension``), never
    truncate or chunk input, and raise ``EmptyTextError`` for empty text and
    an ``UpstreamError`` subclass for provider failures.
    """

    @property
    @abstractmethod
    def dimension(self) -> int: ...

    @abstractmethod
    async def embed(self, text: str) -> list[float]: ...
