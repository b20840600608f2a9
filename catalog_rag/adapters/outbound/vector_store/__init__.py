"""Vector store adapters."""

from .qdrant_adapter import QdrantAdapter

__all__ = ["QdrantAdapter"]
