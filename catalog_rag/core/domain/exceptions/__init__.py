"""Custom exception hierarchy for Catalog RAG.

Each exception includes:
- Error codes for quick identification
- Automatic capture of class, method, file, and line number
- Cause chaining for underlying exceptions
- JSON serialization for structured logging

Import from this package directly:

    from catalog_rag.core.domain.exceptions import CatalogRAGError, ProductNotFoundError
"""

# Base classes
from .base import CatalogRAGError, RaiseLocation

# Configuration exceptions
from .configuration import ConfigurationError, MissingAPIKeyError

# Embedding exceptions
from .embedding import EmbeddingAPIError, EmbeddingError, EmbeddingRateLimitError

# Ingestion exceptions
from .ingestion import IngestionError, SignatureVerificationError

# LLM exceptions
from .llm import LLMConnectionError, LLMError, LLMGenerationError, LLMRateLimitError

# Lookup exceptions
from .retrieval import NotFoundError, ProductNotFoundError

# Upstream base
from .upstream import UpstreamError

# Validation exceptions
from .validation import (
    DimensionMismatchError,
    EmptyRecordError,
    EmptyTextError,
    InvalidFilterError,
    InvalidInputError,
)

# Vector store exceptions
from .vector_store import QdrantConnectionError, QdrantQueryError, VectorStoreError

__all__ = [
    # Base
    "RaiseLocation",
    "CatalogRAGError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    # Validation
    "InvalidInputError",
    "EmptyTextError",
    "EmptyRecordError",
    "DimensionMismatchError",
    "InvalidFilterError",
    # Lookup
    "NotFoundError",
    "ProductNotFoundError",
    # Upstream
    "UpstreamError",
    "EmbeddingError",
    "EmbeddingAPIError",
    "EmbeddingRateLimitError",
    "VectorStoreError",
    "QdrantConnectionError",
    "QdrantQueryError",
    "LLMError",
    "LLMConnectionError",
    "LLMRateLimitError",
    "LLMGenerationError",
    # Ingestion
    "IngestionError",
    "SignatureVerificationError",
]
