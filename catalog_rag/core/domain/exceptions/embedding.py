"""Embedding exceptions for Catalog RAG."""

from .upstream import UpstreamError


class EmbeddingError(UpstreamError):
    """Failed to generate embeddings."""

    error_code = "CR_EMB_001"


class EmbeddingAPIError(EmbeddingError):
    """Embedding API returned an error or a malformed response.

    Common causes:
    - Input exceeds the model's token limit
    - Invalid API key
    - Unexpected vector dimensionality
    """

    error_code = "CR_EMB_002"


class EmbeddingRateLimitError(EmbeddingError):
    """Embedding API rate limit exceeded."""

    error_code = "CR_EMB_003"
