"""Vector store exceptions for Catalog RAG."""

from .upstream import UpstreamError


class VectorStoreError(UpstreamError):
    """Base error for vector store operations."""

    error_code = "CR_VEC_001"


class QdrantConnectionError(VectorStoreError):
    """Failed to connect to Qdrant.

    Common causes:
    - Invalid URL or API key
    - Network connectivity issues
    - Qdrant service is down
    """

    error_code = "CR_VEC_002"


class QdrantQueryError(VectorStoreError):
    """Qdrant rejected an upsert, retrieve or query request.

    Common causes:
    - Collection does not exist
    - Invalid query parameters
    """

    error_code = "CR_VEC_003"
