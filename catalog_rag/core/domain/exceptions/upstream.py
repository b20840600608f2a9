"""Upstream (external collaborator) exceptions for Catalog RAG."""

from .base import CatalogRAGError


class UpstreamError(CatalogRAGError):
    """Failure reported by the embedding provider, vector store or generation model.

    Never retried inside the pipelines. Callers decide whether to retry
    the whole request.
    """

    error_code = "CR_UP_001"
