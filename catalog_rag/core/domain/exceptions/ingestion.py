"""Ingestion and webhook boundary exceptions for Catalog RAG."""

from .base import CatalogRAGError


class IngestionError(CatalogRAGError):
    """Unexpected failure while turning a product into an indexed entry."""

    error_code = "CR_ING_001"


class SignatureVerificationError(CatalogRAGError):
    """Webhook payload is malformed or its signature does not verify.

    Raised only at the webhook boundary; such events never reach ingestion.
    """

    error_code = "CR_ING_002"
