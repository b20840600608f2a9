"""Lookup exceptions for Catalog RAG."""

from .base import CatalogRAGError


class NotFoundError(CatalogRAGError):
    """Referenced entity does not exist."""

    error_code = "CR_NF_001"


class ProductNotFoundError(NotFoundError):
    """No indexed entry exists for the requested product id."""

    error_code = "CR_NF_002"
