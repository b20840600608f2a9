"""Configuration-related exceptions for Catalog RAG."""

from .base import CatalogRAGError


class ConfigurationError(CatalogRAGError):
    """Configuration or environment variable errors.

    Raised when required configuration is missing or invalid.
    """

    error_code = "CR_CFG_001"


class MissingAPIKeyError(ConfigurationError):
    """Required API key is not configured."""

    error_code = "CR_CFG_002"
