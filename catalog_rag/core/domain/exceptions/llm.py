"""LLM exceptions for Catalog RAG."""

from .upstream import UpstreamError


class LLMError(UpstreamError):
    """Base error for generation model operations."""

    error_code = "CR_LLM_001"


class LLMConnectionError(LLMError):
    """Failed to reach the generation model provider.

    Common causes:
    - Invalid API key
    - Network issues
    - Service unavailable
    """

    error_code = "CR_LLM_002"


class LLMRateLimitError(LLMError):
    """Rate limit exceeded on the generation model provider."""

    error_code = "CR_LLM_003"


class LLMGenerationError(LLMError):
    """Provider answered but generation failed.

    Common causes:
    - Content filtered by safety settings
    - Token limit exceeded
    - Invalid message format
    """

    error_code = "CR_LLM_004"
