"""Generation model adapters."""

from .gemini_adapter import GeminiLLMAdapter

__all__ = ["GeminiLLMAdapter"]
