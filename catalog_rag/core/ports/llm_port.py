"""LLM Port Interface."""

from abc import ABC, abstractmethod
from typing import Any

from ..domain import ChatMessage


class LLMPort(ABC):
    """Abstract interface for generation model providers."""

    @abstractmethod
    async def generate(self, messages: list[ChatMessage]) -> dict[str, Any]:
        """Generate a response from role-tagged messages.

        Returns:
            Structured provider output containing at least ``answer``.
        """
        ...
