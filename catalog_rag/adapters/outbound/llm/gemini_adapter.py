"""Gemini adapter implementing the LLM port using the google-genai SDK."""

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from google import genai

from ....core.domain import ChatMessage
from ....core.domain.exceptions import (
    LLMConnectionError,
    LLMGenerationError,
    LLMRateLimitError,
    MissingAPIKeyError,
)
from ....core.ports.llm_port import LLMPort

logger = logging.getLogger(__name__)

# Gemini names the assistant role "model"
_ROLE_MAP = {"user": "user", "assistant": "model", "model": "model"}


class GeminiLLMAdapter(LLMPort):
    """Sends role-tagged messages to Gemini and returns a structured result.

    System messages become the request's system instruction; the remaining
    messages become the conversation contents in order.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.2,
        max_tokens: int = 1024,
    ) -> None:
        """Initialize the Gemini adapter.

        Args:
            api_key: Google AI API key.
            model: Model to use.
            temperature: Sampling temperature (0.0-1.0).
            max_tokens: Maximum tokens to generate.
        """
        self.api_key = api_key
        self.model_name = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client: "genai.Client | None" = None

    def _get_client(self) -> "genai.Client":
        """Lazy load the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Set GOOGLE_API_KEY in your .env file."
                )

            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini client initialized for model: %s", self.model_name)
        return self._client

    @staticmethod
    def _to_output(response: Any, model_name: str) -> dict[str, Any]:
        output: dict[str, Any] = {"answer": response.text or "", "model": model_name}

        candidates = response.candidates or []
        if candidates and candidates[0].finish_reason is not None:
            output["finish_reason"] = str(candidates[0].finish_reason.value)

        usage = response.usage_metadata
        if usage is not None:
            output["usage"] = usage.model_dump(mode="json", exclude_none=True)
        return output

    async def generate(self, messages: list[ChatMessage]) -> dict[str, Any]:
        """Generate a response.

        Returns:
            ``{"answer": ..., "model": ..., "finish_reason": ..., "usage": {...}}``
        """
        from google.genai import errors, types

        client = self._get_client()

        system_instruction = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = [
            types.Content(role=_ROLE_MAP.get(m.role, "user"), parts=[types.Part(text=m.content)])
            for m in messages
            if m.role != "system"
        ]
        context = {"model": self.model_name, "messages": len(messages)}

        try:
            response = await client.aio.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=types.GenerateContentConfig(
                    system_instruction=system_instruction or None,
                    temperature=self.temperature,
                    max_output_tokens=self.max_tokens,
                ),
            )
        except errors.APIError as e:
            if e.code == 429:
                raise LLMRateLimitError(
                    "Gemini rate limit exceeded", cause=e, context=context
                ) from e
            raise LLMGenerationError(
                f"Gemini API error ({e.code}): {e.message}", cause=e, context=context
            ) from e
        except Exception as e:
            raise LLMConnectionError("Failed to reach Gemini", cause=e, context=context) from e

        if not response.candidates:
            raise LLMGenerationError(
                "Gemini returned no candidates (content may have been filtered)",
                context=context,
            )

        return self._to_output(response, self.model_name)
