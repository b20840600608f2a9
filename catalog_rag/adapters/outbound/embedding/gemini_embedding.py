"""Gemini embedding adapter implementing the embedding port."""

import logging
import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google import genai

from ....core.domain.exceptions import (
    EmbeddingAPIError,
    EmbeddingRateLimitError,
    EmptyTextError,
    MissingAPIKeyError,
)
from ....core.domain.utils import is_blank
from ....core.ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_MODEL = "gemini-embedding-001"
DEFAULT_EMBEDDING_DIMENSION = 768
# Products and questions are compared against each other in the same space
DEFAULT_TASK_TYPE = "SEMANTIC_SIMILARITY"


class GeminiEmbeddingAdapter(EmbeddingPort):
    """Embeds text with the Google Gemini API (google-genai SDK, async client).

    Long input is sent as-is; the provider's own length limit surfaces as
    ``EmbeddingAPIError``. Vectors are returned L2-normalized, since Gemini
    embeddings truncated by ``output_dimensionality`` are not unit length.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_EMBEDDING_MODEL,
        dimension: int = DEFAULT_EMBEDDING_DIMENSION,
        task_type: str = DEFAULT_TASK_TYPE,
    ) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self.task_type = task_type
        self._dimension = dimension
        self._client: "genai.Client | None" = None

    @property
    def dimension(self) -> int:
        return self._dimension

    def _get_client(self) -> "genai.Client":
        """Get or create the genai client."""
        if self._client is None:
            if not self.api_key:
                raise MissingAPIKeyError(
                    "Google API key not set. Set GOOGLE_API_KEY in your .env file."
                )

            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini embedding client initialized for model: %s", self.model_name)
        return self._client

    async def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Raises:
            EmptyTextError: If ``text`` is empty or whitespace.
            EmbeddingRateLimitError: If the provider throttled the request.
            EmbeddingAPIError: If the provider failed or answered with an
                unexpected shape.
        """
        if is_blank(text):
            raise EmptyTextError("Cannot embed empty text")

        from google.genai import errors, types

        client = self._get_client()
        context = {"model": self.model_name, "chars": len(text)}

        try:
            result = await client.aio.models.embed_content(
                model=self.model_name,
                contents=[text],
                config=types.EmbedContentConfig(
                    task_type=self.task_type,
                    output_dimensionality=self._dimension,
                ),
            )
        except errors.APIError as e:
            if e.code == 429:
                raise EmbeddingRateLimitError(
                    "Embedding API rate limit exceeded", cause=e, context=context
                ) from e
            raise EmbeddingAPIError(
                f"Embedding API error ({e.code}): {e.message}", cause=e, context=context
            ) from e
        except Exception as e:
            raise EmbeddingAPIError(
                "Failed to reach the embedding API", cause=e, context=context
            ) from e

        if not result or not result.embeddings or not result.embeddings[0].values:
            raise EmbeddingAPIError("Embedding API returned no embeddings", context=context)

        values = [float(v) for v in result.embeddings[0].values]
        if len(values) != self._dimension:
            raise EmbeddingAPIError(
                "Embedding API returned a vector of unexpected dimension",
                context={**context, "expected": self._dimension, "actual": len(values)},
            )
        norm = math.sqrt(sum(v * v for v in values))
        if norm == 0.0:
            raise EmbeddingAPIError("Embedding API returned a zero vector", context=context)
        return [v / norm for v in values]
