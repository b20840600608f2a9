"""FastAPI dependency injection for Catalog RAG.

Each provider builds its collaborator once per process; the services get
them injected rather than reaching for globals.
"""

import logging
from functools import lru_cache

from ....config.settings import settings
from ....core.services import GenerationService, IngestionService, RetrievalService
from ...outbound.embedding import GeminiEmbeddingAdapter
from ...outbound.llm import GeminiLLMAdapter
from ...outbound.vector_store import QdrantAdapter

logger = logging.getLogger(__name__)


@lru_cache
def get_vector_store() -> QdrantAdapter:
    """Get or create the QdrantAdapter singleton."""
    logger.info("Initializing QdrantAdapter...")
    return QdrantAdapter(
        url=settings.qdrant_url,
        api_key=settings.qdrant_api_key,
        collection_name=settings.qdrant_collection,
        dimension=settings.embedding_dimension,
    )


@lru_cache
def get_embedder() -> GeminiEmbeddingAdapter:
    """Get or create the GeminiEmbeddingAdapter singleton."""
    logger.info("Initializing GeminiEmbeddingAdapter...")
    return GeminiEmbeddingAdapter(
        api_key=settings.google_api_key,
        model_name=settings.embedding_model,
        dimension=settings.embedding_dimension,
    )


@lru_cache
def get_llm() -> GeminiLLMAdapter:
    """Get or create the GeminiLLMAdapter singleton."""
    logger.info("Initializing GeminiLLMAdapter...")
    return GeminiLLMAdapter(
        api_key=settings.google_api_key,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )


@lru_cache
def get_ingestion_service() -> IngestionService:
    logger.info("Initializing IngestionService...")
    return IngestionService(get_embedder(), get_vector_store())


@lru_cache
def get_retrieval_service() -> RetrievalService:
    logger.info("Initializing RetrievalService...")
    return RetrievalService(get_embedder(), get_vector_store())


@lru_cache
def get_generation_service() -> GenerationService:
    logger.info("Initializing GenerationService...")
    return GenerationService(get_retrieval_service(), get_llm(), top_k=settings.answer_top_k)
