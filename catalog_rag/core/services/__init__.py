"""Pipelines: ingestion, retrieval and grounded generation."""

from .generation_service import GenerationService
from .ingestion_service import IngestionService
from .normalizer import normalize
from .prompt_builder import PromptBuilder
from .retrieval_service import RetrievalService

__all__ = [
    "GenerationService",
    "IngestionService",
    "PromptBuilder",
    "RetrievalService",
    "normalize",
]
