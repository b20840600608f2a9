"""Ports connecting the pipelines to external collaborators."""

from .embedding_port import EmbeddingPort
from .llm_port import LLMPort
from .vector_store_port import VectorStorePort

__all__ = ["EmbeddingPort", "LLMPort", "VectorStorePort"]
