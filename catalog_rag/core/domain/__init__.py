"""Domain models for Catalog RAG.

- product: Product, IndexedEntry and QueryMatch
- events: WebhookEvent and the ingestion outcome types
- answer: ChatMessage, RetrievalContext and AnswerResult

All models are re-exported here:

    from catalog_rag.core.domain import Product, IndexedEntry, QueryMatch
"""

from .answer import MISSING_QUESTION_MESSAGE, AnswerResult, ChatMessage, RetrievalContext
from .events import IngestionResult, IngestionStage, IngestionStatus, WebhookEvent
from .product import PRODUCT_CREATED_EVENT, IndexedEntry, Product, QueryMatch

__all__ = [
    # Product models
    "PRODUCT_CREATED_EVENT",
    "Product",
    "IndexedEntry",
    "QueryMatch",
    # Event models
    "WebhookEvent",
    "IngestionStatus",
    "IngestionStage",
    "IngestionResult",
    # Answer models
    "MISSING_QUESTION_MESSAGE",
    "ChatMessage",
    "RetrievalContext",
    "AnswerResult",
]
