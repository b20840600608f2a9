"""Ingestion pipeline: product event -> canonical text -> embedding -> index."""

import logging

from ..domain import (
    IndexedEntry,
    IngestionResult,
    IngestionStage,
    IngestionStatus,
    Product,
    WebhookEvent,
)
from ..domain.exceptions import CatalogRAGError, IngestionError
from ..ports.embedding_port import EmbeddingPort
from ..ports.vector_store_port import VectorStorePort
from .normalizer import normalize

logger = logging.getLogger(__name__)


class IngestionService:
    """Turns product creation events into indexed entries.

    Steps run strictly in order and the first failure ends the run. Retries
    belong to whoever delivered the event.
    """

    def __init__(self, embedder: EmbeddingPort, vector_store: VectorStorePort) -> None:
        self.embedder = embedder
        self.vector_store = vector_store

    async def handle_event(self, event: WebhookEvent) -> IngestionResult:
        """Ingest the product carried by a creation event; skip anything else."""
        if not event.is_product_created:
            logger.info(
                "Skipping event %s of type %s (not a product creation)",
                event.event_id,
                event.event_type,
            )
            return IngestionResult(
                status=IngestionStatus.SKIPPED,
                stage=IngestionStage.EVENT_RECEIVED,
                product_id=event.product.id if event.product else None,
                event_type=event.event_type,
            )

        result = await self.ingest(event.product)
        result.event_type = event.event_type
        return result

    async def ingest(self, product: Product) -> IngestionResult:
        """Normalize, embed and index one product.

        Returns:
            IngestionResult with status INDEXED, or FAILED with the error and
            the last stage that completed.
        """
        stage = IngestionStage.EVENT_RECEIVED
        try:
            text = normalize(product)
            stage = IngestionStage.NORMALIZED
            logger.debug("Normalized product %s (%d chars)", product.id, len(text))

            vector = await self.embedder.embed(text)
            if not vector:
                raise IngestionError(
                    "Embedder returned an empty vector",
                    context={"product_id": product.id},
                )
            stage = IngestionStage.EMBEDDED
            logger.debug("Embedded product %s (dim=%d)", product.id, len(vector))

            await self.vector_store.insert(
                IndexedEntry(id=product.id, values=vector, metadata=product.to_index_metadata())
            )
            stage = IngestionStage.INDEXED
        except CatalogRAGError as e:
            logger.error(
                "Ingestion of product %s failed after stage %s: [%s] %s",
                product.id,
                stage.value,
                e.error_code,
                e.message,
            )
            return IngestionResult(
                status=IngestionStatus.FAILED, stage=stage, product_id=product.id, error=e
            )
        except Exception as e:
            logger.exception("Unexpected error ingesting product %s", product.id)
            return IngestionResult(
                status=IngestionStatus.FAILED,
                stage=stage,
                product_id=product.id,
                error=IngestionError(
                    f"Unexpected error ingesting product {product.id}",
                    cause=e,
                    context={"product_id": product.id, "stage": stage.value},
                ),
            )

        logger.info("Indexed product %s", product.id)
        return IngestionResult(
            status=IngestionStatus.INDEXED, stage=stage, product_id=product.id
        )
