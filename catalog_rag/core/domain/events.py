"""Webhook event and ingestion outcome models."""

from dataclasses import dataclass
from enum import Enum

from .exceptions import CatalogRAGError
from .product import PRODUCT_CREATED_EVENT, Product


@dataclass(frozen=True)
class WebhookEvent:
    """A verified event from the payment provider."""

    event_type: str
    product: Product | None = None
    event_id: str | None = None

    @property
    def is_product_created(self) -> bool:
        return self.event_type == PRODUCT_CREATED_EVENT and self.product is not None


class IngestionStatus(Enum):
    """Terminal outcome of one ingestion run."""

    INDEXED = "indexed"
    SKIPPED = "skipped"
    FAILED = "failed"


class IngestionStage(Enum):
    """Last step an ingestion run completed."""

    EVENT_RECEIVED = "event_received"
    NORMALIZED = "normalized"
    EMBEDDED = "embedded"
    INDEXED = "indexed"


@dataclass
class IngestionResult:
    """Explicit result of ingesting one product or event."""

    status: IngestionStatus
    stage: IngestionStage
    product_id: str | None = None
    event_type: str | None = None
    error: CatalogRAGError | None = None

    @property
    def ok(self) -> bool:
        return self.status is not IngestionStatus.FAILED
