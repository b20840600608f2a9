"""Product, index entry and query match models."""

from dataclasses import dataclass, field
from typing import Any

# Only this event type triggers ingestion
PRODUCT_CREATED_EVENT = "product.created"


@dataclass(frozen=True)
class Product:
    """A catalog product as delivered by the payment provider.

    Attributes:
        id: Provider product identifier (e.g. ``prod_...``).
        name: Display name.
        description: Free-text description, if any.
        metadata: Provider key/value metadata in its original order.
    """

    id: str
    name: str
    description: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_stripe(cls, obj: Any) -> "Product":
        """Build a Product from a Stripe product object or its dict form."""
        metadata = obj.get("metadata") or {}
        return cls(
            id=str(obj["id"]),
            name=str(obj.get("name") or ""),
            description=obj.get("description"),
            metadata={str(key): str(value) for key, value in dict(metadata).items()},
        )

    def to_index_metadata(self) -> dict[str, Any]:
        """Denormalized, queryable subset stored next to the vector."""
        return {
            "name": self.name,
            "description": self.description or "",
            "product_metadata": dict(self.metadata),
        }


@dataclass
class IndexedEntry:
    """The persisted unit in the vector store.

    Attributes:
        id: Product identifier.
        values: Embedding vector.
        metadata: Output of ``Product.to_index_metadata``.
    """

    id: str
    values: list[float]
    metadata: dict[str, Any]


@dataclass
class QueryMatch:
    """A similarity query hit.

    Attributes:
        id: Product identifier of the matched entry.
        score: Cosine similarity; matches are ordered by descending score.
        metadata: Stored metadata, or None when it was not requested.
    """

    id: str
    score: float
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "score": self.score, "metadata": self.metadata}
