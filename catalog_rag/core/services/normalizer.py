"""Render products as the canonical text that gets embedded."""

from ..domain import Product
from ..domain.exceptions import EmptyRecordError
from ..domain.utils import clean_text

METADATA_HEADING = "### metadata"


def normalize(product: Product) -> str:
    """Convert a product into a stable Markdown block.

    The layout is a ``## name`` heading, the description (empty line when
    absent), a metadata heading, then one ``- key: value`` line per metadata
    pair in the mapping's iteration order. The same product always yields the
    same text.

    Args:
        product: Product to render.

    Returns:
        Canonical text for embedding and prompting.

    Raises:
        EmptyRecordError: If the product has no name, description or metadata.
    """
    name = clean_text(product.name).strip()
    description = clean_text(product.description).strip()
    metadata_lines = [
        f"- {clean_text(key)}: {clean_text(value)}" for key, value in product.metadata.items()
    ]

    if not name and not description and not metadata_lines:
        raise EmptyRecordError(
            "Product has no text to embed",
            context={"product_id": product.id},
        )

    return "\n".join(
        [
            f"## {name}",
            description,
            METADATA_HEADING,
            "\n".join(metadata_lines),
        ]
    )
