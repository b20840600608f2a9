"""Input validation exceptions for Catalog RAG."""

from .base import CatalogRAGError


class InvalidInputError(CatalogRAGError):
    """Empty or malformed input supplied by a caller.

    Recoverable: surfaced to the user as a message, never treated as a fault.
    """

    error_code = "CR_VAL_001"


class EmptyTextError(InvalidInputError):
    """Text passed to the embedder is empty."""

    error_code = "CR_VAL_002"


class EmptyRecordError(InvalidInputError):
    """Product has no name, description or metadata to embed."""

    error_code = "CR_VAL_003"


class DimensionMismatchError(InvalidInputError):
    """Vector length differs from the index dimension."""

    error_code = "CR_VAL_004"


class InvalidFilterError(InvalidInputError):
    """Metadata filter uses an unsupported operator or a non-scalar value."""

    error_code = "CR_VAL_005"
