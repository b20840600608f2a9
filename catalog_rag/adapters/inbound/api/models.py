"""Pydantic models for API requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QuestionRequest(BaseModel):
    """Request model for asking a question.

    ``question`` is optional here; a missing or empty question is answered
    with a validation message rather than a 422.
    """

    question: str | None = Field(
        None,
        max_length=2000,
        description="Question about the product catalog",
        json_schema_extra={"example": "What color is the widget?"},
    )


class MessageResponse(BaseModel):
    """Validation message returned instead of an answer."""

    message: str = Field(..., description="Human-readable message")


class MatchInfo(BaseModel):
    """A similar product returned by the index."""

    id: str = Field(..., description="Product identifier")
    score: float = Field(..., description="Cosine similarity, higher is closer")
    metadata: dict[str, Any] | None = Field(None, description="Stored product fields")


class ProductResponse(BaseModel):
    """A product with its most similar neighbours."""

    product: dict[str, Any] = Field(..., description="Stored product fields")
    similar_products: list[MatchInfo] = Field(
        default_factory=list,
        description="Similar products, most similar first",
    )


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    vector_store: str = Field(..., description="Vector store backend status")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., CR_NF_002)")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "ProductNotFoundError", "code": "CR_NF_002", "message": "..."},
            "location": {"class": "RetrievalService", "method": "get_product", ...},
            "context": {"product_id": "prod_123"}
        }
    """

    error: ErrorDetail = Field(..., description="Error details including type, code, and message")
    location: ErrorLocation | None = Field(None, description="Source location of the error")
    context: dict | None = Field(None, description="Additional debugging context")
    cause: dict | None = Field(None, description="Underlying exception that caused this error")
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
