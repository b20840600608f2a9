"""Question-answering endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from .....core.services import GenerationService
from ..deps import get_generation_service
from ..models import ErrorResponse, QuestionRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ask"])


@router.post(
    "/ask",
    responses={
        200: {"description": "Raw generation output, or a validation message"},
        502: {"model": ErrorResponse, "description": "Upstream failure"},
    },
)
async def ask_question(
    request: QuestionRequest | None = Body(None),
    service: GenerationService = Depends(get_generation_service),
) -> dict[str, Any]:
    """Answer a question grounded in the most relevant products.

    Returns the generation model's output unchanged, or
    ``{"message": "Please tell me your question."}`` when no question was sent.
    """
    result = await service.answer(request.question if request else None)
    return result.to_response()
