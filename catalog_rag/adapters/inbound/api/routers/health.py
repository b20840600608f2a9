"""Health check endpoints."""

from fastapi import APIRouter, Depends

from ..... import __version__
from ....outbound.vector_store import QdrantAdapter
from ..deps import get_vector_store
from ..models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic liveness check."""
    return HealthResponse(status="healthy", version=__version__, vector_store="not_checked")


@router.get("/ready", response_model=HealthResponse)
async def readiness_check(
    vector_store: QdrantAdapter = Depends(get_vector_store),
) -> HealthResponse:
    """Readiness probe: checks that the vector store answers."""
    try:
        total = await vector_store.count()
        vs_status = f"connected ({total} products)"
    except Exception as e:
        vs_status = f"error: {e}"

    return HealthResponse(status="ready", version=__version__, vector_store=vs_status)
