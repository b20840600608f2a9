"""Product lookup with similar products."""

import logging

from fastapi import APIRouter, Depends

from .....config.settings import settings
from .....core.services import RetrievalService
from ..deps import get_retrieval_service
from ..models import ErrorResponse, MatchInfo, ProductResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.get(
    "/products/{product_id}",
    response_model=ProductResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Product is not indexed"},
        502: {"model": ErrorResponse, "description": "Upstream failure"},
    },
)
async def get_product(
    product_id: str,
    retriever: RetrievalService = Depends(get_retrieval_service),
) -> ProductResponse:
    """Return a product's stored fields and its most similar products.

    Products sharing the requested product's name are left out of the
    similar list.
    """
    entry, matches = await retriever.lookup_with_similar(
        product_id, settings.similar_products_top_k, exclude_self=True
    )
    return ProductResponse(
        product=entry.metadata,
        similar_products=[MatchInfo(**match.to_dict()) for match in matches],
    )
