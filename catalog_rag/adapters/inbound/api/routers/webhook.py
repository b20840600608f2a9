"""Stripe webhook receiver."""

import logging

from fastapi import APIRouter, Depends, Header, Request, Response

from .....config.settings import settings
from .....core.domain.exceptions import SignatureVerificationError
from .....core.services import IngestionService
from ...webhook import parse_event
from ..deps import get_ingestion_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])


@router.post("/webhook")
async def receive_webhook(
    request: Request,
    stripe_signature: str | None = Header(None, alias="stripe-signature"),
    ingestion: IngestionService = Depends(get_ingestion_service),
) -> Response:
    """Verify a delivery and ingest the product it carries.

    Answers 400 for unverifiable deliveries, 500 when ingestion failed so
    that Stripe redelivers, and 200 otherwise (including ignored event types).
    """
    if not stripe_signature or not settings.stripe_webhook_secret:
        return Response(content="", status_code=400, media_type="text/plain")

    payload = await request.body()
    try:
        event = parse_event(payload, stripe_signature, settings.stripe_webhook_secret)
    except SignatureVerificationError as e:
        logger.warning("⚠️  %s", e.message)
        return Response(content=f"⚠️  {e.message}", status_code=400, media_type="text/plain")

    result = await ingestion.handle_event(event)
    if not result.ok:
        message = result.error.message if result.error else "Ingestion failed"
        return Response(content=message, status_code=500, media_type="text/plain")
    return Response(content="", status_code=200, media_type="text/plain")
