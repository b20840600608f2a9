"""Stripe webhook verification and event parsing.

Only verified events leave this module. Anything that fails verification
raises ``SignatureVerificationError`` and never reaches ingestion.
"""

import json
import logging
from typing import Any

import stripe

from ....core.domain import Product, WebhookEvent
from ....core.domain.exceptions import SignatureVerificationError

logger = logging.getLogger(__name__)


def _event_from_payload(data: dict[str, Any]) -> WebhookEvent:
    obj = (data.get("data") or {}).get("object") or {}
    product = None
    if obj.get("object") == "product" and obj.get("id"):
        product = Product.from_stripe(obj)
    return WebhookEvent(
        event_type=str(data.get("type") or ""),
        product=product,
        event_id=data.get("id"),
    )


def parse_event(payload: bytes | str, signature: str, secret: str) -> WebhookEvent:
    """Verify a webhook delivery and extract its product.

    Args:
        payload: Raw request body, exactly as received.
        signature: Value of the ``Stripe-Signature`` header.
        secret: Endpoint signing secret (``whsec_...``).

    Returns:
        WebhookEvent; ``product`` is set only when the event carries a product.

    Raises:
        SignatureVerificationError: If the signature or the payload is invalid.
    """
    try:
        stripe.Webhook.construct_event(payload, signature, secret)
    except stripe.SignatureVerificationError as e:
        raise SignatureVerificationError(
            f"Webhook signature verification failed. {e.user_message or e}", cause=e
        ) from e
    except ValueError as e:
        raise SignatureVerificationError(
            f"Webhook signature verification failed. Invalid payload: {e}", cause=e
        ) from e

    body = payload.decode("utf-8") if isinstance(payload, bytes) else payload
    event = _event_from_payload(json.loads(body))
    logger.debug("Verified webhook event %s (%s)", event.event_id, event.event_type)
    return event
