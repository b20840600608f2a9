"""Unit tests for Stripe webhook verification and parsing."""

import hashlib
import hmac
import json
import time

import pytest

from catalog_rag.adapters.inbound.webhook import parse_event
from catalog_rag.core.domain import Product
from catalog_rag.core.domain.exceptions import SignatureVerificationError

pytestmark = pytest.mark.unit

SECRET = "whsec_test_secret"


def sign(payload: str, secret: str = SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header the way Stripe signs deliveries."""
    timestamp = timestamp or int(time.time())
    digest = hmac.new(
        secret.encode("utf-8"), f"{timestamp}.{payload}".encode("utf-8"), hashlib.sha256
    ).hexdigest()
    return f"t={timestamp},v1={digest}"


def event_payload(event_type: str, obj: dict) -> str:
    return json.dumps(
        {"id": "evt_123", "object": "event", "type": event_type, "data": {"object": obj}}
    )


def test_product_created_event_is_parsed(stripe_product_payload):
    payload = event_payload("product.created", stripe_product_payload)

    event = parse_event(payload.encode("utf-8"), sign(payload), SECRET)

    assert event.event_type == "product.created"
    assert event.event_id == "evt_123"
    assert event.is_product_created
    assert event.product == Product(
        id="prod_NWjs8kKbJWmuuc",
        name="Gold Plan",
        description="Premium subscription with priority support",
        metadata={"tier": "gold", "seats": "10"},
    )


def test_non_product_object_has_no_product():
    payload = event_payload("price.created", {"id": "price_1", "object": "price"})

    event = parse_event(payload, sign(payload), SECRET)

    assert event.event_type == "price.created"
    assert event.product is None
    assert not event.is_product_created


def test_product_updated_is_not_a_creation(stripe_product_payload):
    payload = event_payload("product.updated", stripe_product_payload)

    event = parse_event(payload, sign(payload), SECRET)

    assert event.product is not None
    assert not event.is_product_created


def test_wrong_secret_fails_verification(stripe_product_payload):
    payload = event_payload("product.created", stripe_product_payload)

    with pytest.raises(SignatureVerificationError) as exc_info:
        parse_event(payload, sign(payload, secret="whsec_other"), SECRET)

    assert exc_info.value.message.startswith("Webhook signature verification failed.")


def test_tampered_payload_fails_verification(stripe_product_payload):
    payload = event_payload("product.created", stripe_product_payload)
    header = sign(payload)
    tampered = payload.replace("Gold Plan", "Free Plan")

    with pytest.raises(SignatureVerificationError):
        parse_event(tampered, header, SECRET)


def test_stale_timestamp_fails_verification(stripe_product_payload):
    payload = event_payload("product.created", stripe_product_payload)

    with pytest.raises(SignatureVerificationError):
        parse_event(payload, sign(payload, timestamp=int(time.time()) - 3600), SECRET)


def test_malformed_header_fails_verification(stripe_product_payload):
    payload = event_payload("product.created", stripe_product_payload)

    with pytest.raises(SignatureVerificationError):
        parse_event(payload, "garbage", SECRET)


def test_product_without_description(stripe_product_payload):
    stripe_product_payload["description"] = None
    stripe_product_payload["metadata"] = {}

    product = Product.from_stripe(stripe_product_payload)

    assert product.description is None
    assert product.metadata == {}
    assert product.to_index_metadata()["description"] == ""


def test_invalid_json_is_rejected():
    payload = "{not json"

    with pytest.raises(SignatureVerificationError) as exc_info:
        parse_event(payload, sign(payload), SECRET)

    assert "Invalid payload" in exc_info.value.message
