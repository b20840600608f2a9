"""Webhook boundary: verifies and parses provider events."""

from .stripe_events import parse_event

__all__ = ["parse_event"]
