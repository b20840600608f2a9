"""Text helpers shared by the domain and adapters.

Incoming product fields and user questions have BOM markers stripped and
are NFKC-normalized once, at the point they enter the pipeline, so that
identical products always normalize to identical text.
"""

import unicodedata


def clean_text(text: str | None, *, normalize: bool = True) -> str:
    """Remove BOM markers and optionally apply NFKC normalization.

    Args:
        text: Input text that may contain BOM or replacement characters.
        normalize: Whether to apply NFKC normalization.

    Returns:
        Cleaned text; an empty string for ``None`` or empty input.
    """
    if not text:
        return ""

    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    if normalize:
        cleaned = unicodedata.normalize("NFKC", cleaned)
    return cleaned


def is_blank(text: str | None) -> bool:
    """Return True when text is None, empty, or whitespace only."""
    return not clean_text(text).strip()
