"""
Cleanup pass for extracted plain text.

Responsibilities:
- Strip residual tags, stray boundary lines and leaked part headers.
- Drop long base64-looking runs.
- Decode a small fixed set of HTML entities.
- Collapse whitespace.
"""

from __future__ import annotations

from emlkit.mime.config import (
    CLEANUP_STRIP_PATTERNS,
    CLEANUP_WHITESPACE_PATTERNS,
    HTML_ENTITIES,
)


class ContentCleaner:
    """Stateless utilities for cleaning extracted body text."""

    @staticmethod
    def decode_entities(text: str) -> str:
        for entity, replacement in HTML_ENTITIES:
            text = text.replace(entity, replacement)
        return text

    @staticmethod
    def collapse_whitespace(text: str) -> str:
        for pattern, replacement in CLEANUP_WHITESPACE_PATTERNS:
            text = pattern.sub(replacement, text)
        return text.strip()

    @classmethod
    def clean_text(cls, text: str) -> str:
        """Return *text* cleaned for display, or ``""`` if nothing is left."""
        if not text or not text.strip():
            return ""
        cleaned = text
        for pattern, replacement in CLEANUP_STRIP_PATTERNS:
            cleaned = pattern.sub(replacement, cleaned)
        cleaned = cleaned.replace("\r", "\n")
        cleaned = cls.decode_entities(cleaned)
        return cls.collapse_whitespace(cleaned)
