"""
Header rewrite subpackage.

Public API:
- ``HeaderRewriteEngine`` : line-oriented header removal / rewrite / insertion
- ``rewrite_from``, ``rewrite_message_id`` : single-header value rewrites
- ``summarize_changes``, ``validate_headers`` : before/after reporting
"""

from emlkit.rewrite.addresses import derive_display_name, rewrite_from, rewrite_message_id
from emlkit.rewrite.engine import HeaderRewriteEngine
from emlkit.rewrite.report import summarize_changes, validate_headers

__all__ = [
    "HeaderRewriteEngine",
    "derive_display_name",
    "rewrite_from",
    "rewrite_message_id",
    "summarize_changes",
    "validate_headers",
]
