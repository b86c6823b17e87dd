"""
emlkit: email message model engine.

Two independent pipelines over raw RFC 5322 text:

- extraction: ``parse_and_select(raw, mode)`` parses the MIME tree and pulls
  out plain text, HTML, headers, the source, or all three parts at once;
- header rewrite: ``rewrite_headers(raw, plan)`` strips tracking headers,
  writes placeholder tokens and inserts custom headers, line by line.
"""

from emlkit.ir import (
    ExtractedParts,
    ExtractMode,
    HeaderField,
    HeaderParameter,
    HeaderTable,
    MimeNode,
    PlaceholderBindings,
    RewritePlan,
    RewriteSummary,
)
from emlkit.pipeline import (
    parse_and_select,
    reconstruct_email,
    rewrite_headers,
    rewrite_with_report,
    separate_source,
)

__version__ = "0.1.0"

__all__ = [
    "ExtractMode",
    "ExtractedParts",
    "HeaderField",
    "HeaderParameter",
    "HeaderTable",
    "MimeNode",
    "PlaceholderBindings",
    "RewritePlan",
    "RewriteSummary",
    "parse_and_select",
    "reconstruct_email",
    "rewrite_headers",
    "rewrite_with_report",
    "separate_source",
]
