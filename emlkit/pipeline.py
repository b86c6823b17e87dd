"""
Pipeline: thin orchestrator over the two engines.

parse_and_select  : raw text → MimeTreeParser → ContentSelector
rewrite_headers   : raw text → HeaderRewriteEngine (no tree involved)
separate_source   : PARTS extraction for the source separator
reconstruct_email : rebuild a reduced message from separated parts

Every function here is pure: no I/O, no shared state.
"""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from emlkit.ir import ExtractedParts, ExtractMode, RewritePlan, RewriteSummary
from emlkit.logger import get_logger
from emlkit.mime.normalizer import normalize_line_endings
from emlkit.mime.parser import MimeTreeParser
from emlkit.mime.selector import ContentSelector
from emlkit.profile_loader import default_rewrite_plan
from emlkit.rewrite.engine import HeaderRewriteEngine
from emlkit.rewrite.report import summarize_changes, validate_headers

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def parse_and_select(
    raw_text: str,
    mode: Union[ExtractMode, str] = ExtractMode.PLAIN_TEXT,
) -> Union[str, ExtractedParts]:
    """
    Extract from *raw_text* according to *mode*.

    Returns a string for every mode except PARTS, which returns
    :class:`ExtractedParts`. An empty result means nothing usable was found.
    """
    mode = ExtractMode(mode)
    normalized = normalize_line_endings(raw_text or "")
    if mode is ExtractMode.SOURCE:
        return normalized

    root = MimeTreeParser.parse(normalized)
    result = ContentSelector.select(root, mode, source=normalized)
    size = len(result.plain_text) + len(result.html) if isinstance(result, ExtractedParts) else len(result)
    logger.debug("parse_and_select: mode=%s, %d chars extracted", mode.value, size)
    return result


def separate_source(raw_text: str) -> ExtractedParts:
    """Header block, plain text and HTML of *raw_text*, attachments excluded."""
    return parse_and_select(raw_text, ExtractMode.PARTS)


def reconstruct_email(
    parts: ExtractedParts,
    keep_header: bool = True,
    keep_plain_text: bool = True,
    keep_html: bool = True,
) -> str:
    """
    Join the kept, non-empty sections (header, plain text, HTML) with one
    blank line between them.
    """
    sections: List[str] = []
    if keep_header and parts.header.strip():
        sections.append(parts.header)
    if keep_plain_text and parts.plain_text.strip():
        sections.append(parts.plain_text)
    if keep_html and parts.html.strip():
        sections.append(parts.html)
    return "\n\n".join(sections)


# ---------------------------------------------------------------------------
# Header rewrite
# ---------------------------------------------------------------------------

def rewrite_headers(raw_text: str, plan: Optional[RewritePlan] = None) -> str:
    """
    Rewrite the header block of *raw_text* under *plan* (default plan when
    omitted). Placeholder tokens are left unresolved.
    """
    engine = HeaderRewriteEngine(plan or default_rewrite_plan())
    return engine.rewrite(raw_text or "")


def rewrite_with_report(
    raw_text: str,
    plan: Optional[RewritePlan] = None,
) -> Tuple[str, RewriteSummary, List[str]]:
    """
    :func:`rewrite_headers` plus a change summary and the missing-header
    warnings of the rewritten message.
    """
    result = rewrite_headers(raw_text, plan)
    summary = summarize_changes(normalize_line_endings(raw_text or ""), result)
    warnings = validate_headers(result)
    logger.debug(
        "rewrite_with_report: removed=%d added=%d modified=%d warnings=%d",
        summary.headers_removed, summary.headers_added, summary.headers_modified, len(warnings),
    )
    return result, summary, warnings
