"""
MIME tree parsing: header/body split, boundary extraction and recursive
multipart splitting.

Malformed input never aborts parsing. Missing blank lines, missing or
unmatched boundaries and excessive nesting all degrade to a leaf holding
the raw body.
"""

from __future__ import annotations

import re
from typing import List, Optional

from emlkit.ir import HeaderTable, MimeNode
from emlkit.logger import get_logger
from emlkit.mime.config import (
    BOUNDARY_PARAM_RE,
    BOUNDARY_TRAILING_SEPARATORS,
    MAX_MIME_DEPTH,
)
from emlkit.mime.headers import build_header_table, split_header_block
from emlkit.mime.normalizer import normalize_line_endings

logger = get_logger(__name__)


class MimeTreeParser:
    """Build a :class:`MimeNode` tree from raw message text."""

    # ------------------------------------------------------------------
    # Boundary handling
    # ------------------------------------------------------------------

    @staticmethod
    def extract_boundary(content_type: Optional[str]) -> str:
        """Return the ``boundary`` parameter of a Content-Type value, or ``""``.

        Accepts ``boundary="x"`` and ``boundary=x``; case of the boundary
        itself is preserved.
        """
        if not content_type:
            return ""
        match = BOUNDARY_PARAM_RE.search(content_type)
        if not match:
            return ""
        boundary = (match.group(1) or match.group(2) or "").strip()
        return boundary.rstrip(BOUNDARY_TRAILING_SEPARATORS)

    @staticmethod
    def split_multipart(body: str, boundary: str) -> List[str]:
        """Split a multipart *body* into its raw part texts.

        The preamble before the first ``--boundary`` line and the epilogue
        after ``--boundary--`` are discarded, as are parts that are empty
        or whitespace only. Without a closing delimiter the last part runs
        to the end of the body.
        """
        if not boundary or not body:
            return []

        delimiter_re = re.compile(
            r"^--" + re.escape(boundary) + r"(--)?[ \t]*$",
            re.MULTILINE,
        )
        matches = list(delimiter_re.finditer(body))
        if not matches:
            return []

        parts: List[str] = []
        for idx, match in enumerate(matches):
            if match.group(1):
                break
            start = match.end()
            if body.startswith("\n", start):
                start += 1
            if idx + 1 < len(matches):
                end = matches[idx + 1].start()
                # the line break before a delimiter belongs to the delimiter
                if end > start and body[end - 1] == "\n":
                    end -= 1
            else:
                end = len(body)
            segment = body[start:end]
            if segment.strip():
                parts.append(segment)
        return parts

    # ------------------------------------------------------------------
    # Full parse
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> MimeNode:
        """Parse raw message *text* (any line endings) into a tree."""
        normalized = normalize_line_endings(text or "")
        return cls._parse_section(normalized, depth=0)

    @classmethod
    def _parse_section(cls, text: str, depth: int) -> MimeNode:
        header_lines, body, found = split_header_block(text)
        if not found:
            logger.debug("MIME parse: no blank line at depth %d, body-only section", depth)
            return MimeNode(headers=HeaderTable(), body=text)

        headers = build_header_table(header_lines)
        content_type = headers.get("content-type")
        attrs = {
            "headers": headers,
            "content_type": content_type.lower(),
            "transfer_encoding": headers.get("content-transfer-encoding").lower(),
            "disposition": headers.get("content-disposition").lower(),
        }

        if not attrs["content_type"].startswith("multipart/"):
            return MimeNode(body=body, **attrs)

        if depth >= MAX_MIME_DEPTH:
            logger.debug("MIME parse: nesting limit %d reached, keeping leaf", MAX_MIME_DEPTH)
            return MimeNode(body=body, **attrs)

        boundary = cls.extract_boundary(content_type)
        if not boundary:
            logger.debug("MIME parse: multipart without boundary, keeping leaf")
            return MimeNode(body=body, **attrs)

        segments = cls.split_multipart(body, boundary)
        if not segments:
            logger.debug("MIME parse: boundary %r matched no parts, keeping leaf", boundary)
            return MimeNode(body=body, **attrs)

        children = [cls._parse_section(segment, depth + 1) for segment in segments]
        return MimeNode(children=children, **attrs)
