"""
Before/after reporting for header rewrites: which header names disappeared,
appeared or changed, and which required headers are missing.
"""

from __future__ import annotations

import re
from typing import Dict, List

from emlkit.ir import RewriteSummary
from emlkit.mime.headers import is_continuation, split_header_block
from emlkit.mime.normalizer import normalize_line_endings
from emlkit.rewrite.config import REQUIRED_HEADERS


def _first_lines_by_name(text: str) -> Dict[str, str]:
    """Header name -> first line carrying it, in header-block order."""
    normalized = normalize_line_endings(text or "")
    header_lines, _, found = split_header_block(normalized)
    if not found:
        header_lines = normalized.split("\n")

    first_lines: Dict[str, str] = {}
    for line in header_lines:
        if not line.strip() or is_continuation(line) or ":" not in line:
            continue
        name = line.split(":", 1)[0].strip()
        if name and name not in first_lines:
            first_lines[name] = line
    return first_lines


def summarize_changes(original: str, rewritten: str) -> RewriteSummary:
    """Compare the header blocks of *original* and *rewritten*.

    Names are compared exactly as written, so a casing fix such as
    ``Message-Id`` -> ``Message-ID`` shows up as one removal plus one
    addition.
    """
    before = _first_lines_by_name(original)
    after = _first_lines_by_name(rewritten)

    return RewriteSummary(
        removed_headers=[name for name in before if name not in after],
        added_headers=[name for name in after if name not in before],
        modified_headers=[
            name for name in before
            if name in after and before[name] != after[name]
        ],
        original_size=len((original or "").encode("utf-8")),
        rewritten_size=len((rewritten or "").encode("utf-8")),
    )


def validate_headers(text: str) -> List[str]:
    """Warnings for required headers missing from *text*."""
    warnings: List[str] = []
    for name in REQUIRED_HEADERS:
        pattern = re.compile(rf"^{re.escape(name)}:", re.IGNORECASE | re.MULTILINE)
        if not pattern.search(text or ""):
            warnings.append(f"Missing {name} header")
    return warnings
