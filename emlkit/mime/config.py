"""
Centralised configuration for the MIME parse / extract pipeline.

Regex patterns, entity tables and structural limits live here.
"""

from __future__ import annotations

import re
from typing import List, Tuple

# ---------------------------------------------------------------------------
# Line handling
# ---------------------------------------------------------------------------

LINE_ENDING_RE = re.compile(r"\r\n?")
CONTINUATION_RE = re.compile(r"^[ \t]")

# ---------------------------------------------------------------------------
# Multipart structure
# ---------------------------------------------------------------------------

# Quoted form first, bare form stops at ';' or whitespace.
BOUNDARY_PARAM_RE = re.compile(r'boundary\s*=\s*(?:"([^"]+)"|([^;\s]+))', re.IGNORECASE)
BOUNDARY_TRAILING_SEPARATORS = ";,"

# Nesting deeper than this is kept as a leaf instead of being split further.
MAX_MIME_DEPTH = 64

# ---------------------------------------------------------------------------
# Transfer decoding
# ---------------------------------------------------------------------------

QP_SOFT_BREAK_RE = re.compile(r"=\r?\n")
QP_ESCAPE_RE = re.compile(r"=([0-9A-Fa-f]{2})")
BASE64_ALPHABET_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
WHITESPACE_RE = re.compile(r"\s+")

# ---------------------------------------------------------------------------
# Plain-text cleanup
# ---------------------------------------------------------------------------

# (pattern, replacement) applied in order before entity decoding
CLEANUP_STRIP_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"<[^>]*>"), ""),
    (re.compile(r"^--[a-zA-Z0-9\-_=]+$", re.MULTILINE), ""),
    (re.compile(r"Content-Transfer-Encoding:[^\n]*\n?", re.IGNORECASE), ""),
    (re.compile(r"Content-Type:[^\n]*\n?", re.IGNORECASE), ""),
    (re.compile(r"[A-Za-z0-9+/]{80,}={0,2}"), ""),
]

# Small fixed entity table; "&amp;" is decoded last so "&amp;lt;" stays "&lt;".
HTML_ENTITIES: List[Tuple[str, str]] = [
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&apos;", "'"),
    ("&#x27;", "'"),
    ("&#x2F;", "/"),
    ("&#x60;", "`"),
    ("&#x3D;", "="),
    ("&amp;", "&"),
]

CLEANUP_WHITESPACE_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r"[ \t]+\n"), "\n"),
    (re.compile(r"\n{3,}"), "\n\n"),
    (re.compile(r"[ \t]{2,}"), " "),
    (re.compile(r"^[ \t]+$", re.MULTILINE), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
]

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

SECTION_SEPARATOR = "\n\n"
