"""
Rule tables for the header rewrite engine.

Header names are matched case-insensitively against the text before the
first ``:`` of a header line.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List

# ---------------------------------------------------------------------------
# Removal
# ---------------------------------------------------------------------------

# Authentication / delivery trace headers, always dropped.
REMOVED_HEADER_NAMES: FrozenSet[str] = frozenset({
    "dkim-signature",
    "received-spf",
    "authentication-results",
    "arc-seal",
    "arc-message-signature",
    "arc-authentication-results",
    "return-path",
    "delivered-to",
})

# "Received: by ..." hops are dropped, "Received: from ..." hops are kept.
RECEIVED_BY_RE = re.compile(r"^received\s*:\s*by\b", re.IGNORECASE)

# Dropped here, re-emitted by the insertion block when the plan asks for it.
LIST_UNSUBSCRIBE_NAMES: FrozenSet[str] = frozenset({
    "list-unsubscribe",
    "list-unsubscribe-post",
})

X_HEADER_PREFIX = "x-"

DROPPED_HEADER_NAMES: FrozenSet[str] = frozenset({"cc"})

# ---------------------------------------------------------------------------
# Rewrites
# ---------------------------------------------------------------------------

FROM_ADDRESS_RE = re.compile(r'From:\s*(?:"([^"]*)"|([^<]*))\s*<(.+?)>', re.IGNORECASE)
MESSAGE_ID_VALUE_RE = re.compile(r"^<?([^>]+?)>?\s*$")

FALLBACK_FROM_LOCAL_PART = "noreply"

# ---------------------------------------------------------------------------
# Insertion block
# ---------------------------------------------------------------------------

LIST_UNSUBSCRIBE_TEMPLATES: List[str] = [
    "List-Unsubscribe: <mailto:unsubscribe@{rpath}>, <http://{rpath}/unsubscribe?email=abuse@{rpath}>",
    "List-Unsubscribe-Post: List-Unsubscribe=One-Click",
]

# Bracketed token inside a custom header template, e.g. "[EID]"
PLACEHOLDER_TOKEN_RE = re.compile(r"\[[^\[\]\s]+\]")

# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

REQUIRED_HEADERS: List[str] = ["From", "To", "Subject", "Date"]
