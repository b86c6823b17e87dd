"""
Value rewrites for the ``From:`` and ``Message-ID:`` headers.

Both functions take the logical header line (continuations already joined)
and always return a single replacement line.
"""

from __future__ import annotations

from emlkit.logger import get_logger
from emlkit.rewrite.config import (
    FALLBACK_FROM_LOCAL_PART,
    FROM_ADDRESS_RE,
    MESSAGE_ID_VALUE_RE,
)

logger = get_logger(__name__)


def derive_display_name(name: str, address: str) -> str:
    """Brand-like display name for a sender.

    A name holding an address contributes its domain, a dotted name is used
    as is, anything else falls back to the domain of *address*. Dotted
    tokens reduce to their second-to-last label, and the first letter is
    capitalised: ``"news@mail.shop.com"`` -> ``"Shop"``.
    """
    name = name.strip()
    if "@" in name:
        token = name.split("@")[1]
    elif "." in name:
        token = name
    else:
        token = address.split("@")[1] if "@" in address else name

    if "." in token:
        token = token.split(".")[-2]
    return token[:1].upper() + token[1:]


def rewrite_from(line: str, rpath: str) -> str:
    """``From: "Name" <local@domain>`` -> ``From: "Derived" <local@rpath>``."""
    match = FROM_ADDRESS_RE.search(line)
    if not match:
        logger.debug("From rewrite: unparseable value, using fallback sender")
        return f"From: <{FALLBACK_FROM_LOCAL_PART}@{rpath}>"

    name = match.group(1) or match.group(2) or ""
    address = match.group(3).strip()
    local_part = address.split("@")[0]
    return f'From: "{derive_display_name(name, address)}" <{local_part}@{rpath}>'


def rewrite_message_id(line: str, eid: str, rnds: str) -> str:
    """Insert *eid* into the middle of the Message-ID local part.

    A missing domain becomes *rnds*; a local part already holding *eid* is
    left alone.
    """
    value = line.split(":", 1)[1].strip() if ":" in line else ""
    match = MESSAGE_ID_VALUE_RE.match(value)
    id_value = (match.group(1) if match else value).strip()

    local_part, _, domain = id_value.partition("@")
    if not domain:
        domain = rnds

    if eid not in local_part:
        mid = len(local_part) // 2
        local_part = local_part[:mid] + eid + local_part[mid:]

    return f"Message-ID: <{local_part}@{domain}>"
