"""
Placeholder resolution.

The rewrite engine leaves tokens such as ``[EID]`` in its output. This
module is the separate step that swaps them for real values once they are
known.
"""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

from emlkit.logger import get_logger

logger = get_logger(__name__)


def substitute_placeholders(text: str, values: Mapping[str, str]) -> str:
    """Replace every token in *values* with its value.

    Longer tokens go first so a token that contains another one is not
    split. Tokens without a value (empty key) are ignored.
    """
    if not text or not values:
        return text or ""
    for token in sorted((t for t in values if t), key=len, reverse=True):
        text = text.replace(token, str(values[token]))
    return text


def parse_assignments(pairs: Iterable[str]) -> Dict[str, str]:
    """``["[EID]=abc", "[RNDS]=x.example"]`` -> ``{"[EID]": "abc", ...}``.

    Pairs without ``=`` or with an empty token are skipped with a warning.
    """
    values: Dict[str, str] = {}
    for pair in pairs or []:
        token, sep, value = pair.partition("=")
        token = token.strip()
        if not sep or not token:
            logger.warning("Ignoring malformed placeholder assignment: %r", pair)
            continue
        values[token] = value
    return values
