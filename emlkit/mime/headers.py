"""
Header block handling: header/body split, folded-line merging and the
``Title-Case: value`` rendering used by the header view.
"""

from __future__ import annotations

from typing import List, Tuple

from emlkit.ir import HeaderField, HeaderTable
from emlkit.mime.config import CONTINUATION_RE


def is_continuation(line: str) -> bool:
    """True for a folded header line (leading space or tab)."""
    return bool(CONTINUATION_RE.match(line))


def split_header_block(text: str) -> Tuple[List[str], str, bool]:
    """Split normalised *text* at the first blank line.

    Returns ``(header_lines, body, found)``. When no blank line exists the
    whole text is returned as body with no header lines and ``found=False``.
    """
    lines = text.split("\n")
    for idx, line in enumerate(lines):
        if line.strip() == "":
            return lines[:idx], "\n".join(lines[idx + 1:]), True
    return [], text, False


def build_header_table(lines: List[str]) -> HeaderTable:
    """Build a :class:`HeaderTable` from raw header-block lines.

    Never raises: blank lines are skipped, lines without ``:`` are dropped,
    and a continuation line with no preceding field is discarded.
    """
    names: List[str] = []
    values: List[str] = []

    for raw_line in lines:
        if raw_line.strip() == "":
            continue

        if is_continuation(raw_line):
            if not names:
                continue
            piece = raw_line.strip()
            values[-1] = f"{values[-1]} {piece}" if values[-1] else piece
            continue

        name, sep, value = raw_line.partition(":")
        if not sep:
            continue
        names.append(name.strip())
        values.append(value.strip())

    fields = tuple(
        HeaderField(name=name, value=value, ordinal=idx)
        for idx, (name, value) in enumerate(zip(names, values))
    )
    return HeaderTable(entries=fields)


def title_case_name(name: str) -> str:
    """``content-transfer-encoding`` -> ``Content-Transfer-Encoding``."""
    words = name.strip().lower().split("-")
    return "-".join(w[:1].upper() + w[1:] for w in words)


def format_header_lines(table: HeaderTable) -> str:
    """Render *table* as one ``Title-Case-Name: value`` line per field."""
    return "\n".join(f"{title_case_name(f.name)}: {f.value}" for f in table.entries)


def raw_header_block(text: str) -> str:
    """Verbatim header lines of normalised *text*, up to the first blank line.

    Empty when the text has no blank line, matching :func:`split_header_block`.
    """
    header_lines, _, found = split_header_block(text)
    return "\n".join(header_lines) if found else ""
