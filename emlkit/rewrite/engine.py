"""
Line-oriented header rewriting.

The engine works on the raw lines of a message rather than on the parsed
MIME tree: passthrough headers, folded continuations and the whole body are
emitted byte-for-byte as they came in, only the headers touched by a rule
change. Header mode ends at the first blank line or at a delimiter line of
the message's own multipart boundary.
"""

from __future__ import annotations

from typing import List, Optional

from emlkit.ir import RewritePlan
from emlkit.logger import get_logger
from emlkit.mime.headers import is_continuation, split_header_block
from emlkit.mime.normalizer import normalize_line_endings
from emlkit.mime.parser import MimeTreeParser
from emlkit.rewrite.addresses import rewrite_from, rewrite_message_id
from emlkit.rewrite.config import (
    DROPPED_HEADER_NAMES,
    LIST_UNSUBSCRIBE_NAMES,
    LIST_UNSUBSCRIBE_TEMPLATES,
    PLACEHOLDER_TOKEN_RE,
    RECEIVED_BY_RE,
    REMOVED_HEADER_NAMES,
    X_HEADER_PREFIX,
)

logger = get_logger(__name__)


def header_name(line: str) -> str:
    """Lower-cased field name of a header line, ``""`` when it has no colon."""
    name, sep, _ = line.partition(":")
    return name.strip().lower() if sep else ""


def continuation_end(lines: List[str], start: int) -> int:
    """Index just past the header starting at *start* and its folded lines."""
    end = start + 1
    while end < len(lines) and lines[end].strip() and is_continuation(lines[end]):
        end += 1
    return end


def join_logical(block: List[str]) -> str:
    """One-line view of a folded header, for value parsing only."""
    return " ".join([block[0].strip()] + [line.strip() for line in block[1:]])


class HeaderRewriteEngine:
    """Apply a :class:`RewritePlan` to the header block of a message.

    Instances hold only the plan; :meth:`rewrite` keeps no state between
    calls and never raises on malformed input.
    """

    def __init__(self, plan: Optional[RewritePlan] = None):
        self.plan = plan or RewritePlan()

    # ------------------------------------------------------------------
    # Boundary detection
    # ------------------------------------------------------------------

    @staticmethod
    def detect_boundary(lines: List[str]) -> str:
        """Boundary declared in the header block, or ``""``.

        Leading blank lines are skipped; without any blank line the whole
        text is taken as the header block.
        """
        start = 0
        while start < len(lines) and not lines[start].strip():
            start += 1
        header_lines, _, found = split_header_block("\n".join(lines[start:]))
        if not found:
            header_lines = lines[start:]
        return MimeTreeParser.extract_boundary(" ".join(line.strip() for line in header_lines))

    # ------------------------------------------------------------------
    # Per-field rules
    # ------------------------------------------------------------------

    def rewrite_field(self, block: List[str]) -> List[str]:
        """Replacement lines for one header and its continuations.

        An empty list drops the header; returning *block* keeps it verbatim.
        """
        first = block[0]
        name = header_name(first)
        tokens = self.plan.placeholders

        if name in REMOVED_HEADER_NAMES or RECEIVED_BY_RE.match(first):
            return []
        if self.plan.remove_x_headers and first.strip().lower().startswith(X_HEADER_PREFIX):
            return []
        if name in LIST_UNSUBSCRIBE_NAMES or name in DROPPED_HEADER_NAMES:
            return []

        if name == "to":
            return [f"To: {tokens.to}"]
        if name == "from":
            return [rewrite_from(join_logical(block), tokens.rpath)]
        if name == "message-id":
            return [rewrite_message_id(join_logical(block), tokens.eid, tokens.rnds)]
        if name == "date" and self.plan.replace_date_header:
            return [f"Date: {tokens.date}"]
        return list(block)

    # ------------------------------------------------------------------
    # Insertion block
    # ------------------------------------------------------------------

    def undeclared_tokens(self) -> List[str]:
        """Tokens used by custom header templates that the plan never declares.

        Declared means listed in ``plan.parameters`` or bound to a built-in
        rule. Each token is reported once, in order of first use.
        """
        known = set(self.plan.declared_tokens())
        known.update(self.plan.placeholders.model_dump().values())
        found: List[str] = []
        for template in self.plan.custom_headers:
            for token in PLACEHOLDER_TOKEN_RE.findall(template):
                if token not in known and token not in found:
                    found.append(token)
        return found

    def insertion_block(self) -> List[str]:
        """List-Unsubscribe lines (optional) followed by the custom headers.

        Custom header templates go in verbatim; any placeholder tokens they
        reference stay literal for the downstream substitution step.
        """
        undeclared = self.undeclared_tokens()
        if undeclared:
            logger.debug("Custom headers reference undeclared placeholder(s): %s", ", ".join(undeclared))

        block: List[str] = []
        if self.plan.add_list_unsubscribe:
            rpath = self.plan.placeholders.rpath
            block.extend(t.format(rpath=rpath) for t in LIST_UNSUBSCRIBE_TEMPLATES)
        for template in self.plan.custom_headers:
            for line in normalize_line_endings(template).split("\n"):
                if line.strip():
                    block.append(line.rstrip())
        return block

    # ------------------------------------------------------------------
    # Full pass
    # ------------------------------------------------------------------

    def rewrite(self, text: str) -> str:
        """Rewrite the header block of *text* and return the full message."""
        lines = normalize_line_endings(text or "").split("\n")
        boundary = self.detect_boundary(lines)

        output: List[str] = []
        from_index: Optional[int] = None
        in_header = True
        seen_header = False
        dropped = 0
        i = 0

        while i < len(lines):
            line = lines[i]

            if not in_header:
                output.append(line)
                i += 1
                continue

            if boundary and line.startswith("--") and boundary in line:
                in_header = False
                output.append(line)
                i += 1
                continue

            if line.strip() == "":
                # leading blank lines before any header are kept in header mode
                if seen_header:
                    in_header = False
                output.append(line)
                i += 1
                continue

            if is_continuation(line):
                # folded line with no header to belong to
                dropped += 1
                i += 1
                continue

            seen_header = True
            end = continuation_end(lines, i)
            block = lines[i:end]
            replacement = self.rewrite_field(block)
            if not replacement:
                dropped += 1
            if from_index is None and header_name(line) == "from" and replacement:
                from_index = len(output)
            output.extend(replacement)
            i = end

        insert_at = self._insertion_point(output, from_index)
        insertion = self.insertion_block()
        output[insert_at:insert_at] = insertion

        logger.debug(
            "Header rewrite: %d header(s) dropped, %d line(s) inserted at %d",
            dropped, len(insertion), insert_at,
        )
        return "\n".join(output)

    @staticmethod
    def _insertion_point(output: List[str], from_index: Optional[int]) -> int:
        # after From:, else at the first blank line, else at the end
        if from_index is not None:
            return from_index + 1
        seen_header = False
        for idx, line in enumerate(output):
            if line.strip():
                seen_header = True
            elif seen_header:
                return idx
        return len(output)
