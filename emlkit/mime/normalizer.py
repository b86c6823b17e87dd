"""Line-ending normalisation applied before any other processing."""

from emlkit.mime.config import LINE_ENDING_RE


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR to LF. Idempotent."""
    if not text:
        return ""
    return LINE_ENDING_RE.sub("\n", text)
