"""
Transfer-encoding decoders.

Both decoders map bytes to characters one-to-one (latin-1); charset
handling is the caller's concern. Neither raises: undecodable input comes
back as literal text.
"""

from __future__ import annotations

import base64
import binascii

from emlkit.logger import get_logger
from emlkit.mime.config import (
    BASE64_ALPHABET_RE,
    QP_ESCAPE_RE,
    QP_SOFT_BREAK_RE,
    WHITESPACE_RE,
)

logger = get_logger(__name__)


class TransferDecoder:
    """Stateless quoted-printable / base64 decoding with lossy fallback."""

    @staticmethod
    def decode_quoted_printable(text: str) -> str:
        """Drop soft line breaks, then expand ``=XX`` escapes.

        Escapes that are not two hex digits are left as they are.
        """
        if not text:
            return ""
        unfolded = QP_SOFT_BREAK_RE.sub("", text)
        return QP_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 16)), unfolded)

    @staticmethod
    def decode_base64(text: str) -> str:
        """Decode base64 after stripping whitespace.

        Input that is not valid base64 is returned unchanged.
        """
        if not text:
            return ""
        cleaned = WHITESPACE_RE.sub("", text)
        if not BASE64_ALPHABET_RE.match(cleaned):
            logger.debug("base64: invalid alphabet, returning input unchanged")
            return text
        try:
            raw = base64.b64decode(cleaned, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.debug("base64: decode failed (%s), returning input unchanged", e)
            return text
        return raw.decode("latin-1")

    @classmethod
    def decode(cls, text: str, transfer_encoding: str) -> str:
        """Decode *text* according to a ``Content-Transfer-Encoding`` value.

        7bit, 8bit, binary and unknown encodings pass through untouched.
        """
        encoding = (transfer_encoding or "").lower()
        if "quoted-printable" in encoding:
            return cls.decode_quoted_printable(text)
        if "base64" in encoding:
            return cls.decode_base64(text)
        return text
