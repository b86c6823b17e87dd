"""
MIME parsing subpackage.

Public API:
- ``normalize_line_endings`` : CR/CRLF → LF, idempotent
- ``build_header_table``     : ordered, case-insensitive header fields
- ``TransferDecoder``        : quoted-printable / base64 with lossy fallback
- ``MimeTreeParser``         : recursive multipart splitting into a MimeNode tree
- ``ContentSelector``        : text / html / header / source / parts extraction
- ``ContentCleaner``         : cleanup pass for extracted plain text
"""

from emlkit.mime.cleaner import ContentCleaner
from emlkit.mime.decoder import TransferDecoder
from emlkit.mime.headers import build_header_table, format_header_lines, split_header_block
from emlkit.mime.normalizer import normalize_line_endings
from emlkit.mime.parser import MimeTreeParser
from emlkit.mime.selector import ContentSelector

__all__ = [
    "ContentCleaner",
    "ContentSelector",
    "MimeTreeParser",
    "TransferDecoder",
    "build_header_table",
    "format_header_lines",
    "normalize_line_endings",
    "split_header_block",
]
