"""
Content selection over a parsed MIME tree.

One depth-first, pre-order traversal serves every extraction mode; the mode
decides which leaves are collected and how they are decoded. Decoding works
on copies of leaf bodies and never touches the tree.
"""

from __future__ import annotations

from typing import List, Optional, Union

from emlkit.ir import ExtractedParts, ExtractMode, MimeNode
from emlkit.logger import get_logger
from emlkit.mime.cleaner import ContentCleaner
from emlkit.mime.config import SECTION_SEPARATOR
from emlkit.mime.decoder import TransferDecoder
from emlkit.mime.headers import format_header_lines, raw_header_block
from emlkit.mime.normalizer import normalize_line_endings

logger = get_logger(__name__)


class ContentSelector:
    """Extract text from a :class:`MimeNode` tree in one of the ExtractModes."""

    # ------------------------------------------------------------------
    # Leaf predicates / decoding
    # ------------------------------------------------------------------

    @staticmethod
    def is_plain_text_leaf(node: MimeNode) -> bool:
        """Untyped or ``text/plain`` leaves; base64 ones are skipped, not decoded."""
        if node.is_multipart:
            return False
        if node.content_type and "text/plain" not in node.content_type:
            return False
        return "base64" not in node.transfer_encoding

    @staticmethod
    def is_html_leaf(node: MimeNode) -> bool:
        return not node.is_multipart and "text/html" in node.content_type

    @staticmethod
    def plain_text_of(node: MimeNode) -> str:
        """Decoded, cleaned text of a plain-text leaf."""
        body = node.body or ""
        if "quoted-printable" in node.transfer_encoding:
            body = TransferDecoder.decode_quoted_printable(body)
        return ContentCleaner.clean_text(body)

    @staticmethod
    def html_of(node: MimeNode) -> str:
        """Decoded HTML of an html leaf, tags untouched."""
        return TransferDecoder.decode(node.body or "", node.transfer_encoding).strip()

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    @classmethod
    def collect(
        cls,
        node: MimeNode,
        plain: Optional[List[str]] = None,
        html: Optional[List[str]] = None,
        skip_attachments: bool = False,
    ) -> None:
        """Walk *node* pre-order, appending into whichever collectors are given.

        Children of a multipart node are visited in source order. With
        *skip_attachments*, any node whose disposition mentions
        ``attachment`` is skipped together with its subtree.
        """
        if skip_attachments and node.is_attachment:
            return

        if node.is_multipart:
            for child in node.children or []:
                cls.collect(child, plain, html, skip_attachments)
            return

        if plain is not None and cls.is_plain_text_leaf(node):
            text = cls.plain_text_of(node)
            if text:
                plain.append(text)

        if html is not None and cls.is_html_leaf(node):
            markup = cls.html_of(node)
            if markup:
                html.append(markup)

    @staticmethod
    def _fallback_plain_text(root: MimeNode, collected: List[str]) -> None:
        # Untyped root with nothing collected: treat the raw body as text.
        if collected or root.headers.has("content-type") or root.is_multipart:
            return
        fallback = ContentCleaner.clean_text(root.body or "")
        if fallback:
            logger.debug("select: no text sections, using raw body fallback")
            collected.append(fallback)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @classmethod
    def select_plain_text(cls, root: MimeNode) -> str:
        collected: List[str] = []
        cls.collect(root, plain=collected)
        cls._fallback_plain_text(root, collected)
        return SECTION_SEPARATOR.join(collected)

    @classmethod
    def select_html(cls, root: MimeNode) -> str:
        collected: List[str] = []
        cls.collect(root, html=collected)
        return SECTION_SEPARATOR.join(collected)

    @staticmethod
    def select_headers(root: MimeNode) -> str:
        return format_header_lines(root.headers)

    @classmethod
    def select_parts(cls, root: MimeNode, source: Optional[str] = None) -> ExtractedParts:
        """Header, plain text and HTML in one traversal, attachments excluded.

        The header is the verbatim header block of *source* so a reduced
        message can be rebuilt with its original layout; without *source*
        the formatted header view is used instead.
        """
        plain: List[str] = []
        html: List[str] = []
        cls.collect(root, plain=plain, html=html, skip_attachments=True)
        cls._fallback_plain_text(root, plain)

        if source is not None:
            header = raw_header_block(normalize_line_endings(source))
        else:
            header = format_header_lines(root.headers)

        return ExtractedParts(
            header=header,
            plain_text=SECTION_SEPARATOR.join(plain),
            html=SECTION_SEPARATOR.join(html),
        )

    @classmethod
    def select(
        cls,
        root: MimeNode,
        mode: Union[ExtractMode, str],
        source: Optional[str] = None,
    ) -> Union[str, ExtractedParts]:
        """Extract from *root* according to *mode*.

        *source* is the original message text; SOURCE mode returns it
        line-normalised and PARTS mode takes its header block from it.
        Unknown mode strings raise ``ValueError``.
        """
        mode = ExtractMode(mode)
        if mode is ExtractMode.PLAIN_TEXT:
            return cls.select_plain_text(root)
        if mode is ExtractMode.HTML:
            return cls.select_html(root)
        if mode is ExtractMode.HEADERS:
            return cls.select_headers(root)
        if mode is ExtractMode.SOURCE:
            return normalize_line_endings(source or "")
        return cls.select_parts(root, source)
