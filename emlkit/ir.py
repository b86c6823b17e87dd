"""
Intermediate Representation Module
==================================

Core data structures shared by the parser, the content selector and the
header rewrite engine: header fields, the MIME tree, extraction results and
the rewrite plan supplied by callers.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ExtractMode(str, Enum):
    """
    Traversal modes understood by ``ContentSelector.select``.
    Values match the tab names of the extraction tools; member names
    (``"PLAIN_TEXT"``, ``"parts"``) are accepted too, in any case.
    """
    PLAIN_TEXT = "text"
    HTML = "html"
    HEADERS = "header"
    SOURCE = "source"
    PARTS = "parts"

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        key = value.strip()
        if key.upper() in cls.__members__:
            return cls.__members__[key.upper()]
        for member in cls:
            if member.value == key.lower():
                return member
        return None


class HeaderField(BaseModel):
    """
    One logical header field.

    Attributes:
        name: field name, casing preserved as first seen
        value: field value, continuation lines joined with a single space
        ordinal: position of the field in its header block (0-based)
    """
    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    ordinal: int

    @property
    def key(self) -> str:
        """Lower-cased name used for lookups."""
        return self.name.lower()


class HeaderTable(BaseModel):
    """
    Ordered header fields. Duplicates are kept; lookups are case-insensitive
    and return the first match.
    """
    model_config = ConfigDict(frozen=True)

    entries: Tuple[HeaderField, ...] = ()

    def get(self, name: str, default: str = "") -> str:
        """Value of the first field called *name*, or *default*."""
        key = name.lower()
        for field in self.entries:
            if field.key == key:
                return field.value
        return default

    def get_all(self, name: str) -> List[str]:
        """Values of every field called *name*, in source order."""
        key = name.lower()
        return [f.value for f in self.entries if f.key == key]

    def has(self, name: str) -> bool:
        key = name.lower()
        return any(f.key == key for f in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class MimeNode(BaseModel):
    """
    A node of the parsed MIME tree.

    Exactly one of ``body`` (leaf, raw undecoded text) and ``children``
    (multipart) is set. The header-derived attributes are lower-cased
    copies kept for cheap matching during traversal.
    """
    model_config = ConfigDict(frozen=True)

    headers: HeaderTable = Field(default_factory=HeaderTable)
    body: Optional[str] = None
    children: Optional[List["MimeNode"]] = None
    content_type: str = ""
    transfer_encoding: str = ""
    disposition: str = ""

    @property
    def is_multipart(self) -> bool:
        return self.children is not None

    @property
    def is_attachment(self) -> bool:
        return "attachment" in self.disposition

    def walk(self):
        """Yield this node and every descendant, pre-order."""
        yield self
        for child in self.children or []:
            yield from child.walk()


MimeNode.model_rebuild()


class ExtractedParts(BaseModel):
    """Result of PARTS mode: the three separable sections of a message."""
    header: str = ""
    plain_text: str = ""
    html: str = ""


class HeaderParameter(BaseModel):
    """
    A user-declared placeholder parameter.

    Attributes:
        name: display name (e.g. "Email ID")
        placeholder: literal token written into headers (e.g. "[EID]")
        description: free text
    """
    name: str
    placeholder: str
    description: Optional[str] = None


class PlaceholderBindings(BaseModel):
    """
    Tokens written by the built-in header rules. They stay unresolved in the
    rewritten text; a later substitution step replaces them with real values.
    """
    to: str = "[*to]"
    rpath: str = "[P_RPATH]"
    eid: str = "[EID]"
    rnds: str = "[RNDS]"
    date: str = "[DATE]"


class RewritePlan(BaseModel):
    """
    Rule set consumed by ``HeaderRewriteEngine``. Built by callers, usually
    from a stored profile.

    Attributes:
        parameters: declared placeholder parameters, in display order
        custom_headers: raw header-line templates inserted after ``From:``
        remove_x_headers: drop every ``X-*`` header
        add_list_unsubscribe: insert the two ``List-Unsubscribe*`` lines
        replace_date_header: replace ``Date:`` with the date placeholder
        placeholders: tokens used by the built-in rules
    """
    parameters: List[HeaderParameter] = []
    custom_headers: List[str] = []
    remove_x_headers: bool = False
    add_list_unsubscribe: bool = True
    replace_date_header: bool = False
    placeholders: PlaceholderBindings = Field(default_factory=PlaceholderBindings)

    def declared_tokens(self) -> List[str]:
        """Placeholder tokens of the declared parameters, blanks skipped."""
        return [p.placeholder for p in self.parameters if p.placeholder.strip()]


class RewriteSummary(BaseModel):
    """
    Header-level diff between an original message and its rewrite.
    """
    removed_headers: List[str] = []
    added_headers: List[str] = []
    modified_headers: List[str] = []
    original_size: int = 0
    rewritten_size: int = 0

    @property
    def headers_removed(self) -> int:
        return len(self.removed_headers)

    @property
    def headers_added(self) -> int:
        return len(self.added_headers)

    @property
    def headers_modified(self) -> int:
        return len(self.modified_headers)

    def to_dict(self) -> dict:
        """Plain dict including the derived counts."""
        data = self.model_dump()
        data.update(
            headers_removed=self.headers_removed,
            headers_added=self.headers_added,
            headers_modified=self.headers_modified,
        )
        return data
