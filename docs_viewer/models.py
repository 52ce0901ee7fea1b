"""Data models for docs-viewer."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum, auto
from typing import Union


class ScannerState(Enum):
    """Scanner states used while walking Markdown content.

    Attributes:
        NORMAL: Default state for regular text.
        IN_CODE_BLOCK: Inside an open fenced code block.
    """

    NORMAL = auto()
    IN_CODE_BLOCK = auto()


@dataclass
class ScannerContext:
    """Encapsulate scanner state for a single render pass.

    Attributes:
        state: Current scanner state.
        code_block_lines: Raw lines collected inside the open fence.
        code_language: Language tag captured from the opening fence.
    """

    state: ScannerState = ScannerState.NORMAL
    code_block_lines: list[str] = field(default_factory=list)
    code_language: str = ""


# Inline spans


@dataclass(frozen=True)
class PlainText:
    value: str

    @property
    def markup(self) -> str:
        return self.value


@dataclass(frozen=True)
class Bold:
    value: str

    @property
    def markup(self) -> str:
        return f"**{self.value}**"


@dataclass(frozen=True)
class Italic:
    value: str

    @property
    def markup(self) -> str:
        return f"*{self.value}*"


@dataclass(frozen=True)
class InlineCode:
    value: str

    @property
    def markup(self) -> str:
        return f"`{self.value}`"


InlineSpan = Union[PlainText, Bold, Italic, InlineCode]


# Block nodes


@dataclass(frozen=True)
class Heading:
    """ATX heading; `level` is 1 to 4 and `text` is not inline-formatted."""

    level: int
    text: str


@dataclass(frozen=True)
class Blockquote:
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class ListItem:
    """List item; `indent_level` is the raw character column of the marker."""

    ordered: bool
    indent_level: int
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class CodeBlock:
    language: str
    content: str


@dataclass(frozen=True)
class Paragraph:
    spans: tuple[InlineSpan, ...]


@dataclass(frozen=True)
class BlankSpacer:
    """Vertical spacing for one blank source line."""


BlockNode = Union[Heading, Blockquote, ListItem, HorizontalRule, CodeBlock, Paragraph, BlankSpacer]


def node_to_dict(node: BlockNode | InlineSpan) -> dict:
    """Describe a block node or inline span as JSON-ready data.

    Examples:
        node_to_dict(Heading(level=1, text="Title"))
        # {"type": "Heading", "level": 1, "text": "Title"}
    """
    data: dict = {"type": type(node).__name__}
    for node_field in fields(node):
        value = getattr(node, node_field.name)
        if node_field.name == "spans":
            value = [node_to_dict(span) for span in value]
        data[node_field.name] = value
    return data


@dataclass(frozen=True)
class HeadingEntry:
    """Heading discovered for the page outline.

    Attributes:
        text: Heading text as written after the ``#`` marker.
        level: Heading level, 1 to 3.
        id: Anchor id derived from `text`; not unique across a document.
    """

    text: str
    level: int
    id: str


# Filesystem collaborators


class EntryType(str, Enum):
    FOLDER = "folder"
    FILE = "file"


@dataclass
class FileEntry:
    """Node of a directory listing.

    Attributes:
        id: Stable identifier, the POSIX relative path (``"root"`` for the root).
        name: Display name.
        type: Folder or file.
        path: POSIX path relative to the docs root.
        updated_at: Human readable modification time.
        children: Child entries for folders, None for files.
    """

    id: str
    name: str
    type: EntryType
    path: str
    updated_at: str
    children: list[FileEntry] | None = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "path": self.path,
            "updatedAt": self.updated_at,
        }
        if self.children is not None:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass
class FileContent:
    """Raw Markdown file read from the docs root.

    Attributes:
        path: POSIX path relative to the docs root.
        content: Decoded file text.
        updated_at: Last modification time as a timezone-aware datetime.
        size: File size in bytes.
    """

    path: str
    content: str
    updated_at: datetime
    size: int
