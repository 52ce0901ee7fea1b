"""Line-oriented Markdown scanner."""

from __future__ import annotations

from .constants import (
    BLOCKQUOTE_PREFIX,
    CODE_FENCE,
    HEADING_PREFIXES,
    HORIZONTAL_RULE_PATTERN,
    ORDERED_ITEM_PATTERN,
    UNORDERED_ITEM_PATTERN,
)
from .inline import format_inline
from .models import (
    BlankSpacer,
    Blockquote,
    BlockNode,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListItem,
    Paragraph,
    ScannerContext,
    ScannerState,
)


def split_lines(content: str) -> list[str]:
    """Split a document into lines.

    Lines are separated by ``"\\n"``. A final line terminator does not start an
    extra empty line, and a trailing ``"\\r"`` is removed from each line.

    Args:
        content: Full Markdown document.

    Returns:
        list[str]: Lines in document order, without terminators.

    Raises:
        TypeError: If `content` is not a string.

    Examples:
        split_lines("a\\r\\nb\\n")  # ["a", "b"]
        split_lines("a\\n\\n")  # ["a", ""]
    """
    if not isinstance(content, str):
        raise TypeError(f"Markdown document must be a str, not {type(content).__name__}")

    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def is_fence_marker(line: str) -> bool:
    return line.strip().startswith(CODE_FENCE)


def _try_open_fence(ctx: ScannerContext, line: str) -> bool:
    """Open a fenced code block.

    Args:
        ctx: Scanner context to update when a fence opens.
        line: Current line being scanned.

    Returns:
        bool: True when the line opens a fence and the context is updated.

    Examples:
        _try_open_fence(ScannerContext(), "```Python")  # True, language "python"
    """
    if ctx.state is not ScannerState.NORMAL or not is_fence_marker(line):
        return False

    ctx.state = ScannerState.IN_CODE_BLOCK
    ctx.code_language = line.strip().lstrip("`").strip().lower()
    ctx.code_block_lines = []
    return True


def _try_close_fence(ctx: ScannerContext, line: str) -> CodeBlock | None:
    """Close the open fenced code block.

    Any fence marker closes the block, whatever follows the backticks.

    Args:
        ctx: Scanner context describing the open fence.
        line: Current line being scanned.

    Returns:
        CodeBlock | None: The finished block when the line closes the fence,
            otherwise None.
    """
    if ctx.state is not ScannerState.IN_CODE_BLOCK or not is_fence_marker(line):
        return None

    block = CodeBlock(language=ctx.code_language, content="\n".join(ctx.code_block_lines))
    ctx.state = ScannerState.NORMAL
    ctx.code_block_lines = []
    ctx.code_language = ""
    return block


def _scan_heading(line: str) -> Heading | None:
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix) :])
    return None


def _scan_list_item(line: str) -> ListItem | None:
    for pattern, ordered in ((UNORDERED_ITEM_PATTERN, False), (ORDERED_ITEM_PATTERN, True)):
        match = pattern.match(line)
        if match:
            return ListItem(
                ordered=ordered,
                indent_level=len(match.group("indent")),
                spans=tuple(format_inline(match.group("text"))),
            )
    return None


def scan_line(line: str) -> BlockNode:
    """Classify a line outside any code block.

    Checks run in a fixed priority order: heading, blockquote, unordered list
    item, ordered list item, horizontal rule, blank line, paragraph.

    Args:
        line: Raw line without its terminator.

    Returns:
        BlockNode: Exactly one node for the line.
    """
    heading = _scan_heading(line)
    if heading is not None:
        return heading

    if line.startswith(BLOCKQUOTE_PREFIX):
        return Blockquote(spans=tuple(format_inline(line[len(BLOCKQUOTE_PREFIX) :])))

    list_item = _scan_list_item(line)
    if list_item is not None:
        return list_item

    stripped = line.strip()
    if HORIZONTAL_RULE_PATTERN.match(stripped):
        return HorizontalRule()

    if not stripped:
        return BlankSpacer()

    return Paragraph(spans=tuple(format_inline(line)))


def scan_markdown(content: str) -> list[BlockNode]:
    """Convert a Markdown document into block nodes.

    Walks the lines once. Fence markers toggle the code-block state: the
    opening line captures the language tag and the closing line emits one
    `CodeBlock` holding every line in between, verbatim. A fence that is never
    closed absorbs the rest of the document without emitting anything. Every
    other line yields exactly one node. Malformed input never raises.

    Args:
        content: Full Markdown document.

    Returns:
        list[BlockNode]: Nodes in document order.

    Raises:
        TypeError: If `content` is not a string.

    Examples:
        scan_markdown("# Title\\n\\nSome *text*\\n")
    """
    ctx = ScannerContext()
    blocks: list[BlockNode] = []

    for line in split_lines(content):
        if ctx.state is ScannerState.IN_CODE_BLOCK:
            code_block = _try_close_fence(ctx, line)
            if code_block is not None:
                blocks.append(code_block)
            else:
                ctx.code_block_lines.append(line)
            continue

        if _try_open_fence(ctx, line):
            continue

        blocks.append(scan_line(line))

    return blocks
