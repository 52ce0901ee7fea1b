"""HTML rendering of scanned Markdown."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from markupsafe import Markup

from .constants import LIST_BASE_PADDING, LIST_INDENT_PADDING
from .highlight import highlight_code
from .models import (
    BlankSpacer,
    Blockquote,
    BlockNode,
    Bold,
    CodeBlock,
    Heading,
    HorizontalRule,
    InlineCode,
    InlineSpan,
    Italic,
    ListItem,
    Paragraph,
    PlainText,
)
from .scanner import scan_markdown
from .slugify import generate_heading_id

_SPAN_TEMPLATES = {
    PlainText: Markup("{}"),
    Bold: Markup("<strong>{}</strong>"),
    Italic: Markup("<em>{}</em>"),
    InlineCode: Markup('<code class="md-inline-code">{}</code>'),
}


def render_spans(spans: Iterable[InlineSpan]) -> Markup:
    return Markup("").join(_SPAN_TEMPLATES[type(span)].format(span.value) for span in spans)


def list_item_padding(indent_level: int) -> int:
    return indent_level * LIST_INDENT_PADDING + LIST_BASE_PADDING


def _render_heading(block: Heading, style: str) -> Markup:
    heading_id = generate_heading_id(block.text)
    if not heading_id:
        return Markup('<h{0} class="md-heading">{1}</h{0}>').format(block.level, block.text)
    return Markup('<h{0} id="{1}" class="md-heading">{2}</h{0}>').format(
        block.level, heading_id, block.text
    )


def _render_blockquote(block: Blockquote, style: str) -> Markup:
    return Markup('<blockquote class="md-blockquote">{}</blockquote>').format(
        render_spans(block.spans)
    )


def _render_list_item(block: ListItem, style: str) -> Markup:
    kind = "md-ordered" if block.ordered else "md-unordered"
    return Markup('<li class="md-list-item {}" style="margin-left: {}px">{}</li>').format(
        kind, list_item_padding(block.indent_level), render_spans(block.spans)
    )


def _render_horizontal_rule(block: HorizontalRule, style: str) -> Markup:
    return Markup('<hr class="md-rule">')


def _render_code_block(block: CodeBlock, style: str) -> Markup:
    return highlight_code(block.content, block.language, style)


def _render_paragraph(block: Paragraph, style: str) -> Markup:
    return Markup('<p class="md-paragraph">{}</p>').format(render_spans(block.spans))


def _render_blank_spacer(block: BlankSpacer, style: str) -> Markup:
    return Markup('<div class="md-spacer"></div>')


_BLOCK_RENDERERS = {
    Heading: _render_heading,
    Blockquote: _render_blockquote,
    ListItem: _render_list_item,
    HorizontalRule: _render_horizontal_rule,
    CodeBlock: _render_code_block,
    Paragraph: _render_paragraph,
    BlankSpacer: _render_blank_spacer,
}


def render_block(block: BlockNode, style: str = "default") -> Markup:
    """Render one block node as HTML.

    Args:
        block: Node produced by the scanner.
        style: Pygments style for code blocks.

    Raises:
        TypeError: If `block` is not a known block node.
    """
    try:
        renderer = _BLOCK_RENDERERS[type(block)]
    except KeyError as error:
        raise TypeError(f"Unknown block node: {type(block).__name__}") from error
    return renderer(block, style)


def render_blocks(blocks: Iterable[BlockNode], style: str = "default") -> Markup:
    return Markup("\n").join(render_block(block, style) for block in blocks)


@dataclass(frozen=True)
class RenderedElement:
    """Heading element present in a rendered page.

    Attributes:
        id: Value of the element's ``id`` attribute.
        index: Position of the element among the page's block nodes.
    """

    id: str
    index: int


@dataclass(frozen=True)
class ScrollInstruction:
    """Request to scroll an element into view once the page is shown."""

    element_id: str
    behavior: str = "smooth"
    block: str = "start"


@dataclass
class ScrollRecorder:
    """Scroll primitive for server-rendered pages.

    Records the requested scroll so the page template can perform it in the
    browser.
    """

    instruction: ScrollInstruction | None = None

    def __call__(self, element: RenderedElement) -> None:
        self.instruction = ScrollInstruction(element_id=element.id)


@dataclass
class RenderedPage:
    """Result of rendering one Markdown document.

    Attributes:
        blocks: Block nodes produced by the scanner.
        html: Rendered HTML for the blocks.
        elements: Heading elements carrying an ``id`` attribute, in order.
    """

    blocks: list[BlockNode]
    html: Markup
    elements: list[RenderedElement] = field(default_factory=list)

    def locate(self, element_id: str) -> RenderedElement | None:
        """Return the first element with `element_id`, or None."""
        if not element_id:
            return None
        for element in self.elements:
            if element.id == element_id:
                return element
        return None


def render_page(content: str, style: str = "default") -> RenderedPage:
    """Scan and render a Markdown document.

    Args:
        content: Full Markdown document.
        style: Pygments style for code blocks.

    Returns:
        RenderedPage: Nodes, HTML, and the heading elements that can be
            scrolled to.

    Raises:
        TypeError: If `content` is not a string.
    """
    blocks = scan_markdown(content)
    elements = []
    for index, block in enumerate(blocks):
        if isinstance(block, Heading):
            heading_id = generate_heading_id(block.text)
            if heading_id:
                elements.append(RenderedElement(id=heading_id, index=index))
    return RenderedPage(blocks=blocks, html=render_blocks(blocks, style), elements=elements)
