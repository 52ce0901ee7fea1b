"""Syntax highlighting for fenced code blocks."""

from __future__ import annotations

import logging

from markupsafe import Markup
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)


def highlight_code(content: str, language: str, style: str = "default") -> Markup:
    """Render a code block as HTML.

    Known languages are highlighted with Pygments using inline styles, so the
    output needs no stylesheet. Blocks without a language, or with one Pygments
    does not know, are rendered as escaped preformatted text.

    Args:
        content: Code exactly as written inside the fence.
        language: Lowercased language tag; may be empty.
        style: Pygments style name.

    Returns:
        Markup: Safe HTML for the block.
    """
    lexer = None
    if language:
        try:
            lexer = get_lexer_by_name(language, stripnl=False)
        except ClassNotFound:
            logger.debug("No lexer for code block language %r", language)

    if lexer is None:
        return Markup('<pre class="md-code"><code>{}</code></pre>').format(content)

    formatter = HtmlFormatter(style=style, noclasses=True, cssclass="md-code highlight")
    return Markup(highlight(content, lexer, formatter))
