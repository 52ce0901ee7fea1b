"""Inline formatting of a single text run."""

from __future__ import annotations

from collections.abc import Callable

from .constants import BOLD_DELIMITER, CODE_DELIMITER, ITALIC_DELIMITER
from .models import Bold, InlineCode, InlineSpan, Italic, PlainText


def split_paired(text: str, delimiter: str) -> list[str]:
    """Split text on pairs of a delimiter.

    Even-indexed segments lie outside any pair and odd-indexed segments lie
    between an opening and a closing delimiter. When the delimiter occurs an
    odd number of times, the last one has no partner: it is kept as literal
    text and merged back into the preceding outside segment, so the result
    always has an odd length.

    Args:
        text: Text to split.
        delimiter: Delimiter string, e.g. ``"`"`` or ``"**"``.

    Returns:
        list[str]: Alternating outside/inside segments.

    Examples:
        split_paired("a `b` c", "`")  # ["a ", "b", " c"]
        split_paired("a `b", "`")  # ["a `b"]
    """
    segments = text.split(delimiter)
    if len(segments) % 2 == 0:
        unmatched = segments.pop()
        segments[-1] = f"{segments[-1]}{delimiter}{unmatched}"
    return segments


def _format_pass(
    text: str,
    delimiter: str,
    span_type: type,
    format_outside: Callable[[str], list[InlineSpan]],
) -> list[InlineSpan]:
    # A pair enclosing nothing stays literal and joins the surrounding text.
    spans: list[InlineSpan] = []
    outside = ""
    for index, segment in enumerate(split_paired(text, delimiter)):
        if index % 2 == 0:
            outside += segment
        elif segment:
            spans.extend(format_outside(outside))
            outside = ""
            spans.append(span_type(segment))
        else:
            outside += delimiter * 2
    spans.extend(format_outside(outside))
    return spans


def _plain(text: str) -> list[InlineSpan]:
    return [PlainText(text)] if text else []


def _format_italic(text: str) -> list[InlineSpan]:
    return _format_pass(text, ITALIC_DELIMITER, Italic, _plain)


def _format_bold(text: str) -> list[InlineSpan]:
    return _format_pass(text, BOLD_DELIMITER, Bold, _format_italic)


def format_inline(text: str) -> list[InlineSpan]:
    """Convert a text run into inline spans.

    Three fixed passes are applied in precedence order: code spans are cut out
    first, then bold, then italic on what remains. The formatter is not
    recursive, so markers inside a code or bold span are kept literally.
    Unmatched delimiters are plain text. Unlike a plain split on pairs, a
    pair with nothing between it (two backticks, or ``****``) yields no empty
    span; both delimiters stay in the surrounding plain text. Every character
    of `text` ends up in exactly one span, in order, and no span is empty.

    Args:
        text: Line content with any block-level marker already removed.

    Returns:
        list[InlineSpan]: Spans covering the whole input.

    Examples:
        format_inline("Use `x` and **bold**")
        # [PlainText("Use "), InlineCode("x"), PlainText(" and "), Bold("bold")]
    """
    return _format_pass(text, CODE_DELIMITER, InlineCode, _format_bold)
