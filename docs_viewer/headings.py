"""Heading extraction for the "on this page" outline."""

from __future__ import annotations

from .constants import OUTLINE_HEADING_PATTERN
from .models import HeadingEntry
from .scanner import split_lines
from .slugify import generate_heading_id


def extract_headings(content: str) -> list[HeadingEntry]:
    """Collect level 1 to 3 ATX headings in document order.

    A heading is one to three ``#`` characters, at least one space or tab, and
    at least one more character. Lines are matched on the raw text, so fenced
    code is not skipped. Ids are derived with `generate_heading_id` and are not
    deduplicated: two headings with the same text share an id.

    Args:
        content: Full Markdown document.

    Returns:
        list[HeadingEntry]: One entry per matching line.

    Raises:
        TypeError: If `content` is not a string.

    Examples:
        extract_headings("# Title\\n## Usage\\n")
        # [HeadingEntry("Title", 1, "title"), HeadingEntry("Usage", 2, "usage")]
    """
    headings: list[HeadingEntry] = []
    for line in split_lines(content):
        match = OUTLINE_HEADING_PATTERN.match(line)
        if not match:
            continue
        text = match.group("text")
        headings.append(
            HeadingEntry(text=text, level=len(match.group("hashes")), id=generate_heading_id(text))
        )
    return headings
