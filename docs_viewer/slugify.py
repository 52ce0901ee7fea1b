"""Anchor id generation for Markdown headings."""

from __future__ import annotations

import re

# ASCII word characters only.
_DISALLOWED_CHARACTERS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def generate_heading_id(text: str) -> str:
    """Generate the anchor id used to deep-link a heading.

    Lowercases and trims the text, removes every character that is not a word
    character, whitespace, or hyphen, turns whitespace runs into single
    hyphens, collapses hyphen runs, and strips one leading and one trailing
    hyphen. Unlike a table-of-contents slug, an empty result is returned as is.

    Args:
        text: Heading text as written after the ``#`` marker.

    Returns:
        str: Anchor id; may be empty.

    Examples:
        generate_heading_id("Hello World")  # "hello-world"
        generate_heading_id("What's New?")  # "whats-new"
        generate_heading_id("!!!")  # ""
    """
    slug = text.lower().strip()
    slug = _DISALLOWED_CHARACTERS.sub("", slug)
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug)
    if slug.startswith("-"):
        slug = slug[1:]
    if slug.endswith("-"):
        slug = slug[:-1]
    return slug
