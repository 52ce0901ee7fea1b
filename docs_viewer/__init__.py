"""
docs-viewer: browse and render a directory tree of Markdown files.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    docs-viewer serve docs/
    docs-viewer render README.md

Library Usage:
    from pathlib import Path
    from docs_viewer import extract_headings, render_page

    content = Path("README.md").read_text()
    page = render_page(content)
    outline = extract_headings(content)
"""

from .exceptions import (
    EntryNotFoundError,
    FileAccessError,
    FileTooLargeError,
    PathOutsideRootError,
    UnsupportedFileTypeError,
)
from .headings import extract_headings
from .inline import format_inline
from .models import HeadingEntry
from .outline import NavigatorState, OutlineNavigator
from .render import RenderedPage, render_blocks, render_page
from .scanner import scan_markdown
from .slugify import generate_heading_id

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "scan_markdown",
    "format_inline",
    "extract_headings",
    "generate_heading_id",
    "render_blocks",
    "render_page",
    # Outline
    "OutlineNavigator",
    "NavigatorState",
    # Data models
    "HeadingEntry",
    "RenderedPage",
    # Exceptions
    "FileAccessError",
    "EntryNotFoundError",
    "PathOutsideRootError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",
    # Version
    "__version__",
]
