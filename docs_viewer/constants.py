"""Constants used across the docs-viewer package."""

from __future__ import annotations

import re

from .config import ViewerConfig

DEFAULT_CONFIG = ViewerConfig()

# Markdown patterns
CODE_FENCE = "```"
HEADING_PREFIXES = (("#### ", 4), ("### ", 3), ("## ", 2), ("# ", 1))
BLOCKQUOTE_PREFIX = "> "
UNORDERED_ITEM_PATTERN = re.compile(r"^(?P<indent>\s*)[-*+] (?P<text>.*)$")
ORDERED_ITEM_PATTERN = re.compile(r"^(?P<indent>\s*)\d+\. (?P<text>.*)$")
HORIZONTAL_RULE_PATTERN = re.compile(r"^([*\-_])\1{2,}$")
OUTLINE_HEADING_PATTERN = re.compile(r"^(?P<hashes>#{1,3})[ \t]+(?P<text>.+)$")

# Inline delimiters, in precedence order
CODE_DELIMITER = "`"
BOLD_DELIMITER = "**"
ITALIC_DELIMITER = "*"

# View layer
ROOT_NAME = "Docs"
ROOT_ID = "root"
OUTLINE_BASE_PADDING = 16
OUTLINE_LEVEL_PADDING = 8
LIST_INDENT_PADDING = 8
LIST_BASE_PADDING = 16

# Preferences
DARK_MODE_KEY = "darkMode"
PREFERENCE_MAX_AGE = 60 * 60 * 24 * 365

# Filesystem defaults
MARKDOWN_EXTENSION = DEFAULT_CONFIG.markdown_extension
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size
