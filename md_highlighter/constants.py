"""Constants used across the md-highlighter package."""

from __future__ import annotations

import re

from .config import HighlighterConfig

DEFAULT_CONFIG = HighlighterConfig()

# Markdown patterns
ATX_HEADING_PATTERN = re.compile(r"^(#{1,6}) ")
CODE_FENCE_PATTERN = re.compile(r"^`{3,}(?P<info>.*)$")
COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"
FRONTMATTER_DELIMITER = "---"

# Scheduling
DEFAULT_TICK_INTERVAL = DEFAULT_CONFIG.tick_interval

# Command line input limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn", ".rmd", ".txt")
