#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/constants.py
"""Shared constants and default values for wikilang.

This module centralizes the markup tokens of the vimwiki dialect and the
default values used by parser and renderer options, so that the grammar,
the HTML renderer and the markup serializer agree on a single definition.

"""

from __future__ import annotations

from typing import Final, Literal

# =============================================================================
# Header constants
# =============================================================================

MIN_HEADER_LEVEL: Final = 1
MAX_HEADER_LEVEL: Final = 6
HEADER_MARKER: Final = "="

# =============================================================================
# Fences and block markers
# =============================================================================

CODE_FENCE_OPEN: Final = "{{{"
CODE_FENCE_CLOSE: Final = "}}}"
MATH_FENCE_OPEN: Final = "{{$"
MATH_FENCE_CLOSE: Final = "}}$"

DIVIDER_MIN_LENGTH: Final = 4
BLOCKQUOTE_MARKER: Final = ">"
BLOCKQUOTE_INDENT: Final = "    "
DEFINITION_MARKER: Final = "::"

LINE_COMMENT_PREFIX: Final = "%%"
MULTILINE_COMMENT_OPEN: Final = "%%+"
MULTILINE_COMMENT_CLOSE: Final = "+%%"

TABLE_CELL_SEPARATOR: Final = "|"
TABLE_SPAN_LEFT: Final = ">"
TABLE_SPAN_ABOVE: Final = "\\/"

# =============================================================================
# List constants
# =============================================================================

TodoStatus = Literal["incomplete", "partial_1", "partial_2", "partial_3", "complete", "rejected"]

TODO_STATUS_CHARS: Final[dict[str, TodoStatus]] = {
    " ": "incomplete",
    ".": "partial_1",
    "o": "partial_2",
    "O": "partial_3",
    "X": "complete",
    "-": "rejected",
}
TODO_CHAR_BY_STATUS: Final[dict[TodoStatus, str]] = {status: char for char, status in TODO_STATUS_CHARS.items()}

TODO_HTML_CLASSES: Final[dict[TodoStatus, str]] = {
    "incomplete": "done0",
    "partial_1": "done1",
    "partial_2": "done2",
    "partial_3": "done3",
    "complete": "done4",
    "rejected": "rejected",
}

UNORDERED_MARKERS: Final = frozenset({"-", "*"})

# =============================================================================
# Inline constants
# =============================================================================

Decoration = Literal["bold", "italic", "bold_italic", "strikethrough", "superscript", "subscript", "code"]

DECORATION_DELIMITERS: Final[dict[str, Decoration]] = {
    "*": "bold",
    "_": "italic",
    "~~": "strikethrough",
    "^": "superscript",
    ",,": "subscript",
}

KEYWORDS: Final = ("TODO", "DONE", "STARTED", "FIXME", "FIXED", "XXX")

RAW_LINK_SCHEMES: Final = ("https", "http", "ftp", "file", "local", "mailto")

LinkVariant = Literal["wiki", "indexed_wiki", "interwiki", "diary", "raw", "transclusion"]

DIARY_PREFIX: Final = "diary:"

IMAGE_EXTENSIONS: Final = frozenset({".png", ".jpg", ".jpeg", ".gif", ".svg", ".webp", ".bmp", ".ico", ".tif", ".tiff"})

PlaceholderKind = Literal["title", "date", "template", "nohtml", "other"]

# =============================================================================
# Parser defaults
# =============================================================================

DEFAULT_TRACK_REGIONS: Final = True
DEFAULT_COMPUTE_LINE_COLUMNS: Final = False
DEFAULT_STRICT_PARSING: Final = False

# =============================================================================
# HTML renderer defaults
# =============================================================================

HeaderIdStrategy = Literal["slug", "preserve"]

DEFAULT_HEADER_ID_STRATEGY: HeaderIdStrategy = "slug"
DEFAULT_IGNORE_NEWLINES: Final = True
DEFAULT_INCLUDE_COMMENTS: Final = False
DEFAULT_MISSING_LINK_CLASS: Final = "missing"
DEFAULT_STANDALONE: Final = False
DEFAULT_HTML_LANGUAGE: Final = "en"
DEFAULT_ROOT_PATH: Final = ""
DEFAULT_SLUG_MAX_LENGTH: Final = 100

TEMPLATE_CONTENT_MARKER: Final = "%content%"
TEMPLATE_TITLE_MARKER: Final = "%title%"
TEMPLATE_DATE_MARKER: Final = "%date%"
TEMPLATE_ROOT_PATH_MARKER: Final = "%root_path%"

# =============================================================================
# Optional dependencies
# =============================================================================

DEPS_HIGHLIGHT: Final = [("pygments", "pygments", ">=2.0")]
