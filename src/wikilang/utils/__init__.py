#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/utils/__init__.py
"""Shared helpers for wikilang parsers and renderers."""

from wikilang.utils.decorators import debug_timer, requires_dependencies
from wikilang.utils.html_utils import escape_html
from wikilang.utils.text import make_unique_slug, preserve_anchor, slugify

__all__ = [
    "debug_timer",
    "escape_html",
    "make_unique_slug",
    "preserve_anchor",
    "requires_dependencies",
    "slugify",
]
