#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/options/__init__.py
"""Options classes for the vimwiki parser and renderers."""

from wikilang.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from wikilang.options.html import CodeHighlighter, HtmlRendererOptions, LinkResolver
from wikilang.options.vimwiki import VimwikiParserOptions, VimwikiRendererOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "CodeHighlighter",
    "HtmlRendererOptions",
    "LinkResolver",
    "VimwikiParserOptions",
    "VimwikiRendererOptions",
]
