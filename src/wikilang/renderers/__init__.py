#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/wikilang/renderers/__init__.py
"""AST renderers for vimwiki pages.

Available renderers:
- HtmlRenderer: Render to HTML, returning the placeholders next to the body
- VimwikiRenderer: Serialize back to vimwiki markup

Examples
--------
Render a page to HTML:

    >>> from wikilang.ast import Header, Page, Text
    >>> from wikilang.renderers import HtmlRenderer
    >>> page = Page(children=[Header(level=1, content=[Text(content="Title")])])
    >>> HtmlRenderer().render_to_string(page)
    '<h1 id="title" class="header"><a href="#title">Title</a></h1>'

"""

from wikilang.renderers.base import BaseRenderer, InlineContentMixin
from wikilang.renderers.html import (
    HtmlRenderer,
    LinkResolution,
    PageMetadata,
    RenderResult,
    default_link_resolver,
)
from wikilang.renderers.vimwiki import VimwikiRenderer

__all__ = [
    "BaseRenderer",
    "HtmlRenderer",
    "InlineContentMixin",
    "LinkResolution",
    "PageMetadata",
    "RenderResult",
    "VimwikiRenderer",
    "default_link_resolver",
]
