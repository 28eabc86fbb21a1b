"""wikilang - parse, render and serialize vimwiki markup.

wikilang turns vimwiki pages into a typed abstract syntax tree, renders that
tree to HTML and serializes it back to markup. Parsing the serialized markup
of a parsed page gives back an equal tree.

Every node records the region of the source it came from. Recoverable
problems (an over-deep header, a link without a target, a malformed table)
are kept on the page as diagnostics while the rest of the page parses; only a
code or math fence that is never closed stops the parse.

Requirements
------------
- Python 3.10+
- Pygments for the optional code highlighter (``pip install wikilang[highlight]``)

Examples
--------
Parse and render:

    >>> from wikilang import parse, render
    >>> page = parse("= Hello =\\nWorld\\n")
    >>> print(render(page).html)
    <h1 id="hello" class="header"><a href="#hello">Hello</a></h1>
    <p>World</p>

Serialize a page back to markup:

    >>> from wikilang import serialize
    >>> serialize(page)
    '= Hello =\\nWorld\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "wikilang requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

from wikilang.api import parse, render, render_html, serialize
from wikilang.ast import Page, Region
from wikilang.exceptions import (
    DependencyError,
    InvalidHeaderLevel,
    MalformedLink,
    MalformedTable,
    ParseError,
    UnterminatedBlock,
    WikiLangError,
)
from wikilang.options import HtmlRendererOptions, VimwikiParserOptions, VimwikiRendererOptions
from wikilang.renderers.html import LinkResolution, PageMetadata, RenderResult, default_link_resolver

__all__ = [
    "__version__",
    "parse",
    "render",
    "render_html",
    "serialize",
    "Page",
    "Region",
    "HtmlRendererOptions",
    "VimwikiParserOptions",
    "VimwikiRendererOptions",
    "LinkResolution",
    "PageMetadata",
    "RenderResult",
    "default_link_resolver",
    "WikiLangError",
    "ParseError",
    "UnterminatedBlock",
    "InvalidHeaderLevel",
    "MalformedLink",
    "MalformedTable",
    "DependencyError",
]
