#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/ast/__init__.py
"""Abstract Syntax Tree (AST) module for vimwiki page representation.

The AST separates parsing vimwiki markup from producing output, so one parsed
``Page`` feeds both the HTML renderer and the markup serializer.

The module consists of several components:

- region: source spans attached to every node
- nodes: AST node classes representing page structure
- visitors: visitor pattern base class and the region validator
- utils: text extraction and traversal helpers

Examples
--------
Basic usage:

    >>> from wikilang.ast import Header, Page, Paragraph, Text
    >>> from wikilang.renderers.vimwiki import VimwikiRenderer
    >>>
    >>> page = Page(children=[
    ...     Header(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> VimwikiRenderer().render_to_string(page)
    '= Title =\\nHello world\\n'

"""

from __future__ import annotations

from wikilang.ast.nodes import (
    BlankLine,
    BlockElement,
    Blockquote,
    CodeBlock,
    Comment,
    CommentInline,
    DecoratedText,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Divider,
    Header,
    InlineElement,
    Keyword,
    LineBreak,
    Link,
    List,
    ListItem,
    ListItemBlockElement,
    MathBlock,
    MathInline,
    Node,
    Page,
    Paragraph,
    Placeholder,
    Table,
    TableCell,
    TableRow,
    Tags,
    Text,
    classify_link_target,
    classify_list_marker,
    get_node_children,
)
from wikilang.ast.region import LineIndex, Region
from wikilang.ast.utils import collect_placeholders, extract_text, iter_nodes
from wikilang.ast.visitors import NodeVisitor, RegionValidator

__all__ = [
    # Regions
    "LineIndex",
    "Region",
    # Base
    "Node",
    "BlockElement",
    "InlineElement",
    "ListItemBlockElement",
    # Block nodes
    "Page",
    "Header",
    "Paragraph",
    "DefinitionList",
    "DefinitionTerm",
    "DefinitionDescription",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "CodeBlock",
    "MathBlock",
    "Blockquote",
    "Divider",
    "Placeholder",
    "Comment",
    "BlankLine",
    # Inline nodes
    "Text",
    "DecoratedText",
    "Link",
    "Tags",
    "Keyword",
    "CommentInline",
    "MathInline",
    "LineBreak",
    # Helpers
    "classify_link_target",
    "classify_list_marker",
    "get_node_children",
    "collect_placeholders",
    "extract_text",
    "iter_nodes",
    # Visitors
    "NodeVisitor",
    "RegionValidator",
]
