#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/ast/utils.py
"""Utility functions for working with AST nodes.

This module provides helper functions for common operations on AST nodes,
including text extraction, tree traversal and placeholder lookup.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
iter_nodes : Walk a tree depth-first in source order
collect_placeholders : Gather the placeholders of a page

Examples
--------
Extract text from a header:

    >>> from wikilang.ast import DecoratedText, Header, Text
    >>> from wikilang.ast.utils import extract_text
    >>>
    >>> header = Header(level=1, content=[
    ...     Text(content="Hello "),
    ...     DecoratedText("italic", [Text(content="world")])
    ... ])
    >>> extract_text(header)
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Union

from wikilang.ast.nodes import Keyword, LineBreak, Link, Placeholder, Text, get_node_children

if TYPE_CHECKING:
    from wikilang.ast.nodes import Node, Page


def extract_text(node_or_nodes: Union[Node, list[Node], tuple[Node, ...]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Text runs, keywords and the targets of links without a description
    contribute their text; line breaks contribute a single space. Comments,
    math and tags contribute nothing.

    Parameters
    ----------
    node_or_nodes : Node or sequence of Node
        A single node or a sequence of nodes to extract text from
    joiner : str, default = ""
        String placed between the parts of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, (list, tuple)):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, Text):
        return node.content
    if isinstance(node, Keyword):
        return node.word
    if isinstance(node, LineBreak):
        return " "
    if isinstance(node, Link) and node.description is None:
        return node.target

    return joiner.join(extract_text(child, joiner) for child in get_node_children(node))


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants, depth-first in pre-order."""
    yield node
    for child in get_node_children(node):
        yield from iter_nodes(child)


def collect_placeholders(page: Page) -> list[Placeholder]:
    """Return the page's top-level placeholders in source order.

    Parameters
    ----------
    page : Page
        Parsed page

    Returns
    -------
    list of Placeholder
        Placeholders as they appear on the page

    """
    return [child for child in page.children if isinstance(child, Placeholder)]


__all__ = ["collect_placeholders", "extract_text", "iter_nodes"]
