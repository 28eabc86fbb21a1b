#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class for traversing and processing
vimwiki AST nodes. Renderers, the markup serializer and validators are all
visitors, which keeps each algorithm separate from the node structure.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from wikilang.ast.nodes import (
    BlankLine,
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
    Keyword,
    LineBreak,
    Link,
    List,
    ListItem,
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
    get_node_children,
)
from wikilang.ast.region import Region


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a visit_* method for each node type. Each node's
    ``accept`` method dispatches to the matching method, so a visitor never
    needs ``isinstance`` chains.

    Examples
    --------
    Visitor that collects the text of every header:

        >>> class HeaderCollector(NodeVisitor):
        ...     def __init__(self):
        ...         self.headers = []
        ...
        ...     def visit_page(self, node):
        ...         for child in node.children:
        ...             child.accept(self)
        ...
        ...     def visit_header(self, node):
        ...         self.headers.append(extract_text(node))
        ...
        ...     # remaining visit_* methods omitted

    """

    @abstractmethod
    def visit_page(self, node: Page) -> Any:
        """Visit a Page node.

        Parameters
        ----------
        node : Page
            The page node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_header(self, node: Header) -> Any:
        """Visit a Header node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_definition_list(self, node: DefinitionList) -> Any:
        """Visit a DefinitionList node."""
        pass

    @abstractmethod
    def visit_definition_term(self, node: DefinitionTerm) -> Any:
        """Visit a DefinitionTerm node."""
        pass

    @abstractmethod
    def visit_definition_description(self, node: DefinitionDescription) -> Any:
        """Visit a DefinitionDescription node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_math_block(self, node: MathBlock) -> Any:
        """Visit a MathBlock node."""
        pass

    @abstractmethod
    def visit_blockquote(self, node: Blockquote) -> Any:
        """Visit a Blockquote node."""
        pass

    @abstractmethod
    def visit_divider(self, node: Divider) -> Any:
        """Visit a Divider node."""
        pass

    @abstractmethod
    def visit_placeholder(self, node: Placeholder) -> Any:
        """Visit a Placeholder node."""
        pass

    @abstractmethod
    def visit_comment(self, node: Comment) -> Any:
        """Visit a block-level Comment node."""
        pass

    @abstractmethod
    def visit_blank_line(self, node: BlankLine) -> Any:
        """Visit a BlankLine node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_decorated_text(self, node: DecoratedText) -> Any:
        """Visit a DecoratedText node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node (any variant, including transclusions)."""
        pass

    @abstractmethod
    def visit_tags(self, node: Tags) -> Any:
        """Visit a Tags node."""
        pass

    @abstractmethod
    def visit_keyword(self, node: Keyword) -> Any:
        """Visit a Keyword node."""
        pass

    @abstractmethod
    def visit_comment_inline(self, node: CommentInline) -> Any:
        """Visit a CommentInline node."""
        pass

    @abstractmethod
    def visit_math_inline(self, node: MathInline) -> Any:
        """Visit a MathInline node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        The default implementation does nothing but can be overridden.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class RegionValidator(NodeVisitor):
    """Visitor that checks the source regions of a parsed tree.

    For every node with a region, the regions of its children must lie
    within it, and sibling regions must not overlap and must appear in
    source order. Nodes without a region (e.g. trees built by hand) are
    skipped.

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise on the first violation

    Examples
    --------
        >>> page = VimwikiParser().parse("= Title =\\nSome *bold* text\\n")
        >>> validator = RegionValidator(strict=False)
        >>> page.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator.

        Parameters
        ----------
        strict : bool, default = True
            Whether to raise ValueError immediately on a violation

        """
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        """Record a violation, raising in strict mode."""
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _check(self, node: Node) -> None:
        parent = node.region
        previous: Optional[Region] = None
        previous_node: Optional[Node] = None
        for child in get_node_children(node):
            region = child.region
            if region is not None:
                if parent is not None and not parent.contains(region):
                    self._add_error(
                        f"{type(child).__name__} region {region.offset}+{region.length} escapes "
                        f"{type(node).__name__} region {parent.offset}+{parent.length}"
                    )
                if previous is not None and previous.end > region.offset:
                    self._add_error(
                        f"{type(child).__name__} at offset {region.offset} overlaps or precedes "
                        f"sibling {type(previous_node).__name__} ending at {previous.end}"
                    )
                previous = region
                previous_node = child
            child.accept(self)

    def visit_page(self, node: Page) -> None:
        """Validate the page and its blocks."""
        if node.region is not None and node.region.end > len(node.source):
            self._add_error(f"Page region ends at {node.region.end} past source length {len(node.source)}")
        self._check(node)

    def visit_header(self, node: Header) -> None:
        self._check(node)

    def visit_paragraph(self, node: Paragraph) -> None:
        self._check(node)

    def visit_definition_list(self, node: DefinitionList) -> None:
        self._check(node)

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        self._check(node)

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        self._check(node)

    def visit_list(self, node: List) -> None:
        self._check(node)

    def visit_list_item(self, node: ListItem) -> None:
        self._check(node)

    def visit_table(self, node: Table) -> None:
        self._check(node)

    def visit_table_row(self, node: TableRow) -> None:
        self._check(node)

    def visit_table_cell(self, node: TableCell) -> None:
        self._check(node)

    def visit_code_block(self, node: CodeBlock) -> None:
        pass

    def visit_math_block(self, node: MathBlock) -> None:
        pass

    def visit_blockquote(self, node: Blockquote) -> None:
        self._check(node)

    def visit_divider(self, node: Divider) -> None:
        pass

    def visit_placeholder(self, node: Placeholder) -> None:
        pass

    def visit_comment(self, node: Comment) -> None:
        pass

    def visit_blank_line(self, node: BlankLine) -> None:
        pass

    def visit_text(self, node: Text) -> None:
        pass

    def visit_decorated_text(self, node: DecoratedText) -> None:
        self._check(node)

    def visit_link(self, node: Link) -> None:
        self._check(node)

    def visit_tags(self, node: Tags) -> None:
        pass

    def visit_keyword(self, node: Keyword) -> None:
        pass

    def visit_comment_inline(self, node: CommentInline) -> None:
        pass

    def visit_math_inline(self, node: MathInline) -> None:
        pass

    def visit_line_break(self, node: LineBreak) -> None:
        pass
