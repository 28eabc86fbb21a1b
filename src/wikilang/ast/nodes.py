#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/ast/nodes.py
"""AST node classes for vimwiki document representation.

This module defines the node hierarchy produced by the vimwiki parser and
consumed by the HTML renderer and the markup serializer. Each node represents
a structural or inline element of a wiki page.

Nodes are frozen dataclasses. Sequence fields are normalized to tuples, so a
parsed ``Page`` can be shared freely; consumers build new trees with
``dataclasses.replace`` instead of mutating nodes in place.

Every node carries an optional ``region`` locating it in the source text.
The region is excluded from equality, so two trees compare equal when they
have the same structure regardless of where they were parsed from.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes:
    - Page, Header, Paragraph, DefinitionList (DefinitionTerm, DefinitionDescription)
    - List, ListItem, Table, TableRow, TableCell
    - CodeBlock, MathBlock, Blockquote, Divider
    - Placeholder, Comment, BlankLine

Inline nodes:
    - Text, DecoratedText, Link, Tags, Keyword
    - CommentInline, MathInline, LineBreak

"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, Optional, Union

from wikilang.ast.region import Region
from wikilang.constants import (
    DIARY_PREFIX,
    MAX_HEADER_LEVEL,
    MIN_HEADER_LEVEL,
    UNORDERED_MARKERS,
    Decoration,
    LinkVariant,
    PlaceholderKind,
    TodoStatus,
)

if TYPE_CHECKING:
    from wikilang.exceptions import ParseError

CellSpan = Literal["left", "above"]
MarkerKind = Literal[
    "hyphen", "asterisk", "pound", "number", "lower_alpha", "upper_alpha", "lower_roman", "upper_roman"
]

_INDEXED_WIKI_PATTERN = re.compile(r"^wiki(\d+):(.*)$", re.DOTALL)
_INTERWIKI_PATTERN = re.compile(r"^wn\.([^:]+):(.*)$", re.DOTALL)
_NUMBER_MARKER_PATTERN = re.compile(r"^(\d+)[.)]$")
_ALPHA_MARKER_PATTERN = re.compile(r"^([a-zA-Z])[.)]$")
_ROMAN_MARKER_PATTERN = re.compile(r"^([ivxlcdm]+|[IVXLCDM]+)[.)]$")

_ROMAN_VALUES = {"i": 1, "v": 5, "x": 10, "l": 50, "c": 100, "d": 500, "m": 1000}

_DECORATIONS = frozenset({"bold", "italic", "bold_italic", "strikethrough", "superscript", "subscript", "code"})
_LINK_VARIANTS = frozenset({"wiki", "indexed_wiki", "interwiki", "diary", "raw", "transclusion"})
_PLACEHOLDER_KINDS = frozenset({"title", "date", "template", "nohtml", "other"})


def _freeze(node: Node, *names: str) -> None:
    for name in names:
        value = getattr(node, name)
        if not isinstance(value, tuple):
            object.__setattr__(node, name, tuple(value))


def _roman_to_int(numeral: str) -> int:
    total = 0
    previous = 0
    for char in reversed(numeral.lower()):
        value = _ROMAN_VALUES[char]
        if value < previous:
            total -= value
        else:
            total += value
            previous = value
    return total


def classify_list_marker(marker: str) -> MarkerKind:
    """Classify a list marker token.

    Single letters are alphabetic markers, except ``i``/``I`` which start a
    roman sequence. Multi-letter runs made only of roman digits are roman.

    Parameters
    ----------
    marker : str
        Marker token without surrounding whitespace, e.g. ``"-"`` or ``"3)"``

    Returns
    -------
    str
        Marker kind name

    Raises
    ------
    ValueError
        If the token is not a vimwiki list marker

    """
    if marker == "-":
        return "hyphen"
    if marker == "*":
        return "asterisk"
    if marker == "#":
        return "pound"
    if _NUMBER_MARKER_PATTERN.match(marker):
        return "number"
    alpha = _ALPHA_MARKER_PATTERN.match(marker)
    if alpha and alpha.group(1) not in ("i", "I"):
        return "lower_alpha" if alpha.group(1).islower() else "upper_alpha"
    roman = _ROMAN_MARKER_PATTERN.match(marker)
    if roman:
        return "lower_roman" if roman.group(1).islower() else "upper_roman"
    raise ValueError(f"Not a list marker: {marker!r}")


def classify_link_target(target: str) -> LinkVariant:
    """Return the wiki link variant implied by a ``[[...]]`` target prefix."""
    if target.startswith(DIARY_PREFIX):
        return "diary"
    if _INDEXED_WIKI_PATTERN.match(target):
        return "indexed_wiki"
    if _INTERWIKI_PATTERN.match(target):
        return "interwiki"
    return "wiki"


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    Parameters
    ----------
    region : Region or None, default = None
        Where this node came from in the source text. Not part of equality.

    """

    region: Optional[Region]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass(frozen=True)
class Page(Node):
    """Root node of a parsed wiki page.

    Parameters
    ----------
    children : tuple of Node, default = ()
        Block-level nodes in source order
    source : str, default = ""
        The text the page was parsed from; regions index into it
    diagnostics : tuple of ParseError, default = ()
        Recoverable parse errors recorded while building the page
    region : Region or None, default = None
        Span of the whole source

    """

    children: tuple[Node, ...] = ()
    source: str = field(default="", compare=False, repr=False)
    diagnostics: tuple[ParseError, ...] = field(default=(), compare=False, repr=False, hash=False)
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize children to an immutable sequence."""
        _freeze(self, "children", "diagnostics")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this page.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_page method

        Returns
        -------
        Any
            Result from visitor.visit_page(self)

        """
        return visitor.visit_page(self)

    def source_text(self, node: Node) -> str:
        """Return the raw source text a node was parsed from.

        Parameters
        ----------
        node : Node
            Any node of this page

        Returns
        -------
        str
            The covered substring, or an empty string when the node carries no region

        """
        if node.region is None:
            return ""
        return node.region.slice(self.source)


@dataclass(frozen=True)
class Header(Node):
    """Header node (levels 1-6).

    Parameters
    ----------
    level : int
        Header level, the number of ``=`` on each side
    content : tuple of Node, default = ()
        Inline nodes of the header text
    centered : bool, default = False
        Whether the header line was indented (vimwiki centered header)
    region : Region or None, default = None
        Source span of the header line

    """

    level: int
    content: tuple[Node, ...] = ()
    centered: bool = False
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate header level is between 1 and 6."""
        if not MIN_HEADER_LEVEL <= self.level <= MAX_HEADER_LEVEL:
            raise ValueError(f"Header level must be {MIN_HEADER_LEVEL}-{MAX_HEADER_LEVEL}, got {self.level}")
        _freeze(self, "content")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this header."""
        return visitor.visit_header(self)


@dataclass(frozen=True)
class Paragraph(Node):
    """Paragraph node.

    Consecutive source lines are kept as one paragraph, with a ``LineBreak``
    node marking each line boundary.

    Parameters
    ----------
    content : tuple of Node, default = ()
        Inline nodes of the paragraph
    region : Region or None, default = None
        Source span of the paragraph

    """

    content: tuple[Node, ...] = ()
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize content to an immutable sequence."""
        _freeze(self, "content")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass(frozen=True)
class DefinitionTerm(Node):
    """Term of a definition list entry (the text before ``::``)."""

    content: tuple[Node, ...] = ()
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize content to an immutable sequence."""
        _freeze(self, "content")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition term."""
        return visitor.visit_definition_term(self)


@dataclass(frozen=True)
class DefinitionDescription(Node):
    """One definition of a definition list term."""

    content: tuple[Node, ...] = ()
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize content to an immutable sequence."""
        _freeze(self, "content")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition description."""
        return visitor.visit_definition_description(self)


@dataclass(frozen=True)
class DefinitionList(Node):
    """Definition list node.

    Parameters
    ----------
    items : tuple, default = ()
        ``(DefinitionTerm, tuple[DefinitionDescription, ...])`` pairs in source order
    region : Region or None, default = None
        Source span of the whole list

    """

    items: tuple[tuple[DefinitionTerm, tuple[DefinitionDescription, ...]], ...] = ()
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize items to nested immutable sequences."""
        object.__setattr__(self, "items", tuple((term, tuple(descriptions)) for term, descriptions in self.items))

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition list."""
        return visitor.visit_definition_list(self)


@dataclass(frozen=True)
class ListItem(Node):
    """List item node containing block content.

    Parameters
    ----------
    children : tuple of Node, default = ()
        Paragraph, CodeBlock, MathBlock, Blockquote, Table or nested List nodes
    marker : str, default = "-"
        The marker token as written, e.g. ``"-"``, ``"*"``, ``"#"``, ``"3."`` or ``"b)"``
    todo : str or None, default = None
        Checkbox state: ``incomplete``, ``partial_1``, ``partial_2``,
        ``partial_3``, ``complete`` or ``rejected``
    region : Region or None, default = None
        Source span from the marker to the end of the item body

    """

    children: tuple[Node, ...] = ()
    marker: str = "-"
    todo: Optional[TodoStatus] = None
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate the marker and normalize children."""
        classify_list_marker(self.marker)
        _freeze(self, "children")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)

    @property
    def marker_kind(self) -> MarkerKind:
        """Kind of marker this item was written with."""
        return classify_list_marker(self.marker)

    @property
    def ordered(self) -> bool:
        """Whether the marker belongs to an ordered list."""
        return self.marker not in UNORDERED_MARKERS

    @property
    def number(self) -> Optional[int]:
        """Explicit item number carried by the marker, if any.

        Numeric markers give their value, alphabetic markers their position
        in the alphabet and roman markers their numeral value. ``-``, ``*``
        and ``#`` carry no number.

        """
        kind = self.marker_kind
        token = self.marker[:-1]
        if kind == "number":
            return int(token)
        if kind in ("lower_alpha", "upper_alpha"):
            return ord(token.lower()) - ord("a") + 1
        if kind in ("lower_roman", "upper_roman"):
            return _roman_to_int(token)
        return None


@dataclass(frozen=True)
class List(Node):
    """List node (ordered or unordered).

    All items of one list share the same kind; an ordered marker following an
    unordered one starts a new sibling list.

    Parameters
    ----------
    ordered : bool
        True for ordered lists (numbers, letters, roman numerals, ``#``)
    items : tuple of ListItem, default = ()
        List items
    region : Region or None, default = None
        Source span of the list

    """

    ordered: bool
    items: tuple[ListItem, ...] = ()
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate that every item matches the list kind."""
        _freeze(self, "items")
        for item in self.items:
            if item.ordered != self.ordered:
                kind = "ordered" if self.ordered else "unordered"
                raise ValueError(f"List item marker {item.marker!r} does not belong in an {kind} list")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass(frozen=True)
class TableCell(Node):
    """Table cell node.

    Parameters
    ----------
    content : tuple of Node, default = ()
        Inline content of the cell
    span : {'left', 'above'} or None, default = None
        ``left`` for a ``>`` cell that widens its left neighbour, ``above``
        for a ``\\/`` cell that heightens the cell above it
    region : Region or None, default = None
        Source span of the cell text

    """

    content: tuple[Node, ...] = ()
    span: Optional[CellSpan] = None
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate that span cells have no content."""
        _freeze(self, "content")
        if self.span is not None and self.content:
            raise ValueError("Span cells cannot carry content")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass(frozen=True)
class TableRow(Node):
    """Table row node.

    Parameters
    ----------
    cells : tuple of TableCell, default = ()
        Cells in this row (empty for divider rows)
    is_header : bool, default = False
        Whether the row sits above the first divider row
    is_divider : bool, default = False
        Whether this is a ``|---|---|`` row separating header from body
    region : Region or None, default = None
        Source span of the row line

    """

    cells: tuple[TableCell, ...] = ()
    is_header: bool = False
    is_divider: bool = False
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize cells to an immutable sequence."""
        _freeze(self, "cells")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass(frozen=True)
class Table(Node):
    """Table node.

    Parameters
    ----------
    rows : tuple of TableRow, default = ()
        Rows in source order, including divider rows
    centered : bool, default = False
        Whether the first row was indented
    region : Region or None, default = None
        Source span of the table

    """

    rows: tuple[TableRow, ...] = ()
    centered: bool = False
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize rows to an immutable sequence."""
        _freeze(self, "rows")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)

    @property
    def content_rows(self) -> list[TableRow]:
        """Rows that hold cells, in order."""
        return [row for row in self.rows if not row.is_divider]

    @property
    def header_rows(self) -> list[TableRow]:
        """Content rows above the first divider row."""
        return [row for row in self.content_rows if row.is_header]

    @property
    def body_rows(self) -> list[TableRow]:
        """Content rows below the first divider row (all rows when there is none)."""
        return [row for row in self.content_rows if not row.is_header]

    @property
    def column_count(self) -> int:
        """Widest row width, in cells."""
        return max((len(row.cells) for row in self.rows), default=0)

    def cell_spans(self) -> dict[tuple[int, int], tuple[int, int]]:
        """Compute row and column spans of every content cell.

        A content cell widens by one column for each ``left`` span cell that
        directly follows it in its row, and grows by one row for each
        ``above`` span cell directly below it in its column. Divider rows
        are skipped when counting rows, and a row span stops at the boundary
        between header rows and body rows.

        Returns
        -------
        dict
            Maps ``(row, column)`` positions in ``content_rows`` to
            ``(rowspan, colspan)`` pairs. Span cells have no entry.

        """
        rows = self.content_rows
        spans: dict[tuple[int, int], tuple[int, int]] = {}
        for r, row in enumerate(rows):
            for c, cell in enumerate(row.cells):
                if cell.span is not None:
                    continue
                colspan = 1
                while c + colspan < len(row.cells) and row.cells[c + colspan].span == "left":
                    colspan += 1
                rowspan = 1
                while (
                    r + rowspan < len(rows)
                    and rows[r + rowspan].is_header == row.is_header
                    and c < len(rows[r + rowspan].cells)
                    and rows[r + rowspan].cells[c].span == "above"
                ):
                    rowspan += 1
                spans[(r, c)] = (rowspan, colspan)
        return spans


@dataclass(frozen=True)
class CodeBlock(Node):
    """Fenced code block node.

    Parameters
    ----------
    lines : tuple of str, default = ()
        Raw lines between the fences, whitespace preserved
    language : str or None, default = None
        Language tag following ``{{{``
    metadata : dict, default = empty dict
        Ordered ``key="value"`` pairs from the opening fence
    region : Region or None, default = None
        Source span from the opening fence to the closing fence

    """

    lines: tuple[str, ...] = ()
    language: Optional[str] = None
    metadata: dict[str, str] = field(default_factory=dict, hash=False)
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize lines to an immutable sequence."""
        _freeze(self, "lines")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass(frozen=True)
class MathBlock(Node):
    """Fenced math block node.

    Parameters
    ----------
    lines : tuple of str, default = ()
        Raw lines between ``{{$`` and ``}}$``, whitespace preserved
    environment : str or None, default = None
        LaTeX environment from ``{{$%env%``
    region : Region or None, default = None
        Source span from the opening fence to the closing fence

    """

    lines: tuple[str, ...] = ()
    environment: Optional[str] = None
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize lines to an immutable sequence."""
        _freeze(self, "lines")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this math block."""
        return visitor.visit_math_block(self)


@dataclass(frozen=True)
class Blockquote(Node):
    """Blockquote node.

    Parameters
    ----------
    lines : tuple of tuple of Node, default = ()
        Inline content of each quoted line, whitespace after the ``> ``
        marker preserved. Blank lines between quote lines are empty tuples.
    indented : bool, default = False
        True for the indented form, where each line is indented by four or
        more spaces instead of starting with ``> ``
    region : Region or None, default = None
        Source span of the quote

    """

    lines: tuple[tuple[Node, ...], ...] = ()
    indented: bool = False
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize lines to nested immutable sequences."""
        object.__setattr__(self, "lines", tuple(tuple(line) for line in self.lines))

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this blockquote."""
        return visitor.visit_blockquote(self)


@dataclass(frozen=True)
class Divider(Node):
    """Horizontal rule (``----``)."""

    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this divider."""
        return visitor.visit_divider(self)


@dataclass(frozen=True)
class Placeholder(Node):
    """Page placeholder such as ``%title`` or ``%nohtml``.

    Parameters
    ----------
    kind : {'title', 'date', 'template', 'nohtml', 'other'}
        Placeholder kind
    value : str, default = ""
        Text after the placeholder name
    name : str or None, default = None
        Placeholder name for ``other`` placeholders
    region : Region or None, default = None
        Source span of the placeholder line

    """

    kind: PlaceholderKind
    value: str = ""
    name: Optional[str] = None
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate the kind and its name."""
        if self.kind not in _PLACEHOLDER_KINDS:
            raise ValueError(f"Unknown placeholder kind: {self.kind}")
        if (self.kind == "other") != (self.name is not None):
            raise ValueError("Only 'other' placeholders carry a name")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this placeholder."""
        return visitor.visit_placeholder(self)


@dataclass(frozen=True)
class Comment(Node):
    """Block-level comment.

    Parameters
    ----------
    content : str
        Text after ``%%``, or between ``%%+`` and ``+%%``
    multiline : bool, default = False
        Whether the comment used the ``%%+ ... +%%`` form
    region : Region or None, default = None
        Source span of the comment

    """

    content: str
    multiline: bool = False
    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this comment."""
        return visitor.visit_comment(self)


@dataclass(frozen=True)
class BlankLine(Node):
    """An empty (or whitespace-only) source line between blocks."""

    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this blank line."""
        return visitor.visit_blank_line(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass(frozen=True)
class Text(Node):
    """Literal text run."""

    content: str
    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass(frozen=True)
class DecoratedText(Node):
    """Decorated text span.

    Parameters
    ----------
    decoration : str
        One of ``bold``, ``italic``, ``bold_italic``, ``strikethrough``,
        ``superscript``, ``subscript`` or ``code``
    content : tuple of Node, default = ()
        Nested inline nodes. Code spans hold a single raw ``Text``.
    region : Region or None, default = None
        Source span including the delimiters

    """

    decoration: Decoration
    content: tuple[Node, ...] = ()
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate the decoration name."""
        if self.decoration not in _DECORATIONS:
            raise ValueError(f"Unknown decoration: {self.decoration}")
        _freeze(self, "content")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this decorated text."""
        return visitor.visit_decorated_text(self)


@dataclass(frozen=True)
class Link(Node):
    """Link node covering wiki, diary, interwiki, raw and transclusion links.

    Parameters
    ----------
    variant : str
        ``wiki``, ``indexed_wiki``, ``interwiki``, ``diary``, ``raw`` or ``transclusion``
    target : str
        Target as written, including any ``diary:``/``wikiN:``/``wn.Name:``
        prefix and ``#anchor`` suffixes
    description : tuple of Node or None, default = None
        Inline description; may embed a transclusion ``Link`` (image link)
    properties : dict, default = empty dict
        Transclusion attributes, in source order
    region : Region or None, default = None
        Source span including the brackets

    """

    variant: LinkVariant
    target: str
    description: Optional[tuple[Node, ...]] = None
    properties: dict[str, str] = field(default_factory=dict, hash=False)
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate the variant and normalize the description."""
        if self.variant not in _LINK_VARIANTS:
            raise ValueError(f"Unknown link variant: {self.variant}")
        if self.description is not None:
            _freeze(self, "description")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)

    @property
    def _path(self) -> str:
        if self.variant == "diary":
            return self.target[len(DIARY_PREFIX) :]
        if self.variant == "indexed_wiki":
            return _INDEXED_WIKI_PATTERN.match(self.target).group(2)  # type: ignore[union-attr]
        if self.variant == "interwiki":
            return _INTERWIKI_PATTERN.match(self.target).group(2)  # type: ignore[union-attr]
        return self.target

    @property
    def page(self) -> str:
        """Target path without wiki prefix or anchors."""
        if self.variant in ("raw", "transclusion"):
            return self.target
        return self._path.split("#", 1)[0]

    @property
    def anchors(self) -> list[str]:
        """Anchor names following ``#`` in the target."""
        if self.variant in ("raw", "transclusion"):
            return []
        return [anchor for anchor in self._path.split("#")[1:] if anchor]

    @property
    def is_local_anchor(self) -> bool:
        """Whether the link points at an anchor of the current page."""
        return self.variant == "wiki" and self.target.startswith("#")

    @property
    def wiki_index(self) -> Optional[int]:
        """Index of the target wiki for ``wikiN:`` links."""
        match = _INDEXED_WIKI_PATTERN.match(self.target) if self.variant == "indexed_wiki" else None
        return int(match.group(1)) if match else None

    @property
    def wiki_name(self) -> Optional[str]:
        """Name of the target wiki for ``wn.Name:`` links."""
        match = _INTERWIKI_PATTERN.match(self.target) if self.variant == "interwiki" else None
        return match.group(1) if match else None


@dataclass(frozen=True)
class Tags(Node):
    """Tag set such as ``:work:urgent:``."""

    names: tuple[str, ...] = ()
    region: Optional[Region] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Normalize names to an immutable sequence."""
        _freeze(self, "names")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing these tags."""
        return visitor.visit_tags(self)


@dataclass(frozen=True)
class Keyword(Node):
    """Highlighted keyword: TODO, DONE, STARTED, FIXME, FIXED or XXX."""

    word: str
    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this keyword."""
        return visitor.visit_keyword(self)


@dataclass(frozen=True)
class CommentInline(Node):
    """Comment inside a line of text.

    Parameters
    ----------
    content : str
        Comment text without its delimiters
    multiline : bool, default = False
        True for ``%%+ ... +%%``, False for a trailing ``%%`` comment
    region : Region or None, default = None
        Source span including the delimiters

    """

    content: str
    multiline: bool = False
    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline comment."""
        return visitor.visit_comment_inline(self)


@dataclass(frozen=True)
class MathInline(Node):
    """Inline math written as ``$...$``."""

    content: str
    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline math."""
        return visitor.visit_math_inline(self)


@dataclass(frozen=True)
class LineBreak(Node):
    """Line boundary inside a multi-line paragraph."""

    region: Optional[Region] = field(default=None, compare=False)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


BlockElement = Union[
    Header,
    Paragraph,
    DefinitionList,
    List,
    Table,
    CodeBlock,
    MathBlock,
    Blockquote,
    Divider,
    Placeholder,
    Comment,
    BlankLine,
]
ListItemBlockElement = Union[Paragraph, CodeBlock, MathBlock, Blockquote, Table, List]
InlineElement = Union[Text, DecoratedText, Link, Tags, Keyword, CommentInline, MathInline, LineBreak]


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes of a node in source order.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        Direct child nodes (empty list for leaf nodes)

    Examples
    --------
    >>> header = Header(level=1, content=[Text("Hello"), DecoratedText("bold", [Text("world")])])
    >>> len(get_node_children(header))
    2

    """
    if isinstance(node, (Page, ListItem)):
        return list(node.children)

    if isinstance(node, (Header, Paragraph, DecoratedText, TableCell, DefinitionTerm, DefinitionDescription)):
        return list(node.content)

    if isinstance(node, Link):
        return list(node.description or ())

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        return list(node.rows)

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, DefinitionList):
        dl_children: list[Node] = []
        for term, descriptions in node.items:
            dl_children.append(term)
            dl_children.extend(descriptions)
        return dl_children

    if isinstance(node, Blockquote):
        return [child for line in node.lines for child in line]

    return []
