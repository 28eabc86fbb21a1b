#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/renderers/vimwiki.py
"""Vimwiki rendering from AST.

This module provides the VimwikiRenderer class which serializes AST nodes
back to vimwiki markup. Each construct is written in one canonical form, so
parsing the output of the renderer gives back an equal tree.

List item bodies are written relative to their item and indented as the
enclosing list is written out; the raw lines of code and math blocks are
never re-indented.

"""

from __future__ import annotations

import logging

from wikilang.ast import (
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
)
from wikilang.ast.visitors import NodeVisitor
from wikilang.constants import (
    BLOCKQUOTE_INDENT,
    BLOCKQUOTE_MARKER,
    CODE_FENCE_CLOSE,
    CODE_FENCE_OPEN,
    DEFINITION_MARKER,
    HEADER_MARKER,
    LINE_COMMENT_PREFIX,
    MATH_FENCE_CLOSE,
    MATH_FENCE_OPEN,
    MULTILINE_COMMENT_CLOSE,
    MULTILINE_COMMENT_OPEN,
    TABLE_SPAN_ABOVE,
    TABLE_SPAN_LEFT,
    TODO_CHAR_BY_STATUS,
)
from wikilang.exceptions import RenderingError
from wikilang.options.vimwiki import VimwikiRendererOptions
from wikilang.parsers.vimwiki import DEFINITION_TERM_PATTERN, LIST_ITEM_PATTERN
from wikilang.renderers.base import BaseRenderer, InlineContentMixin

logger = logging.getLogger(__name__)

_DELIMITERS = {
    "bold": ("*", "*"),
    "italic": ("_", "_"),
    "bold_italic": ("*_", "_*"),
    "strikethrough": ("~~", "~~"),
    "superscript": ("^", "^"),
    "subscript": (",,", ",,"),
    "code": ("`", "`"),
}

# (text, verbatim): verbatim lines are never indented by enclosing list items
_OutputLine = tuple[str, bool]


def _first_line_indent(lines: list[_OutputLine]) -> int:
    if not lines or lines[0][1]:
        return 0
    text = lines[0][0]
    return len(text) - len(text.lstrip())


class VimwikiRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to vimwiki markup.

    Parameters
    ----------
    options : VimwikiRendererOptions or None, default = None
        Serializer options

    Examples
    --------
        >>> from wikilang.ast import Header, Page, Text
        >>> page = Page(children=[Header(level=2, content=[Text(content="Tasks")])])
        >>> VimwikiRenderer().render_to_string(page)
        '== Tasks ==\\n'

    """

    def __init__(self, options: VimwikiRendererOptions | None = None):
        """Initialize the vimwiki renderer with options."""
        BaseRenderer._validate_options_type(options, VimwikiRendererOptions, "vimwiki")
        options = options or VimwikiRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: VimwikiRendererOptions = options
        self._output: list[str] = []
        self._lines: list[_OutputLine] = []

    def render_to_string(self, page: Page) -> str:
        """Serialize a page to vimwiki markup.

        Parameters
        ----------
        page : Page
            The page to serialize

        Returns
        -------
        str
            Markup with one trailing newline, or an empty string for an empty page

        """
        self._output = []
        self._lines = []
        page.accept(self)
        if not self._lines:
            return ""
        return "\n".join(text for text, _ in self._lines) + "\n"

    def _capture_blocks(self, nodes: tuple[Node, ...] | list[Node]) -> list[_OutputLine]:
        """Render block nodes into a separate line buffer."""
        saved_lines = self._lines
        self._lines = []
        for node in nodes:
            node.accept(self)
        captured = self._lines
        self._lines = saved_lines
        return captured

    def _render_blocks(self, nodes: tuple[Node, ...] | list[Node]) -> list[_OutputLine]:
        """Render a run of sibling blocks.

        A list is always written from column zero, so a list directly
        followed by a block whose first line is indented, such as a centered
        header or an indented blockquote, is shifted right to that indent,
        together with any lists directly before it. The indented line then
        ends the last item instead of joining its body.

        """
        rendered = [self._capture_blocks([node]) for node in nodes]
        shift = 0
        for index in range(len(nodes) - 1, -1, -1):
            if not isinstance(nodes[index], List):
                shift = _first_line_indent(rendered[index])
            elif shift:
                rendered[index] = [
                    (text if verbatim else " " * shift + text, verbatim) for text, verbatim in rendered[index]
                ]
        return [line for block in rendered for line in block]

    def _emit(self, text: str, verbatim: bool = False) -> None:
        self._lines.append((text, verbatim))

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_page(self, node: Page) -> None:
        """Render all blocks of the page."""
        self._lines.extend(self._render_blocks(node.children))

    def visit_header(self, node: Header) -> None:
        """Render a header as ``= Title =``, indented when centered."""
        markers = HEADER_MARKER * node.level
        indent = " " if node.centered else ""
        self._emit(f"{indent}{markers} {self._render_inline_content(node.content)} {markers}")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a paragraph, one source line per line break."""
        for line in self._render_inline_content(node.content).split("\n"):
            self._emit(line)

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render ``Term:: definition`` lines.

        The first description shares the term's line; further descriptions
        go on ``:: definition`` lines.

        """
        for term, descriptions in node.items:
            term_text = self._render_inline_content(term.content)
            rendered = [self._render_inline_content(d.content) for d in descriptions]
            if not term_text:
                for description in rendered:
                    self._emit(f"{DEFINITION_MARKER} {description}")
                continue
            if rendered:
                self._emit(f"{term_text}{DEFINITION_MARKER} {rendered[0]}")
            else:
                self._emit(f"{term_text}{DEFINITION_MARKER}")
            for description in rendered[1:]:
                self._emit(f"{DEFINITION_MARKER} {description}")

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        self._output.append(self._render_inline_content(node.content))

    def visit_list(self, node: List) -> None:
        """Render list items at the current indentation."""
        for item in node.items:
            item.accept(self)

    def visit_list_item(self, node: ListItem) -> None:
        """Render a list item.

        The first line of the first child follows the marker when that line
        reads back as the same item; otherwise the marker stands alone. Every
        other child line is indented to the item's content column.

        """
        prefix = f"{node.marker} "
        if node.todo is not None:
            prefix += f"[{TODO_CHAR_BY_STATUS[node.todo]}] "
        child_indent = " " * len(prefix)

        body = self._render_blocks(node.children)
        first_text, first_verbatim = body[0] if body else ("", True)
        if not first_verbatim and self._reads_back_as_item(node, prefix + first_text, first_text):
            self._emit(prefix + first_text)
            body = body[1:]
        else:
            self._emit(prefix.rstrip())
        for text, verbatim in body:
            self._emit(text if verbatim else child_indent + text, verbatim)

    @staticmethod
    def _reads_back_as_item(node: ListItem, line: str, text: str) -> bool:
        """Return True when ``line`` parses as ``node``'s marker line with ``text`` as its body."""
        if DEFINITION_TERM_PATTERN.match(line):
            return False
        match = LIST_ITEM_PATTERN.match(line)
        return (
            match is not None
            and match.group("marker") == node.marker
            and (match.group("todo") is None) == (node.todo is None)
            and match.group("text") == text
        )

    def visit_table(self, node: Table) -> None:
        """Render table rows; divider rows use one dash run per column."""
        indent = " " if node.centered else ""
        columns = node.column_count
        for row in node.rows:
            if row.is_divider:
                self._emit(indent + "|" + "---|" * max(columns, 1))
                continue
            cells = [self._render_cell(cell) for cell in row.cells]
            self._emit(indent + "| " + " | ".join(cells) + " |")

    def _render_cell(self, cell: TableCell) -> str:
        if cell.span == "left":
            return TABLE_SPAN_LEFT
        if cell.span == "above":
            return TABLE_SPAN_ABOVE
        return self._render_inline_content(cell.content)

    def visit_table_row(self, node: TableRow) -> None:
        self._output.append(" | ".join(self._render_cell(cell) for cell in node.cells))

    def visit_table_cell(self, node: TableCell) -> None:
        self._output.append(self._render_cell(node))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a ``{{{`` block; the inner lines are written unchanged."""
        info = node.language or ""
        if node.metadata:
            properties = " ".join(f'{key}="{value}"' for key, value in node.metadata.items())
            info = f"{info} {properties}" if info else f" {properties}"
        self._emit(f"{CODE_FENCE_OPEN}{info}")
        for line in node.lines:
            self._emit(line, verbatim=True)
        self._emit(CODE_FENCE_CLOSE)

    def visit_math_block(self, node: MathBlock) -> None:
        """Render a ``{{$`` block; the inner lines are written unchanged."""
        environment = f"%{node.environment}%" if node.environment else ""
        self._emit(f"{MATH_FENCE_OPEN}{environment}")
        for line in node.lines:
            self._emit(line, verbatim=True)
        self._emit(MATH_FENCE_CLOSE)

    def visit_blockquote(self, node: Blockquote) -> None:
        """Render ``> `` lines, or four-space indented lines for an indented quote."""
        for line in node.lines:
            content = self._render_inline_content(line)
            if node.indented:
                self._emit(BLOCKQUOTE_INDENT + content)
            else:
                self._emit(f"{BLOCKQUOTE_MARKER} {content}" if content else BLOCKQUOTE_MARKER)

    def visit_divider(self, node: Divider) -> None:
        self._emit("----")

    def visit_placeholder(self, node: Placeholder) -> None:
        name = node.name if node.kind == "other" else node.kind
        self._emit(f"%{name} {node.value}" if node.value else f"%{name}")

    def visit_comment(self, node: Comment) -> None:
        """Render a ``%%`` or ``%%+ ... +%%`` comment."""
        if not node.multiline:
            if "\n" in node.content:
                raise RenderingError("Single-line comment content cannot contain a newline", rendering_stage="vimwiki")
            self._emit(f"{LINE_COMMENT_PREFIX}{node.content}")
            return
        text = f"{MULTILINE_COMMENT_OPEN}{node.content}{MULTILINE_COMMENT_CLOSE}"
        for line in text.split("\n"):
            self._emit(line, verbatim=True)

    def visit_blank_line(self, node: BlankLine) -> None:
        self._emit("")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        self._output.append(node.content)

    def visit_decorated_text(self, node: DecoratedText) -> None:
        opening, closing = _DELIMITERS[node.decoration]
        self._output.append(f"{opening}{self._render_inline_content(node.content)}{closing}")

    def visit_link(self, node: Link) -> None:
        """Render a link in its bracketed form, or bare for raw links."""
        if node.variant == "raw":
            self._output.append(node.target)
            return

        parts = [node.target]
        if node.description is not None or node.properties:
            parts.append(self._render_inline_content(node.description or ()))
        if node.variant == "transclusion":
            if node.properties:
                parts.append(" ".join(f'{key}="{value}"' for key, value in node.properties.items()))
            self._output.append("{{" + "|".join(parts) + "}}")
        else:
            self._output.append("[[" + "|".join(parts) + "]]")

    def visit_tags(self, node: Tags) -> None:
        self._output.append(":" + ":".join(node.names) + ":")

    def visit_keyword(self, node: Keyword) -> None:
        self._output.append(node.word)

    def visit_comment_inline(self, node: CommentInline) -> None:
        if node.multiline:
            self._output.append(f"{MULTILINE_COMMENT_OPEN}{node.content}{MULTILINE_COMMENT_CLOSE}")
        else:
            self._output.append(f"{LINE_COMMENT_PREFIX}{node.content}")

    def visit_math_inline(self, node: MathInline) -> None:
        self._output.append(f"${node.content}$")

    def visit_line_break(self, node: LineBreak) -> None:
        self._output.append("\n")
