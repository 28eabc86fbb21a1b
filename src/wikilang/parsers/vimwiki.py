#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/parsers/vimwiki.py
"""Vimwiki markup to AST converter.

This module parses vimwiki markup with a line-oriented recursive descent.
Each line is offered to the block matchers in a fixed order (header,
divider, placeholder, comment, code fence, math fence, table row,
blockquote, definition list, list, blank line) and the first one that
accepts it consumes one or more lines; anything else starts a paragraph.
A paragraph keeps taking lines until a blank line or a line that one of the
matchers would accept.

Inline content is handled by ``InlineParser`` one line at a time.

"""

from __future__ import annotations

import datetime
import logging
import re
from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

from wikilang.ast import (
    BlankLine,
    Blockquote,
    CodeBlock,
    Comment,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Divider,
    Header,
    LineBreak,
    LineIndex,
    List,
    ListItem,
    MathBlock,
    Node,
    Page,
    Paragraph,
    Placeholder,
    Region,
    Table,
    TableCell,
    TableRow,
)
from wikilang.constants import (
    CODE_FENCE_CLOSE,
    MATH_FENCE_CLOSE,
    MAX_HEADER_LEVEL,
    TABLE_SPAN_ABOVE,
    TABLE_SPAN_LEFT,
    TODO_STATUS_CHARS,
    UNORDERED_MARKERS,
)
from wikilang.exceptions import InvalidHeaderLevel, MalformedTable, ParseError, UnterminatedBlock
from wikilang.options.vimwiki import VimwikiParserOptions
from wikilang.parsers._vimwiki_inline import InlineParser, parse_properties, split_unescaped
from wikilang.parsers.base import BaseParser, ParserInput
from wikilang.utils.decorators import debug_timer

logger = logging.getLogger(__name__)

# =============================================================================
# Regex Patterns for vimwiki block syntax
# =============================================================================

# Header: = Title =, == Title ==, ...; leading whitespace centers the header
HEADER_PATTERN = re.compile(r"^(?P<indent>\s*)(?P<open>=+)\s+(?P<text>.+?)\s+(?P<close>=+)\s*$")

# Divider: ---- (four or more dashes)
DIVIDER_PATTERN = re.compile(r"^\s*-{4,}\s*$")

# Placeholders: %title Text, %date 2024-01-31, %template name, %nohtml, %name value
PLACEHOLDER_PATTERN = re.compile(r"^\s*%(?P<name>[A-Za-z][\w-]*)(?:\s+(?P<value>.*?))?\s*$")
KNOWN_PLACEHOLDERS = ("title", "date", "template", "nohtml")

# Comments: %% text, or %%+ text +%% (possibly across lines)
LINE_COMMENT_PATTERN = re.compile(r"^\s*%%(?P<content>.*)$")
MULTILINE_COMMENT_OPEN_PATTERN = re.compile(r"^\s*%%\+(?P<content>.*)$")
MULTILINE_COMMENT_CLOSE_PATTERN = re.compile(r"^(?P<content>.*)\+%%\s*$")

# Code fence: {{{lang key="value" ... }}}
CODE_FENCE_PATTERN = re.compile(r"^\s*\{\{\{(?P<info>.*)$")
CODE_INFO_PATTERN = re.compile(r"^\s*(?P<lang>[^\s=\"]+)?(?P<props>(?:\s*[\w-]+=\"[^\"]*\")*)\s*$")

# Math fence: {{$ or {{$%environment% ... }}$
MATH_FENCE_PATTERN = re.compile(r"^\s*\{\{\$(?:%(?P<env>[^%\s]+)%)?\s*$")

# Table row: | cell | cell |
TABLE_ROW_PATTERN = re.compile(r"^(?P<indent>\s*)\|(?P<inner>.*)\|\s*$")
TABLE_LINE_PATTERN = re.compile(r"^\s*\|")
TABLE_DIVIDER_CELL_PATTERN = re.compile(r"^-+$")
TABLE_DIVIDER_RUN_PATTERN = re.compile(r"^-{3,}$")

# Blockquote: > text, or a bare > followed by nothing but whitespace
BLOCKQUOTE_PATTERN = re.compile(r"^\s*>(?: |\s*$)")

# Indented blockquote: four or more leading whitespace characters, top level only
INDENTED_BLOCKQUOTE_PATTERN = re.compile(r"^\s{4,}\S")

# Definition list: Term:: definition, Term::, or :: definition
DEFINITION_TERM_PATTERN = re.compile(r"^\s*(?P<term>\S.*?)\s*::(?:\s+(?P<definition>\S.*?))?\s*$")
DEFINITION_DESCRIPTION_PATTERN = re.compile(r"^\s*::\s+(?P<definition>\S.*?)\s*$")

# List item: marker, optional checkbox, text. Whitespace is matched with \s
# so that a line and its stripped form agree on being a list item.
LIST_ITEM_PATTERN = re.compile(
    r"^(?P<indent>\s*)"
    r"(?P<marker>[-*#]|\d+[.)]|[ivxlcdm]+[.)]|[IVXLCDM]+[.)]|[a-zA-Z][.)])"
    r"(?:\s+\[(?P<todo>[ .oOX-])\])?"
    r"(?=\s|$)\s*(?P<text>.*?)\s*$"
)


class _Line(NamedTuple):
    """A line of source, or the part of a list item line after its marker."""

    text: str
    start: int
    indent: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def content_start(self) -> int:
        """Offset of the first non-whitespace character."""
        return self.start + _leading_whitespace(self.text)

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class _Scope:
    """Where a run of lines is being parsed."""

    in_list_item: bool = False
    parent_indent: int = -1
    base_indent: int = 0


_TOP_LEVEL = _Scope()


def _leading_whitespace(text: str) -> int:
    return len(text) - len(text.lstrip())


class VimwikiParser(BaseParser):
    r"""Convert vimwiki markup to AST representation.

    Parameters
    ----------
    options : VimwikiParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = VimwikiParser()
        >>> page = parser.parse("= Hello =\nWorld\n")
        >>> page.children[0].level
        1

    Raise on the first recoverable error:

        >>> parser = VimwikiParser(VimwikiParserOptions(strict=True))
        >>> parser.parse("======= too deep =======")
        Traceback (most recent call last):
        ...
        wikilang.exceptions.InvalidHeaderLevel: Header level 7 exceeds maximum of 6 (offset 0)

    Notes
    -----
    Recoverable problems (an over-deep header, a link without a target, a
    malformed table row) are recorded in ``Page.diagnostics`` and the
    offending text is kept as ordinary content. A code or math fence that is
    never closed always raises ``UnterminatedBlock``.

    """

    def __init__(self, options: VimwikiParserOptions | None = None):
        """Initialize the vimwiki parser with options."""
        BaseParser._validate_options_type(options, VimwikiParserOptions, "vimwiki")
        options = options or VimwikiParserOptions()
        super().__init__(options)
        self.options: VimwikiParserOptions = options
        self._source = ""
        self._line_index: Optional[LineIndex] = None
        self._diagnostics: list[ParseError] = []
        self._inline = InlineParser(self._region, self._error_region, self._record)

    def parse(self, input_data: ParserInput) -> Page:
        """Parse vimwiki input into a Page.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Vimwiki markup. Strings are always treated as markup text.

        Returns
        -------
        Page
            Parsed page; recoverable errors are in ``page.diagnostics``

        Raises
        ------
        UnterminatedBlock
            If a code or math fence is never closed
        ParseError
            Any recoverable error, when ``strict`` is enabled

        """
        source = self._load_text_content(input_data)

        # Reset parser state to prevent leakage across parse calls
        self._source = source
        self._line_index = LineIndex(source) if self.options.compute_line_columns else None
        self._diagnostics = []

        with debug_timer(logger, "Parsing (vimwiki)"):
            lines = self._split_lines(source)
            children = self._parse_blocks(lines, 0, len(lines), _TOP_LEVEL)

        if self._diagnostics:
            logger.debug(f"Parsed page with {len(self._diagnostics)} diagnostic(s)")

        return Page(
            children=children,
            source=source,
            diagnostics=tuple(self._diagnostics),
            region=self._region(0, len(source)),
        )

    # ------------------------------------------------------------------
    # Regions and diagnostics
    # ------------------------------------------------------------------

    def _error_region(self, start: int, end: int) -> Region:
        region = Region.from_span(start, end)
        if self._line_index is not None:
            region = self._line_index.locate(region)
        return region

    def _region(self, start: int, end: int) -> Optional[Region]:
        if not self.options.track_regions:
            return None
        return self._error_region(start, end)

    def _record(self, error: ParseError) -> None:
        """Raise the error in strict mode, otherwise keep it as a diagnostic."""
        if self.options.strict:
            raise error
        logger.warning(f"Recovered from parse error: {error}")
        self._diagnostics.append(error)

    @staticmethod
    def _split_lines(source: str) -> list[_Line]:
        """Split source into lines, accepting both ``\\n`` and ``\\r\\n`` endings."""
        lines: list[_Line] = []
        pos = 0
        while pos < len(source):
            newline = source.find("\n", pos)
            if newline == -1:
                end = next_pos = len(source)
            else:
                end, next_pos = newline, newline + 1
                if end > pos and source[end - 1] == "\r":
                    end -= 1
            text = source[pos:end]
            lines.append(_Line(text, pos, _leading_whitespace(text)))
            pos = next_pos
        return lines

    # ------------------------------------------------------------------
    # Block dispatch
    # ------------------------------------------------------------------

    def _matchers(self, scope: _Scope) -> list[Callable[[list[_Line], int, int, _Scope, list[Node]], tuple[bool, int]]]:
        if scope.in_list_item:
            return [
                self._try_parse_code_block,
                self._try_parse_math_block,
                self._try_parse_table,
                self._try_parse_blockquote,
                self._try_parse_list,
            ]
        return [
            self._try_parse_header,
            self._try_parse_divider,
            self._try_parse_placeholder,
            self._try_parse_comment,
            self._try_parse_code_block,
            self._try_parse_math_block,
            self._try_parse_table,
            self._try_parse_blockquote,
            self._try_parse_definition_list,
            self._try_parse_list,
            self._try_parse_indented_blockquote,
            self._try_parse_blank_line,
        ]

    def _parse_blocks(self, lines: list[_Line], start: int, end: int, scope: _Scope) -> list[Node]:
        """Parse ``lines[start:end]`` into block nodes."""
        result: list[Node] = []
        matchers = self._matchers(scope)
        i = start
        while i < end:
            if scope.in_list_item and lines[i].is_blank:
                i += 1
                continue

            for matcher in matchers:
                matched, new_i = matcher(lines, i, end, scope, result)
                if matched:
                    i = new_i
                    break
            else:
                paragraph, i = self._parse_paragraph(lines, i, end, scope)
                result.append(paragraph)
        return result

    def _starts_block(self, line: _Line, scope: _Scope) -> bool:
        """Return True when a block matcher would take this line instead of a paragraph."""
        text = line.text
        if CODE_FENCE_PATTERN.match(text) or MATH_FENCE_PATTERN.match(text):
            return True
        if TABLE_ROW_PATTERN.match(text) or BLOCKQUOTE_PATTERN.match(text) or LIST_ITEM_PATTERN.match(text):
            return True
        if scope.in_list_item:
            return False

        header = HEADER_PATTERN.match(text)
        if header and len(header.group("open")) == len(header.group("close")):
            return True
        if DIVIDER_PATTERN.match(text) or self._match_placeholder(text) or LINE_COMMENT_PATTERN.match(text):
            return True
        return bool(
            DEFINITION_TERM_PATTERN.match(text) or DEFINITION_DESCRIPTION_PATTERN.match(text)
        )

    # ------------------------------------------------------------------
    # Single-line blocks
    # ------------------------------------------------------------------

    def _try_parse_header(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a header.

        Marker runs of different lengths are not a header. Equal runs longer
        than the deepest level record ``InvalidHeaderLevel`` and the line is
        kept as a one-line paragraph.

        Returns
        -------
        tuple[bool, int]
            (matched, new_index)

        """
        line = lines[i]
        match = HEADER_PATTERN.match(line.text)
        if not match or len(match.group("open")) != len(match.group("close")):
            return False, i

        level = len(match.group("open"))
        content_start = line.content_start
        content_end = line.start + len(line.text.rstrip())
        if level > MAX_HEADER_LEVEL:
            self._record(
                InvalidHeaderLevel(
                    f"Header level {level} exceeds maximum of {MAX_HEADER_LEVEL}",
                    self._error_region(content_start, content_end),
                )
            )
            stripped = line.text.strip()
            result.append(
                Paragraph(
                    content=self._inline.parse(stripped, content_start),
                    region=self._region(content_start, content_end),
                )
            )
            return True, i + 1

        result.append(
            Header(
                level=level,
                content=self._inline.parse(match.group("text"), line.start + match.start("text")),
                centered=bool(match.group("indent")),
                region=self._region(content_start, content_end),
            )
        )
        return True, i + 1

    def _try_parse_divider(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a horizontal rule."""
        line = lines[i]
        if not DIVIDER_PATTERN.match(line.text):
            return False, i
        result.append(Divider(region=self._region(line.content_start, line.start + len(line.text.rstrip()))))
        return True, i + 1

    @staticmethod
    def _match_placeholder(text: str) -> Optional[re.Match[str]]:
        match = PLACEHOLDER_PATTERN.match(text)
        if match and match.group("name") == "date" and match.group("value"):
            try:
                datetime.date.fromisoformat(match.group("value"))
            except ValueError:
                return None
        return match

    def _try_parse_placeholder(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a ``%name value`` placeholder line."""
        line = lines[i]
        match = self._match_placeholder(line.text)
        if not match:
            return False, i

        name = match.group("name")
        value = match.group("value") or ""
        region = self._region(line.content_start, line.start + len(line.text.rstrip()))
        if name in KNOWN_PLACEHOLDERS:
            result.append(Placeholder(kind=name, value=value, region=region))  # type: ignore[arg-type]
        else:
            result.append(Placeholder(kind="other", value=value, name=name, region=region))
        return True, i + 1

    def _try_parse_comment(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a line comment or a ``%%+ ... +%%`` comment.

        A multi-line comment needs ``+%%`` at the end of some line; without
        one the opening line is an ordinary line comment.

        """
        line = lines[i]
        comment = LINE_COMMENT_PATTERN.match(line.text)
        if not comment:
            return False, i
        start = line.content_start

        opening = MULTILINE_COMMENT_OPEN_PATTERN.match(line.text)
        if opening:
            first = opening.group("content")
            same_line = MULTILINE_COMMENT_CLOSE_PATTERN.match(first)
            if same_line:
                result.append(
                    Comment(
                        content=same_line.group("content"),
                        multiline=True,
                        region=self._region(start, line.start + len(line.text.rstrip())),
                    )
                )
                return True, i + 1

            for j in range(i + 1, end):
                closing = MULTILINE_COMMENT_CLOSE_PATTERN.match(lines[j].text)
                if closing:
                    body = [first, *(lines[k].text for k in range(i + 1, j)), closing.group("content")]
                    result.append(
                        Comment(
                            content="\n".join(body),
                            multiline=True,
                            region=self._region(start, lines[j].start + len(lines[j].text.rstrip())),
                        )
                    )
                    return True, j + 1

        result.append(Comment(content=comment.group("content"), region=self._region(start, line.end)))
        return True, i + 1

    def _try_parse_blank_line(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a blank (whitespace-only) line."""
        line = lines[i]
        if not line.is_blank:
            return False, i
        result.append(BlankLine(region=self._region(line.start, line.end)))
        return True, i + 1

    # ------------------------------------------------------------------
    # Fenced blocks
    # ------------------------------------------------------------------

    def _find_fence_close(self, lines: list[_Line], i: int, end: int, closer: str, kind: str) -> int:
        """Return the index of the closing fence line for the fence opened at ``i``.

        Raises
        ------
        UnterminatedBlock
            If no closing fence follows before ``end``

        """
        for j in range(i + 1, end):
            if lines[j].text.strip() == closer:
                return j
        opening = lines[i]
        raise UnterminatedBlock(
            f"{kind} opened here is never closed with {closer!r}",
            self._error_region(opening.content_start, opening.end),
        )

    def _try_parse_code_block(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a ``{{{ ... }}}`` code block; inner lines are kept verbatim."""
        line = lines[i]
        match = CODE_FENCE_PATTERN.match(line.text)
        if not match:
            return False, i

        close = self._find_fence_close(lines, i, end, CODE_FENCE_CLOSE, "Code block")
        language, metadata = self._parse_code_info(match.group("info"))
        closing = lines[close]
        result.append(
            CodeBlock(
                lines=tuple(lines[j].text for j in range(i + 1, close)),
                language=language,
                metadata=metadata,
                region=self._region(line.content_start, closing.start + len(closing.text.rstrip())),
            )
        )
        return True, close + 1

    @staticmethod
    def _parse_code_info(info: str) -> tuple[Optional[str], dict[str, str]]:
        """Split the text after ``{{{`` into a language and ``key="value"`` metadata.

        Info text that is not a language followed by attribute pairs is kept
        whole as the language.

        """
        info = info.strip()
        if not info:
            return None, {}
        match = CODE_INFO_PATTERN.match(info)
        if not match:
            return info, {}
        return match.group("lang"), parse_properties(match.group("props"))

    def _try_parse_math_block(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a ``{{$ ... }}$`` math block."""
        line = lines[i]
        match = MATH_FENCE_PATTERN.match(line.text)
        if not match:
            return False, i

        close = self._find_fence_close(lines, i, end, MATH_FENCE_CLOSE, "Math block")
        closing = lines[close]
        result.append(
            MathBlock(
                lines=tuple(lines[j].text for j in range(i + 1, close)),
                environment=match.group("env"),
                region=self._region(line.content_start, closing.start + len(closing.text.rstrip())),
            )
        )
        return True, close + 1

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _try_parse_table(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a table.

        The table continues while lines start with ``|``. A ``|`` line that
        does not also end with ``|`` records ``MalformedTable`` and ends the
        table; that line is then parsed as a paragraph.

        Returns
        -------
        tuple[bool, int]
            (matched, new_index)

        """
        first = TABLE_ROW_PATTERN.match(lines[i].text)
        if not first:
            return False, i

        rows: list[TableRow] = []
        j = i
        while j < end and TABLE_LINE_PATTERN.match(lines[j].text):
            line = lines[j]
            match = TABLE_ROW_PATTERN.match(line.text)
            if not match:
                self._record(
                    MalformedTable(
                        "Table row does not end with '|'",
                        self._error_region(line.content_start, line.start + len(line.text.rstrip())),
                    )
                )
                break
            rows.append(self._parse_table_row(line, match))
            j += 1

        seen_divider = False
        for index, row in enumerate(rows):
            if row.is_divider:
                seen_divider = True
                continue
            if not seen_divider and any(later.is_divider for later in rows[index + 1 :]):
                rows[index] = TableRow(cells=row.cells, is_header=True, region=row.region)

        last = lines[j - 1]
        result.append(
            Table(
                rows=rows,
                centered=lines[i].indent > scope.base_indent,
                region=self._region(lines[i].content_start, last.start + len(last.text.rstrip())),
            )
        )
        return True, j

    def _parse_table_row(self, line: _Line, match: re.Match[str]) -> TableRow:
        """Parse one ``| a | b |`` row into cells."""
        inner_offset = line.start + match.start("inner")
        row_region = self._region(line.start + match.end("indent"), inner_offset + len(match.group("inner")) + 1)
        parts = split_unescaped(match.group("inner"))
        stripped = [part.strip() for part, _ in parts]

        if all(TABLE_DIVIDER_CELL_PATTERN.match(cell) for cell in stripped):
            return TableRow(is_divider=True, region=row_region)
        if any(TABLE_DIVIDER_RUN_PATTERN.match(cell) for cell in stripped):
            self._record(
                MalformedTable(
                    "Table divider row mixes dashes and content",
                    self._error_region(inner_offset - 1, inner_offset + len(match.group("inner")) + 1),
                )
            )

        cells: list[TableCell] = []
        for (part, index), text in zip(parts, stripped):
            cell_start = inner_offset + index + _leading_whitespace(part)
            cell_region = self._region(cell_start, cell_start + len(text))
            if text == TABLE_SPAN_LEFT:
                cells.append(TableCell(span="left", region=cell_region))
            elif text == TABLE_SPAN_ABOVE:
                cells.append(TableCell(span="above", region=cell_region))
            else:
                cells.append(TableCell(content=self._inline.parse(text, cell_start), region=cell_region))
        return TableRow(cells=cells, region=row_region)

    # ------------------------------------------------------------------
    # Quotes and definitions
    # ------------------------------------------------------------------

    def _try_parse_blockquote(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse consecutive ``> `` lines.

        Blank lines between two quote lines become empty quote lines.
        Trailing whitespace of a quote line is not part of its content.

        """
        if not BLOCKQUOTE_PATTERN.match(lines[i].text):
            return False, i

        quoted: list[list[Node]] = []
        last = i
        j = i
        while j < end:
            line = lines[j]
            match = BLOCKQUOTE_PATTERN.match(line.text)
            if match:
                quoted.append(self._inline.parse(line.text[match.end() :].rstrip(), line.start + match.end()))
                last = j
                j += 1
                continue
            if not line.is_blank:
                break
            k = j
            while k < end and lines[k].is_blank:
                k += 1
            if k >= end or not BLOCKQUOTE_PATTERN.match(lines[k].text):
                break
            quoted.extend([] for _ in range(k - j))
            j = k

        closing = lines[last]
        result.append(
            Blockquote(
                lines=quoted,
                region=self._region(lines[i].content_start, closing.start + len(closing.text.rstrip())),
            )
        )
        return True, last + 1

    def _try_parse_indented_blockquote(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse lines indented by four or more characters as a blockquote.

        Tried only at the top level and after every other block matcher. The
        quote runs until a blank line or a less indented line, whatever the
        quoted lines contain.

        """
        if not INDENTED_BLOCKQUOTE_PATTERN.match(lines[i].text):
            return False, i

        quoted: list[list[Node]] = []
        j = i
        while j < end and INDENTED_BLOCKQUOTE_PATTERN.match(lines[j].text):
            line = lines[j]
            quoted.append(self._inline.parse(line.text.strip(), line.content_start))
            j += 1

        last = lines[j - 1]
        result.append(
            Blockquote(
                lines=quoted,
                indented=True,
                region=self._region(lines[i].content_start, last.start + len(last.text.rstrip())),
            )
        )
        return True, j

    def _try_parse_definition_list(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse ``Term:: definition`` / ``:: definition`` lines."""
        line = lines[i]
        if not (DEFINITION_DESCRIPTION_PATTERN.match(line.text) or DEFINITION_TERM_PATTERN.match(line.text)):
            return False, i

        items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []
        j = i
        while j < end:
            line = lines[j]
            description = DEFINITION_DESCRIPTION_PATTERN.match(line.text)
            if description:
                if not items:
                    empty_term = DefinitionTerm(region=self._region(line.content_start, line.content_start))
                    items.append((empty_term, []))
                items[-1][1].append(self._definition_description(line, description))
                j += 1
                continue

            term = DEFINITION_TERM_PATTERN.match(line.text)
            if not term:
                break
            term_start = line.start + term.start("term")
            term_node = DefinitionTerm(
                content=self._inline.parse(term.group("term"), term_start),
                region=self._region(term_start, line.start + term.end("term")),
            )
            descriptions = [self._definition_description(line, term)] if term.group("definition") else []
            items.append((term_node, descriptions))
            j += 1

        last = lines[j - 1]
        result.append(
            DefinitionList(
                items=items,
                region=self._region(lines[i].content_start, last.start + len(last.text.rstrip())),
            )
        )
        return True, j

    def _definition_description(self, line: _Line, match: re.Match[str]) -> DefinitionDescription:
        start = line.start + match.start("definition")
        return DefinitionDescription(
            content=self._inline.parse(match.group("definition"), start),
            region=self._region(start, line.start + match.end("definition")),
        )

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _try_parse_list(
        self, lines: list[_Line], i: int, end: int, scope: _Scope, result: list[Node]
    ) -> tuple[bool, int]:
        """Try to parse a list starting at this line."""
        match = LIST_ITEM_PATTERN.match(lines[i].text)
        if not match or lines[i].indent <= scope.parent_indent:
            return False, i
        list_node, new_i = self._parse_list(lines, i, end, scope.parent_indent)
        result.append(list_node)
        return True, new_i

    def _parse_list(self, lines: list[_Line], start: int, end: int, parent_indent: int) -> tuple[List, int]:
        """Parse a list whose first item is at ``lines[start]``.

        An item joins the list when its indent is deeper than the enclosing
        item, no deeper than the first item, and its marker is of the same
        kind (ordered or unordered).

        Returns
        -------
        tuple[List, int]
            Parsed list node and the index after its last line

        """
        first = LIST_ITEM_PATTERN.match(lines[start].text)
        assert first is not None
        list_indent = lines[start].indent
        ordered = first.group("marker") not in UNORDERED_MARKERS

        items: list[ListItem] = []
        i = start
        while i < end:
            line = lines[i]
            match = LIST_ITEM_PATTERN.match(line.text)
            if not match or not parent_indent < line.indent <= list_indent:
                break
            if (match.group("marker") not in UNORDERED_MARKERS) != ordered:
                break
            item, i = self._parse_list_item(lines, i, end, match)
            items.append(item)

        region = None
        if items and items[0].region is not None and items[-1].region is not None:
            region = items[0].region.union(items[-1].region)
        return List(ordered=ordered, items=items, region=region), i

    def _parse_list_item(
        self, lines: list[_Line], i: int, end: int, match: re.Match[str]
    ) -> tuple[ListItem, int]:
        """Parse one list item and the indented lines that belong to it.

        The item body is every following line indented deeper than the
        marker, up to a blank line. A fence opened in the body runs to its
        closing fence whatever the indentation of the lines in between.

        """
        line = lines[i]
        item_indent = line.indent
        marker = match.group("marker")
        todo_char = match.group("todo")
        content_indent = item_indent + len(marker) + 1 + (4 if todo_char is not None else 0)

        text = match.group("text")
        # An empty item body starts right after the marker, not after trailing whitespace
        text_start = line.start + (match.start("text") if text else len(line.text.rstrip()))
        body = [_Line(text, text_start, line.indent + match.start("text") - match.end("indent"))]

        closer = self._fence_closer(text)
        j = i + 1
        while j < end:
            candidate = lines[j]
            if closer is not None:
                if candidate.text.strip() == closer:
                    closer = None
                body.append(candidate)
                j += 1
                continue
            if candidate.is_blank or candidate.indent <= item_indent:
                break
            closer = self._fence_closer(candidate.text)
            body.append(candidate)
            j += 1

        scope = _Scope(in_list_item=True, parent_indent=item_indent, base_indent=content_indent)
        children = self._parse_blocks(body, 0, len(body), scope)

        item_end = max(line.start + match.end("marker"), body[-1].start + len(body[-1].text.rstrip()))
        return (
            ListItem(
                children=children,
                marker=marker,
                todo=TODO_STATUS_CHARS[todo_char] if todo_char is not None else None,
                region=self._region(line.content_start, item_end),
            ),
            j,
        )

    @staticmethod
    def _fence_closer(text: str) -> Optional[str]:
        if CODE_FENCE_PATTERN.match(text):
            return CODE_FENCE_CLOSE
        if MATH_FENCE_PATTERN.match(text):
            return MATH_FENCE_CLOSE
        return None

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _parse_paragraph(self, lines: list[_Line], i: int, end: int, scope: _Scope) -> tuple[Paragraph, int]:
        """Collect lines into a paragraph until a blank line or a block start.

        Lines are stripped; the boundary between two lines becomes a
        ``LineBreak`` node.

        """
        content: list[Node] = []
        first_start = previous_end = 0
        j = i
        while j < end:
            line = lines[j]
            if line.is_blank or (j > i and self._starts_block(line, scope)):
                break
            stripped = line.text.strip()
            text_start = line.start + _leading_whitespace(line.text)
            if j == i:
                first_start = text_start
            else:
                content.append(LineBreak(region=self._region(previous_end, text_start)))
            content.extend(self._inline.parse(stripped, text_start))
            previous_end = text_start + len(stripped)
            j += 1

        return Paragraph(content=content, region=self._region(first_start, previous_end)), j
