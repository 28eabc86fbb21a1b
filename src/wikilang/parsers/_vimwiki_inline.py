#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/parsers/_vimwiki_inline.py
"""Inline markup scanner for the vimwiki parser.

The scanner walks one line of text and repeatedly takes the earliest match
among the inline patterns (ties go to the pattern listed first). Decoration
delimiters are resolved with a stack: a delimiter closes the nearest open
delimiter of the same kind, anything opened in between falls back to literal
text, and openers still unclosed at the end of the line stay literal.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

from wikilang.ast import (
    CommentInline,
    DecoratedText,
    Keyword,
    Link,
    MathInline,
    Node,
    Region,
    Tags,
    Text,
    classify_link_target,
)
from wikilang.constants import DECORATION_DELIMITERS, KEYWORDS, RAW_LINK_SCHEMES
from wikilang.exceptions import MalformedLink, ParseError

logger = logging.getLogger(__name__)

# =============================================================================
# Regex Patterns for inline vimwiki syntax
# =============================================================================

# Inline comment spanning part of a line: %%+ text +%%
MULTILINE_COMMENT_INLINE_PATTERN = re.compile(r"%%\+(.*?)\+%%")
# Comment running to the end of the line: %% text
LINE_COMMENT_INLINE_PATTERN = re.compile(r"%%(.*)$", re.DOTALL)
# Inline code: `code`
CODE_PATTERN = re.compile(r"`([^`]+)`")
# Inline math: $x^2$ (no whitespace just inside the dollars)
MATH_INLINE_PATTERN = re.compile(r"\$(?=\S)([^$]*?\S)\$")
# Wiki link: [[target]] or [[target|description]]
WIKILINK_PATTERN = re.compile(r"\[\[(.*?)\]\]")
# Transclusion: {{url}}, {{url|description}} or {{url|description|key="value"}}
TRANSCLUSION_PATTERN = re.compile(r"\{\{(.*?)\}\}")
# Bare URL at a word start; trailing punctuation is left outside the link
RAW_LINK_PATTERN = re.compile(
    r"(?<![\w/])(?:" + "|".join(RAW_LINK_SCHEMES) + r"):"
    r"[^\s<>\"\[\]{}|`]*[^\s<>\"\[\]{}|`.,;:!?)'*_~^]"
)
# Tags: :tag1:tag2: surrounded by whitespace or line boundaries
TAGS_PATTERN = re.compile(r"(?<!\S):(?:[^:\s]+:)+(?!\S)")
KEYWORD_PATTERN = re.compile(r"\b(?:" + "|".join(KEYWORDS) + r")\b")
# Decoration delimiters, two-character tokens first
DELIMITER_PATTERN = re.compile(r"~~|,,|[*_^]")

PROPERTY_PATTERN = re.compile(r"([\w-]+)=\"([^\"]*)\"")

INLINE_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("comment_multiline", MULTILINE_COMMENT_INLINE_PATTERN),
    ("comment", LINE_COMMENT_INLINE_PATTERN),
    ("code", CODE_PATTERN),
    ("math", MATH_INLINE_PATTERN),
    ("wikilink", WIKILINK_PATTERN),
    ("transclusion", TRANSCLUSION_PATTERN),
    ("raw_link", RAW_LINK_PATTERN),
    ("tags", TAGS_PATTERN),
    ("keyword", KEYWORD_PATTERN),
    ("delimiter", DELIMITER_PATTERN),
]

_OPENING_BRACKETS = {"[[": "]]", "{{": "}}"}


def split_unescaped(text: str, separator: str = "|", maxsplit: int = -1) -> list[tuple[str, int]]:
    """Split text on a separator outside links, transclusions and code.

    A separator preceded by a backslash, or inside ``[[...]]``, ``{{...}}``
    or a backtick span, does not split.

    Parameters
    ----------
    text : str
        Text to split
    separator : str, default "|"
        Single-character separator
    maxsplit : int, default -1
        Maximum number of splits; negative means no limit

    Returns
    -------
    list of tuple
        ``(part, index)`` pairs where ``index`` is where the part starts in ``text``

    Examples
    --------
        >>> split_unescaped("a|[[b|c]]|d")
        [('a', 0), ('[[b|c]]', 2), ('d', 10)]

    """
    parts: list[tuple[str, int]] = []
    closers: list[str] = []
    in_code = False
    start = 0
    i = 0
    while i < len(text):
        char = text[i]
        pair = text[i : i + 2]
        if char == "\\":
            i += 2
            continue
        if char == "`":
            in_code = not in_code
        elif not in_code:
            if pair in _OPENING_BRACKETS:
                closers.append(_OPENING_BRACKETS[pair])
                i += 2
                continue
            if closers and pair == closers[-1]:
                closers.pop()
                i += 2
                continue
            if char == separator and not closers and (maxsplit < 0 or len(parts) < maxsplit):
                parts.append((text[start:i], start))
                start = i + 1
        i += 1
    parts.append((text[start:], start))
    return parts


def parse_properties(text: str) -> dict[str, str]:
    """Parse space-separated ``key="value"`` pairs; the last value of a repeated key wins."""
    properties: dict[str, str] = {}
    for key, value in PROPERTY_PATTERN.findall(text):
        properties[key] = value
    return properties


@dataclass
class _Delimiter:
    """Decoration delimiter waiting for its partner."""

    decoration: str
    text: str
    start: int
    end: int


_Item = Union[Node, _Delimiter]


class InlineParser:
    """Turn one line of vimwiki text into inline nodes.

    Parameters
    ----------
    make_region : callable
        ``(start, end) -> Region or None`` for node regions
    error_region : callable
        ``(start, end) -> Region`` for diagnostics, always available
    report : callable
        Receives recoverable ``ParseError`` instances

    """

    def __init__(
        self,
        make_region: Callable[[int, int], Optional[Region]],
        error_region: Callable[[int, int], Region],
        report: Callable[[ParseError], None],
    ):
        """Store the callbacks shared with the block parser."""
        self._make_region = make_region
        self._error_region = error_region
        self._report = report

    def parse(self, text: str, offset: int) -> list[Node]:
        """Parse inline content.

        Parameters
        ----------
        text : str
            Line text (no newline)
        offset : int
            Source offset of ``text[0]``

        Returns
        -------
        list of Node
            Inline nodes with adjacent text runs merged

        """
        items: list[_Item] = []
        openers: list[int] = []
        pos = 0

        while pos < len(text):
            kind, match = self._find_earliest(text, pos)
            if match is None:
                items.append(self._text(text[pos:], offset + pos))
                break

            if match.start() > pos:
                items.append(self._text(text[pos : match.start()], offset + pos))

            if kind == "delimiter":
                self._handle_delimiter(match, text, offset, items, openers)
            else:
                items.append(self._handle_match(kind, match, offset))
            pos = match.end()

        return self._finish(items)

    @staticmethod
    def _find_earliest(text: str, pos: int) -> tuple[str, Optional[re.Match[str]]]:
        earliest_match = None
        earliest_kind = ""
        for kind, pattern in INLINE_PATTERNS:
            match = pattern.search(text, pos)
            if match and (earliest_match is None or match.start() < earliest_match.start()):
                earliest_match = match
                earliest_kind = kind
        return earliest_kind, earliest_match

    def _text(self, content: str, start: int) -> Text:
        return Text(content=content, region=self._make_region(start, start + len(content)))

    def _handle_match(self, kind: str, match: re.Match[str], offset: int) -> Node:
        start = offset + match.start()
        end = offset + match.end()
        region = self._make_region(start, end)

        if kind == "comment_multiline":
            return CommentInline(content=match.group(1), multiline=True, region=region)
        if kind == "comment":
            return CommentInline(content=match.group(1), multiline=False, region=region)
        if kind == "code":
            code_text = self._text(match.group(1), offset + match.start(1))
            return DecoratedText(decoration="code", content=(code_text,), region=region)
        if kind == "math":
            return MathInline(content=match.group(1), region=region)
        if kind == "wikilink":
            return self._parse_wikilink(match, offset)
        if kind == "transclusion":
            return self._parse_transclusion(match, offset)
        if kind == "raw_link":
            return Link(variant="raw", target=match.group(0), region=region)
        if kind == "tags":
            names = tuple(match.group(0).strip(":").split(":"))
            return Tags(names=names, region=region)
        if kind == "keyword":
            return Keyword(word=match.group(0), region=region)
        raise ValueError(f"Unhandled inline pattern: {kind}")

    def _parse_wikilink(self, match: re.Match[str], offset: int) -> Node:
        """Build a wiki, diary or interwiki link from a ``[[...]]`` match."""
        inner_offset = offset + match.start(1)
        parts = split_unescaped(match.group(1), maxsplit=1)
        target = parts[0][0]
        if not target.strip():
            return self._malformed_link(match, offset)

        description = None
        if len(parts) > 1:
            desc_text, desc_index = parts[1]
            description = tuple(self.parse(desc_text, inner_offset + desc_index))

        return Link(
            variant=classify_link_target(target),
            target=target,
            description=description,
            region=self._make_region(offset + match.start(), offset + match.end()),
        )

    def _parse_transclusion(self, match: re.Match[str], offset: int) -> Node:
        """Build a transclusion link from a ``{{...}}`` match."""
        inner_offset = offset + match.start(1)
        parts = split_unescaped(match.group(1), maxsplit=2)
        target = parts[0][0]
        if not target.strip():
            return self._malformed_link(match, offset)

        description = None
        if len(parts) > 1:
            desc_text, desc_index = parts[1]
            description = tuple(self.parse(desc_text, inner_offset + desc_index))
        properties = parse_properties(parts[2][0]) if len(parts) > 2 else {}

        return Link(
            variant="transclusion",
            target=target,
            description=description,
            properties=properties,
            region=self._make_region(offset + match.start(), offset + match.end()),
        )

    def _malformed_link(self, match: re.Match[str], offset: int) -> Text:
        start = offset + match.start()
        end = offset + match.end()
        self._report(MalformedLink(f"Link has no target: {match.group(0)!r}", self._error_region(start, end)))
        return self._text(match.group(0), start)

    def _handle_delimiter(
        self,
        match: re.Match[str],
        text: str,
        offset: int,
        items: list[_Item],
        openers: list[int],
    ) -> None:
        """Open, close or drop a decoration delimiter.

        A delimiter can close when the character before it is not
        whitespace, and can open when the character after it is not
        whitespace.

        """
        token = match.group(0)
        decoration = DECORATION_DELIMITERS[token]
        start = offset + match.start()
        end = offset + match.end()
        can_close = match.start() > 0 and not text[match.start() - 1].isspace()
        can_open = match.end() < len(text) and not text[match.end()].isspace()

        partner = None
        if can_close:
            for depth in range(len(openers) - 1, -1, -1):
                candidate = items[openers[depth]]
                if isinstance(candidate, _Delimiter) and candidate.decoration == decoration:
                    partner = depth
                    break

        if partner is not None:
            opener_index = openers[partner]
            opener = items[opener_index]
            assert isinstance(opener, _Delimiter)
            if opener_index == len(items) - 1:
                # Nothing to decorate: the opener stays literal
                items[opener_index] = self._text(opener.text, opener.start)
                del openers[partner:]
            else:
                content = self._finish(items[opener_index + 1 :])
                del items[opener_index:]
                del openers[partner:]
                items.append(self._decorate(decoration, content, opener.start, end))
                return

        if can_open:
            openers.append(len(items))
            items.append(_Delimiter(decoration=decoration, text=token, start=start, end=end))
        else:
            items.append(self._text(token, start))

    def _decorate(self, decoration: str, content: list[Node], start: int, end: int) -> DecoratedText:
        """Build a decorated span, folding bold around italic (or the reverse) into bold_italic."""
        if len(content) == 1 and isinstance(content[0], DecoratedText):
            inner = content[0]
            if {decoration, inner.decoration} == {"bold", "italic"}:
                return DecoratedText(
                    decoration="bold_italic", content=inner.content, region=self._make_region(start, end)
                )
        return DecoratedText(decoration=decoration, content=tuple(content), region=self._make_region(start, end))  # type: ignore[arg-type]

    def _finish(self, items: list[_Item]) -> list[Node]:
        """Turn leftover delimiters into text and merge adjacent text runs."""
        nodes: list[Node] = []
        for item in items:
            node = self._text(item.text, item.start) if isinstance(item, _Delimiter) else item
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                previous = nodes[-1]
                region = None
                if previous.region is not None and node.region is not None:
                    region = previous.region.union(node.region)
                nodes[-1] = Text(content=previous.content + node.content, region=region)
            elif isinstance(node, Text) and not node.content:
                continue
            else:
                nodes.append(node)
        return nodes
