#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/ast/region.py
"""Source regions for AST nodes.

A ``Region`` is a contiguous span of the original source text, stored as an
offset and a length. Offsets index the Python ``str`` the parser was given,
so they count code points. Line and column numbers are optional and are
derived from a ``LineIndex`` only when requested.

Examples
--------
    >>> source = "= Hello =\\nWorld\\n"
    >>> region = Region(offset=10, length=5)
    >>> region.slice(source)
    'World'
    >>> LineIndex(source).locate(region)
    Region(offset=10, length=5, line=2, column=1)

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True)
class Region:
    """Span of source text.

    Parameters
    ----------
    offset : int
        Index of the first character of the span
    length : int
        Number of characters covered
    line : int or None, default = None
        1-based line of ``offset``, when line/column tracking is enabled
    column : int or None, default = None
        1-based column of ``offset``, when line/column tracking is enabled

    Notes
    -----
    Equality only considers ``offset`` and ``length``; the derived line and
    column never change the identity of a span.

    """

    offset: int
    length: int
    line: Optional[int] = field(default=None, compare=False)
    column: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate that the span is non-negative."""
        if self.offset < 0 or self.length < 0:
            raise ValueError(f"Region offset and length must be non-negative, got ({self.offset}, {self.length})")

    @classmethod
    def from_span(cls, start: int, end: int) -> Region:
        """Build a region covering ``source[start:end]``."""
        return cls(offset=start, length=max(0, end - start))

    @property
    def end(self) -> int:
        """Index one past the last covered character."""
        return self.offset + self.length

    def union(self, other: Region) -> Region:
        """Return the smallest region covering both regions."""
        start = min(self.offset, other.offset)
        return Region.from_span(start, max(self.end, other.end))

    def contains(self, other: Region) -> bool:
        """Return True when ``other`` lies entirely within this region."""
        return self.offset <= other.offset and other.end <= self.end

    def overlaps(self, other: Region) -> bool:
        """Return True when the two regions share at least one character."""
        return self.offset < other.end and other.offset < self.end

    def slice(self, source: str) -> str:
        """Return the text this region covers in ``source``."""
        return source[self.offset : self.end]


class LineIndex:
    """Lazily-built table of line start offsets.

    Parameters
    ----------
    source : str
        The text the offsets refer to

    """

    def __init__(self, source: str):
        """Remember the source; the offset table is built on first lookup."""
        self._source = source
        self._line_starts: list[int] | None = None

    def _starts(self) -> list[int]:
        if self._line_starts is None:
            starts = [0]
            for index, char in enumerate(self._source):
                if char == "\n":
                    starts.append(index + 1)
            self._line_starts = starts
        return self._line_starts

    def line_column(self, offset: int) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` of ``offset``.

        Parameters
        ----------
        offset : int
            Character offset into the source

        Returns
        -------
        tuple of int
            Line and column, both starting at 1

        """
        starts = self._starts()
        line_index = bisect_right(starts, offset) - 1
        return line_index + 1, offset - starts[line_index] + 1

    def locate(self, region: Region) -> Region:
        """Return a copy of ``region`` with line and column filled in."""
        line, column = self.line_column(region.offset)
        return replace(region, line=line, column=column)


__all__ = ["LineIndex", "Region"]
