#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/options/vimwiki.py
"""Configuration options for vimwiki parsing and serialization.

This module defines options for reading vimwiki markup into the AST and for
writing an AST back out as vimwiki markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wikilang.constants import DEFAULT_COMPUTE_LINE_COLUMNS, DEFAULT_STRICT_PARSING, DEFAULT_TRACK_REGIONS
from wikilang.options.base import BaseParserOptions, BaseRendererOptions


@dataclass(frozen=True)
class VimwikiParserOptions(BaseParserOptions):
    """Configuration options for parsing vimwiki markup.

    Parameters
    ----------
    track_regions : bool, default True
        Attach a source ``Region`` to every node. When disabled, nodes carry
        ``region=None`` and diagnostics still report offsets.
    compute_line_columns : bool, default False
        Fill in 1-based line and column numbers on every region. Requires
        ``track_regions``.
    strict : bool, default False
        Raise the first recoverable parse error instead of recording it in
        ``Page.diagnostics`` and falling back.

    Examples
    --------
    Report errors with line numbers:
        >>> options = VimwikiParserOptions(compute_line_columns=True, strict=True)

    """

    track_regions: bool = field(
        default=DEFAULT_TRACK_REGIONS,
        metadata={"help": "Attach source regions to parsed nodes", "importance": "core"},
    )
    compute_line_columns: bool = field(
        default=DEFAULT_COMPUTE_LINE_COLUMNS,
        metadata={"help": "Compute line and column numbers for every region", "importance": "advanced"},
    )
    strict: bool = field(
        default=DEFAULT_STRICT_PARSING,
        metadata={"help": "Raise recoverable parse errors instead of recording them", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate option combinations.

        Raises
        ------
        ValueError
            If line/column computation is requested without region tracking.

        """
        super().__post_init__()

        if self.compute_line_columns and not self.track_regions:
            raise ValueError("compute_line_columns requires track_regions=True")


@dataclass(frozen=True)
class VimwikiRendererOptions(BaseRendererOptions):
    """Configuration options for serializing an AST to vimwiki markup.

    The serializer writes one canonical form of each construct so that
    parsing its output reproduces the tree. It currently has no tunable
    settings; the class exists so the serializer validates its options the
    same way every renderer does.

    """
