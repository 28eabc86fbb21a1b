#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/parsers/__init__.py
"""Parsers turning vimwiki markup into the wikilang AST."""

from wikilang.parsers.base import BaseParser, ParserInput
from wikilang.parsers.vimwiki import VimwikiParser

__all__ = ["BaseParser", "ParserInput", "VimwikiParser"]
