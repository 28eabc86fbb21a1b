#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/utils/highlight.py
"""Pygments-backed code highlighting for the HTML renderer.

``PygmentsHighlighter`` instances are callables matching the
``code_highlighter`` option of ``HtmlRendererOptions``. Pygments is an
optional dependency, installed with the ``highlight`` extra.

Examples
--------
    >>> from wikilang import render_html
    >>> from wikilang.utils.highlight import PygmentsHighlighter
    >>> html = render_html(source, code_highlighter=PygmentsHighlighter())

"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from wikilang.constants import DEPS_HIGHLIGHT
from wikilang.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


class PygmentsHighlighter:
    """Highlight code block lines with Pygments.

    Parameters
    ----------
    css_class : str, default "highlight"
        Class of the wrapping ``<div>`` produced by the formatter
    line_numbers : bool, default False
        Emit a line number column

    """

    def __init__(self, css_class: str = "highlight", line_numbers: bool = False):
        """Store formatter settings."""
        self.css_class = css_class
        self.line_numbers = line_numbers

    @requires_dependencies("highlight", DEPS_HIGHLIGHT)
    def __call__(self, lines: Sequence[str], language: Optional[str]) -> str:
        """Highlight code, falling back to the plain text lexer for unknown languages.

        Parameters
        ----------
        lines : sequence of str
            Raw code lines
        language : str or None
            Language name or alias known to Pygments

        Returns
        -------
        str
            Highlighted HTML

        Raises
        ------
        DependencyError
            If Pygments is not installed

        """
        from pygments import highlight
        from pygments.formatters import HtmlFormatter
        from pygments.lexers import TextLexer, get_lexer_by_name
        from pygments.util import ClassNotFound

        if language:
            try:
                lexer = get_lexer_by_name(language.strip())
            except ClassNotFound:
                logger.debug(f"No Pygments lexer for language '{language}', using plain text")
                lexer = TextLexer()
        else:
            lexer = TextLexer()

        formatter = HtmlFormatter(cssclass=self.css_class, linenos="table" if self.line_numbers else False)
        return highlight("\n".join(lines) + "\n", lexer, formatter)
