"""HTML-related utility helpers."""

from __future__ import annotations

from html import escape as _html_escape
from typing import Mapping, Optional


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape HTML special characters when enabled."""
    if not enabled:
        return text
    return _html_escape(text)


def format_attributes(attributes: Mapping[str, Optional[str]]) -> str:
    """Format an attribute mapping as ``' key="value"'`` pairs.

    Attributes whose value is None are skipped; values are escaped. The
    result starts with a space when not empty, so it can follow a tag name
    directly.

    Examples
    --------
        >>> format_attributes({"href": "a&b.html", "class": None})
        ' href="a&amp;b.html"'

    """
    return "".join(f' {key}="{escape_html(value)}"' for key, value in attributes.items() if value is not None)


def render_math_html(content: str, *, inline: bool, environment: Optional[str] = None) -> str:
    """Wrap LaTeX source in the delimiters MathJax picks up.

    Parameters
    ----------
    content : str
        LaTeX source
    inline : bool
        Use ``\\( ... \\)`` when True, otherwise a display block
    environment : str or None, default None
        LaTeX environment for display math. Without one the block uses
        ``\\[ ... \\]``.

    Returns
    -------
    str
        Escaped, delimited math

    """
    escaped = escape_html(content)
    if inline:
        return f"\\({escaped}\\)"
    if environment:
        return f"\\begin{{{environment}}}\n{escaped}\n\\end{{{environment}}}"
    return f"\\[\n{escaped}\n\\]"


def render_html_comment(text: str) -> str:
    """Render text as an HTML comment, breaking up any ``--`` it contains."""
    safe = text.replace("--", "- -")
    return f"<!--{safe}-->"


__all__ = ["escape_html", "format_attributes", "render_html_comment", "render_math_html"]
