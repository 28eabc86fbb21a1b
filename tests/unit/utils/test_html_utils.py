#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_html_utils.py
"""Unit tests for HTML helper functions."""

import pytest

from wikilang.utils.html_utils import escape_html, format_attributes, render_html_comment, render_math_html


@pytest.mark.unit
class TestEscapeHtml:
    """Tests for escape_html."""

    def test_escapes_special_characters(self) -> None:
        assert escape_html('<a href="x">&</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&lt;/a&gt;"

    def test_disabled(self) -> None:
        assert escape_html("<b>", enabled=False) == "<b>"


@pytest.mark.unit
class TestFormatAttributes:
    """Tests for format_attributes."""

    def test_skips_none_and_escapes(self) -> None:
        assert format_attributes({"href": "a&b.html", "class": None, "id": "x"}) == ' href="a&amp;b.html" id="x"'

    def test_empty(self) -> None:
        assert format_attributes({}) == ""


@pytest.mark.unit
class TestMathAndComments:
    """Tests for math delimiters and HTML comments."""

    def test_inline_math(self) -> None:
        assert render_math_html("a<b", inline=True) == "\\(a&lt;b\\)"

    def test_display_math(self) -> None:
        assert render_math_html("x^2", inline=False) == "\\[\nx^2\n\\]"

    def test_environment(self) -> None:
        assert render_math_html("a &= b", inline=False, environment="align") == (
            "\\begin{align}\na &amp;= b\n\\end{align}"
        )

    def test_comment_breaks_double_dash(self) -> None:
        assert render_html_comment(" a -- b ") == "<!-- a - - b -->"
