#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_highlight.py
"""Unit tests for the Pygments code highlighter."""

import pytest

from wikilang import render_html
from wikilang.utils.highlight import PygmentsHighlighter

pytest.importorskip("pygments")


@pytest.mark.unit
class TestPygmentsHighlighter:
    """Tests for PygmentsHighlighter."""

    def test_known_language(self) -> None:
        html = PygmentsHighlighter()(["def f():", "    return 1"], "python")
        assert html.startswith('<div class="highlight">')
        assert '<span class="k">def</span>' in html

    def test_unknown_language_is_plain(self) -> None:
        html = PygmentsHighlighter(css_class="code")(["a < b"], "no-such-language")
        assert html.startswith('<div class="code">')
        assert "a &lt; b" in html

    def test_no_language(self) -> None:
        assert "plain" in PygmentsHighlighter()(["plain"], None)

    def test_used_by_renderer(self) -> None:
        html = render_html("{{{python\nx = 1\n}}}", code_highlighter=PygmentsHighlighter()).html
        assert '<div class="highlight">' in html
        assert "<pre>x = 1</pre>" not in html
