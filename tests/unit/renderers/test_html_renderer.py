#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_html_renderer.py
"""Unit tests for HtmlRenderer.

Tests cover:
- Rendering every block and inline construct
- Header ids and duplicate disambiguation
- Link resolution, missing links and resolver failures
- Placeholders, standalone documents and templates
- Idempotent output

"""

import logging
from io import BytesIO, StringIO

import pytest

from wikilang.ast import Link, Page, Paragraph, Text
from wikilang.options import HtmlRendererOptions
from wikilang.parsers import VimwikiParser
from wikilang.renderers import HtmlRenderer, LinkResolution, PageMetadata, default_link_resolver


def _html(source: str, **options) -> str:
    page = VimwikiParser().parse(source)
    return HtmlRenderer(HtmlRendererOptions(**options)).render(page).html


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level HTML output."""

    def test_header_and_paragraph(self) -> None:
        assert _html("= Hello =\nWorld\n") == (
            '<h1 id="hello" class="header"><a href="#hello">Hello</a></h1>\n<p>World</p>'
        )

    def test_duplicate_header_ids(self) -> None:
        html = _html("= Intro =\n== Intro ==\n=== Intro ===\n")
        assert 'id="intro"' in html
        assert 'id="intro-1"' in html
        assert 'id="intro-2"' in html

    def test_preserve_header_ids(self) -> None:
        assert 'id="My-Header"' in _html("= My Header =", header_id_strategy="preserve")

    def test_invalid_header_id_strategy(self) -> None:
        with pytest.raises(ValueError):
            HtmlRendererOptions(header_id_strategy="number")  # type: ignore[arg-type]

    def test_centered_header(self) -> None:
        assert 'class="header justcenter"' in _html("  = Middle =")

    def test_text_is_escaped(self) -> None:
        assert _html("a < b & c") == "<p>a &lt; b &amp; c</p>"

    def test_line_breaks(self) -> None:
        assert _html("one\ntwo") == "<p>one two</p>"
        assert _html("one\ntwo", ignore_newlines=False) == "<p>one<br />\ntwo</p>"

    def test_nested_list(self) -> None:
        assert _html("- A\n  - B\n- C\n") == (
            "<ul>\n<li><p>A</p>\n<ul>\n<li><p>B</p></li>\n</ul></li>\n<li><p>C</p></li>\n</ul>"
        )

    def test_ordered_list_type_and_values(self) -> None:
        html = _html("a) one\nc) three\nd) four")
        assert html.startswith('<ol type="a">')
        assert '<li value="3"><p>three</p></li>' in html
        assert "<li><p>four</p></li>" in html

    def test_numbered_list_has_no_type(self) -> None:
        assert _html("1. x\n2. y").startswith("<ol>\n")

    def test_todo_classes(self) -> None:
        html = _html("- [ ] a\n- [X] b\n- [-] c")
        assert '<li class="done0">' in html
        assert '<li class="done4">' in html
        assert '<li class="rejected">' in html

    def test_definition_list(self) -> None:
        assert _html("Term:: Def\n:: More") == "<dl>\n<dt>Term</dt>\n<dd>Def</dd>\n<dd>More</dd>\n</dl>"

    def test_table_with_header_and_spans(self) -> None:
        html = _html("| a | b |\n|---|---|\n| c | > |\n| \\/ | d |")
        assert "<thead>\n<tr><th>a</th><th>b</th></tr>\n</thead>" in html
        assert '<td rowspan="2" colspan="2">c</td>' in html
        assert "<tr><td>d</td></tr>" in html

    def test_rowspan(self) -> None:
        html = _html("| a | b |\n| \\/ | c |")
        assert '<td rowspan="2">a</td>' in html

    def test_rowspan_does_not_leave_thead(self) -> None:
        html = _html("| a | b |\n|---|---|\n| \\/ | c |")
        assert "<thead>\n<tr><th>a</th><th>b</th></tr>\n</thead>" in html
        assert "rowspan" not in html
        assert "<tbody>\n<tr><td>c</td></tr>\n</tbody>" in html

    def test_centered_table(self) -> None:
        assert _html(" | a |").startswith('<table class="center">')

    def test_code_block(self) -> None:
        html = _html('{{{python class="demo"\nif x < 1:\n    pass\n}}}')
        assert html == '<pre class="demo"><code class="python">if x &lt; 1:\n    pass</code></pre>'

    def test_code_highlighter(self) -> None:
        calls = []

        def highlighter(lines, language):
            calls.append((tuple(lines), language))
            return f"<div class=\"hl\">{language}</div>\n"

        html = _html("{{{rust\nfn main() {}\n}}}", code_highlighter=highlighter)
        assert html == '<div class="hl">rust</div>'
        assert calls == [(("fn main() {}",), "rust")]

    def test_math_block(self) -> None:
        assert _html("{{$\nx^2\n}}$") == '<div class="math">\\[\nx^2\n\\]</div>'

    def test_math_block_environment(self) -> None:
        html = _html("{{$%align%\na &= b\n}}$")
        assert html == '<div class="math">\\begin{align}\na &amp;= b\n\\end{align}</div>'

    def test_blockquote(self) -> None:
        assert _html("> a\n> b\n\n> c") == "<blockquote>\n<p>a b</p>\n<p>c</p>\n</blockquote>"

    def test_divider(self) -> None:
        assert _html("----") == "<hr />"

    def test_comments_hidden_by_default(self) -> None:
        assert _html("%% hidden\ntext %% inline") == "<p>text </p>"

    def test_comments_included(self) -> None:
        html = _html("%% hidden -- note", include_comments=True)
        assert html == "<!-- hidden - - note-->"


@pytest.mark.unit
class TestInline:
    """Tests for inline HTML output."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("*b*", "<strong>b</strong>"),
            ("_i_", "<em>i</em>"),
            ("*_bi_*", "<strong><em>bi</em></strong>"),
            ("~~s~~", "<del>s</del>"),
            ("^sup^", "<sup><small>sup</small></sup>"),
            (",,sub,,", "<sub><small>sub</small></sub>"),
            ("`a<b`", "<code>a&lt;b</code>"),
            ("$x_1$", "\\(x_1\\)"),
            ("TODO", '<span class="todo">TODO</span>'),
            (":a:b:", '<span class="tag">a</span> <span class="tag">b</span>'),
        ],
    )
    def test_inline(self, source: str, expected: str) -> None:
        assert _html(source) == f"<p>{expected}</p>"

    def test_wiki_link(self) -> None:
        assert _html("[[Page]]") == '<p><a href="Page.html">Page</a></p>'

    def test_wiki_link_with_description(self) -> None:
        assert _html("[[Page|*Go*]]") == '<p><a href="Page.html"><strong>Go</strong></a></p>'

    def test_local_anchor_matches_header_id(self) -> None:
        html = _html("= Next Steps =\n[[#Next Steps|jump]]")
        assert 'id="next-steps"' in html
        assert '<a href="#next-steps">jump</a>' in html

    def test_local_anchor_skips_resolver(self) -> None:
        def resolver(link):
            raise AssertionError("resolver should not be called")

        assert _html("[[#Top]]", wiki_link_resolver=resolver) == '<p><a href="#top">#Top</a></p>'

    def test_unresolved_link_is_flagged(self) -> None:
        html = _html("[[Ghost]]", wiki_link_resolver=lambda link: LinkResolution("ghost.html", exists=False))
        assert html == '<p><a href="ghost.html" class="missing">Ghost</a></p>'

    def test_custom_missing_class(self) -> None:
        html = _html(
            "[[Ghost]]",
            wiki_link_resolver=lambda link: LinkResolution("ghost.html", exists=False),
            missing_link_class="broken",
        )
        assert 'class="broken"' in html

    def test_resolver_failure_degrades(self, caplog) -> None:
        def resolver(link):
            raise OSError("unreachable")

        with caplog.at_level(logging.WARNING, logger="wikilang.renderers.html"):
            html = _html("[[Page]]", wiki_link_resolver=resolver)

        assert html == '<p><a href="Page" class="missing">Page</a></p>'
        assert "unreachable" in caplog.text

    def test_raw_link(self) -> None:
        assert _html("https://example.com") == '<p><a href="https://example.com">https://example.com</a></p>'

    def test_local_raw_link(self) -> None:
        assert _html("local:docs/a.pdf") == '<p><a href="docs/a.pdf">local:docs/a.pdf</a></p>'

    def test_image_transclusion(self) -> None:
        html = _html('{{img/cat.png|A cat|width="10" class="pic"}}')
        assert html == '<p><img src="img/cat.png" alt="A cat" width="10" class="pic" /></p>'

    def test_object_transclusion(self) -> None:
        assert _html("{{doc.pdf|Manual}}") == '<p><object data="doc.pdf">Manual</object></p>'

    def test_image_link(self) -> None:
        html = _html("[[Page|{{thumb.png}}]]")
        assert html == '<p><a href="Page.html"><img src="thumb.png" /></a></p>'


@pytest.mark.unit
class TestDocument:
    """Tests for placeholders and the page wrapper."""

    def test_placeholders_reported_not_rendered(self) -> None:
        page = VimwikiParser().parse("%title Notes\n%date 2024-01-31\n%nohtml\n%author Me\nBody")
        result = HtmlRenderer().render(page)

        assert result.html == "<p>Body</p>"
        assert result.placeholders == PageMetadata(
            title="Notes", date="2024-01-31", nohtml=True, other={"author": "Me"}
        )

    def test_last_placeholder_wins(self) -> None:
        page = VimwikiParser().parse("%title One\n%title Two")
        assert PageMetadata.from_page(page).title == "Two"

    def test_standalone(self) -> None:
        html = _html("%title A & B\ntext", standalone=True, css_file="style.css")
        assert html.startswith("<!DOCTYPE html>\n")
        assert "<title>A &amp; B</title>" in html
        assert '<link rel="stylesheet" href="style.css">' in html
        assert "<body>\n<p>text</p>\n</body>" in html

    def test_standalone_default_title(self) -> None:
        assert "<title>Untitled</title>" in _html("text", standalone=True)

    def test_template(self) -> None:
        template = '<html><head><title>%title%</title><link href="%root_path%s.css"></head>%content%</html>'
        html = _html("%title T\n%date 2024-02-01\nbody %date%", template=template, root_path="../")
        assert html == '<html><head><title>T</title><link href="../s.css"></head><p>body %date%</p></html>'

    def test_template_requires_content_marker(self) -> None:
        with pytest.raises(ValueError, match="%content%"):
            HtmlRendererOptions(template="<html></html>")

    def test_rendering_is_idempotent(self) -> None:
        page = VimwikiParser().parse("= A =\n= A =\n- [[x]]\n| a |\n")
        renderer = HtmlRenderer()
        assert renderer.render(page).html == renderer.render(page).html

    def test_render_to_string(self) -> None:
        page = Page(children=[Paragraph(content=[Text(content="hi")])])
        assert HtmlRenderer().render_to_string(page) == "<p>hi</p>"

    def test_render_to_text_stream(self) -> None:
        buffer = StringIO()
        HtmlRenderer().render(Page(children=[Paragraph(content=[Text(content="hi")])]), buffer)
        assert buffer.getvalue() == "<p>hi</p>"

    def test_render_to_binary_stream(self) -> None:
        buffer = BytesIO()
        HtmlRenderer().render(Page(children=[Paragraph(content=[Text(content="é")])]), buffer)
        assert buffer.getvalue() == "<p>é</p>".encode("utf-8")

    def test_render_to_path(self, tmp_path) -> None:
        path = tmp_path / "out.html"
        HtmlRenderer().render(Page(children=[Paragraph(content=[Text(content="hi")])]), path)
        assert path.read_text(encoding="utf-8") == "<p>hi</p>"


@pytest.mark.unit
class TestDefaultLinkResolver:
    """Tests for the default vimwiki path mapping."""

    @pytest.mark.parametrize(
        "variant,target,destination",
        [
            ("wiki", "Page", "Page.html"),
            ("wiki", "Projects/Todo#Next week", "Projects/Todo.html#next-week"),
            ("wiki", "notes/", "notes/index.html"),
            ("wiki", "files/report.pdf", "files/report.pdf"),
            ("wiki", "https://example.com/x", "https://example.com/x"),
            ("wiki", "#Top#Sub", "#top-sub"),
            ("diary", "diary:2024-01-31", "diary/2024-01-31.html"),
            ("indexed_wiki", "wiki1:Page", "../wiki1/Page.html"),
            ("interwiki", "wn.Work:Plan#Goals", "../Work/Plan.html#goals"),
        ],
    )
    def test_destinations(self, variant: str, target: str, destination: str) -> None:
        resolution = default_link_resolver(Link(variant=variant, target=target))
        assert resolution == LinkResolution(destination=destination, exists=True)
