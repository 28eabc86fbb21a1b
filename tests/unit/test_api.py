#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the top-level parse, render, serialize and render_html functions."""

import logging
from io import BytesIO

import pytest

from wikilang import parse, render, render_html, serialize
from wikilang.ast import Header, Link, List, Paragraph, Text
from wikilang.exceptions import InvalidHeaderLevel, UnterminatedBlock
from wikilang.options import HtmlRendererOptions, VimwikiParserOptions
from wikilang.renderers.html import LinkResolution


@pytest.mark.unit
class TestParse:
    """Tests for parse()."""

    def test_header_and_paragraph(self) -> None:
        page = parse("= Hello =\nWorld\n")
        assert page.children == (
            Header(level=1, content=(Text(content="Hello"),)),
            Paragraph(content=(Text(content="World"),)),
        )

    def test_keyword_options(self) -> None:
        page = parse("= Hello =\nWorld\n", compute_line_columns=True)
        assert page.children[1].region.line == 2
        assert page.children[1].region.column == 1

    def test_options_and_kwargs_combine(self) -> None:
        page = parse("= x =", VimwikiParserOptions(compute_line_columns=True), track_regions=True)
        assert page.children[0].region.line == 1

    def test_regions_disabled(self) -> None:
        page = parse("= Hello =", track_regions=False)
        assert page.children[0].region is None

    def test_unknown_kwargs_are_skipped(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="wikilang.api"):
            page = parse("text", not_an_option=True)
        assert page.children == (Paragraph(content=(Text(content="text"),)),)
        assert "not_an_option" in caplog.text

    def test_strict_kwarg(self) -> None:
        with pytest.raises(InvalidHeaderLevel):
            parse("======= deep =======", strict=True)

    def test_unterminated_fence(self) -> None:
        with pytest.raises(UnterminatedBlock):
            parse("{{{\ncode")

    def test_bytes_and_streams(self, tmp_path) -> None:
        source = "= Café =\n"
        path = tmp_path / "page.wiki"
        path.write_text(source, encoding="utf-8")
        expected = parse(source)
        assert parse(source.encode("utf-8")) == expected
        assert parse(BytesIO(source.encode("utf-8"))) == expected
        assert parse(path) == expected

    def test_nested_list(self) -> None:
        lst = parse("- A\n  - B\n- C\n").children[0]
        assert isinstance(lst, List)
        assert not lst.ordered
        first, second = lst.items
        assert first.children[0] == Paragraph(content=(Text(content="A"),))
        nested = first.children[1]
        assert isinstance(nested, List)
        assert [item.children[0] for item in nested.items] == [Paragraph(content=(Text(content="B"),))]
        assert second.children == (Paragraph(content=(Text(content="C"),)),)


@pytest.mark.unit
class TestRender:
    """Tests for render() and render_html()."""

    def test_render_page(self) -> None:
        result = render(parse("= Hello =\nWorld\n"))
        assert result.html == '<h1 id="hello" class="header"><a href="#hello">Hello</a></h1>\n<p>World</p>'

    def test_render_kwargs(self) -> None:
        result = render(parse("%title Notes\n= A =\n"), standalone=True)
        assert result.html.startswith("<!DOCTYPE html>")
        assert "<title>Notes</title>" in result.html
        assert result.placeholders.title == "Notes"

    def test_unresolved_link_is_flagged(self) -> None:
        html = render_html(
            "[[Nowhere]]",
            wiki_link_resolver=lambda link: LinkResolution(f"/{link.page}", exists=False),
        ).html
        assert html == '<p><a href="/Nowhere" class="missing">Nowhere</a></p>'

    def test_render_html_routes_kwargs(self) -> None:
        result = render_html("= Hello =\n", track_regions=False, header_id_strategy="preserve")
        assert result.html.startswith('<h1 id="Hello"')

    def test_render_html_with_option_objects(self) -> None:
        result = render_html(
            "line one\nline two",
            parser_options=VimwikiParserOptions(strict=True),
            renderer_options=HtmlRendererOptions(ignore_newlines=False),
        )
        assert result.html == "<p>line one<br />\nline two</p>"

    def test_invalid_renderer_kwarg_value(self) -> None:
        with pytest.raises(ValueError):
            render_html("= x =", header_id_strategy="numbered")


@pytest.mark.unit
class TestSerialize:
    """Tests for serialize()."""

    def test_serialize_parsed_page(self) -> None:
        source = "= Hello =\n\n- [ ] task\n      - sub\n\n| a | b |\n|---|---|\n| c | d |\n"
        assert serialize(parse(source)) == source

    def test_transclusion_properties_round_trip(self) -> None:
        source = '{{pic.png|Pic|width="10" height="20"}}'
        page = parse(serialize(parse(source)))
        link = page.children[0].content[0]
        assert isinstance(link, Link)
        assert list(link.properties.items()) == [("width", "10"), ("height", "20")]
        assert page == parse(source)
