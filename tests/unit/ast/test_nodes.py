#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_nodes.py
"""Unit tests for AST node construction, validation and helpers."""

import dataclasses

import pytest

from wikilang.ast import (
    DecoratedText,
    Header,
    Keyword,
    LineBreak,
    Link,
    List,
    ListItem,
    Page,
    Paragraph,
    Placeholder,
    Region,
    RegionValidator,
    Table,
    TableCell,
    TableRow,
    Tags,
    Text,
    classify_link_target,
    classify_list_marker,
    collect_placeholders,
    extract_text,
    get_node_children,
    iter_nodes,
)


@pytest.mark.unit
class TestNodeConstruction:
    """Tests for node validation and normalization."""

    def test_header_level_bounds(self) -> None:
        Header(level=1)
        Header(level=6)
        with pytest.raises(ValueError, match="Header level"):
            Header(level=0)
        with pytest.raises(ValueError, match="Header level"):
            Header(level=7)

    def test_sequences_become_tuples(self) -> None:
        para = Paragraph(content=[Text(content="a")])
        assert isinstance(para.content, tuple)

    def test_nodes_are_frozen(self) -> None:
        header = Header(level=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            header.level = 2  # type: ignore[misc]

    def test_region_excluded_from_equality(self) -> None:
        assert Text(content="x", region=Region(0, 1)) == Text(content="x", region=Region(7, 1))

    def test_unknown_decoration_rejected(self) -> None:
        with pytest.raises(ValueError):
            DecoratedText(decoration="underline")  # type: ignore[arg-type]

    def test_unknown_link_variant_rejected(self) -> None:
        with pytest.raises(ValueError):
            Link(variant="email", target="x")  # type: ignore[arg-type]

    def test_placeholder_name_only_for_other(self) -> None:
        Placeholder(kind="other", name="author", value="me")
        with pytest.raises(ValueError):
            Placeholder(kind="title", name="title")
        with pytest.raises(ValueError):
            Placeholder(kind="other")

    def test_span_cell_cannot_have_content(self) -> None:
        with pytest.raises(ValueError):
            TableCell(content=[Text(content="x")], span="left")

    def test_list_rejects_mixed_kinds(self) -> None:
        with pytest.raises(ValueError, match="does not belong"):
            List(ordered=False, items=[ListItem(marker="1.")])

    def test_list_item_rejects_bad_marker(self) -> None:
        with pytest.raises(ValueError):
            ListItem(marker="+")


@pytest.mark.unit
class TestListMarkers:
    """Tests for list marker classification and numbering."""

    @pytest.mark.parametrize(
        "marker,kind",
        [
            ("-", "hyphen"),
            ("*", "asterisk"),
            ("#", "pound"),
            ("12.", "number"),
            ("3)", "number"),
            ("b)", "lower_alpha"),
            ("C.", "upper_alpha"),
            ("i.", "lower_roman"),
            ("iv)", "lower_roman"),
            ("I)", "upper_roman"),
            ("XII.", "upper_roman"),
        ],
    )
    def test_classify(self, marker: str, kind: str) -> None:
        assert classify_list_marker(marker) == kind

    def test_classify_invalid(self) -> None:
        with pytest.raises(ValueError):
            classify_list_marker("1")

    @pytest.mark.parametrize("marker,number", [("7.", 7), ("c)", 3), ("iv.", 4), ("XIV)", 14), ("-", None), ("#", None)])
    def test_number(self, marker: str, number) -> None:
        assert ListItem(marker=marker).number == number

    def test_ordered(self) -> None:
        assert not ListItem(marker="*").ordered
        assert ListItem(marker="#").ordered


@pytest.mark.unit
class TestLinkProperties:
    """Tests for link target decomposition."""

    @pytest.mark.parametrize(
        "target,variant",
        [
            ("Page", "wiki"),
            ("diary:2024-01-31", "diary"),
            ("wiki2:Page", "indexed_wiki"),
            ("wn.Work:Page", "interwiki"),
            ("#Anchor", "wiki"),
        ],
    )
    def test_classify_target(self, target: str, variant: str) -> None:
        assert classify_link_target(target) == variant

    def test_page_and_anchors(self) -> None:
        link = Link(variant="wiki", target="Projects/Todo#Next#Steps")
        assert link.page == "Projects/Todo"
        assert link.anchors == ["Next", "Steps"]
        assert not link.is_local_anchor

    def test_local_anchor(self) -> None:
        link = Link(variant="wiki", target="#Section")
        assert link.is_local_anchor
        assert link.page == ""

    def test_indexed_wiki(self) -> None:
        link = Link(variant="indexed_wiki", target="wiki3:Notes#Top")
        assert link.wiki_index == 3
        assert link.page == "Notes"
        assert link.anchors == ["Top"]

    def test_interwiki(self) -> None:
        link = Link(variant="interwiki", target="wn.Work:Plans")
        assert link.wiki_name == "Work"
        assert link.page == "Plans"

    def test_diary(self) -> None:
        assert Link(variant="diary", target="diary:2024-01-31").page == "2024-01-31"


@pytest.mark.unit
class TestTableSpans:
    """Tests for table cell span computation."""

    def test_colspan_and_rowspan(self) -> None:
        table = Table(
            rows=[
                TableRow(cells=[TableCell(content=[Text(content="a")]), TableCell(span="left")]),
                TableRow(is_divider=True),
                TableRow(cells=[TableCell(content=[Text(content="b")]), TableCell(content=[Text(content="c")])]),
                TableRow(cells=[TableCell(span="above"), TableCell(content=[Text(content="d")])]),
            ]
        )
        spans = table.cell_spans()
        assert spans[(0, 0)] == (1, 2)
        assert (0, 1) not in spans
        assert spans[(1, 0)] == (2, 1)
        assert spans[(1, 1)] == (1, 1)
        assert (2, 0) not in spans
        assert table.column_count == 2

    def test_header_and_body_rows(self) -> None:
        table = Table(
            rows=[
                TableRow(cells=[TableCell()], is_header=True),
                TableRow(is_divider=True),
                TableRow(cells=[TableCell()]),
            ]
        )
        assert len(table.header_rows) == 1
        assert len(table.body_rows) == 1
        assert len(table.content_rows) == 2

    def test_rowspan_stops_at_header_boundary(self) -> None:
        table = Table(
            rows=[
                TableRow(
                    cells=[TableCell(content=[Text(content="a")]), TableCell(content=[Text(content="b")])],
                    is_header=True,
                ),
                TableRow(is_divider=True),
                TableRow(cells=[TableCell(span="above"), TableCell(content=[Text(content="c")])]),
                TableRow(cells=[TableCell(content=[Text(content="d")]), TableCell(span="above")]),
            ]
        )
        spans = table.cell_spans()
        assert spans[(0, 0)] == (1, 1)
        assert (1, 0) not in spans
        assert spans[(1, 1)] == (2, 1)
        assert spans[(2, 0)] == (1, 1)


@pytest.mark.unit
class TestAstUtils:
    """Tests for traversal and text helpers."""

    def test_extract_text(self) -> None:
        header = Header(
            level=1,
            content=[
                Text(content="Hello "),
                DecoratedText(decoration="italic", content=[Text(content="world")]),
                LineBreak(),
                Keyword(word="TODO"),
                Tags(names=("skip",)),
            ],
        )
        assert extract_text(header) == "Hello world TODO"

    def test_extract_text_uses_link_target_without_description(self) -> None:
        assert extract_text(Link(variant="wiki", target="Page")) == "Page"
        assert extract_text(Link(variant="wiki", target="Page", description=(Text(content="Label"),))) == "Label"

    def test_iter_nodes_preorder(self) -> None:
        page = Page(children=[Paragraph(content=[Text(content="a"), DecoratedText("bold", [Text(content="b")])])])
        kinds = [type(node).__name__ for node in iter_nodes(page)]
        assert kinds == ["Page", "Paragraph", "Text", "DecoratedText", "Text"]

    def test_get_node_children_of_leaf(self) -> None:
        assert get_node_children(Text(content="x")) == []

    def test_collect_placeholders(self) -> None:
        page = Page(
            children=[
                Placeholder(kind="title", value="T"),
                Paragraph(content=[Text(content="x")]),
                Placeholder(kind="nohtml"),
            ]
        )
        assert [p.kind for p in collect_placeholders(page)] == ["title", "nohtml"]


@pytest.mark.unit
class TestRegionValidator:
    """Tests for the region validator on hand-built trees."""

    def test_child_escaping_parent(self) -> None:
        page = Page(
            children=[Paragraph(content=[Text(content="abc", region=Region(0, 9))], region=Region(0, 3))],
            source="abc",
            region=Region(0, 3),
        )
        validator = RegionValidator(strict=False)
        page.accept(validator)
        assert any("escapes" in error for error in validator.errors)

    def test_overlapping_siblings_raise_in_strict_mode(self) -> None:
        page = Page(
            children=[
                Paragraph(
                    content=[Text(content="ab", region=Region(0, 2)), Text(content="bc", region=Region(1, 2))],
                    region=Region(0, 3),
                )
            ],
            source="abc",
            region=Region(0, 3),
        )
        with pytest.raises(ValueError, match="overlaps"):
            page.accept(RegionValidator())

    def test_trees_without_regions_pass(self) -> None:
        validator = RegionValidator()
        Page(children=[Paragraph(content=[Text(content="x")])]).accept(validator)
        assert validator.errors == []
