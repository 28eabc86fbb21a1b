#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/renderers/html.py
"""HTML rendering from AST.

This module provides the HtmlRenderer class which converts a parsed vimwiki
page to HTML. The renderer produces a body fragment by default, and can wrap
it in a standalone document or a caller-supplied page template.

Placeholders (``%title``, ``%date``, ``%template``, ``%nohtml``) never appear
in the body; they are returned next to the HTML as ``PageMetadata`` so the
caller can fill in the surrounding page.

Link destinations come from a resolver callable. The renderer never looks at
the file system: ``default_link_resolver`` maps targets to paths the way
vimwiki lays out its HTML output and reports every target as existing.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Optional

from wikilang.ast import (
    BlankLine,
    Blockquote,
    CodeBlock,
    Comment,
    CommentInline,
    DecoratedText,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Divider,
    Header,
    Keyword,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Node,
    Page,
    Paragraph,
    Placeholder,
    Table,
    TableCell,
    TableRow,
    Tags,
    Text,
    extract_text,
)
from wikilang.ast.visitors import NodeVisitor
from wikilang.constants import (
    IMAGE_EXTENSIONS,
    TEMPLATE_CONTENT_MARKER,
    TEMPLATE_DATE_MARKER,
    TEMPLATE_ROOT_PATH_MARKER,
    TEMPLATE_TITLE_MARKER,
    TODO_HTML_CLASSES,
)
from wikilang.options.html import HtmlRendererOptions
from wikilang.renderers.base import BaseRenderer, InlineContentMixin, RenderOutput
from wikilang.utils.decorators import debug_timer
from wikilang.utils.html_utils import escape_html, format_attributes, render_html_comment, render_math_html
from wikilang.utils.text import make_unique_slug, preserve_anchor, slugify

logger = logging.getLogger(__name__)

_URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][\w+.-]*:")
_LOCAL_SCHEME = "local:"

_ORDERED_LIST_TYPES = {
    "lower_alpha": "a",
    "upper_alpha": "A",
    "lower_roman": "i",
    "upper_roman": "I",
}

_INLINE_TAGS = {
    "bold": ("<strong>", "</strong>"),
    "italic": ("<em>", "</em>"),
    "bold_italic": ("<strong><em>", "</em></strong>"),
    "strikethrough": ("<del>", "</del>"),
    "superscript": ("<sup><small>", "</small></sup>"),
    "subscript": ("<sub><small>", "</small></sub>"),
}


@dataclass(frozen=True)
class LinkResolution:
    """Where a wiki link points.

    Parameters
    ----------
    destination : str
        URL or relative path placed in ``href``
    exists : bool, default True
        False flags the link with the missing-link CSS class

    """

    destination: str
    exists: bool = True


@dataclass(frozen=True)
class PageMetadata:
    """Placeholder values collected from a page.

    When a placeholder appears more than once, the last one wins.

    Parameters
    ----------
    title : str or None
        Value of ``%title``
    date : str or None
        Value of ``%date`` (ISO ``YYYY-MM-DD``)
    template : str or None
        Value of ``%template``
    nohtml : bool
        Whether the page carries ``%nohtml``
    other : dict
        Any other ``%name value`` placeholders, in source order

    """

    title: Optional[str] = None
    date: Optional[str] = None
    template: Optional[str] = None
    nohtml: bool = False
    other: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_page(cls, page: Page) -> PageMetadata:
        """Collect the top-level placeholders of a page."""
        values: dict[str, Optional[str]] = {"title": None, "date": None, "template": None}
        nohtml = False
        other: dict[str, str] = {}
        for child in page.children:
            if not isinstance(child, Placeholder):
                continue
            if child.kind == "nohtml":
                nohtml = True
            elif child.kind == "other":
                other[child.name or ""] = child.value
            else:
                values[child.kind] = child.value
        return cls(title=values["title"], date=values["date"], template=values["template"], nohtml=nohtml, other=other)


@dataclass(frozen=True)
class RenderResult:
    """Rendered HTML together with the page's placeholders."""

    html: str
    placeholders: PageMetadata


def default_link_resolver(link: Link) -> LinkResolution:
    """Map a wiki link to the path vimwiki would write it to.

    - ``page`` becomes ``page.html``; ``dir/`` becomes ``dir/index.html``
    - targets with a file extension or a URL scheme are kept as written
    - ``diary:2024-01-31`` becomes ``diary/2024-01-31.html``
    - ``wiki1:page`` becomes ``../wiki1/page.html``
    - ``wn.Name:page`` becomes ``../Name/page.html``
    - anchors are slugified and joined after ``#``

    Parameters
    ----------
    link : Link
        A ``wiki``, ``indexed_wiki``, ``interwiki`` or ``diary`` link

    Returns
    -------
    LinkResolution
        Destination path; always reported as existing

    Examples
    --------
        >>> default_link_resolver(Link(variant="wiki", target="Projects/Todo#Next week"))
        LinkResolution(destination='Projects/Todo.html#next-week', exists=True)

    """
    path = link.page
    if link.variant == "diary":
        destination = f"diary/{path}.html"
    elif _URL_SCHEME_PATTERN.match(path):
        return LinkResolution(link.target)
    elif not path:
        destination = ""
    elif path.endswith("/"):
        destination = f"{path}index.html"
    elif PurePosixPath(path).suffix:
        destination = path
    else:
        destination = f"{path}.html"

    if link.variant == "indexed_wiki":
        destination = f"../wiki{link.wiki_index}/{destination}"
    elif link.variant == "interwiki":
        destination = f"../{link.wiki_name}/{destination}"

    if link.anchors:
        destination += "#" + "-".join(slugify(anchor) for anchor in link.anchors)
    return LinkResolution(destination)


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to HTML format.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
    Basic usage:

        >>> from wikilang.parsers.vimwiki import VimwikiParser
        >>> page = VimwikiParser().parse("%title Notes\\n= Hello =\\nWorld\\n")
        >>> result = HtmlRenderer().render(page)
        >>> result.placeholders.title
        'Notes'
        >>> print(result.html)
        <h1 id="hello" class="header"><a href="#hello">Hello</a></h1>
        <p>World</p>

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []
        self._seen_ids: dict[str, int] = {}

    def render(self, page: Page, output: RenderOutput | None = None) -> RenderResult:  # type: ignore[override]
        """Render a page to HTML.

        Parameters
        ----------
        page : Page
            The page to render
        output : str, Path, IO[bytes], IO[str] or None, default None
            When given, the HTML is also written here

        Returns
        -------
        RenderResult
            HTML text and the page's placeholder values

        """
        placeholders = PageMetadata.from_page(page)

        with debug_timer(logger, "Rendering (html)"):
            self._output = []
            self._seen_ids = {}
            page.accept(self)
            content = "".join(self._output).rstrip("\n")

        if self.options.template is not None:
            html = self._apply_template(content, placeholders)
        elif self.options.standalone:
            html = self._wrap_in_document(content, placeholders)
        else:
            html = content

        if output is not None:
            self.write_text_output(html, output)
        return RenderResult(html=html, placeholders=placeholders)

    def render_to_string(self, page: Page) -> str:
        """Render a page AST to an HTML string.

        Parameters
        ----------
        page : Page
            The page to render

        Returns
        -------
        str
            HTML text

        """
        return self.render(page).html

    def _apply_template(self, content: str, placeholders: PageMetadata) -> str:
        """Substitute the page into the configured template text."""
        assert self.options.template is not None
        html = self.options.template
        html = html.replace(TEMPLATE_TITLE_MARKER, escape_html(placeholders.title or ""))
        html = html.replace(TEMPLATE_DATE_MARKER, escape_html(placeholders.date or ""))
        html = html.replace(TEMPLATE_ROOT_PATH_MARKER, self.options.root_path)
        # Content last so markers inside the page body are left alone
        return html.replace(TEMPLATE_CONTENT_MARKER, content)

    def _wrap_in_document(self, content: str, placeholders: PageMetadata) -> str:
        """Wrap content in a complete HTML document.

        Parameters
        ----------
        content : str
            Rendered HTML body
        placeholders : PageMetadata
            Placeholder values; the title becomes the document title

        Returns
        -------
        str
            Complete HTML document

        """
        title = placeholders.title or "Untitled"
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape_html(self.options.language)}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{escape_html(title)}</title>",
        ]
        if self.options.css_file:
            parts.append(f'<link rel="stylesheet" href="{escape_html(self.options.css_file)}">')
        parts.append("</head>")
        parts.append("<body>")
        parts.append(content)
        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _anchor_id(self, text: str) -> str:
        if self.options.header_id_strategy == "preserve":
            return preserve_anchor(text)
        return slugify(text)

    def _render_blocks(self, nodes: tuple[Node, ...]) -> str:
        """Render block nodes into a separate buffer and return the HTML."""
        saved_output = self._output
        self._output = []
        for node in nodes:
            node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    def _resolve(self, link: Link) -> LinkResolution:
        """Resolve a wiki link, degrading to a flagged link when the resolver fails."""
        resolver = self.options.wiki_link_resolver or default_link_resolver
        try:
            return resolver(link)
        except Exception as e:
            logger.warning(f"Link resolver failed for '{link.target}': {e}")
            return LinkResolution(destination=link.target, exists=False)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_page(self, node: Page) -> None:
        """Render the blocks of the page."""
        for child in node.children:
            child.accept(self)

    def visit_header(self, node: Header) -> None:
        """Render a header with a unique id and a self-link."""
        header_id = make_unique_slug(self._anchor_id(extract_text(node.content)), self._seen_ids)
        css_class = "header justcenter" if node.centered else "header"
        content = self._render_inline_content(node.content)
        self._output.append(
            f'<h{node.level} id="{escape_html(header_id)}" class="{css_class}">'
            f'<a href="#{escape_html(header_id)}">{content}</a></h{node.level}>\n'
        )

    def visit_paragraph(self, node: Paragraph) -> None:
        self._output.append(f"<p>{self._render_inline_content(node.content)}</p>\n")

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render a ``<dl>``; terms with no text are omitted."""
        self._output.append("<dl>\n")
        for term, descriptions in node.items:
            if term.content:
                term.accept(self)
            for description in descriptions:
                description.accept(self)
        self._output.append("</dl>\n")

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        self._output.append(f"<dt>{self._render_inline_content(node.content)}</dt>\n")

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        self._output.append(f"<dd>{self._render_inline_content(node.content)}</dd>\n")

    def visit_list(self, node: List) -> None:
        """Render a list.

        Ordered lists take their ``type`` from the first item's marker. An
        item whose marker number breaks the running count gets an explicit
        ``value``.

        """
        if not node.ordered:
            self._output.append("<ul>\n")
            for item in node.items:
                item.accept(self)
            self._output.append("</ul>\n")
            return

        list_type = _ORDERED_LIST_TYPES.get(node.items[0].marker_kind) if node.items else None
        self._output.append(f"<ol{format_attributes({'type': list_type})}>\n")
        expected = 1
        for item in node.items:
            number = item.number
            value = str(number) if number is not None and number != expected else None
            self._render_list_item(item, value)
            expected = (number if number is not None else expected) + 1
        self._output.append("</ol>\n")

    def visit_list_item(self, node: ListItem) -> None:
        self._render_list_item(node, None)

    def _render_list_item(self, node: ListItem, value: Optional[str]) -> None:
        css_class = TODO_HTML_CLASSES[node.todo] if node.todo is not None else None
        attributes = format_attributes({"class": css_class, "value": value})
        body = self._render_blocks(node.children).rstrip("\n")
        self._output.append(f"<li{attributes}>{body}</li>\n")

    def visit_table(self, node: Table) -> None:
        """Render a table, merging span cells into rowspan/colspan."""
        spans = node.cell_spans()
        header: list[str] = []
        body: list[str] = []
        for r, row in enumerate(node.content_rows):
            cells: list[str] = []
            tag = "th" if row.is_header else "td"
            for c, cell in enumerate(row.cells):
                if (r, c) not in spans:
                    continue
                rowspan, colspan = spans[(r, c)]
                attributes = format_attributes(
                    {
                        "rowspan": str(rowspan) if rowspan > 1 else None,
                        "colspan": str(colspan) if colspan > 1 else None,
                    }
                )
                cells.append(f"<{tag}{attributes}>{self._render_inline_content(cell.content)}</{tag}>")
            (header if row.is_header else body).append("<tr>" + "".join(cells) + "</tr>\n")

        self._output.append('<table class="center">\n' if node.centered else "<table>\n")
        if header:
            self._output.append("<thead>\n" + "".join(header) + "</thead>\n")
        if body:
            self._output.append("<tbody>\n" + "".join(body) + "</tbody>\n")
        self._output.append("</table>\n")

    def visit_table_row(self, node: TableRow) -> None:
        tag = "th" if node.is_header else "td"
        cells = "".join(
            f"<{tag}>{self._render_inline_content(cell.content)}</{tag}>" for cell in node.cells if cell.span is None
        )
        self._output.append(f"<tr>{cells}</tr>\n")

    def visit_table_cell(self, node: TableCell) -> None:
        self._output.append(f"<td>{self._render_inline_content(node.content)}</td>")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a code block through the highlighter, or as escaped ``<pre><code>``."""
        if self.options.code_highlighter is not None:
            self._output.append(self.options.code_highlighter(node.lines, node.language).rstrip("\n") + "\n")
            return

        pre_attributes = format_attributes(dict(node.metadata))
        code_attributes = format_attributes({"class": node.language})
        code = escape_html("\n".join(node.lines))
        self._output.append(f"<pre{pre_attributes}><code{code_attributes}>{code}</code></pre>\n")

    def visit_math_block(self, node: MathBlock) -> None:
        math = render_math_html("\n".join(node.lines), inline=False, environment=node.environment)
        self._output.append(f'<div class="math">{math}</div>\n')

    def visit_blockquote(self, node: Blockquote) -> None:
        """Render a blockquote; runs of quoted lines separated by empty ones become paragraphs."""
        separator = " " if self.options.ignore_newlines else "<br />\n"
        paragraphs: list[list[str]] = [[]]
        for line in node.lines:
            if not line:
                if paragraphs[-1]:
                    paragraphs.append([])
                continue
            paragraphs[-1].append(self._render_inline_content(line))

        self._output.append("<blockquote>\n")
        for lines in paragraphs:
            if lines:
                self._output.append(f"<p>{separator.join(lines)}</p>\n")
        self._output.append("</blockquote>\n")

    def visit_divider(self, node: Divider) -> None:
        self._output.append("<hr />\n")

    def visit_placeholder(self, node: Placeholder) -> None:
        # Reported through RenderResult.placeholders
        pass

    def visit_comment(self, node: Comment) -> None:
        if self.options.include_comments:
            self._output.append(render_html_comment(node.content) + "\n")

    def visit_blank_line(self, node: BlankLine) -> None:
        pass

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        self._output.append(escape_html(node.content))

    def visit_decorated_text(self, node: DecoratedText) -> None:
        if node.decoration == "code":
            self._output.append(f"<code>{escape_html(extract_text(node.content))}</code>")
            return
        opening, closing = _INLINE_TAGS[node.decoration]
        self._output.append(f"{opening}{self._render_inline_content(node.content)}{closing}")

    def visit_link(self, node: Link) -> None:
        """Render a link or transclusion.

        Same-page anchor links point at the header id directly and never go
        through the resolver. Links the resolver reports as missing, or that
        it fails on, get the missing-link class.

        """
        if node.variant == "transclusion":
            self._render_transclusion(node)
            return

        if node.variant == "raw":
            href = node.target[len(_LOCAL_SCHEME) :] if node.target.startswith(_LOCAL_SCHEME) else node.target
            self._output.append(f"<a{format_attributes({'href': href})}>{escape_html(node.target)}</a>")
            return

        if node.description is not None:
            label = self._render_inline_content(node.description)
        else:
            label = escape_html(node.target)

        if node.is_local_anchor:
            href = "#" + "-".join(self._anchor_id(anchor) for anchor in node.anchors)
            self._output.append(f"<a{format_attributes({'href': href})}>{label}</a>")
            return

        resolution = self._resolve(node)
        css_class = None if resolution.exists else self.options.missing_link_class
        attributes = format_attributes({"href": resolution.destination, "class": css_class})
        self._output.append(f"<a{attributes}>{label}</a>")

    def _render_transclusion(self, node: Link) -> None:
        """Render ``{{...}}`` as an image, or an object for other content."""
        source = node.target[len(_LOCAL_SCHEME) :] if node.target.startswith(_LOCAL_SCHEME) else node.target
        suffix = PurePosixPath(source.split("?", 1)[0].split("#", 1)[0]).suffix.lower()
        description = node.description or ()

        if suffix in IMAGE_EXTENSIONS:
            attributes: dict[str, Optional[str]] = {"src": source}
            if node.description is not None:
                attributes["alt"] = extract_text(description)
            attributes.update(node.properties)
            self._output.append(f"<img{format_attributes(attributes)} />")
            return

        attributes = {"data": source}
        attributes.update(node.properties)
        self._output.append(f"<object{format_attributes(attributes)}>{self._render_inline_content(description)}</object>")

    def visit_tags(self, node: Tags) -> None:
        spans = (f'<span class="tag">{escape_html(name)}</span>' for name in node.names)
        self._output.append(" ".join(spans))

    def visit_keyword(self, node: Keyword) -> None:
        self._output.append(f'<span class="todo">{node.word}</span>')

    def visit_comment_inline(self, node: CommentInline) -> None:
        if self.options.include_comments:
            self._output.append(render_html_comment(node.content))

    def visit_math_inline(self, node: MathInline) -> None:
        self._output.append(render_math_html(node.content, inline=True))

    def visit_line_break(self, node: LineBreak) -> None:
        self._output.append(" " if self.options.ignore_newlines else "<br />\n")
