#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/options/html.py
"""Configuration options for HTML rendering.

This module defines the options for turning a parsed vimwiki page into HTML,
including link resolution, code highlighting and page templating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Sequence

from wikilang.constants import (
    DEFAULT_HEADER_ID_STRATEGY,
    DEFAULT_HTML_LANGUAGE,
    DEFAULT_IGNORE_NEWLINES,
    DEFAULT_INCLUDE_COMMENTS,
    DEFAULT_MISSING_LINK_CLASS,
    DEFAULT_ROOT_PATH,
    DEFAULT_STANDALONE,
    TEMPLATE_CONTENT_MARKER,
    HeaderIdStrategy,
)
from wikilang.options.base import BaseRendererOptions

if TYPE_CHECKING:
    from wikilang.ast.nodes import Link
    from wikilang.renderers.html import LinkResolution

LinkResolver = Callable[["Link"], "LinkResolution"]
CodeHighlighter = Callable[[Sequence[str], Optional[str]], str]

_HEADER_ID_STRATEGIES = ("slug", "preserve")


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a vimwiki page to HTML.

    Parameters
    ----------
    header_id_strategy : {"slug", "preserve"}, default "slug"
        How header anchors are derived from header text. ``slug`` lowercases
        and hyphenates; ``preserve`` keeps the text and only replaces
        whitespace. Repeated ids get ``-1``, ``-2``, ... suffixes.
    wiki_link_resolver : callable or None, default None
        Maps a wiki, diary or interwiki ``Link`` to a ``LinkResolution``.
        None uses ``default_link_resolver``. Exceptions raised by the resolver
        are logged and the link is rendered flagged as missing.
    code_highlighter : callable or None, default None
        ``(lines, language) -> html`` used for code blocks instead of a plain
        ``<pre><code>`` element.
    ignore_newlines : bool, default True
        Render line boundaries inside paragraphs as spaces. When False they
        render as ``<br />``.
    include_comments : bool, default False
        Emit comments as ``<!-- -->`` instead of dropping them.
    missing_link_class : str, default "missing"
        CSS class added to links whose target does not exist.
    standalone : bool, default False
        Wrap the body in a complete HTML document. Ignored when ``template``
        is set.
    language : str, default "en"
        Language code for the ``<html lang>`` attribute of standalone output.
    css_file : str or None, default None
        Stylesheet linked from the head of standalone output.
    template : str or None, default None
        Page template text. ``%title%``, ``%date%``, ``%root_path%`` and
        ``%content%`` are replaced with the page title, date, ``root_path``
        and rendered body.
    root_path : str, default ""
        Relative path from the page to the wiki root, substituted for
        ``%root_path%`` in templates.

    Examples
    --------
    Render with a custom resolver:
        >>> options = HtmlRendererOptions(
        ...     wiki_link_resolver=lambda link: LinkResolution(f"/wiki/{link.page}", exists=True)
        ... )

    """

    header_id_strategy: HeaderIdStrategy = field(
        default=DEFAULT_HEADER_ID_STRATEGY,
        metadata={
            "help": "How header ids are derived: 'slug' (lowercase, hyphenated) or 'preserve' (text as written)",
            "choices": list(_HEADER_ID_STRATEGIES),
            "importance": "core",
        },
    )
    wiki_link_resolver: Optional[LinkResolver] = field(
        default=None,
        metadata={"help": "Callable mapping wiki links to destinations", "importance": "core"},
    )
    code_highlighter: Optional[CodeHighlighter] = field(
        default=None,
        metadata={"help": "Callable rendering code block lines to highlighted HTML", "importance": "advanced"},
    )
    ignore_newlines: bool = field(
        default=DEFAULT_IGNORE_NEWLINES,
        metadata={"help": "Render paragraph line breaks as spaces instead of <br />", "importance": "core"},
    )
    include_comments: bool = field(
        default=DEFAULT_INCLUDE_COMMENTS,
        metadata={"help": "Emit wiki comments as HTML comments", "importance": "advanced"},
    )
    missing_link_class: str = field(
        default=DEFAULT_MISSING_LINK_CLASS,
        metadata={"help": "CSS class for links to pages that do not exist", "importance": "advanced"},
    )
    standalone: bool = field(
        default=DEFAULT_STANDALONE,
        metadata={"help": "Generate a complete HTML document", "importance": "core"},
    )
    language: str = field(
        default=DEFAULT_HTML_LANGUAGE,
        metadata={"help": "Document language code for the html lang attribute", "importance": "advanced"},
    )
    css_file: Optional[str] = field(
        default=None,
        metadata={"help": "Stylesheet linked from standalone documents", "importance": "advanced"},
    )
    template: Optional[str] = field(
        default=None,
        metadata={"help": "Template text with %title%, %date%, %root_path% and %content% markers", "importance": "advanced"},
    )
    root_path: str = field(
        default=DEFAULT_ROOT_PATH,
        metadata={"help": "Path from the page to the wiki root, used for %root_path%", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate field values.

        Raises
        ------
        ValueError
            If the header id strategy is unknown or the template has no
            content marker.

        """
        super().__post_init__()

        if self.header_id_strategy not in _HEADER_ID_STRATEGIES:
            raise ValueError(
                f"header_id_strategy must be one of {', '.join(_HEADER_ID_STRATEGIES)}, "
                f"got {self.header_id_strategy!r}"
            )

        if self.template is not None and TEMPLATE_CONTENT_MARKER not in self.template:
            raise ValueError(f"template must contain the {TEMPLATE_CONTENT_MARKER} marker")
