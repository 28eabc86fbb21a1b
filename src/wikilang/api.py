"""The major exported API functions for parsing, rendering and serializing pages."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/wikilang/api.py
import logging
from dataclasses import fields
from typing import Any, Optional, TypeVar

from wikilang.ast.nodes import Page
from wikilang.options.base import BaseParserOptions, BaseRendererOptions
from wikilang.options.html import HtmlRendererOptions
from wikilang.options.vimwiki import VimwikiParserOptions
from wikilang.parsers.base import ParserInput
from wikilang.parsers.vimwiki import VimwikiParser
from wikilang.renderers.html import HtmlRenderer, RenderResult
from wikilang.renderers.vimwiki import VimwikiRenderer

logger = logging.getLogger(__name__)

# TypeVar for generic options creation
OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions)


def _option_names(options_class: type) -> set[str]:
    return {field.name for field in fields(options_class)}


def _create_options_from_kwargs(
    options_class: type[OptionsT],
    options: Optional[OptionsT],
    options_type_name: str,
    **kwargs: Any,
) -> OptionsT:
    """Build options from an optional base instance plus keyword overrides.

    Parameters
    ----------
    options_class : type
        The options class to instantiate
    options : options instance or None
        Starting point; defaults are used when None
    options_type_name : str
        Name of the options type for logging (e.g., "parser" or "renderer")
    **kwargs
        Field overrides. Names that are not fields of ``options_class`` are
        skipped with a debug log message.

    Returns
    -------
    OptionsT
        Options instance

    """
    base = options if options is not None else options_class()
    option_names = _option_names(options_class)
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    missing = [k for k in kwargs if k not in valid_kwargs]
    if missing:
        logger.debug(f"Skipping unknown {options_type_name} options: {missing}")
    if not valid_kwargs:
        return base
    return base.create_updated(**valid_kwargs)


def parse(source: ParserInput, options: Optional[VimwikiParserOptions] = None, **kwargs: Any) -> Page:
    """Parse vimwiki markup into a Page.

    Parameters
    ----------
    source : str, Path, IO or bytes
        Markup to parse. A ``str`` is always markup text, never a path.
    options : VimwikiParserOptions or None, default None
        Parser options
    **kwargs
        Individual parser option overrides, e.g. ``strict=True``

    Returns
    -------
    Page
        Parsed page

    Raises
    ------
    UnterminatedBlock
        If a code or math fence is never closed
    ParseError
        Any recoverable error, when ``strict`` is enabled

    Examples
    --------
        >>> page = parse("= Hello =\\nWorld\\n", compute_line_columns=True)
        >>> page.children[1].region.line
        2

    """
    parser_options = _create_options_from_kwargs(VimwikiParserOptions, options, "parser", **kwargs)
    return VimwikiParser(parser_options).parse(source)


def render(page: Page, options: Optional[HtmlRendererOptions] = None, **kwargs: Any) -> RenderResult:
    """Render a parsed page to HTML.

    Parameters
    ----------
    page : Page
        Parsed page
    options : HtmlRendererOptions or None, default None
        Renderer options
    **kwargs
        Individual renderer option overrides, e.g. ``standalone=True``

    Returns
    -------
    RenderResult
        HTML text and the page's placeholder values

    """
    renderer_options = _create_options_from_kwargs(HtmlRendererOptions, options, "renderer", **kwargs)
    return HtmlRenderer(renderer_options).render(page)


def serialize(page: Page) -> str:
    """Serialize a page back to vimwiki markup.

    Parsing the result gives a page equal to ``page`` when ``page`` came
    from the parser.

    Parameters
    ----------
    page : Page
        Page to serialize

    Returns
    -------
    str
        Vimwiki markup

    """
    return VimwikiRenderer().render_to_string(page)


def render_html(
    source: ParserInput,
    parser_options: Optional[VimwikiParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    **kwargs: Any,
) -> RenderResult:
    """Parse vimwiki markup and render it to HTML in one step.

    Keyword arguments are routed by name to the parser or renderer options.

    Parameters
    ----------
    source : str, Path, IO or bytes
        Markup to render
    parser_options : VimwikiParserOptions or None, default None
        Parser options
    renderer_options : HtmlRendererOptions or None, default None
        Renderer options
    **kwargs
        Option overrides for either side

    Returns
    -------
    RenderResult
        HTML text and the page's placeholder values

    Examples
    --------
        >>> render_html("= Hello =\\n", standalone=True).html.startswith("<!DOCTYPE html>")
        True

    """
    parser_names = _option_names(VimwikiParserOptions)
    parser_kwargs = {k: v for k, v in kwargs.items() if k in parser_names}
    renderer_kwargs = {k: v for k, v in kwargs.items() if k not in parser_names}

    page = parse(source, parser_options, **parser_kwargs)
    return render(page, renderer_options, **renderer_kwargs)


__all__ = ["parse", "render", "render_html", "serialize"]
