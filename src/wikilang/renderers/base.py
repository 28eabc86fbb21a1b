#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class that the HTML renderer and the
vimwiki serializer inherit from. The BaseRenderer provides a consistent
interface for turning a parsed ``Page`` into text.

"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from wikilang.ast import Node, Page
from wikilang.exceptions import InvalidOptionsError
from wikilang.options.base import BaseRendererOptions

RenderOutput = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class TitleRenderer(BaseRenderer):
        ...     def render_to_string(self, page):
        ...         return "rendered output"
        ...
        ...     def render(self, page, output):
        ...         self.write_text_output(self.render_to_string(page), output)

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration.

        Parameters
        ----------
        options : BaseRendererOptions or None, default = None
            Format-specific rendering options. If None, default options will be used.

        """
        self.options = options

    @abstractmethod
    def render_to_string(self, page: Page) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        page : Page
            AST page to render

        Returns
        -------
        str
            Rendered page

        """
        pass

    def render(self, page: Page, output: RenderOutput) -> None:
        """Render the AST and write it to a file or stream.

        Parameters
        ----------
        page : Page
            AST page to render
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object. Binary streams receive UTF-8.

        Raises
        ------
        RenderingError
            If rendering fails
        TypeError
            If the output type is not supported

        """
        self.write_text_output(self.render_to_string(page), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: RenderOutput) -> None:
        """Write text output to a file path or IO stream.

        Parameters
        ----------
        text : str
            Rendered text to write
        output : str, Path, IO[bytes], or IO[str]
            Output destination. A ``str`` is a file path.

        Raises
        ------
        TypeError
            If output type is not supported

        Examples
        --------
        Write to StringIO:
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("= Hello =", buffer)
            >>> buffer.getvalue()
            '= Hello ='

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        # Detect binary or text mode
        if isinstance(output, BytesIO):
            is_binary_mode = True
        elif isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            cast(IO[bytes], output).write(text.encode("utf-8"))
        else:
            cast(IO[str], output).write(text)


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    The implementing class must have an ``_output`` attribute (list[str]) and
    visitor methods that append to it.

    """

    _output: list[str]

    def _render_inline_content(self, content: tuple[Node, ...] | list[Node]) -> str:
        """Render a sequence of inline nodes to text.

        Parameters
        ----------
        content : sequence of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content

        """
        # Save current output state
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        # Capture result and restore output state
        result = "".join(self._output)
        self._output = saved_output
        return result
