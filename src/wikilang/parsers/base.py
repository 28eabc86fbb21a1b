#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/parsers/base.py
"""Base classes for markup parsers.

This module defines the abstract base class that parsers inherit from. The
BaseParser provides a consistent interface for turning source text into the
wikilang AST.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from wikilang.ast import Page
from wikilang.exceptions import InvalidOptionsError
from wikilang.options.base import BaseParserOptions
from wikilang.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for markup parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    The parse() method accepts:
    - str: Markup text (never interpreted as a path)
    - Path: File to read
    - IO[bytes] or IO[str]: File-like object
    - bytes: Raw encoded markup

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Page:
        """Parse the input into a Page AST.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            The markup to parse

        Returns
        -------
        Page
            Root of the parsed tree

        Raises
        ------
        ParseError
            If the markup contains a fatal error, or any error in strict mode

        """
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load markup text from various input types.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Input data to load. Strings are returned unchanged.

        Returns
        -------
        str
            Markup text

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        if isinstance(input_data, Path):
            logger.debug(f"Reading markup from {input_data}")
            return read_text_with_encoding_detection(input_data.read_bytes())
        if hasattr(input_data, "seek") and input_data.seekable():
            input_data.seek(0)
        return normalize_stream_to_text(input_data)
