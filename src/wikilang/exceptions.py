#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the wikilang library.

This module defines specialized exception classes for the error conditions
that can occur while parsing vimwiki markup and rendering document trees.
Parse errors carry the ``Region`` of the offending source text so callers
can report them with surrounding context.

Exception Hierarchy
-------------------
- WikiLangError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - ParsingError (markup parsing failures)
    - ParseError (grammar error anchored to a source region)
      - UnterminatedBlock (fenced code/math without closing fence)
      - InvalidHeaderLevel (header marker count outside 1..6)
      - MalformedLink (link without a target)
      - MalformedTable (inconsistent cell markers mid-row)

  - RenderingError (output generation failures)

  - DependencyError (missing/incompatible optional packages)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from wikilang.ast.region import Region

ParseErrorKind = Literal["unterminated_block", "invalid_header_level", "malformed_link", "malformed_table"]


class WikiLangError(Exception):
    """Base exception class for all wikilang-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(WikiLangError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    component_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(WikiLangError):
    """Exception raised when markup parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class ParseError(ParsingError):
    """Grammar error anchored to a region of the source text.

    Instances are either raised (fatal conditions, or any condition when the
    parser runs in strict mode) or recorded in ``Page.diagnostics`` when the
    parser recovers with a best-effort fallback.

    Parameters
    ----------
    message : str
        Description of the problem
    region : Region
        Span of the offending source text
    kind : str
        One of ``unterminated_block``, ``invalid_header_level``,
        ``malformed_link`` or ``malformed_table``

    """

    kind: ParseErrorKind

    def __init__(self, message: str, region: Region, kind: ParseErrorKind | None = None):
        """Initialize the parse error with its source region."""
        if kind is None:
            kind = getattr(type(self), "kind", None)
            if kind is None:
                raise TypeError("ParseError requires a kind when instantiated directly")
        super().__init__(message, parsing_stage=kind)
        self.region = region
        self.kind = kind

    def __str__(self) -> str:
        location = f"offset {self.region.offset}"
        if self.region.line is not None:
            location = f"line {self.region.line}, column {self.region.column}"
        return f"{self.message} ({location})"


class UnterminatedBlock(ParseError):
    """A fenced code or math block reached end of input without its closing fence."""

    kind: ParseErrorKind = "unterminated_block"


class InvalidHeaderLevel(ParseError):
    """A header marker run was longer than the deepest supported level."""

    kind: ParseErrorKind = "invalid_header_level"


class MalformedLink(ParseError):
    """A link was missing its target."""

    kind: ParseErrorKind = "malformed_link"


class MalformedTable(ParseError):
    """A table row mixed divider and content cells or lost its closing separator."""

    kind: ParseErrorKind = "malformed_table"


class RenderingError(WikiLangError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class DependencyError(WikiLangError):
    """Exception raised when optional dependencies are not available.

    Parameters
    ----------
    feature_name : str
        Name of the feature requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        feature_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []
            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{feature_name} requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{feature_name} has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.feature_name = feature_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
