#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/utils/decorators.py
"""Utility decorators for wikilang parsers and renderers.

This module provides the dependency check used by optional features and the
timer used to log how long parsing and rendering take.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from wikilang.exceptions import DependencyError
from wikilang.utils.packages import check_version_requirement


def requires_dependencies(feature_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required dependencies and versions before method execution.

    Parameters
    ----------
    feature_name : str
        Name of the feature (e.g., "highlight"). This appears in error
        messages to tell users which extra they need.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples where:
        - install_name: Package name for pip install (e.g., "pygments")
        - import_name: Module name for import statement (e.g., "pygments")
        - version_spec: Version requirement (e.g., ">=2.0" or "" for any version)

    Returns
    -------
    Callable
        Decorated method that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package is missing or has an incompatible version.
        The message suggests installing the ``wikilang[feature_name]`` extra,
        and the original ImportError is chained for debugging.

    Examples
    --------
        >>> @requires_dependencies("highlight", [("pygments", "pygments", ">=2.0")])
        ... def __call__(self, lines, language):
        ...     from pygments import highlight
        ...     # highlighting logic here

    """

    def decorator(method: Callable) -> Callable:
        @wraps(method)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            version_mismatches = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e
                    continue

                if version_spec:
                    meets_requirement, installed_version = check_version_requirement(install_name, version_spec)
                    if not meets_requirement:
                        version_mismatches.append((install_name, version_spec, installed_version or "unknown"))

            if missing or version_mismatches:
                raise DependencyError(
                    feature_name=feature_name,
                    missing_packages=missing,
                    version_mismatches=version_mismatches,
                    install_command=f"pip install 'wikilang[{feature_name}]'",
                    original_import_error=original_error,
                ) from original_error

            return method(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Context manager for timing operations with DEBUG-level logging.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance to use for DEBUG messages
    operation : str
        Description of the operation being timed (e.g., "Parsing (vimwiki)")

    Yields
    ------
    None
        Control flow to the code block being timed

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Rendering (html)"):
        ...     html = renderer.render_to_string(page)
        ... # Logs: "Rendering (html) completed in 0.01s" at DEBUG level

    Notes
    -----
    Time is only measured when the logger has DEBUG level enabled.

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.2f}s")
    else:
        yield
