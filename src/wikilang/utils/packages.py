#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/utils/packages.py
"""Installed-distribution lookups for the optional dependency checks."""

from __future__ import annotations

from importlib import metadata
from typing import Optional, Tuple

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version


def get_package_version(package_name: str) -> Optional[str]:
    """Return the installed version of a distribution, or None.

    ``package_name`` is the name pip knows (``pygments``), which is not
    always the import name.
    """
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check an installed distribution against a specifier such as ``">=2.0"``.

    Parameters
    ----------
    package_name : str
        Distribution name
    version_spec : str
        PEP 440 version specifier

    Returns
    -------
    tuple
        ``(meets_requirement, installed_version)``. A distribution that is
        missing, or whose version string cannot be parsed, does not meet the
        requirement.

    """
    installed_version = get_package_version(package_name)
    if installed_version is None:
        return False, None

    try:
        installed = Version(installed_version)
    except InvalidVersion:
        return False, installed_version
    return SpecifierSet(version_spec).contains(installed, prereleases=True), installed_version
