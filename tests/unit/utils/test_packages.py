#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_packages.py
"""Unit tests for utils/packages.py."""

from unittest.mock import patch

import pytest

from wikilang.utils import packages
from wikilang.utils.packages import check_version_requirement, get_package_version


@pytest.mark.unit
class TestPackageVersions:
    """Tests for installed-distribution version checks."""

    def test_missing_distribution(self) -> None:
        assert get_package_version("nonexistent-wikilang-dist") is None
        assert check_version_requirement("nonexistent-wikilang-dist", ">=1.0") == (False, None)

    def test_installed_distribution(self) -> None:
        assert get_package_version("packaging") is not None
        ok, version = check_version_requirement("packaging", ">=1.0")
        assert ok
        assert version == get_package_version("packaging")

    def test_requirement_not_met(self) -> None:
        with patch.object(packages, "get_package_version", return_value="1.0.0"):
            assert check_version_requirement("pygments", ">=2.0") == (False, "1.0.0")

    def test_unparseable_version_does_not_meet_requirement(self) -> None:
        with patch.object(packages, "get_package_version", return_value="not a version"):
            assert check_version_requirement("pygments", ">=2.0") == (False, "not a version")
