#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_text.py
"""Unit tests for header anchor helpers."""

import pytest

from wikilang.utils.text import make_unique_slug, preserve_anchor, slugify


@pytest.mark.unit
class TestSlugify:
    """Tests for slugify."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello World!", "hello-world"),
            ("Café résumé", "cafe-resume"),
            ("  spaced   out  ", "spaced-out"),
            ("snake_case_name", "snake-case-name"),
            ("a -- b", "a-b"),
            ("Version 2.0", "version-20"),
        ],
    )
    def test_slugify(self, text: str, expected: str) -> None:
        assert slugify(text) == expected

    def test_empty_result_falls_back(self) -> None:
        assert slugify("!!!") == "section"
        assert slugify("") == "section"

    def test_max_length_strips_trailing_separator(self) -> None:
        assert slugify("abc def", max_length=4) == "abc"

    def test_custom_separator(self) -> None:
        assert slugify("Hello World", separator="_") == "hello_world"


@pytest.mark.unit
class TestPreserveAnchor:
    """Tests for preserve_anchor."""

    def test_keeps_case_and_punctuation(self) -> None:
        assert preserve_anchor("  My  Header! ") == "My-Header!"

    def test_blank_falls_back(self) -> None:
        assert preserve_anchor("   ") == "section"


@pytest.mark.unit
class TestMakeUniqueSlug:
    """Tests for make_unique_slug."""

    def test_counts_duplicates(self) -> None:
        seen: dict[str, int] = {}
        assert [make_unique_slug("intro", seen) for _ in range(3)] == ["intro", "intro-1", "intro-2"]

    def test_skips_taken_suffix(self) -> None:
        seen: dict[str, int] = {}
        make_unique_slug("intro-1", seen)
        make_unique_slug("intro", seen)
        assert make_unique_slug("intro", seen) == "intro-2"

    def test_custom_separator(self) -> None:
        seen = {"a": 0}
        assert make_unique_slug("a", seen, separator="_") == "a_1"
