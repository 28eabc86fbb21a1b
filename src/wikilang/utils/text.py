#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/utils/text.py
"""Text processing utilities for header anchors.

This module provides the text manipulation functions used to derive header
ids and the anchors of local links, so that ``[[#Some Header]]`` and
``= Some Header =`` agree on one id.

Functions
---------
slugify : Convert text to URL-safe slug
preserve_anchor : Keep text as written, replacing only whitespace
make_unique_slug : Generate unique slug with duplicate handling

Examples
--------
Basic slugification:

    >>> from wikilang.utils.text import slugify
    >>> slugify("My Header Title")
    'my-header-title'

Unique slug generation with counter:

    >>> seen = {}
    >>> slug1 = make_unique_slug("my-header", seen)  # 'my-header'
    >>> slug2 = make_unique_slug("my-header", seen)  # 'my-header-1'
    >>> slug3 = make_unique_slug("my-header", seen)  # 'my-header-2'

"""

from __future__ import annotations

import re
import unicodedata

from wikilang.constants import DEFAULT_SLUG_MAX_LENGTH

_WHITESPACE_PATTERN = re.compile(r"\s+")


def make_unique_slug(slug: str, seen_slugs: dict[str, int], separator: str = "-") -> str:
    """Generate unique slug with duplicate handling.

    The first occurrence of a slug is returned unchanged. Later occurrences
    get numeric suffixes starting at 1, skipping any candidate that was
    itself already handed out.

    Parameters
    ----------
    slug : str
        Base slug to make unique
    seen_slugs : dict[str, int]
        Dictionary tracking occurrence counts (mutated in-place).
        Maps every slug handed out so far to the number of times its base
        has been requested.
    separator : str, default = "-"
        Separator to use before numeric suffix

    Returns
    -------
    str
        Unique slug (with numeric suffix if needed)

    Examples
    --------
        >>> seen = {}
        >>> make_unique_slug("intro", seen)
        'intro'
        >>> make_unique_slug("intro", seen)
        'intro-1'
        >>> make_unique_slug("intro", seen)
        'intro-2'

    """
    if slug not in seen_slugs:
        seen_slugs[slug] = 0
        return slug

    while True:
        seen_slugs[slug] += 1
        candidate = f"{slug}{separator}{seen_slugs[slug]}"
        if candidate not in seen_slugs:
            seen_slugs[candidate] = 0
            return candidate


def slugify(text: str, *, max_length: int = DEFAULT_SLUG_MAX_LENGTH, separator: str = "-") -> str:
    """Create a URL-safe slug from text.

    This function:
    - Normalizes Unicode characters (NFD decomposition) and drops accents
    - Converts to lowercase
    - Replaces whitespace and underscores with the separator
    - Removes characters other than letters, digits and the separator
    - Collapses repeated separators and strips them from both ends
    - Limits the length to max_length characters

    Parameters
    ----------
    text : str
        Text to slugify (e.g., header text)
    max_length : int, default = 100
        Maximum length of the slug
    separator : str, default = "-"
        The separator between words in the slug

    Returns
    -------
    str
        URL-safe slug; ``"section"`` when nothing survives

    Examples
    --------
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Café résumé")
        'cafe-resume'

    """
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    slug = normalized.lower()
    slug = re.sub(r"[\s_]+", separator, slug)

    escaped = re.escape(separator)
    slug = re.sub(rf"[^a-z0-9\-{escaped}]", "", slug)
    slug = re.sub(rf"(?:{escaped})+", separator, slug)
    slug = slug.strip(separator)

    if not slug:
        slug = "section"

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip(separator)

    return slug


def preserve_anchor(text: str, *, separator: str = "-") -> str:
    """Keep header text as the anchor, joining words with the separator.

    Examples
    --------
        >>> preserve_anchor("  My  Header ")
        'My-Header'

    """
    anchor = _WHITESPACE_PATTERN.sub(separator, text.strip())
    return anchor or "section"


__all__ = [
    "make_unique_slug",
    "preserve_anchor",
    "slugify",
]
