"""Locale normalization and locale search trees.

Centralizes locale handling used throughout the codebase:

- locale_key() canonicalizes any accepted locale representation into a
  dash-separated tag ("en_US" -> "en-US"). All lookups and cache keys use
  this form.
- locale_tree() expands one locale, or an ordered list of preferred locales,
  into the sequence of tags the resolver searches.
- get_babel_locale() maps a tag onto a Babel Locale for formatting.

All public functions are memoized and thread-safe (lru_cache locking).

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Sequence
from typing import TYPE_CHECKING

from towerlex.constants import (
    BABEL_FALLBACK_LOCALE,
    MAX_LOCALE_CACHE_SIZE,
    MAX_LOCALE_TREE_SIZE,
    NIL_LOCALE,
    SYSTEM_LOCALE,
)

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_locale",
    "locale_key",
    "locale_tree",
    "normalize_locale",
]

logger = logging.getLogger(__name__)

type LocaleLike = str | Locale | None
"""Any accepted single-locale representation."""


def normalize_locale(locale_code: str) -> str:
    """Convert a tag to POSIX format for Babel.

    Tags use hyphens (en-US), while Babel/POSIX uses underscores (en_US).

    Example:
        >>> normalize_locale("en-US")
        'en_US'
    """
    return locale_code.replace("-", "_")


def locale_key(locale: LocaleLike) -> str:
    """Canonicalize a locale identifier into a dash-separated tag.

    Underscores become dashes and case is preserved. A babel.Locale is
    rendered through its string form. None and "" become the "nil" tag so
    that lookups against an absent locale simply find nothing. The keyword
    "system" resolves to the host platform's locale.

    Idempotent: locale_key(locale_key(x)) == locale_key(x).

    Example:
        >>> locale_key("en_US")
        'en-US'
        >>> locale_key(None)
        'nil'
    """
    if locale is None:
        return NIL_LOCALE
    if isinstance(locale, str):
        return _locale_key_str(locale)
    return _locale_key_str(str(locale))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def _locale_key_str(locale: str) -> str:
    if not locale:
        return NIL_LOCALE
    if locale == SYSTEM_LOCALE:
        locale = get_system_locale()
    return locale.replace("_", "-")


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def _single_tree(tag: str) -> tuple[str, ...]:
    """Tree for one normalized tag: en-US-var1 -> (en-US-var1, en-US, en)."""
    parts = tag.split("-")
    return tuple("-".join(parts[:n]) for n in range(len(parts), 0, -1))


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def _merged_tree(tags: tuple[str, ...]) -> tuple[str, ...]:
    """Tree for several normalized tags in caller preference order."""
    trees = [_single_tree(tag) for tag in tags]

    # Root language of each input, ranked by first appearance
    primaries = tuple(dict.fromkeys(tree[-1] for tree in trees))
    rank = {primary: i for i, primary in enumerate(primaries)}

    merged = dict.fromkeys(tag for tree in trees for tag in tree)
    # sorted() is stable: ties keep first-seen order
    ordered = sorted(
        merged,
        key=lambda tag: 10 * rank.get(_single_tree(tag)[-1], 0) - len(_single_tree(tag)),
    )
    return tuple(ordered[:MAX_LOCALE_TREE_SIZE])


def locale_tree(locales: LocaleLike | Sequence[LocaleLike]) -> tuple[str, ...]:
    """Build the ordered locale search sequence.

    A single locale yields its prefixes from most to least specific. A list
    or tuple of locales (descending preference) yields the merged trees,
    deduplicated and ordered so that every entry of an earlier-preferred root
    language precedes any entry of a later one, more specific entries first.
    The merged result is capped at MAX_LOCALE_TREE_SIZE entries.

    Args:
        locales: One locale, or a list/tuple of locales

    Returns:
        Tuple of normalized tags to search, in order

    Example:
        >>> locale_tree("en-US-var1")
        ('en-US-var1', 'en-US', 'en')
        >>> locale_tree(["en-GB", "fr-FR", "en-US"])
        ('en-GB', 'en-US', 'en', 'fr-FR', 'fr')
    """
    if isinstance(locales, (list, tuple)):
        tags = tuple(locale_key(loc) for loc in locales)
        if not tags:
            return ()
        if len(tags) == 1:
            return _single_tree(tags[0])
        return _merged_tree(tags)
    return _single_tree(locale_key(locales))


@functools.lru_cache(maxsize=128)
def get_babel_locale(tag: str) -> Locale:
    """Get a Babel Locale for a tag, degrading to less specific tags.

    Tries each entry of the tag's own tree (en-US-var1, en-US, en) until
    Babel accepts one. Tags that Babel rejects entirely log a warning and
    fall back to en_US, so formatting never fails on an exotic tag.

    Args:
        tag: Locale tag (dash or underscore separated)

    Returns:
        Babel Locale object

    Example:
        >>> get_babel_locale("en-US-var1").territory
        'US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale, UnknownLocaleError  # noqa: PLC0415

    for candidate in _single_tree(locale_key(tag)):
        try:
            return Locale.parse(normalize_locale(candidate))
        except (UnknownLocaleError, ValueError):
            continue

    logger.warning("Unknown locale '%s'. Falling back to %s", tag, BABEL_FALLBACK_LOCALE)
    return Locale.parse(BABEL_FALLBACK_LOCALE)


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales and strips encodings.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en-US" as fallback.

    Returns:
        Detected locale as a dash-separated tag.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return system_locale.split(".")[0].replace("_", "-")
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            return value.split(".")[0].replace("_", "-")

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return "en-US"
