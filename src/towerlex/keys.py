"""Translation keys, scopes, and literal fallbacks.

A key is a string naming a dictionary entry, with namespace segments
separated by dots or slashes: "example.bar/baz" and "example/bar/baz" name
the same entry. The canonical spelling joins namespace segments with dots
and puts the entry name after a single slash ("example.bar/baz").

A scope is a key prefix ("example.bar"). scoped() concatenates the segments
of a scope and a key, in order.

Any non-string element of a key list is a literal: it ends the key search
and is returned as-is when nothing earlier resolved. Fallback wraps literal
text so it is not mistaken for a key.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from towerlex.constants import MAX_SCOPED_KEY_CACHE_SIZE

__all__ = [
    "Alias",
    "Fallback",
    "explode_key",
    "is_key",
    "literal_value",
    "scoped",
]

_SEPARATORS = re.compile(r"[./]")


@dataclass(frozen=True, slots=True)
class Fallback:
    """Literal fallback text in a key list.

    Example:
        >>> t("en", ["greeting", Fallback("Hi!")])
        'Hi!'
    """

    text: str


@dataclass(frozen=True, slots=True)
class Alias:
    """Dictionary leaf redirecting to another key of the same locale.

    Equivalent to the string form "@:example/greeting" in resource files.
    """

    target: str


def is_key(item: object) -> bool:
    """True if a key-list element is a key rather than a literal."""
    return isinstance(item, str)


def literal_value(item: object) -> object:
    """Value returned for a literal element of a key list."""
    if isinstance(item, Fallback):
        return item.text
    return item


@functools.lru_cache(maxsize=MAX_SCOPED_KEY_CACHE_SIZE)
def explode_key(key: str) -> tuple[str, ...]:
    """Split a key or scope into its segments, dropping empty ones.

    Example:
        >>> explode_key("example.bar/baz")
        ('example', 'bar', 'baz')
    """
    return tuple(part for part in _SEPARATORS.split(key) if part)


@functools.lru_cache(maxsize=MAX_SCOPED_KEY_CACHE_SIZE)
def _join(parts: tuple[str, ...]) -> str:
    if len(parts) == 1:
        return parts[0]
    return ".".join(parts[:-1]) + "/" + parts[-1]


def scoped(*keys: str | None) -> str | None:
    """Compose scopes and keys into one canonical key.

    None entries are skipped, so scoped(None, k) is the canonical form of k.
    Returns None when nothing remains.

    Example:
        >>> scoped("example", "bar/baz")
        'example.bar/baz'
        >>> scoped(None, "example.foo")
        'example/foo'
    """
    parts: list[str] = []
    for key in keys:
        if key is not None:
            parts.extend(explode_key(key))
    if not parts:
        return None
    return _join(tuple(parts))
