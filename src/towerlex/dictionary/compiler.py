"""Dictionary compiler.

Compiles the development-friendly nested dictionary into the flat form the
translator looks up:

    {"en": {"example": {"with-markdown": "<tag>**strong**</tag>",
                        "with-exclaim!": "<tag>**strong**</tag>",
                        "greeting_note": "Hello translator, please do x",
                        "greeting-alias": Alias("example/greeting")}}}
    =>
    {"example/with-markdown": {"en": "&lt;tag&gt;<strong>strong</strong>&lt;/tag&gt;"},
     "example/with-exclaim": {"en": "<tag>**strong**</tag>"},
     ...}

Each leaf path (locale, ns1, ..., nsN, decorated-key, value) is compiled
independently:

1. The decorated key is split into base key and Decorator.
2. Alias values are replaced by the raw value of their target, looked up in
   the same locale. Aliases are single hop: a target that is itself an
   alias is a malformed dictionary.
3. The decorator transform is applied (comments are dropped).
4. The result is stored under scoped(ns1, ..., nsN, base-key) for the locale.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping

from towerlex.constants import ALIAS_PREFIX, MIN_DICTIONARY_PATH_LENGTH
from towerlex.diagnostics import MalformedDictionaryPathError
from towerlex.dictionary.markup import block_markdown, escape_html, inline_markdown
from towerlex.dictionary.types import RawDictionary
from towerlex.enums import DECORATOR_MARKERS, Decorator
from towerlex.keys import Alias, scoped
from towerlex.locale_utils import locale_key

__all__ = [
    "alias_target",
    "compile_dictionary",
    "leaf_paths",
    "split_decorated_key",
]

logger = logging.getLogger(__name__)

# Longest marker first so that e.g. "_comment" is never read as a shorter marker
_MARKERS: tuple[tuple[str, Decorator], ...] = tuple(
    sorted(DECORATOR_MARKERS.items(), key=lambda item: len(item[0]), reverse=True)
)

_TRANSFORMS: dict[Decorator, Callable[[str], str]] = {
    Decorator.VERBATIM: lambda text: text,
    Decorator.ESCAPE: escape_html,
    Decorator.INLINE_MARKDOWN: lambda text: inline_markdown(escape_html(text)),
    Decorator.BLOCK_MARKDOWN: lambda text: block_markdown(escape_html(text)),
}

type _LeafPath = tuple[object, ...]


def split_decorated_key(name: str) -> tuple[str, Decorator]:
    """Split a raw key into its base name and decorator.

    Example:
        >>> split_decorated_key("with-exclaim!")
        ('with-exclaim', <Decorator.VERBATIM: 'verbatim'>)
        >>> split_decorated_key("greeting")
        ('greeting', <Decorator.INLINE_MARKDOWN: 'inline-markdown'>)
    """
    for marker, decorator in _MARKERS:
        if name.endswith(marker) and len(name) > len(marker):
            return name[: -len(marker)], decorator
    return name, Decorator.INLINE_MARKDOWN


def alias_target(value: object) -> str | None:
    """Target key if a leaf value is an alias, else None.

    Example:
        >>> alias_target("@:example/greeting")
        'example/greeting'
        >>> alias_target("Hello") is None
        True
    """
    if isinstance(value, Alias):
        return value.target
    if isinstance(value, str) and value.startswith(ALIAS_PREFIX) and len(value) > len(ALIAS_PREFIX):
        target = value[len(ALIAS_PREFIX) :]
        if not any(ch.isspace() for ch in target):
            return target
    return None


def leaf_paths(tree: Mapping[object, object]) -> Iterator[_LeafPath]:
    """Yield every path to a leaf of a nested mapping, leaf value last.

    Example:
        >>> list(leaf_paths({"a": {"b": "x", "c": "y"}}))
        [('a', 'b', 'x'), ('a', 'c', 'y')]
    """
    for k, v in tree.items():
        if isinstance(v, Mapping):
            for path in leaf_paths(v):
                yield (k, *path)
        else:
            yield (k, v)


def _split_path(path: _LeafPath) -> tuple[str, list[str]]:
    """Locale tag and key segments of a leaf path.

    Raises:
        MalformedDictionaryPathError: A locale or key is not a string
    """
    for part in path[:-1]:
        if not isinstance(part, str):
            msg = f"locale and key names must be strings, got {type(part).__name__} {part!r}"
            raise MalformedDictionaryPathError(path, msg)
    return locale_key(path[0]), list(path[1:-1])  # type: ignore[arg-type]


class _AliasIndex:
    """Raw leaf values and namespaces per (locale, qualified key)."""

    __slots__ = ("_namespaces", "_values")

    def __init__(self, paths: list[_LeafPath]) -> None:
        self._values: dict[tuple[str, str], object] = {}
        self._namespaces: set[tuple[str, str]] = set()

        for path in paths:
            if len(path) < MIN_DICTIONARY_PATH_LENGTH:
                continue
            loc, segments = _split_path(path)
            base, decorator = split_decorated_key(segments[-1])
            if decorator.discards:
                continue
            key = scoped(*segments[:-1], base)
            if key is None:
                continue
            # Undecorated spelling wins over decorated spellings of the same key
            if (loc, key) not in self._values or segments[-1] == base:
                self._values[(loc, key)] = path[-1]
            for i in range(1, len(segments)):
                namespace = scoped(*segments[:i])
                if namespace is not None:
                    self._namespaces.add((loc, namespace))

    def resolve(self, path: _LeafPath, loc: str, target: str) -> object | None:
        """Raw value of an alias target, None if the target does not exist.

        Raises:
            MalformedDictionaryPathError: Target is an alias or a namespace
        """
        key = scoped(target)
        if key is None:
            msg = f"empty alias target {target!r}"
            raise MalformedDictionaryPathError(path, msg)
        if (loc, key) not in self._values:
            if (loc, key) in self._namespaces:
                msg = f"alias target {target!r} is a namespace, not a text entry"
                raise MalformedDictionaryPathError(path, msg)
            return None

        value = self._values[(loc, key)]
        if alias_target(value) is not None:
            msg = f"alias target {target!r} is itself an alias; aliases resolve one hop only"
            raise MalformedDictionaryPathError(path, msg)
        return value


def _compile_path(path: _LeafPath, index: _AliasIndex) -> tuple[str, str, str] | None:
    """Compile one leaf path into (qualified key, locale tag, text).

    Returns None for entries that produce no output (comments, null text,
    dangling aliases).
    """
    if len(path) < MIN_DICTIONARY_PATH_LENGTH:
        msg = "expected at least (locale, key, text)"
        raise MalformedDictionaryPathError(path, msg)

    loc, segments = _split_path(path)
    base, decorator = split_decorated_key(segments[-1])
    if decorator.discards:
        return None

    value = path[-1]
    target = alias_target(value)
    if target is not None:
        value = index.resolve(path, loc, target)
        if value is None:
            logger.warning("Dangling alias %r in locale %s: %s", segments[-1], loc, target)
            return None
    if value is None:
        return None

    key = scoped(*segments[:-1], base)
    if key is None:
        msg = "empty key"
        raise MalformedDictionaryPathError(path, msg)
    return key, loc, _TRANSFORMS[decorator](str(value))


def compile_dictionary(raw: RawDictionary) -> dict[str, dict[str, str]]:
    """Compile a raw dictionary into qualified key -> locale tag -> text.

    Fragments are merged one level deep: the per-locale mappings of a key
    are unioned, and a repeated (key, locale) pair keeps the last value.

    Args:
        raw: Raw dictionary with per-locale imports already resolved

    Returns:
        Compiled dictionary

    Raises:
        MalformedDictionaryPathError: If any leaf path cannot be compiled
    """
    paths = list(leaf_paths(raw))
    index = _AliasIndex(paths)

    compiled: dict[str, dict[str, str]] = {}
    for path in paths:
        fragment = _compile_path(path, index)
        if fragment is None:
            continue
        key, loc, text = fragment
        compiled.setdefault(key, {})[loc] = text

    logger.debug(
        "Compiled %d dictionary leaves into %d keys",
        len(paths),
        len(compiled),
    )
    return compiled
