"""Compiled-dictionary cache with dev-mode reloading.

Compilation turns a dictionary source into a compiled dictionary once and
serves the result to every later resolve call.

Cache Key Structure:
    (kind, identity, loader, inherit_parents)
    - kind: "resource" for named sources, "inline" for mappings
    - identity: resource name, or id() of the mapping (the entry keeps the
      mapping alive and re-checks identity, so ids are never confused)
    - loader: DictionaryLoader used for named resources and imports
    - inherit_parents: whether ancestor inheritance was applied

Reload Policy:
    Static (dev_mode=False): an entry is served forever.
    Dev mode: before serving an entry built from named resources, the
    last-modified stamps of every resource it read are compared with the
    stamps taken just before each resource was read. Any difference
    rebuilds the entry.
    Inline mappings are never reload-checked.

Thread Safety:
    Entries are immutable and published by replacing the dict slot under the
    write lock of an RWLock. Readers take the read lock and observe either
    the old entry or the complete new one. A failed build raises to the
    caller and leaves the previous entry in place, so the next call retries.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from towerlex.dictionary.compiler import compile_dictionary
from towerlex.dictionary.loading import (
    DictionaryLoader,
    inherit_parent_translations,
    load_dictionary,
)
from towerlex.dictionary.types import CompiledDictionary, DictionarySource
from towerlex.runtime.rwlock import RWLock

__all__ = ["DEFAULT_CACHE", "DictionaryCache"]

logger = logging.getLogger(__name__)

type _CacheKey = tuple[str, Hashable, DictionaryLoader, bool]


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    """One published compilation result."""

    source: object
    compiled: CompiledDictionary
    resources: tuple[str, ...]
    stamps: tuple[int | None, ...]


class DictionaryCache:
    """Thread-safe cache of compiled dictionaries.

    Example:
        >>> cache = DictionaryCache()
        >>> compiled = cache.get({"en": {"a": "A"}}, PathDictionaryLoader())
        >>> compiled["a"]["en"]
        'A'
        >>> cache.get_stats()["compilations"]
        1
    """

    __slots__ = ("_compilations", "_entries", "_hits", "_lock", "_reloads", "_stats_lock")

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: dict[_CacheKey, _CacheEntry] = {}
        self._lock = RWLock()
        self._stats_lock = threading.Lock()
        self._hits = 0
        self._compilations = 0
        self._reloads = 0

    @staticmethod
    def _make_key(
        source: DictionarySource, loader: DictionaryLoader, inherit_parents: bool
    ) -> _CacheKey:
        if source is None or isinstance(source, str):
            return ("resource", source, loader, inherit_parents)
        return ("inline", id(source), loader, inherit_parents)

    @staticmethod
    def _matches(entry: _CacheEntry | None, source: DictionarySource) -> bool:
        if entry is None:
            return False
        if isinstance(source, Mapping):
            return entry.source is source
        return True

    @staticmethod
    def _is_stale(entry: _CacheEntry, loader: DictionaryLoader) -> bool:
        current = tuple(loader.last_modified(name) for name in entry.resources)
        return current != entry.stamps

    def _servable(
        self,
        entry: _CacheEntry | None,
        source: DictionarySource,
        loader: DictionaryLoader,
        *,
        dev_mode: bool,
    ) -> _CacheEntry | None:
        """Entry if it can be served as-is, None if a build is needed."""
        if entry is None or not self._matches(entry, source):
            return None
        if dev_mode and isinstance(source, str) and self._is_stale(entry, loader):
            return None
        return entry

    def get(
        self,
        source: DictionarySource,
        loader: DictionaryLoader,
        *,
        dev_mode: bool = False,
        inherit_parents: bool = False,
    ) -> CompiledDictionary:
        """Return the compiled dictionary for a source, compiling if needed.

        Args:
            source: Inline mapping, resource name, or None
            loader: Loader for named resources and per-locale imports
            dev_mode: Rebuild when a backing resource changed
            inherit_parents: Merge ancestor locales before compiling

        Returns:
            Read-only compiled dictionary

        Raises:
            DictionaryLoadError: If a resource fails to load
            MalformedDictionaryPathError: If the dictionary cannot be compiled
        """
        key = self._make_key(source, loader, inherit_parents)

        with self._lock.read():
            entry = self._entries.get(key)
        served = self._servable(entry, source, loader, dev_mode=dev_mode)
        if served is not None:
            with self._stats_lock:
                self._hits += 1
            return served.compiled

        with self._lock.write():
            # Another thread may have rebuilt while we waited
            entry = self._entries.get(key)
            served = self._servable(entry, source, loader, dev_mode=dev_mode)
            if served is not None:
                with self._stats_lock:
                    self._hits += 1
                return served.compiled

            reload = self._matches(entry, source)
            if reload:
                logger.info("Dictionary resource %r changed, recompiling", source)
            try:
                new_entry = self._build(source, loader, inherit_parents=inherit_parents)
            except Exception as e:
                logger.error("Failed to compile dictionary %r: %s", _describe(source), e)
                raise
            self._entries[key] = new_entry

        with self._stats_lock:
            self._compilations += 1
            if reload:
                self._reloads += 1
        return new_entry.compiled

    @staticmethod
    def _build(
        source: DictionarySource, loader: DictionaryLoader, *, inherit_parents: bool
    ) -> _CacheEntry:
        loaded = load_dictionary(source, loader)
        raw = inherit_parent_translations(loaded.raw) if inherit_parents else loaded.raw
        compiled = compile_dictionary(raw)
        logger.info(
            "Compiled dictionary %s: %d keys",
            _describe(source),
            len(compiled),
        )
        frozen = MappingProxyType(
            {k: MappingProxyType(per_locale) for k, per_locale in compiled.items()}
        )
        return _CacheEntry(
            source=source,
            compiled=frozen,
            resources=loaded.resources,
            stamps=loaded.stamps,
        )

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        with self._lock.write():
            self._entries.clear()
        with self._stats_lock:
            self._hits = 0
            self._compilations = 0
            self._reloads = 0
        logger.debug("Dictionary cache cleared")

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with keys:
            - entries (int): Compiled dictionaries currently cached
            - hits (int): Calls served from an existing entry
            - compilations (int): Successful builds, reloads included
            - reloads (int): Builds that replaced a stale entry
        """
        with self._lock.read():
            entries = len(self._entries)
        with self._stats_lock:
            return {
                "entries": entries,
                "hits": self._hits,
                "compilations": self._compilations,
                "reloads": self._reloads,
            }


def _describe(source: DictionarySource) -> str:
    if isinstance(source, str):
        return repr(source)
    if source is None:
        return "<empty>"
    return f"<inline dictionary, {len(source)} locales>"


# Process-wide cache shared by translators that do not bring their own.
DEFAULT_CACHE = DictionaryCache()
