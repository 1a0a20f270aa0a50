"""Type aliases for the dictionary domain.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "CompiledDictionary",
    "DictionarySource",
    "LocaleTag",
    "QualifiedKey",
    "RawDictionary",
    "ResourceName",
]

type LocaleTag = str
"""Normalized dash-separated locale tag (e.g., 'en', 'en-US', 'en-US-var1')."""

type QualifiedKey = str
"""Canonical scoped key (e.g., 'example/foo', 'example.bar/baz', 'missing')."""

type ResourceName = str
"""Name of a dictionary resource understood by a DictionaryLoader."""

type RawDictionary = Mapping[str, object]
"""Nested mapping: locale -> namespace* -> decorated key -> text or alias."""

type DictionarySource = RawDictionary | ResourceName | None
"""Inline raw dictionary, or the name of a resource holding one."""

type CompiledDictionary = Mapping[QualifiedKey, Mapping[LocaleTag, str]]
"""Flattened, decorated, alias-resolved text: key -> locale -> text."""
