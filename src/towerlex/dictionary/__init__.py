"""Dictionary loading, compilation and caching.

Python 3.13+.
"""

from .compiler import alias_target, compile_dictionary, leaf_paths, split_decorated_key
from .loading import (
    DictionaryLoader,
    LoadedDictionary,
    PathDictionaryLoader,
    deep_merge,
    inherit_parent_translations,
    load_dictionary,
)
from .markup import block_markdown, escape_html, inline_markdown
from .types import (
    CompiledDictionary,
    DictionarySource,
    LocaleTag,
    QualifiedKey,
    RawDictionary,
    ResourceName,
)

__all__ = [
    "CompiledDictionary",
    "DictionaryLoader",
    "DictionarySource",
    "LoadedDictionary",
    "LocaleTag",
    "PathDictionaryLoader",
    "QualifiedKey",
    "RawDictionary",
    "ResourceName",
    "alias_target",
    "block_markdown",
    "compile_dictionary",
    "deep_merge",
    "escape_html",
    "inherit_parent_translations",
    "inline_markdown",
    "leaf_paths",
    "load_dictionary",
    "split_decorated_key",
]
