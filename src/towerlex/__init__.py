"""towerlex - translation resolution for display-ready, localized text.

Callers describe translations as a nested dictionary (locale -> namespace
path -> key -> text) and get back a resolver that picks the best text for
a locale or locale-preference list, with fallback through parent locales,
a configured fallback locale, and a "missing" pattern.

Public API:
    make_t - Build a translator from a TranslationConfig
    TranslationConfig - Immutable translator configuration
    Translator - Callable resolver returned by make_t
    Fallback - Literal fallback text in a key list
    Alias - Dictionary entry redirecting to another key
    scoped - Compose scopes and keys into one canonical key
    locale_key - Normalize a locale to its tag
    locale_tree - Ordered locale search sequence
    Decorator - Text transformation selected by a key suffix

Exceptions:
    TowerError - Base exception class
    DictionaryLoadError - Dictionary resource could not be loaded
    MalformedDictionaryPathError - Dictionary leaf cannot be compiled
    UnknownStyleError - Unsupported formatting style
    EmptyPatternFormatError - Formatting requested without a pattern

Submodules:
    towerlex.dictionary - Loaders, compiler and compiled-dictionary cache
    towerlex.runtime - Resolver, default formatter, localization helpers
    towerlex.diagnostics - Error types and missing-translation reporting
"""

from .diagnostics import (
    DictionaryLoadError,
    EmptyPatternFormatError,
    MalformedDictionaryPathError,
    MissingTranslation,
    TowerError,
    UnknownStyleError,
)
from .dictionary import PathDictionaryLoader
from .enums import Decorator
from .keys import Alias, Fallback, scoped
from .locale_utils import locale_key, locale_tree
from .runtime import DictionaryCache, TranslationConfig, Translator, make_t

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("towerlex")
except PackageNotFoundError:
    # Running from a source checkout without installation
    __version__ = "0.0.0+dev"

__all__ = [
    "Alias",
    "Decorator",
    "DictionaryCache",
    "DictionaryLoadError",
    "EmptyPatternFormatError",
    "Fallback",
    "MalformedDictionaryPathError",
    "MissingTranslation",
    "PathDictionaryLoader",
    "TowerError",
    "TranslationConfig",
    "Translator",
    "UnknownStyleError",
    "__version__",
    "locale_key",
    "locale_tree",
    "make_t",
    "scoped",
]
