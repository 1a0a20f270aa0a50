"""towerlex runtime package.

Provides the translation resolver, the default message formatter, and the
locale-aware formatting and parsing pass-throughs.

Python 3.13+.
"""

from .cache import DEFAULT_CACHE, DictionaryCache
from .formatting import format_message, format_value
from .localization import (
    localize,
    normalize_text,
    parse,
    sorted_localized_countries,
    sorted_localized_languages,
    sorted_timezones,
)
from .rwlock import RWLock
from .translator import TranslationConfig, Translator, make_t

__all__ = [
    "DEFAULT_CACHE",
    "DictionaryCache",
    "RWLock",
    "TranslationConfig",
    "Translator",
    "format_message",
    "format_value",
    "localize",
    "make_t",
    "normalize_text",
    "parse",
    "sorted_localized_countries",
    "sorted_localized_languages",
    "sorted_timezones",
]
