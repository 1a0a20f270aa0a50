"""Error types and missing-translation diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .errors import (
    DictionaryLoadError,
    EmptyPatternFormatError,
    MalformedDictionaryPathError,
    TowerError,
    UnknownStyleError,
)
from .missing import MissingTranslation, log_missing_translation

__all__ = [
    "DictionaryLoadError",
    "EmptyPatternFormatError",
    "MalformedDictionaryPathError",
    "MissingTranslation",
    "TowerError",
    "UnknownStyleError",
    "log_missing_translation",
]
