"""Shared constants for towerlex.

Centralizes limits, sentinels and defaults used by the locale, dictionary
and runtime packages. Keeping them here avoids circular imports between
those packages.

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale handling
    "NIL_LOCALE",
    "SYSTEM_LOCALE",
    "DEFAULT_FALLBACK_LOCALE",
    "BABEL_FALLBACK_LOCALE",
    # Cache limits
    "MAX_LOCALE_TREE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    "MAX_SCOPED_KEY_CACHE_SIZE",
    # Dictionary structure
    "MIN_DICTIONARY_PATH_LENGTH",
    "MISSING_KEY",
    "ALIAS_PREFIX",
    # Diagnostics
    "NIL_REPR",
]

# ============================================================================
# LOCALE HANDLING
# ============================================================================

# Tag used for an absent locale so lookups degrade instead of raising.
NIL_LOCALE: str = "nil"

# Keyword resolving to the host platform's default locale.
SYSTEM_LOCALE: str = "system"

# Locale retried when a translation is missing in the requested locales.
DEFAULT_FALLBACK_LOCALE: str = "en"

# Babel locale used for formatting when no part of a tag is known to CLDR.
BABEL_FALLBACK_LOCALE: str = "en_US"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum entries in a merged multi-locale search tree. Bounds the number of
# dictionary lookups per key on every resolve call.
MAX_LOCALE_TREE_SIZE: int = 6

# Memo table sizes. Bounded by the locales and keys an application actually
# uses; 4096 covers large multi-region deployments.
MAX_LOCALE_CACHE_SIZE: int = 4096
MAX_SCOPED_KEY_CACHE_SIZE: int = 16384

# ============================================================================
# DICTIONARY STRUCTURE
# ============================================================================

# Shortest leaf path: (locale, key, text).
MIN_DICTIONARY_PATH_LENGTH: int = 3

# Reserved unscoped key holding the missing-translation pattern.
MISSING_KEY: str = "missing"

# Prefix marking a text leaf as an alias to another key, e.g. "@:example/foo".
ALIAS_PREFIX: str = "@:"

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Rendering of an absent value in missing-translation patterns.
NIL_REPR: str = "nil"
