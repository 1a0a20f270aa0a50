"""towerlex exception hierarchy.

All library errors derive from TowerError. Missing translations are not
errors: they are reported through the missing-translation callback and
handled by the resolver's fallback chain.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "DictionaryLoadError",
    "EmptyPatternFormatError",
    "MalformedDictionaryPathError",
    "TowerError",
    "UnknownStyleError",
]


class TowerError(Exception):
    """Base exception for all towerlex errors."""


class DictionaryLoadError(TowerError):
    """A named dictionary resource could not be found, read, or parsed.

    Fatal for the resolve call that triggered compilation. The cache keeps
    its previous state, so the next call retries the load.

    Attributes:
        resource: Name of the resource that failed to load
        cause: Underlying I/O or parse error (also chained as __cause__)
    """

    def __init__(self, resource: str, cause: BaseException | None = None) -> None:
        """Initialize DictionaryLoadError.

        Args:
            resource: Resource name as given by the caller
            cause: Underlying exception, if any
        """
        msg = f"Failed to load dictionary from resource: {resource!r}"
        if cause is not None:
            msg = f"{msg} ({type(cause).__name__}: {cause})"
        super().__init__(msg)
        self.resource = resource
        self.cause = cause


class MalformedDictionaryPathError(TowerError):
    """A raw dictionary leaf cannot be compiled.

    Raised for leaf paths shorter than (locale, key, text), for aliases
    that point at another alias, and for aliases that point at a namespace
    instead of a text leaf.

    Attributes:
        path: Offending leaf path (locale first)
        reason: Short human-readable explanation
    """

    def __init__(self, path: Sequence[object], reason: str) -> None:
        """Initialize MalformedDictionaryPathError.

        Args:
            path: Offending leaf path
            reason: Why the path cannot be compiled
        """
        self.path = tuple(path)
        self.reason = reason
        super().__init__(f"Malformed dictionary path {list(self.path)!r}: {reason}")


class UnknownStyleError(TowerError, ValueError):
    """Unsupported formatting style or placeholder type.

    Attributes:
        style: The rejected style token
    """

    def __init__(self, style: object) -> None:
        """Initialize UnknownStyleError.

        Args:
            style: The rejected style token
        """
        self.style = style
        super().__init__(f"Unknown style: {style!r}")


class EmptyPatternFormatError(TowerError):
    """Formatting arguments were supplied but no pattern was resolved.

    Distinguishes "nothing to format" from a pattern that formats to "".

    Attributes:
        keys: Keys that were tried
    """

    def __init__(self, keys: Sequence[object]) -> None:
        """Initialize EmptyPatternFormatError.

        Args:
            keys: Keys that were tried
        """
        self.keys = tuple(keys)
        super().__init__(f"Cannot format absent translation pattern for keys {list(self.keys)!r}")
