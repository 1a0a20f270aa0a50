"""Enumerations for towerlex type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum

__all__ = ["DECORATOR_MARKERS", "Decorator"]


class Decorator(StrEnum):
    """Text transformation selected by a dictionary key's suffix marker.

    StrEnum provides automatic string conversion: str(Decorator.VERBATIM) == "verbatim"
    """

    COMMENT = "comment"
    """Note for translators: greeting_note = "Keep it short". Never compiled."""

    VERBATIM = "verbatim"
    """Trusted HTML, passed through unchanged: title! = "<b>Hi</b>" """

    INLINE_MARKDOWN = "inline-markdown"
    """Default for undecorated keys: HTML-escaped, then inline markdown."""

    BLOCK_MARKDOWN = "block-markdown"
    """HTML-escaped, then block markdown (paragraphs, headings, lists): body_md"""

    ESCAPE = "escape"
    """HTML-escaped only, no markdown: code_esc = "2 * 3 * 4" """

    @property
    def discards(self) -> bool:
        """True if entries with this decorator produce no compiled output."""
        return self is Decorator.COMMENT


# Suffix markers recognized on raw dictionary keys. Matched longest first.
DECORATOR_MARKERS: dict[str, Decorator] = {
    "_comment": Decorator.COMMENT,
    "_note": Decorator.COMMENT,
    "_html": Decorator.VERBATIM,
    "!": Decorator.VERBATIM,
    "_md": Decorator.BLOCK_MARKDOWN,
    "_esc": Decorator.ESCAPE,
}
