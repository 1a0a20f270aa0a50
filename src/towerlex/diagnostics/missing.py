"""Missing-translation reporting.

MissingTranslation is the diagnostic context handed to the
log-missing-translation callback. log_missing_translation is the default
callback: it logs through the standard logging module, at WARNING in dev
mode and DEBUG otherwise. Callers wanting metrics or stricter behavior pass
their own callback in TranslationConfig.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

__all__ = ["MissingTranslation", "log_missing_translation"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MissingTranslation:
    """Context of a translation that was not found in the requested locales.

    Attributes:
        locales: Requested locales as normalized tags, in preference order
        scope: Scope in effect for the lookup (None when unscoped)
        keys: Keys tried, as given by the caller (literals included)
        dev_mode: Whether the translator runs in dev mode

    Example:
        >>> def collect(info: MissingTranslation) -> None:
        ...     missing.add((info.locales[0], info.keys[0]))
        >>> t = make_t(TranslationConfig(dictionary=d, log_missing_translation_fn=collect))
    """

    locales: tuple[str, ...]
    scope: str | None
    keys: tuple[object, ...]
    dev_mode: bool = False


def log_missing_translation(info: MissingTranslation) -> None:
    """Default missing-translation callback."""
    level = logging.WARNING if info.dev_mode else logging.DEBUG
    logger.log(
        level,
        "Missing translation: locales=%s scope=%s keys=%s",
        list(info.locales),
        info.scope,
        list(info.keys),
    )
