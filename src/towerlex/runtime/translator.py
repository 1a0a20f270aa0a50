"""Translation resolver.

make_t() turns a TranslationConfig into a Translator: a callable resolving
(locales, keys, *fmt_args) into display-ready text.

Resolution order for t(locales, keys, *fmt_args, scope=...):

1. Build the locale tree of the requested locales.
2. Scope every key in the leading run of string keys. The first
   (locale, key) pair with a compiled entry wins, searching all keys
   against the most preferred tree entry before moving to the next.
3. Nothing found and the last element is a literal: use the literal as the
   text (a None literal is returned as-is, even with arguments). The
   missing-translation callback is not called.
4. Otherwise report the miss to the callback and search again with the
   fallback locale's tree.
5. Still nothing: format the unscoped "missing" pattern, if any locale of
   either tree has one, with the requested locales, scope and keys.
6. Format the text with the positional arguments, if any.

Example:
    >>> t = make_t(TranslationConfig(dictionary={
    ...     "en": {"example": {"greeting": "Hello {0}"}},
    ... }))
    >>> t("en-GB", "example/greeting", "Steve")
    'Hello Steve'

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from towerlex.constants import DEFAULT_FALLBACK_LOCALE, MISSING_KEY, NIL_REPR
from towerlex.diagnostics import (
    EmptyPatternFormatError,
    MissingTranslation,
    log_missing_translation,
)
from towerlex.dictionary.loading import DictionaryLoader, PathDictionaryLoader
from towerlex.dictionary.types import CompiledDictionary, DictionarySource, LocaleTag
from towerlex.keys import is_key, literal_value, scoped
from towerlex.locale_utils import LocaleLike, locale_key, locale_tree
from towerlex.runtime.cache import DEFAULT_CACHE, DictionaryCache
from towerlex.runtime.formatting import format_message

__all__ = ["TranslationConfig", "Translator", "make_t"]

logger = logging.getLogger(__name__)

type FormatFunction = Callable[..., str]
type MissingTranslationCallback = Callable[[MissingTranslation], None]
type Locales = LocaleLike | Sequence[LocaleLike]
type Keys = object
"""One key, one literal, or a list of keys optionally ending in a literal."""


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


_UNSET = _Unset()


@dataclass(frozen=True, slots=True)
class TranslationConfig:
    """Immutable configuration of a Translator.

    Attributes:
        dictionary: Inline raw dictionary, resource name, or None (empty)
        dev_mode: Rebuild when a backing resource file changes, and report
            missing translations at WARNING instead of DEBUG
        fallback_locale: Locale searched after the requested ones (None
            disables the fallback step)
        scope: Default scope for calls that do not pass one
        fmt_fn: Formatter called as fmt_fn(locale_tag, pattern, *args)
        log_missing_translation_fn: Callback receiving MissingTranslation
        loader: Loader for named resources (default: PathDictionaryLoader
            rooted at the current directory)
        inherit_parents: Merge ancestor locales into each locale at compile
            time (en-US gains every en entry it does not define itself)
        cache: Compiled-dictionary cache (default: the process-wide cache)

    Example:
        >>> config = TranslationConfig(
        ...     dictionary="i18n/dictionary.yaml",
        ...     dev_mode=True,
        ...     fallback_locale="en",
        ... )
    """

    dictionary: DictionarySource = None
    dev_mode: bool = False
    fallback_locale: LocaleLike = DEFAULT_FALLBACK_LOCALE
    scope: str | None = None
    fmt_fn: FormatFunction = format_message
    log_missing_translation_fn: MissingTranslationCallback = log_missing_translation
    loader: DictionaryLoader | None = None
    inherit_parents: bool = False
    cache: DictionaryCache | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            TypeError: If dictionary is neither a mapping, a string nor None,
                or if a callback is not callable
        """
        if self.dictionary is not None and not isinstance(self.dictionary, (str, Mapping)):
            msg = (
                "dictionary must be a mapping, a resource name or None, "
                f"got {type(self.dictionary).__name__}"
            )
            raise TypeError(msg)
        if self.scope is not None and not isinstance(self.scope, str):
            msg = f"scope must be a string or None, got {type(self.scope).__name__}"
            raise TypeError(msg)
        if not callable(self.fmt_fn):
            msg = "fmt_fn must be callable"
            raise TypeError(msg)
        if not callable(self.log_missing_translation_fn):
            msg = "log_missing_translation_fn must be callable"
            raise TypeError(msg)


def _nstr(value: object) -> str:
    """Diagnostic rendering: None as nil, sequences as [a b]."""
    match value:
        case None:
            return NIL_REPR
        case str():
            return value
        case list() | tuple():
            return "[" + " ".join(_nstr(item) for item in value) + "]"
        case _:
            return str(literal_value(value))


class Translator:
    """Callable translation resolver bound to one configuration.

    Stateless apart from the shared compiled-dictionary cache, so one
    instance can serve every thread.

    Example:
        >>> t = make_t(TranslationConfig(dictionary={"en": {"a": {"b": "B"}}}))
        >>> t("en", "a/b")
        'B'
        >>> t("en", ["a/zzz", Fallback("literal")])
        'literal'
    """

    __slots__ = ("_cache", "_config", "_fmt_fn", "_loader")

    def __init__(self, config: TranslationConfig) -> None:
        """Initialize the translator.

        Args:
            config: Translator configuration
        """
        self._config = config
        self._fmt_fn: FormatFunction = config.fmt_fn
        self._loader: DictionaryLoader = config.loader or PathDictionaryLoader()
        self._cache: DictionaryCache = config.cache or DEFAULT_CACHE

    @property
    def config(self) -> TranslationConfig:
        """Configuration this translator was built from."""
        return self._config

    @property
    def compiled_dictionary(self) -> CompiledDictionary:
        """Current compiled dictionary, compiling or reloading if needed.

        Raises:
            DictionaryLoadError: If a resource fails to load
            MalformedDictionaryPathError: If the dictionary cannot be compiled
        """
        return self._cache.get(
            self._config.dictionary,
            self._loader,
            dev_mode=self._config.dev_mode,
            inherit_parents=self._config.inherit_parents,
        )

    @staticmethod
    def _search(
        compiled: CompiledDictionary,
        tree: Sequence[LocaleTag],
        qualified_keys: Sequence[str],
    ) -> str | None:
        for loc in tree:
            for key in qualified_keys:
                per_locale = compiled.get(key)
                if per_locale is not None and loc in per_locale:
                    return per_locale[loc]
        return None

    def translate(
        self,
        locales: Locales,
        keys: Keys,
        *fmt_args: object,
        scope: str | None | _Unset = _UNSET,
    ) -> object:
        """Resolve keys into text for the given locales.

        Args:
            locales: One locale or a list of locales, most preferred first
            keys: One key or a list of keys, most preferred first. A final
                non-string element (None, Fallback) is an explicit fallback.
            *fmt_args: Positional arguments for the formatter
            scope: Scope prefixed to every key (default: config scope)

        Returns:
            Formatted text; the explicit fallback literal; or None when
            nothing was found and no "missing" pattern exists

        Raises:
            EmptyPatternFormatError: If fmt_args are given but nothing resolved
            DictionaryLoadError: If the dictionary resource fails to load
            MalformedDictionaryPathError: If the dictionary cannot be compiled
        """
        config = self._config
        if isinstance(scope, _Unset):
            scope = config.scope

        key_list: tuple[object, ...] = (
            tuple(keys) if isinstance(keys, (list, tuple)) else (keys,)
        )
        qualified: list[str] = []
        for item in key_list:
            if not is_key(item):
                break
            qualified_key = scoped(scope, item)  # type: ignore[arg-type]
            if qualified_key is not None:
                qualified.append(qualified_key)

        requested = tuple(locales) if isinstance(locales, (list, tuple)) else (locales,)
        preferred = locale_key(requested[0]) if requested else locale_key(config.fallback_locale)

        compiled = self.compiled_dictionary
        tree = locale_tree(locales)
        text = self._search(compiled, tree, qualified)

        if text is None and key_list and not is_key(key_list[-1]):
            literal = literal_value(key_list[-1])
            logger.debug("Keys %r not found, using explicit fallback", key_list[:-1])
            if not isinstance(literal, str):
                return literal
            text = literal
        elif text is None:
            config.log_missing_translation_fn(
                MissingTranslation(
                    locales=tuple(locale_key(loc) for loc in requested),
                    scope=scope,
                    keys=key_list,
                    dev_mode=config.dev_mode,
                )
            )
            fallback_tree: tuple[str, ...] = ()
            if config.fallback_locale is not None:
                fallback_tree = locale_tree(config.fallback_locale)
                text = self._search(compiled, fallback_tree, qualified)

            if text is None:
                combined = tuple(dict.fromkeys((*tree, *fallback_tree)))
                pattern = self._search(compiled, combined, (MISSING_KEY,))
                if pattern is not None:
                    text = self._fmt_fn(
                        preferred,
                        pattern,
                        _nstr(locales),
                        _nstr(scope),
                        _nstr(keys),
                    )

        if not fmt_args:
            return text
        if text is None:
            raise EmptyPatternFormatError(key_list)
        return self._fmt_fn(preferred, text, *fmt_args)

    __call__ = translate

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"Translator(dictionary={self._config.dictionary!r:.60}, "
            f"fallback_locale={self._config.fallback_locale!r}, "
            f"dev_mode={self._config.dev_mode})"
        )


def make_t(config: TranslationConfig) -> Translator:
    """Build a translator from a configuration.

    Compilation is lazy: the dictionary is loaded and compiled on the first
    call and shared through the configured cache.
    """
    return Translator(config)
