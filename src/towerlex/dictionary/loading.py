"""Dictionary loading infrastructure.

Provides the protocol for dictionary resource loaders, a filesystem
implementation with path-traversal security, and the functions that turn a
dictionary source (inline mapping or resource name) into a raw dictionary
ready for compilation.

Components:
    DictionaryLoader - Protocol for loading named resources (structural typing)
    PathDictionaryLoader - Disk-based loader for JSON, TOML and YAML files
    LoadedDictionary - Raw dictionary plus the resources it was built from
    load_dictionary - Resolve a source and its per-locale imports
    inherit_parent_translations - Merge ancestor locales into each locale

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import yaml

from towerlex.diagnostics import DictionaryLoadError
from towerlex.dictionary.types import DictionarySource, RawDictionary, ResourceName
from towerlex.locale_utils import locale_key, locale_tree

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DictionaryLoader",
    # Concrete loader
    "PathDictionaryLoader",
    # Loading
    "LoadedDictionary",
    "load_dictionary",
    # Merging
    "deep_merge",
    "inherit_parent_translations",
]

logger = logging.getLogger(__name__)

_YAML_BOOL_TAG = "tag:yaml.org,2002:bool"


class DictionaryLoader(Protocol):
    """Protocol for loading named dictionary resources.

    Implementations must provide load() and last_modified(). The optional
    describe_path() gives a human-readable location for diagnostics.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders
    (package data, databases, remote config stores).

    Example:
        >>> class PackageLoader:
        ...     def load(self, name: str) -> Mapping[str, object]:
        ...         text = importlib.resources.files("myapp.i18n").joinpath(name).read_text()
        ...         return json.loads(text)
        ...     def last_modified(self, name: str) -> int | None:
        ...         return None  # Immutable package data: never reloads
        ...
        >>> t = make_t(TranslationConfig(dictionary="dict.json", loader=PackageLoader()))
    """

    def load(self, name: ResourceName) -> RawDictionary:
        """Load and parse a resource into a mapping.

        Raises:
            DictionaryLoadError: If the resource is missing, unreadable,
                unparsable, or does not hold a mapping
        """

    def last_modified(self, name: ResourceName) -> int | None:
        """Modification stamp of the resource, or None if unknown/missing."""

    def describe_path(self, name: ResourceName) -> str:
        """Return human-readable location for diagnostics."""
        return name


def _parse_json(text: str) -> object:
    return json.loads(text)


def _parse_toml(text: str) -> object:
    return tomllib.loads(text)


class _DictionaryYamlLoader(yaml.SafeLoader):
    """SafeLoader that resolves only true/false as booleans.

    yes/no/on/off stay strings, so the Norwegian locale root "no" and keys
    such as "on" load as written.
    """


_DictionaryYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
_DictionaryYamlLoader.add_implicit_resolver(
    _YAML_BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def _parse_yaml(text: str) -> object:
    return yaml.load(text, Loader=_DictionaryYamlLoader)  # noqa: S506 - SafeLoader subclass


_PARSERS = {
    ".json": _parse_json,
    ".toml": _parse_toml,
    ".yaml": _parse_yaml,
    ".yml": _parse_yaml,
}


@dataclass(frozen=True, slots=True)
class PathDictionaryLoader:
    """File system dictionary loader.

    Resolves resource names relative to a fixed root directory and parses
    them by suffix: .json (json), .toml (tomllib), .yaml/.yml (PyYAML).

    Security:
        Resource names containing ".." or absolute paths are rejected, and
        every resolved path is validated against the root directory.

    Example:
        >>> loader = PathDictionaryLoader("i18n")
        >>> raw = loader.load("dictionary.yaml")
        # Loads from: i18n/dictionary.yaml

    Attributes:
        root_dir: Directory resource names are resolved against
    """

    root_dir: str = "."
    _resolved_root: Path = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Cache the resolved root directory."""
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    @staticmethod
    def _validate_name(name: ResourceName) -> None:
        """Validate a resource name for path traversal attacks and whitespace.

        Raises:
            ValueError: If name is empty, padded, absolute, or traverses upward
        """
        if not name:
            msg = "Resource name cannot be empty"
            raise ValueError(msg)
        if name.strip() != name:
            msg = f"Resource name contains leading/trailing whitespace: {name!r}"
            raise ValueError(msg)
        if Path(name).is_absolute() or name.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in resource name: '{name}'"
            raise ValueError(msg)
        if ".." in Path(name).parts:
            msg = f"Path traversal sequences not allowed in resource name: '{name}'"
            raise ValueError(msg)

    def _resolve(self, name: ResourceName) -> Path:
        self._validate_name(name)
        full_path = (self._resolved_root / name).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = f"Path traversal detected: '{name}' escapes root directory"
            raise ValueError(msg) from None
        return full_path

    def describe_path(self, name: ResourceName) -> str:
        """Return the filesystem path a resource name resolves to."""
        return str(self._resolved_root / name)

    def last_modified(self, name: ResourceName) -> int | None:
        """Modification time in nanoseconds, or None if the file is absent."""
        try:
            return self._resolve(name).stat().st_mtime_ns
        except (OSError, ValueError):
            return None

    def load(self, name: ResourceName) -> RawDictionary:
        """Read and parse a dictionary file.

        Raises:
            DictionaryLoadError: Wrapping the path, I/O, or parse error
        """
        try:
            path = self._resolve(name)
            parser = _PARSERS.get(path.suffix.lower())
            if parser is None:
                msg = (
                    f"Unsupported dictionary format '{path.suffix}', "
                    f"expected one of {sorted(_PARSERS)}"
                )
                raise ValueError(msg)
            data = parser(path.read_text(encoding="utf-8"))
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise DictionaryLoadError(name, e) from e

        if not isinstance(data, Mapping):
            cause = TypeError(f"expected a mapping at top level, got {type(data).__name__}")
            raise DictionaryLoadError(name, cause) from cause
        logger.debug("Loaded dictionary resource %s", self.describe_path(name))
        return data


@dataclass(frozen=True, slots=True)
class LoadedDictionary:
    """Raw dictionary with the names of all resources read to build it.

    Attributes:
        raw: Raw dictionary with per-locale imports resolved
        resources: Resource names read, main resource first (empty for
            inline dictionaries without imports)
        stamps: last_modified() of each resource, taken before it was read
    """

    raw: RawDictionary
    resources: tuple[ResourceName, ...] = ()
    stamps: tuple[int | None, ...] = ()


def _load_resource(loader: DictionaryLoader, name: ResourceName) -> RawDictionary:
    try:
        return loader.load(name)
    except DictionaryLoadError:
        raise
    except (OSError, ValueError, TypeError) as e:
        raise DictionaryLoadError(name, e) from e


def load_dictionary(source: DictionarySource, loader: DictionaryLoader) -> LoadedDictionary:
    """Turn a dictionary source into a raw dictionary.

    A mapping is used as-is; a string names a resource to load. In both
    cases every locale-root entry whose value is a string is itself a
    resource name, loaded independently as that locale's namespace tree.

    Args:
        source: Inline mapping, resource name, or None (empty dictionary)
        loader: Loader used for every named resource

    Returns:
        LoadedDictionary with the resolved raw dictionary

    Raises:
        DictionaryLoadError: If any resource fails to load
    """
    resources: list[ResourceName] = []
    stamps: list[int | None] = []

    def read(name: ResourceName) -> RawDictionary:
        # Stamp first: an edit during the read then shows up as a newer stamp
        stamps.append(loader.last_modified(name))
        resources.append(name)
        return _load_resource(loader, name)

    if source is None:
        raw: RawDictionary = {}
    elif isinstance(source, str):
        raw = read(source)
    else:
        raw = source

    imports = {loc: value for loc, value in raw.items() if isinstance(value, str)}
    if not imports:
        return LoadedDictionary(raw=raw, resources=tuple(resources), stamps=tuple(stamps))

    resolved = dict(raw)
    for loc, name in imports.items():
        logger.debug("Importing dictionary for locale %s from %s", loc, name)
        resolved[loc] = read(name)
    return LoadedDictionary(raw=resolved, resources=tuple(resources), stamps=tuple(stamps))


def deep_merge(*maps: Mapping[str, object]) -> dict[str, object]:
    """Merge mappings recursively; later non-mapping values win.

    Example:
        >>> deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}})
        {'a': {'b': 1, 'c': 3}}
    """
    merged: dict[str, object] = {}
    for m in maps:
        for k, v in m.items():
            current = merged.get(k)
            if isinstance(current, Mapping) and isinstance(v, Mapping):
                merged[k] = deep_merge(current, v)
            elif isinstance(v, Mapping):
                merged[k] = deep_merge(v)
            else:
                merged[k] = v
    return merged


def inherit_parent_translations(raw: RawDictionary) -> dict[str, object]:
    """Merge each locale's entries over those of its ancestor locales.

    Ancestors are merged least specific first, so en-US-var1 sees en, then
    en-US, then its own entries. Locale roots are re-keyed to normalized
    tags. Roots that are not mappings are passed through untouched for the
    compiler to reject.

    Example:
        >>> inherit_parent_translations({"en": {"a": "A", "b": "B"}, "en_US": {"a": "US"}})
        {'en': {'a': 'A', 'b': 'B'}, 'en-US': {'a': 'US', 'b': 'B'}}
    """
    normalized: dict[str, object] = {}
    for loc, tree in raw.items():
        tag = locale_key(loc)
        existing = normalized.get(tag)
        if isinstance(existing, Mapping) and isinstance(tree, Mapping):
            normalized[tag] = deep_merge(existing, tree)
        else:
            normalized[tag] = tree

    inherited: dict[str, object] = {}
    for tag, tree in normalized.items():
        if not isinstance(tree, Mapping):
            inherited[tag] = tree
            continue
        ancestors = [
            normalized[parent]
            for parent in reversed(locale_tree(tag))
            if isinstance(normalized.get(parent), Mapping)
        ]
        inherited[tag] = deep_merge(*ancestors)  # type: ignore[arg-type]
    return inherited
