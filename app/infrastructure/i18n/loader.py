"""Localization loading interface and implementations.

Defines the contract for loading localization tables and provides
file, raw bytes and in-memory loaders. The file format is chosen by
extension, never by trial decoding.
"""

import json
import tomllib
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

import yaml

from infrastructure.i18n.exceptions import LocalizationLoadError
from infrastructure.i18n.models import Localization, LocalizationTable, normalize_locale
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class LocalizationFormat(str, Enum):
    """Structured data formats accepted for localization files."""

    YAML = "yaml"
    TOML = "toml"
    JSON = "json"

    @property
    def extensions(self) -> Tuple[str, ...]:
        """File extensions for this format (lowercase, with dot)."""
        return _EXTENSIONS[self]

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "LocalizationFormat":
        """Detect format from a file extension (case-insensitive).

        Args:
            path: File path (e.g., "locales/en.yml").

        Returns:
            Matching LocalizationFormat.

        Raises:
            ValueError: If the extension is not supported.
        """
        suffix = Path(path).suffix.lower()
        for fmt, extensions in _EXTENSIONS.items():
            if suffix in extensions:
                return fmt
        raise ValueError(f"Unknown data format, can't decode file: '{path}'")

    def decode(self, data: Union[bytes, str], source: str = "<bytes>") -> Any:
        """Decode raw content.

        Args:
            data: Encoded content.
            source: Description of the content origin, used in errors.

        Returns:
            Decoded data structure.

        Raises:
            LocalizationLoadError: If the content cannot be decoded.
        """
        try:
            text = data.decode("utf-8") if isinstance(data, bytes) else data
            if self is LocalizationFormat.YAML:
                return yaml.safe_load(text)
            if self is LocalizationFormat.TOML:
                return tomllib.loads(text)
            return json.loads(text)
        except (yaml.YAMLError, ValueError) as e:
            logger.error(
                "localization_decode_error",
                source=source,
                format=self.value,
                error=str(e),
            )
            raise LocalizationLoadError(
                f"Failed to decode {source} as {self.value}: {e}"
            ) from e


_EXTENSIONS: Dict[LocalizationFormat, Tuple[str, ...]] = {
    LocalizationFormat.YAML: (".yaml", ".yml"),
    LocalizationFormat.TOML: (".toml",),
    LocalizationFormat.JSON: (".json",),
}


def parse_localizations(data: Any, source: str) -> Dict[str, Localization]:
    """Convert decoded data into key -> Localization entries.

    Expected format:
    KEY:
      one: "%d item"
      other: "%d items"

    Args:
        data: Decoded data (mapping of key to entry).
        source: Description of the data origin, used in errors.

    Returns:
        Dict of key to Localization.

    Raises:
        LocalizationLoadError: If the data does not have the expected shape.
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise LocalizationLoadError(
            f"Expected a mapping of localization keys in {source}, "
            f"got {type(data).__name__}"
        )

    entries: Dict[str, Localization] = {}
    for key, value in data.items():
        try:
            entries[str(key)] = Localization.from_value(value)
        except ValueError as e:
            raise LocalizationLoadError(
                f"Invalid localization entry '{key}' in {source}: {e}"
            ) from e
    return entries


class LocalizationLoader(ABC):
    """Abstract base for localization loaders.

    Implementations define where localization entries for a locale come
    from. The Translator only consumes the resulting table.
    """

    @abstractmethod
    def load(self, locale: str) -> Dict[str, Localization]:
        """Load localization entries for a specific locale.

        Args:
            locale: Locale identifier (e.g., "en").

        Returns:
            Dict of key to Localization.

        Raises:
            LocalizationLoadError: If the source is missing or invalid.
        """
        pass

    def has_source(self, locale: str) -> bool:
        """Whether this loader holds entries for locale.

        Locales without a source are left out of load_all(), so the
        Translator serves them from the default locale.
        """
        return True

    def load_all(self, locales: Sequence[str]) -> LocalizationTable:
        """Load localization entries for every given locale.

        Args:
            locales: Supported locale identifiers.

        Returns:
            Dict mapping locale to its entries, without the locales that
            have no source.
        """
        table: LocalizationTable = {}
        for locale in locales:
            if not self.has_source(locale):
                logger.warning("no_localization_source", locale=locale)
                continue
            table[locale] = self.load(locale)
        return table


class FileLocalizationLoader(LocalizationLoader):
    """Loader for one localization file per locale.

    Expects files named <locale>.<ext> (e.g., en.yaml, it.json, en-US.toml)
    directly inside localizations_dir. File names are matched
    case-insensitively and "_" may stand in for "-". When several files
    match a locale they are merged in name order, later entries winning.

    Attributes:
        localizations_dir: Directory containing localization files.
        cache: Cache of loaded entries (locale -> entries).
    """

    def __init__(
        self,
        localizations_dir: Union[str, Path],
        use_cache: bool = True,
    ):
        """Initialize file localization loader.

        Args:
            localizations_dir: Directory with localization files.
            use_cache: Whether to cache loaded entries in memory.

        Raises:
            LocalizationLoadError: If the directory does not exist.
        """
        self.localizations_dir = Path(localizations_dir)
        self.use_cache = use_cache
        self.cache: Dict[str, Dict[str, Localization]] = {}

        if not self.localizations_dir.is_dir():
            raise LocalizationLoadError(
                f"Localizations directory not found: {self.localizations_dir}"
            )

        logger.info(
            "initialized_file_loader",
            localizations_dir=str(self.localizations_dir),
            use_cache=use_cache,
        )

    def find_files(self, locale: str) -> list:
        """Find the localization files for a locale.

        Args:
            locale: Locale identifier.

        Returns:
            Sorted list of matching file paths.
        """
        stems = {locale.lower(), locale.lower().replace("-", "_")}
        found = []
        for path in self.localizations_dir.iterdir():
            if not path.is_file():
                continue
            try:
                LocalizationFormat.from_path(path)
            except ValueError:
                continue
            if path.stem.lower() in stems:
                found.append(path)
        return sorted(found)

    def load(self, locale: str) -> Dict[str, Localization]:
        if self.use_cache and locale in self.cache:
            logger.debug("loaded_from_cache", locale=locale)
            return self.cache[locale]

        files = self.find_files(locale)
        if not files:
            raise LocalizationLoadError(
                f"No localization file found for locale '{locale}' "
                f"in {self.localizations_dir}"
            )

        entries: Dict[str, Localization] = {}
        for path in files:
            fmt = LocalizationFormat.from_path(path)
            try:
                content = path.read_bytes()
            except OSError as e:
                raise LocalizationLoadError(f"Failed to read {path}: {e}") from e
            entries.update(parse_localizations(fmt.decode(content, str(path)), str(path)))

        logger.info(
            "loaded_localizations",
            locale=locale,
            file_count=len(files),
            key_count=len(entries),
        )

        if self.use_cache:
            self.cache[locale] = entries

        return entries

    def clear_cache(self) -> None:
        """Clear all cached localizations."""
        self.cache.clear()
        logger.info("cleared_localization_cache")


class BytesLocalizationLoader(LocalizationLoader):
    """Loader for raw encoded localization blobs.

    Useful to embed localizations in other packages without touching
    the filesystem.

    Example:
        loader = BytesLocalizationLoader({
            "en": (LocalizationFormat.YAML, b"GEM: {one: 'Oops %s', other: 'Oops %s'}"),
        })
    """

    def __init__(
        self,
        sources: Mapping[str, Tuple[Union[LocalizationFormat, str], Union[bytes, str]]],
    ):
        self.sources = {
            normalize_locale(locale): (LocalizationFormat(fmt), data)
            for locale, (fmt, data) in sources.items()
        }

    def has_source(self, locale: str) -> bool:
        return normalize_locale(locale) in self.sources

    def load(self, locale: str) -> Dict[str, Localization]:
        source = self.sources.get(normalize_locale(locale))
        if source is None:
            logger.warning("no_localization_source", locale=locale)
            return {}
        fmt, data = source
        description = f"<{locale}.{fmt.value}>"
        return parse_localizations(fmt.decode(data, description), description)


class MappingLocalizationLoader(LocalizationLoader):
    """Loader for hardcoded, already decoded localizations.

    Values may be Localization instances, {"one": ..., "other": ...}
    mappings, (one, other) pairs or plain strings.
    """

    def __init__(self, localizations: Mapping[str, Mapping[str, Any]]):
        self.localizations = {
            normalize_locale(locale): entries
            for locale, entries in localizations.items()
        }

    def has_source(self, locale: str) -> bool:
        return normalize_locale(locale) in self.localizations

    def load(self, locale: str) -> Dict[str, Localization]:
        data: Optional[Mapping[str, Any]] = self.localizations.get(
            normalize_locale(locale)
        )
        if data is None:
            logger.warning("no_localization_source", locale=locale)
            return {}
        return parse_localizations(data, f"<{locale}>")
