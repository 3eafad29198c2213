"""i18n configuration model.

The Locales order is important: they must be ordered from the most
preferred to the least one, the first one is the default.

Set path OR localizations; path takes precedence. Use localizations for
hardcoded entries (useful to embed i18n in other packages), otherwise set
path to load one localization file per locale.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from infrastructure.configuration import I18nSettings
from infrastructure.i18n.exceptions import ConfigError
from infrastructure.i18n.loader import LocalizationFormat
from infrastructure.i18n.models import (
    DEFAULT_HTTP_LOOKUP_STRATEGY,
    LookupPosition,
    LookupSource,
)

# Bundled localizations shipped as package data
DEFAULT_LOCALIZATIONS_DIR = Path(__file__).resolve().parent / "locales"


def _to_lookup_position(value: Any) -> LookupPosition:
    if isinstance(value, LookupPosition):
        return value
    if isinstance(value, str):
        return LookupPosition.from_string(value)
    if isinstance(value, dict):
        source = value.get("source", value.get("id"))
        key = value.get("key")
        if source is None or not key:
            raise ValueError(f"Lookup position needs 'source' and 'key': {value}")
        if not isinstance(source, LookupSource):
            source = LookupSource(str(source).lower())
        return LookupPosition(source=source, key=str(key))
    raise ValueError(f"Unsupported lookup position: {value!r}")


class I18nConfig(BaseModel):
    """Localization configuration.

    Attributes:
        locales: Supported locales, most preferred first. The first is the
            default. Empty means "en" unless strict_locales is set.
        path: Directory with one localization file per locale.
        localizations: Hardcoded localizations (locale -> key -> entry).
        http_lookup_strategy: Ordered request positions to read the
            locale from.
        strict_locales: Reject an empty locales list.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    locales: List[str] = Field(default_factory=list)
    path: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("path", "localizations_path"),
    )
    localizations: Optional[Dict[str, Dict[str, Any]]] = Field(
        default=None,
        validation_alias=AliasChoices("localizations", "locs"),
    )
    http_lookup_strategy: List[LookupPosition] = Field(
        default_factory=lambda: list(DEFAULT_HTTP_LOOKUP_STRATEGY),
    )
    strict_locales: bool = False

    @field_validator("locales", mode="before")
    @classmethod
    def validate_locales(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("http_lookup_strategy", mode="before")
    @classmethod
    def validate_http_lookup_strategy(cls, v: Any) -> List[LookupPosition]:
        """Parse "source:key" strings or {source, key} mappings."""
        if not v:
            return list(DEFAULT_HTTP_LOOKUP_STRATEGY)
        if isinstance(v, str):
            v = [item for item in v.split(",") if item.strip()]
        return [_to_lookup_position(item) for item in v]

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "I18nConfig":
        """Load configuration from a YAML, TOML or JSON file.

        A relative localizations path is resolved against the config
        file directory.

        Example (i18n.yaml):
            locales: [en, it]
            localizations_path: ./locales

        Args:
            config_path: Config file path.

        Returns:
            I18nConfig instance.

        Raises:
            ConfigError: If the file is missing, undecodable or invalid.
        """
        config_path = Path(config_path)
        try:
            fmt = LocalizationFormat.from_path(config_path)
            content = config_path.read_bytes()
        except (ValueError, OSError) as e:
            raise ConfigError(f"Invalid i18n config file '{config_path}': {e}") from e

        data = fmt.decode(content, str(config_path)) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"i18n config file '{config_path}' must hold a mapping")

        config = cls.from_dict(data)
        if config.path and not Path(config.path).is_absolute():
            resolved = (config_path.parent / config.path).resolve()
            config = config.model_copy(update={"path": str(resolved)})
        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "I18nConfig":
        """Validate a config mapping.

        Raises:
            ConfigError: If the mapping is invalid.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid i18n config: {e}") from e

    @classmethod
    def from_settings(cls, settings: I18nSettings) -> "I18nConfig":
        """Build configuration from environment settings.

        I18N_CONFIG_FILE, when set, takes precedence.
        """
        if settings.CONFIG_FILE:
            return cls.from_file(settings.CONFIG_FILE)
        return cls.from_dict(
            {
                "locales": settings.locales,
                "path": settings.PATH or str(DEFAULT_LOCALIZATIONS_DIR),
                "http_lookup_strategy": settings.lookup_strategy,
                "strict_locales": settings.STRICT_LOCALES,
            }
        )
