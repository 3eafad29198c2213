"""Factory functions for creating i18n components.

Setup is the only stage that can fail; everything it builds is immutable.
"""

from pathlib import Path
from typing import Any, Optional, Union

from infrastructure.configuration import I18nSettings
from infrastructure.i18n.config import I18nConfig
from infrastructure.i18n.exceptions import ConfigError
from infrastructure.i18n.loader import (
    FileLocalizationLoader,
    LocalizationLoader,
    MappingLocalizationLoader,
)
from infrastructure.i18n.matcher import LocaleMatcher
from infrastructure.i18n.resolvers import LocaleOverride, LocaleResolver
from infrastructure.i18n.service import I18n
from infrastructure.i18n.translator import Translator
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def create_loader(config: I18nConfig) -> LocalizationLoader:
    """Pick the localization source from config.

    Raises:
        ConfigError: If neither path nor localizations are set.
    """
    if config.path:
        return FileLocalizationLoader(config.path)
    if config.localizations is not None:
        return MappingLocalizationLoader(config.localizations)
    raise ConfigError("Either a localizations path or localizations must be provided")


def create_i18n(
    config: Optional[I18nConfig] = None,
    override: Optional[LocaleOverride] = None,
    loader: Optional[LocalizationLoader] = None,
    **config_fields: Any,
) -> I18n:
    """Create and configure an I18n service.

    Args:
        config: I18nConfig. Built from config_fields when omitted.
        override: Optional hook returning the request locale.
        loader: Optional loader replacing config.path/localizations
            (e.g., a BytesLocalizationLoader).
        **config_fields: I18nConfig fields (locales, path, localizations,
            http_lookup_strategy, strict_locales).

    Returns:
        I18n: Configured service

    Raises:
        ConfigError: If locales are invalid, no localization source is
            configured, or a localization file is missing or undecodable.

    Usage:
        i18n = create_i18n(locales=["en", "it"], path="./locales")

        i18n = create_i18n(
            locales=["en", "it"],
            localizations={"en": {"GEM": {"one": "Oops %s", "other": "Oops %s"}}},
        )
    """
    if config is None:
        config = I18nConfig.from_dict(config_fields)
    elif config_fields:
        config = I18nConfig.from_dict({**config.model_dump(), **config_fields})

    matcher = LocaleMatcher(config.locales, strict=config.strict_locales)
    loader = loader or create_loader(config)
    translator = Translator.from_loader(loader, matcher.locales)
    resolver = LocaleResolver(matcher, config.http_lookup_strategy, override)

    logger.info(
        "i18n_created",
        locales=matcher.locales,
        loader=type(loader).__name__,
        lookup_strategy=[f"{p.source.value}:{p.key}" for p in resolver.strategy],
    )
    return I18n(matcher, translator, resolver)


def create_i18n_from_file(
    config_path: Union[str, Path],
    override: Optional[LocaleOverride] = None,
) -> I18n:
    """Create an I18n service from a YAML/TOML/JSON config file (e.g., i18n.yaml)."""
    return create_i18n(I18nConfig.from_file(config_path), override=override)


def create_i18n_from_settings(
    settings: Optional[I18nSettings] = None,
    override: Optional[LocaleOverride] = None,
) -> I18n:
    """Create an I18n service from I18N_* environment settings.

    Without I18N_PATH the bundled infrastructure/i18n/locales directory is used.
    """
    settings = settings or I18nSettings()
    return create_i18n(I18nConfig.from_settings(settings), override=override)
