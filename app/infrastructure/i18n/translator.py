"""Translation service for retrieving and formatting localized messages.

The Translator holds an immutable snapshot of the localization table and
never raises while translating: a locale that was never loaded falls back
to the default locale, and a missing key renders as the key itself.
"""

from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence

from infrastructure.i18n.formatting import sprintf
from infrastructure.i18n.loader import LocalizationLoader
from infrastructure.i18n.models import Localization, normalize_locale
from infrastructure.logging import get_module_logger

logger = get_module_logger()

_EMPTY: Mapping[str, Localization] = MappingProxyType({})


class Translator:
    """Service for translating keys with printf-style parameters.

    Attributes:
        default_locale: Locale whose entries are used when the requested
            locale was never loaded.
    """

    def __init__(
        self,
        localizations: Mapping[str, Mapping[str, Localization]],
        default_locale: str,
    ):
        """Initialize Translator.

        Args:
            localizations: Table of locale -> key -> Localization. It is
                copied, later changes to the argument are not seen. Locale
                keys are normalized ("en_us" -> "en-US").
            default_locale: Fallback locale (first supported locale).
        """
        self.default_locale = normalize_locale(default_locale)
        self._localizations: Mapping[str, Mapping[str, Localization]] = (
            MappingProxyType(
                {
                    normalize_locale(locale): MappingProxyType(dict(entries))
                    for locale, entries in localizations.items()
                }
            )
        )
        logger.info(
            "initialized_translator",
            default_locale=default_locale,
            locales=list(self._localizations.keys()),
        )

    @classmethod
    def from_loader(
        cls,
        loader: LocalizationLoader,
        locales: Sequence[str],
    ) -> "Translator":
        """Create a Translator with every supported locale loaded.

        Args:
            loader: LocalizationLoader to read entries from.
            locales: Supported locales, the first one is the default.

        Returns:
            Translator instance.

        Raises:
            LocalizationLoadError: If the loader fails for any locale.
        """
        return cls(loader.load_all(locales), default_locale=locales[0])

    def load(self, localizations: Mapping[str, Mapping[str, Localization]]) -> "Translator":
        """Return a new Translator serving the given table.

        The current instance is left untouched so concurrent readers keep
        a consistent snapshot.
        """
        return Translator(localizations, default_locale=self.default_locale)

    @property
    def locales(self) -> List[str]:
        """Locales present in the table."""
        return list(self._localizations.keys())

    def _entries(self, locale: str) -> Optional[Mapping[str, Localization]]:
        entries = self._localizations.get(locale)
        if entries is None:
            entries = self._localizations.get(normalize_locale(locale))
        return entries

    def get_localization(self, locale: str, key: str) -> Optional[Localization]:
        """Get the raw entry for key in locale, without any fallback."""
        return (self._entries(locale) or _EMPTY).get(key)

    def has_key(self, key: str, locale: str) -> bool:
        """Check if key exists in locale (no fallback)."""
        return self.get_localization(locale, key) is not None

    def translate(self, locale: str, plural: bool, key: str, *params: Any) -> str:
        """Translate key into locale and substitute params.

        Args:
            locale: Resolved locale identifier.
            plural: Select the plural ("other") template instead of "one".
            key: Message key.
            *params: Positional values for the template verbs.

        Returns:
            Formatted message, or key unchanged when it is not localized.
        """
        entries = self._entries(locale)
        if entries is None:
            logger.debug(
                "locale_not_loaded",
                locale=locale,
                default_locale=self.default_locale,
            )
            entries = self._localizations.get(self.default_locale, _EMPTY)

        localization = entries.get(key)
        if localization is None:
            logger.warning("translation_key_missing", key=key, locale=locale)
            return key

        return sprintf(localization.template(plural), *params)

    def t(self, locale: str, key: str, *params: Any) -> str:
        """Translate key using the singular template."""
        return self.translate(locale, False, key, *params)

    def tp(self, locale: str, key: str, *params: Any) -> str:
        """Translate key using the plural template."""
        return self.translate(locale, True, key, *params)
