"""i18n system - internationalization and localization framework.

Resolves a caller's preferred language from an HTTP request (or an
explicit locale) and renders localized, printf-style messages with
singular/plural forms and a fallback to the default locale.

Main components:
- models: LocaleTag, Localization, LookupPosition, LookupSource
- matcher: LocaleMatcher with weighted language tag matching
- loader: file, bytes and in-memory localization loaders
- translator: Translator with printf-style substitution
- resolvers: request locale extraction and LocaleResolver
- service: I18n facade
- factory: create_i18n() and friends
- middleware / dispatcher: ASGI integration
"""

from infrastructure.i18n.config import I18nConfig
from infrastructure.i18n.dispatcher import LocalizedDispatcher
from infrastructure.i18n.exceptions import ConfigError, I18nError, LocalizationLoadError
from infrastructure.i18n.factory import (
    create_i18n,
    create_i18n_from_file,
    create_i18n_from_settings,
)
from infrastructure.i18n.formatting import sprintf
from infrastructure.i18n.loader import (
    BytesLocalizationLoader,
    FileLocalizationLoader,
    LocalizationFormat,
    LocalizationLoader,
    MappingLocalizationLoader,
)
from infrastructure.i18n.matcher import (
    LocaleMatcher,
    MatchConfidence,
    parse_accept_language,
)
from infrastructure.i18n.middleware import LocaleMiddleware, get_request_locale
from infrastructure.i18n.models import (
    DEFAULT_HTTP_LOOKUP_STRATEGY,
    DEFAULT_LOCALE,
    Localization,
    LocalizationTable,
    LocaleTag,
    LookupPosition,
    LookupSource,
)
from infrastructure.i18n.resolvers import LocaleOverride, LocaleResolver, extract_locale
from infrastructure.i18n.service import I18n
from infrastructure.i18n.translator import Translator

__all__ = [
    "DEFAULT_HTTP_LOOKUP_STRATEGY",
    "DEFAULT_LOCALE",
    "BytesLocalizationLoader",
    "ConfigError",
    "FileLocalizationLoader",
    "I18n",
    "I18nConfig",
    "I18nError",
    "Localization",
    "LocalizationFormat",
    "LocalizationLoadError",
    "LocalizationLoader",
    "LocalizationTable",
    "LocaleMatcher",
    "LocaleMiddleware",
    "LocaleOverride",
    "LocaleResolver",
    "LocaleTag",
    "LocalizedDispatcher",
    "LookupPosition",
    "LookupSource",
    "MappingLocalizationLoader",
    "MatchConfidence",
    "Translator",
    "create_i18n",
    "create_i18n_from_file",
    "create_i18n_from_settings",
    "extract_locale",
    "get_request_locale",
    "parse_accept_language",
    "sprintf",
]
