"""Localization service facade.

Composes the LocaleMatcher, Translator and LocaleResolver into the single
object applications share. Instances are immutable snapshots: build one at
startup and share it between requests, threads and tasks.
"""

from typing import Any, List, Mapping, Optional

from starlette.requests import HTTPConnection

from infrastructure.i18n.matcher import LocaleMatcher
from infrastructure.i18n.models import Localization, LocaleTag
from infrastructure.i18n.resolvers import LocaleOverride, LocaleResolver
from infrastructure.i18n.translator import Translator


class I18n:
    """Class-based localization service.

    Usage:
        i18n = create_i18n(locales=["en", "it"], path="./locales")

        # Explicit locale
        i18n.t("en", "SAY_HELLO", "Marco")      # "Hello, Marco!"
        i18n.tp("it", "ITEMS", 5)               # "5 elementi"

        # Locale from the request (override -> header/cookie/query)
        i18n.auto_t(request, "SAY_HELLO", "Marco")

        # Locale only, e.g. to pick a localized static site
        locale = i18n.get_locale(request)
    """

    def __init__(
        self,
        matcher: LocaleMatcher,
        translator: Translator,
        resolver: Optional[LocaleResolver] = None,
    ):
        self._matcher = matcher
        self._translator = translator
        self._resolver = resolver or LocaleResolver(matcher)

    @property
    def matcher(self) -> LocaleMatcher:
        return self._matcher

    @property
    def translator(self) -> Translator:
        return self._translator

    @property
    def resolver(self) -> LocaleResolver:
        return self._resolver

    @property
    def default_locale(self) -> str:
        """Default locale (first supported)."""
        return self._matcher.default

    @property
    def locales(self) -> List[str]:
        """Supported locales in configured order."""
        return self._matcher.locales

    def match_locale(self, candidate: Optional[str]) -> str:
        """Match a raw locale candidate (e.g., "it-CH") to a supported locale."""
        return self._matcher.resolve(candidate)

    def get_locale(self, request: Optional[HTTPConnection]) -> str:
        """Resolve the request locale. Always returns a supported locale."""
        return self._resolver.resolve(request)

    def get_locale_tag(self, request: Optional[HTTPConnection]) -> LocaleTag:
        return self._resolver.resolve_tag(request)

    def translate(self, locale: str, plural: bool, key: str, *params: Any) -> str:
        """Translate key for an explicit locale.

        Args:
            locale: Locale identifier.
            plural: Use the plural template.
            key: Message key.
            *params: printf-style parameters.

        Returns:
            Localized message, or key when not localized.
        """
        return self._translator.translate(locale, plural, key, *params)

    def t(self, locale: str, key: str, *params: Any) -> str:
        return self._translator.translate(locale, False, key, *params)

    def tp(self, locale: str, key: str, *params: Any) -> str:
        return self._translator.translate(locale, True, key, *params)

    def auto_translate(
        self,
        request: Optional[HTTPConnection],
        plural: bool,
        key: str,
        *params: Any,
    ) -> str:
        """Translate key for the locale resolved from the request."""
        return self._translator.translate(self.get_locale(request), plural, key, *params)

    def auto_t(self, request: Optional[HTTPConnection], key: str, *params: Any) -> str:
        return self.auto_translate(request, False, key, *params)

    def auto_tp(self, request: Optional[HTTPConnection], key: str, *params: Any) -> str:
        return self.auto_translate(request, True, key, *params)

    def with_override(self, override: Optional[LocaleOverride]) -> "I18n":
        """Return a new service using override to read the request locale.

        The hook is consulted before the lookup strategy; returning None
        or "" falls through to headers, cookies and query parameters.
        """
        return I18n(self._matcher, self._translator, self._resolver.with_override(override))

    def with_localizations(
        self,
        localizations: Mapping[str, Mapping[str, Localization]],
    ) -> "I18n":
        """Return a new service serving another localization table.

        Callers swap the returned instance in place of the old one; the
        old instance keeps serving its own snapshot.
        """
        return I18n(self._matcher, self._translator.load(localizations), self._resolver)
