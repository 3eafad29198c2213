"""Locale resolution logic for determining a request's preferred language.

Extracts a raw locale candidate from an HTTP request, following an
optional application override and then an ordered lookup strategy
(headers, cookies, query parameters), and matches it against the
supported locales.
"""

from typing import Callable, Optional, Sequence, Tuple

from starlette.requests import HTTPConnection

from infrastructure.i18n.matcher import LocaleMatcher
from infrastructure.i18n.models import (
    DEFAULT_HTTP_LOOKUP_STRATEGY,
    LocaleTag,
    LookupPosition,
    LookupSource,
)
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Returns the request locale, or None/"" to fall through to the strategy.
# Non-string results are ignored
LocaleOverride = Callable[[HTTPConnection], Optional[str]]


def lookup(request: HTTPConnection, position: LookupPosition) -> str:
    """Read a single lookup position from the request.

    Args:
        request: Starlette/FastAPI request or websocket.
        position: Source and key to read.

    Returns:
        Stripped value, or "" if absent.
    """
    if position.source is LookupSource.HEADER:
        value = request.headers.get(position.key)
    elif position.source is LookupSource.COOKIE:
        value = request.cookies.get(position.key)
    else:
        value = request.query_params.get(position.key)
    return (value or "").strip()


def extract_locale(
    request: Optional[HTTPConnection],
    override: Optional[LocaleOverride] = None,
    strategy: Sequence[LookupPosition] = DEFAULT_HTTP_LOOKUP_STRATEGY,
) -> str:
    """Extract the raw locale candidate from a request.

    Resolution order:
    1. override(request), if given and non-empty
    2. Each strategy position in order, first non-empty value wins
    3. "" (the matcher resolves it to the default locale)

    Args:
        request: Starlette/FastAPI request, may be None.
        override: Optional application hook (e.g., user profile locale).
        strategy: Ordered lookup positions.

    Returns:
        Raw candidate string, possibly empty. Never raises.
    """
    if request is None:
        return ""

    if override is not None:
        try:
            locale = override(request)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("locale_override_failed", error=str(e))
            locale = None
        if isinstance(locale, str) and locale.strip():
            return locale.strip()
        if locale is not None and not isinstance(locale, str):
            logger.warning("locale_override_invalid", type=type(locale).__name__)

    for position in strategy:
        value = lookup(request, position)
        if value:
            return value

    return ""


class LocaleResolver:
    """Resolves the request locale against the supported locales.

    Immutable: use with_override() to get a resolver with another hook.

    Attributes:
        matcher: LocaleMatcher for the supported locales.
        strategy: Ordered lookup positions.
        override: Optional application hook consulted first.
    """

    def __init__(
        self,
        matcher: LocaleMatcher,
        strategy: Optional[Sequence[LookupPosition]] = None,
        override: Optional[LocaleOverride] = None,
    ):
        self.matcher = matcher
        self.strategy: Tuple[LookupPosition, ...] = tuple(
            strategy if strategy is not None else DEFAULT_HTTP_LOOKUP_STRATEGY
        )
        self.override = override

    def extract(self, request: Optional[HTTPConnection]) -> str:
        """Extract the raw locale candidate from the request."""
        return extract_locale(request, self.override, self.strategy)

    def resolve_tag(self, request: Optional[HTTPConnection]) -> LocaleTag:
        return self.matcher.resolve_tag(self.extract(request))

    def resolve(self, request: Optional[HTTPConnection]) -> str:
        """Resolve the request locale.

        Args:
            request: Starlette/FastAPI request, may be None.

        Returns:
            One of the supported locale identifiers, the default when
            nothing matches.
        """
        candidate = self.extract(request)
        locale = self.matcher.resolve(candidate)
        logger.debug("locale_resolved", candidate=candidate, locale=locale)
        return locale

    def with_override(self, override: Optional[LocaleOverride]) -> "LocaleResolver":
        return LocaleResolver(self.matcher, self.strategy, override)
