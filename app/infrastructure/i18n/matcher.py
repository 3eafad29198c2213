"""Locale matching against an ordered set of supported locales.

Implements weighted language tag matching: a ranked Accept-Language style
value is matched against the supported locales, preferring the most
specific match and falling back to the default (first) locale.
"""

from enum import IntEnum
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from babel.core import get_global, parse_locale

from infrastructure.i18n.exceptions import ConfigError
from infrastructure.i18n.models import DEFAULT_LOCALE, LocaleTag
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DEFAULT_CACHE_SIZE = 1024


class MatchConfidence(IntEnum):
    """How well a requested tag matches a supported tag."""

    NO = 0
    LOW = 1
    HIGH = 2
    EXACT = 3


# Weakest match still accepted
MIN_CONFIDENCE = MatchConfidence.LOW


def parse_accept_language(value: str) -> List[LocaleTag]:
    """Parse an Accept-Language style value into tags by preference.

    Handles formats like:
    - "it"
    - "it-CH"
    - "fr-CH, fr;q=0.9, en;q=0.8, *;q=0.5"

    Entries with q=0 and the "*" wildcard are dropped. Entries with the
    same weight keep their original order.

    Args:
        value: Raw header/cookie/query value.

    Returns:
        Tags in descending preference order.

    Raises:
        ValueError: If any entry or weight is malformed.
    """
    entries: List[Tuple[float, LocaleTag]] = []

    for raw_part in value.split(","):
        part = raw_part.strip()
        if not part:
            continue

        tag_str, _, params = part.partition(";")
        tag_str = tag_str.strip()
        quality = 1.0

        # Extension parameters (e.g. "level=1") are allowed, only q is read
        for param in params.split(";") if params else ():
            name, sep, weight = param.strip().partition("=")
            if not sep:
                raise ValueError(f"Invalid language range parameter: {part!r}")
            if name.strip().lower() != "q":
                continue
            quality = float(weight.strip())
            if not 0.0 <= quality <= 1.0:
                raise ValueError(f"Language range weight out of range: {part!r}")

        if quality == 0.0 or tag_str == "*":
            continue

        entries.append((quality, LocaleTag.parse_candidate(tag_str)))

    entries.sort(key=lambda entry: entry[0], reverse=True)
    return [tag for _, tag in entries]


@lru_cache(maxsize=DEFAULT_CACHE_SIZE)
def likely_script(language: str, region: Optional[str] = None) -> Optional[str]:
    """Infer the script of a tag from CLDR likely subtags.

    Examples:
        zh, TW -> "Hant"
        zh -> "Hans"
        en -> "Latn"

    Returns:
        Script code, or None when CLDR has no data for the language.
    """
    likely_subtags = get_global("likely_subtags")
    keys = [f"{language}_{region}", language] if region else [language]
    for key in keys:
        expanded = likely_subtags.get(key)
        if expanded:
            try:
                script = parse_locale(expanded)[2]
            except ValueError:
                continue
            if script:
                return script
    return None


def match_confidence(requested: LocaleTag, supported: LocaleTag) -> MatchConfidence:
    """Rate how well a supported tag serves a requested tag.

    Missing scripts are inferred from the language and region, so zh-TW
    is treated as zh-Hant-TW.

    Examples:
        it-CH -> it-CH: EXACT
        it-CH -> it, zh-TW -> zh-Hant: HIGH
        en -> en-US, en-GB -> en-US: LOW
        zh-Hant -> zh-Hans, zh-TW -> zh-Hans, en -> it: NO
    """
    if requested.language != supported.language:
        return MatchConfidence.NO

    requested_script = requested.script or likely_script(
        requested.language, requested.region
    )
    supported_script = supported.script or likely_script(
        supported.language, supported.region
    )
    if requested_script and supported_script and requested_script != supported_script:
        return MatchConfidence.NO

    if requested == supported:
        return MatchConfidence.EXACT

    if supported.script in (None, requested_script) and supported.region in (
        None,
        requested.region,
    ):
        return MatchConfidence.HIGH

    return MatchConfidence.LOW


class LocaleMatcher:
    """Matches requested locales against the supported locale set.

    The supported set is ordered: the first locale is the default and
    wins ties. The instance is immutable after construction and safe to
    share between threads; resolutions are memoized in a bounded cache.

    Attributes:
        tags: Supported LocaleTags in configured order.
    """

    def __init__(
        self,
        supported: Optional[Sequence[str]] = None,
        strict: bool = False,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        """Build the matcher.

        Args:
            supported: Supported locale identifiers, most preferred first.
            strict: Raise instead of substituting "en" when supported is empty.
            cache_size: Maximum number of memoized resolutions.

        Raises:
            ConfigError: If supported is empty in strict mode, or if any
                identifier is not a valid locale.
        """
        locales = list(supported or [])
        if not locales:
            if strict:
                raise ConfigError("At least one supported locale must be configured")
            logger.warning("supported_locales_defaulted", default=DEFAULT_LOCALE)
            locales = [DEFAULT_LOCALE]

        tags: List[LocaleTag] = []
        for locale in locales:
            tag = LocaleTag.parse(locale)
            if tag not in tags:
                tags.append(tag)

        self._tags: Tuple[LocaleTag, ...] = tuple(tags)
        by_language: Dict[str, List[int]] = {}
        for index, tag in enumerate(self._tags):
            by_language.setdefault(tag.language, []).append(index)
        self._by_language: Dict[str, Tuple[int, ...]] = {
            language: tuple(indexes) for language, indexes in by_language.items()
        }
        self._match_cached = lru_cache(maxsize=cache_size)(self._match_index)

        logger.info(
            "locale_matcher_configured",
            locales=self.locales,
            default=self.default,
        )

    @property
    def tags(self) -> Tuple[LocaleTag, ...]:
        return self._tags

    @property
    def locales(self) -> List[str]:
        """Supported locale identifiers in configured order."""
        return [str(tag) for tag in self._tags]

    @property
    def default(self) -> str:
        """Default locale identifier (first supported)."""
        return str(self._tags[0])

    def match(self, candidate: Optional[str]) -> Tuple[LocaleTag, int, MatchConfidence]:
        """Match a raw candidate against the supported set.

        Args:
            candidate: Raw Accept-Language style value, may be empty.

        Returns:
            Tuple of (matched tag, index in supported set, confidence).
            The default tag with confidence NO is returned when nothing
            matches.
        """
        index, confidence = self._match_cached(candidate or "")
        if not 0 <= index < len(self._tags):
            return self._tags[0], 0, MatchConfidence.NO
        return self._tags[index], index, confidence

    def resolve_tag(self, candidate: Optional[str]) -> LocaleTag:
        """Resolve a raw candidate to a supported LocaleTag."""
        return self.match(candidate)[0]

    def resolve(self, candidate: Optional[str]) -> str:
        """Resolve a raw candidate to a supported locale identifier.

        Never raises: empty, malformed or unmatched candidates resolve
        to the default locale.

        Args:
            candidate: Raw Accept-Language style value (e.g., "it-CH,en;q=0.5").

        Returns:
            One of the supported locale identifiers.
        """
        return str(self.resolve_tag(candidate))

    def _match_index(self, candidate: str) -> Tuple[int, MatchConfidence]:
        if not candidate:
            return 0, MatchConfidence.NO

        try:
            preferences = parse_accept_language(candidate)
        except ValueError:
            logger.debug("unparseable_locale_candidate", candidate=candidate)
            return 0, MatchConfidence.NO

        for requested in preferences:
            best_index, best_confidence = -1, MatchConfidence.NO
            for index in self._by_language.get(requested.language, ()):
                confidence = match_confidence(requested, self._tags[index])
                if confidence > best_confidence:
                    best_index, best_confidence = index, confidence
            if best_confidence >= MIN_CONFIDENCE:
                logger.debug(
                    "locale_matched",
                    candidate=candidate,
                    locale=str(self._tags[best_index]),
                    confidence=best_confidence.name,
                )
                return best_index, best_confidence

        return 0, MatchConfidence.NO


def configure(supported: Optional[Sequence[str]], strict: bool = False) -> LocaleMatcher:
    """Build a LocaleMatcher for the supported locales.

    Args:
        supported: Supported locale identifiers, most preferred first.
        strict: Raise instead of substituting "en" when supported is empty.

    Returns:
        Immutable LocaleMatcher.
    """
    return LocaleMatcher(supported, strict=strict)
