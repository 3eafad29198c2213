"""Localization models for i18n system.

Defines core data structures for locales, localization entries and the
HTTP lookup strategy used to find a request locale.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from babel import Locale as BabelLocale
from babel import UnknownLocaleError
from babel.core import parse_locale

from infrastructure.i18n.exceptions import ConfigError

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class LocaleTag:
    """Structured language tag (e.g., "en", "it-CH", "zh-Hant-TW").

    Frozen to ensure immutability and hashability for caching.

    Attributes:
        language: Lowercase ISO 639 language code (e.g., "en").
        script: Optional ISO 15924 script code (e.g., "Hant").
        region: Optional ISO 3166 region code (e.g., "US").
    """

    language: str
    script: Optional[str] = None
    region: Optional[str] = None

    def __str__(self) -> str:
        """Return normalized BCP 47 form.

        Returns:
            Tag string (e.g., "en-US").
        """
        return "-".join(p for p in (self.language, self.script, self.region) if p)

    @classmethod
    def parse(cls, identifier: str) -> "LocaleTag":
        """Parse a locale identifier that must be known to CLDR.

        Used for the supported locale set, where an invalid identifier
        is a configuration error.

        Args:
            identifier: Locale identifier (e.g., "en", "en-US", "en_US").

        Returns:
            LocaleTag instance.

        Raises:
            ConfigError: If the identifier cannot be parsed.
        """
        if not isinstance(identifier, str) or not identifier.strip():
            raise ConfigError(f"Invalid locale identifier: {identifier!r}")
        try:
            tag = cls.parse_candidate(identifier)
            BabelLocale.parse(str(tag), sep="-")
        except (ValueError, TypeError, UnknownLocaleError) as e:
            raise ConfigError(f"Invalid locale identifier: {identifier!r}") from e
        return tag

    @classmethod
    def parse_candidate(cls, identifier: str) -> "LocaleTag":
        """Parse a requested language tag syntactically.

        Unlike parse(), the tag does not need to exist in CLDR: an unknown
        but well-formed tag such as "xx-ZZ" is accepted and will simply
        match nothing.

        Raises:
            ValueError: If the tag is not well-formed.
        """
        parts = parse_locale(identifier.strip().replace("_", "-"), sep="-")
        language, region, script = parts[0], parts[1], parts[2]
        return cls(language=language.lower(), script=script, region=region)


def normalize_locale(identifier: str) -> str:
    """Normalize a locale key to the form the matcher produces.

    "en_us" and "en-US" both become "en-US". Keys that are not
    well-formed tags are returned stripped but otherwise unchanged.
    """
    try:
        return str(LocaleTag.parse_candidate(identifier))
    except (ValueError, AttributeError):
        return str(identifier).strip()


@dataclass(frozen=True)
class Localization:
    """A localized message with singular and plural templates.

    Both templates are printf-style format strings (e.g., "%d item").

    Attributes:
        one: Singular template.
        other: Plural template.
    """

    one: str
    other: str

    def template(self, plural: bool) -> str:
        """Select the template for the requested plurality."""
        return self.other if plural else self.one

    @classmethod
    def from_value(cls, value: Any) -> "Localization":
        """Build a Localization from a decoded file value.

        Accepts a mapping with "one"/"other" keys (any case), a
        (one, other) pair, or a plain string used for both forms.

        Args:
            value: Decoded value.

        Returns:
            Localization instance.

        Raises:
            ValueError: If the value has an unsupported shape.
        """
        if isinstance(value, Localization):
            return value
        if isinstance(value, str):
            return cls(one=value, other=value)
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(one=str(value[0]), other=str(value[1]))
        if isinstance(value, Mapping):
            fields = {str(k).lower(): v for k, v in value.items()}
            one = fields.get("one")
            other = fields.get("other", one)
            if one is None:
                one = other
            if isinstance(one, str) and isinstance(other, str):
                return cls(one=one, other=other)
        raise ValueError(f"Unsupported localization entry: {value!r}")


# locale -> key -> Localization
LocalizationTable = Dict[str, Dict[str, Localization]]


class LookupSource(str, Enum):
    """Where to look for a locale candidate in an HTTP request."""

    HEADER = "header"
    COOKIE = "cookie"
    QUERY = "query"


@dataclass(frozen=True)
class LookupPosition:
    """A single (source, key) step of the HTTP lookup strategy.

    Attributes:
        source: Request part to inspect.
        key: Header name, cookie name or query parameter name.
    """

    source: LookupSource
    key: str

    @classmethod
    def from_string(cls, value: str) -> "LookupPosition":
        """Create LookupPosition from "source:key" string.

        Args:
            value: String like "header:Accept-Language" or "cookie:lang".

        Returns:
            LookupPosition instance.

        Raises:
            ValueError: If the string is not in "source:key" format.
        """
        parts = value.split(":", 1)
        if len(parts) != 2 or not parts[1].strip():
            raise ValueError(
                f"Lookup position must be in format 'source:key': {value}"
            )
        return cls(
            source=LookupSource(parts[0].strip().lower()),
            key=parts[1].strip(),
        )


DEFAULT_HTTP_LOOKUP_STRATEGY: Tuple[LookupPosition, ...] = (
    LookupPosition(LookupSource.HEADER, "Accept-Language"),
    LookupPosition(LookupSource.COOKIE, "lang"),
    LookupPosition(LookupSource.QUERY, "lang"),
)
