"""Internationalization infrastructure settings."""

import json
from typing import List, Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class I18nSettings(InfrastructureSettings):
    """Localization configuration.

    Environment Variables:
        I18N_LOCALES: Comma-separated or JSON list of supported locales,
            most preferred first. The first one is the default (default: "en")
        I18N_PATH: Directory holding one localization file per locale
            (e.g., en.yaml, it.json). Defaults to the bundled
            infrastructure/i18n/locales
        I18N_CONFIG_FILE: Optional YAML/TOML/JSON i18n config file. When set,
            it takes precedence over the other variables
        I18N_LOOKUP_STRATEGY: Comma-separated "source:key" steps used to find
            the request locale (default:
            "header:Accept-Language,cookie:lang,query:lang")
        I18N_STRICT_LOCALES: Reject an empty I18N_LOCALES instead of
            substituting "en" (default: False)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        locales = settings.i18n.locales  # ["en", "it"]
        strategy = settings.i18n.lookup_strategy
        ```
    """

    LOCALES: str = Field(default="en", alias="I18N_LOCALES")
    PATH: Optional[str] = Field(default=None, alias="I18N_PATH")
    CONFIG_FILE: Optional[str] = Field(default=None, alias="I18N_CONFIG_FILE")
    LOOKUP_STRATEGY: str = Field(
        default="header:Accept-Language,cookie:lang,query:lang",
        alias="I18N_LOOKUP_STRATEGY",
    )
    STRICT_LOCALES: bool = Field(default=False, alias="I18N_STRICT_LOCALES")

    @field_validator("LOCALES", "LOOKUP_STRATEGY", mode="before")
    @classmethod
    def validate_csv(cls, v) -> str:
        """Accept a comma-separated string, a JSON list or a list."""
        if v is None:
            return ""
        if isinstance(v, str) and v.strip().startswith("["):
            v = json.loads(v)
        if isinstance(v, (list, tuple)):
            return ",".join(str(item) for item in v)
        return v

    @property
    def locales(self) -> List[str]:
        """Supported locales, in configured order."""
        return [item.strip() for item in self.LOCALES.split(",") if item.strip()]

    @property
    def lookup_strategy(self) -> List[str]:
        """Lookup strategy steps as "source:key" strings."""
        return [
            item.strip() for item in self.LOOKUP_STRATEGY.split(",") if item.strip()
        ]
