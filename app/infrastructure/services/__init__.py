"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    SettingsDep,
    I18nDep,
    LocaleDep,
    get_locale,
)
from infrastructure.services.providers import (
    get_settings,
    get_i18n,
)

__all__ = [
    "SettingsDep",
    "I18nDep",
    "LocaleDep",
    "get_locale",
    "get_settings",
    "get_i18n",
]
