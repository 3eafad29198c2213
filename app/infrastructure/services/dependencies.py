"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated

from fastapi import Depends, Request

from infrastructure.configuration import Settings
from infrastructure.i18n import I18n, get_request_locale
from infrastructure.services.providers import get_i18n, get_settings

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Localization service dependency
I18nDep = Annotated[I18n, Depends(get_i18n)]


def get_locale(request: Request, i18n: I18nDep) -> str:
    """Request locale, as set by LocaleMiddleware or resolved on demand."""
    return get_request_locale(request, i18n)


# Resolved request locale dependency
LocaleDep = Annotated[str, Depends(get_locale)]

__all__ = [
    "SettingsDep",
    "I18nDep",
    "LocaleDep",
    "get_locale",
]
