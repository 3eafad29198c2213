"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Localization settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    locales = settings.i18n.locales
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.infrastructure.i18n import I18nSettings

__all__ = ["Settings", "settings", "I18nSettings"]
