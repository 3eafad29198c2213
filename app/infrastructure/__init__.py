"""Infrastructure modules for the localization service.

Centralized infrastructure components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- i18n: Locale resolution and translation
- services: Dependency injection services (SettingsDep, I18nDep, LocaleDep)
"""

# Configuration
from infrastructure.configuration import settings

# Observability
from infrastructure.logging import get_module_logger

__all__ = [
    "settings",
    "get_module_logger",
]
