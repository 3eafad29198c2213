"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.i18n import I18n, create_i18n_from_settings


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_i18n() -> I18n:
    """
    Get application-scoped localization service singleton.

    Built once from I18N_* settings; setup errors surface on first use.

    Returns:
        I18n: Cached, immutable localization service.

    Usage:
        @router.get("/hello")
        def hello(i18n: I18nDep, locale: LocaleDep):
            return {"message": i18n.t(locale, "SAY_HELLO", "Marco")}
    """
    return create_i18n_from_settings(get_settings().i18n)
