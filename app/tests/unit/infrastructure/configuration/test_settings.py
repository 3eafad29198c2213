"""Unit tests for infrastructure.configuration.settings module.

Tests cover:
- I18nSettings validation and defaults
- Settings class initialization
- Integration with Pydantic BaseSettings
"""

import pytest

from infrastructure.configuration import I18nSettings, Settings
from infrastructure.services.providers import get_settings


@pytest.mark.unit
class TestI18nSettings:
    """Test suite for I18nSettings configuration."""

    def test_i18n_settings_defaults(self, monkeypatch):
        """I18nSettings uses correct default values."""
        for name in (
            "I18N_LOCALES",
            "I18N_PATH",
            "I18N_CONFIG_FILE",
            "I18N_LOOKUP_STRATEGY",
            "I18N_STRICT_LOCALES",
        ):
            monkeypatch.delenv(name, raising=False)

        i18n = I18nSettings()

        assert i18n.locales == ["en"]
        assert i18n.PATH is None
        assert i18n.CONFIG_FILE is None
        assert i18n.lookup_strategy == [
            "header:Accept-Language",
            "cookie:lang",
            "query:lang",
        ]
        assert i18n.STRICT_LOCALES is False

    def test_i18n_settings_from_environment(self, monkeypatch):
        """I18nSettings reads I18N_* variables."""
        monkeypatch.setenv("I18N_LOCALES", "it, en")
        monkeypatch.setenv("I18N_PATH", "/srv/locales")
        monkeypatch.setenv("I18N_LOOKUP_STRATEGY", "cookie:lang,header:Accept-Language")
        monkeypatch.setenv("I18N_STRICT_LOCALES", "true")

        i18n = I18nSettings()

        assert i18n.locales == ["it", "en"]
        assert i18n.PATH == "/srv/locales"
        assert i18n.lookup_strategy == ["cookie:lang", "header:Accept-Language"]
        assert i18n.STRICT_LOCALES is True

    def test_i18n_settings_accepts_lists(self):
        """Locales and lookup strategy accept lists."""
        i18n = I18nSettings(I18N_LOCALES=["en", "it"], I18N_LOOKUP_STRATEGY=["query:l"])

        assert i18n.locales == ["en", "it"]
        assert i18n.lookup_strategy == ["query:l"]

    def test_i18n_settings_json_list(self, monkeypatch):
        """I18N_LOCALES accepts a JSON list."""
        monkeypatch.setenv("I18N_LOCALES", "[\"it\", \"en\"]")

        assert I18nSettings().locales == ["it", "en"]

    def test_i18n_settings_empty_locales(self, monkeypatch):
        """An empty I18N_LOCALES yields no locales."""
        monkeypatch.setenv("I18N_LOCALES", "")

        assert I18nSettings().locales == []


@pytest.mark.unit
class TestSettings:
    """Test suite for the Settings aggregator."""

    def test_settings_builds_subsettings(self):
        """Settings instantiates I18nSettings automatically."""
        settings = Settings()
        assert isinstance(settings.i18n, I18nSettings)

    def test_settings_accepts_subsettings_override(self):
        """Settings uses a given I18nSettings instance."""
        i18n = I18nSettings(I18N_LOCALES="it")
        settings = Settings(i18n=i18n)
        assert settings.i18n.locales == ["it"]

    def test_is_production(self, monkeypatch):
        """Production is an empty PREFIX."""
        monkeypatch.setenv("PREFIX", "")
        assert Settings().is_production is True

        monkeypatch.setenv("PREFIX", "dev-")
        assert Settings().is_production is False

    def test_log_level_from_environment(self, monkeypatch):
        """LOG_LEVEL is read from the environment."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert Settings().LOG_LEVEL == "DEBUG"

    def test_get_settings_provider(self):
        """The provider returns a Settings singleton."""
        assert get_settings() is get_settings()
        assert isinstance(get_settings(), Settings)

    def test_log_max_value_length(self, monkeypatch):
        """LOG_MAX_VALUE_LENGTH is read from the environment."""
        monkeypatch.setenv("LOG_MAX_VALUE_LENGTH", "64")
        assert Settings().LOG_MAX_VALUE_LENGTH == 64
