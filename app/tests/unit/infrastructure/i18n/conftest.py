"""Feature-level fixtures for i18n system tests.

Provides localization files, services and request builders for locale
resolution and translation scenarios.
"""

import json

import pytest
import yaml

from infrastructure.i18n import FileLocalizationLoader, LocaleMatcher, Translator
from tests.factories.i18n import make_i18n, make_localizations


@pytest.fixture
def temp_localizations_dir(tmp_path):
    """Create temporary directory with sample localization files.

    Returns a directory structure like:
    - en.yaml
    - it.json
    - notes.txt (ignored)
    """
    en = {
        "GEM": {
            "one": "Something went wrong %s",
            "other": "Some things went wrong %s",
        },
        "ITEMS": {"one": "%d item", "other": "%d items"},
    }
    with open(tmp_path / "en.yaml", "w", encoding="utf-8") as f:
        yaml.dump(en, f, allow_unicode=True)

    it = {
        "GEM": {
            "One": "Qualcosa è andato storto %s",
            "Other": "Alcune cose sono andate storte %s",
        },
        "ITEMS": {"one": "%d elemento", "other": "%d elementi"},
    }
    with open(tmp_path / "it.json", "w", encoding="utf-8") as f:
        json.dump(it, f, ensure_ascii=False)

    (tmp_path / "notes.txt").write_text("not a localization file")

    return tmp_path


@pytest.fixture
def file_loader(temp_localizations_dir):
    """Create FileLocalizationLoader for temporary localizations directory."""
    return FileLocalizationLoader(temp_localizations_dir, use_cache=False)


@pytest.fixture
def matcher():
    """LocaleMatcher supporting en (default) and it."""
    return LocaleMatcher(["en", "it"])


@pytest.fixture
def translator():
    """Translator over the shared en/it table."""
    return Translator(make_localizations(), default_locale="en")


@pytest.fixture
def i18n():
    """I18n service over the shared en/it table."""
    return make_i18n()


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_it": "it",
        "regional_it": "it-CH",
        "with_quality": "it-CH,it;q=0.9,en;q=0.8",
        "quality_ordering": "en;q=0.3,it;q=0.9",
        "unsupported_first": "de-DE,it;q=0.5",
        "wildcard": "*;q=0.8,it;q=0.5",
        "invalid_quality": "it;q=invalid,en",
    }
