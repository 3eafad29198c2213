"""Tests for infrastructure.i18n.translator module."""

# pylint: disable=protected-access

import pytest

from infrastructure.i18n import Localization, MappingLocalizationLoader, Translator
from tests.factories.i18n import GEM, make_localizations


class TestTranslator:
    """Tests for Translator service."""

    def test_translator_initialization(self, translator):
        """Translator keeps the default locale and loaded locales."""
        assert translator.default_locale == "en"
        assert translator.locales == ["en", "it"]

    def test_table_is_a_snapshot(self):
        """Later changes to the source table are not seen."""
        table = make_localizations()
        translator = Translator(table, default_locale="en")
        table["en"][GEM] = Localization("changed", "changed")
        table["fr"] = {}
        assert translator.t("en", GEM, "Marco") == "Something went wrong Marco"
        assert "fr" not in translator.locales

    def test_table_is_read_only(self, translator):
        """The installed table cannot be mutated."""
        with pytest.raises(TypeError):
            translator._localizations["en"]["NEW"] = Localization("a", "b")

    def test_translate_singular(self, translator):
        """translate() uses the "one" template."""
        assert translator.translate("en", False, GEM, "Marco") == (
            "Something went wrong Marco"
        )

    def test_translate_plural(self, translator):
        """translate() uses the "other" template when plural."""
        assert translator.translate("it", True, GEM, "Marco") == (
            "Alcune cose sono andate storte Marco"
        )

    def test_plural_selection_with_count(self, translator):
        """Plural selection is driven by the flag."""
        assert translator.translate("en", False, "ITEMS", 1) == "1 item"
        assert translator.translate("en", True, "ITEMS", 5) == "5 items"

    def test_t_and_tp_shortcuts(self, translator):
        """t() and tp() select singular and plural."""
        assert translator.t("it", "ITEMS", 1) == "1 elemento"
        assert translator.tp("it", "ITEMS", 3) == "3 elementi"

    def test_missing_key_returns_key(self, translator):
        """Unknown keys render as the key itself."""
        assert translator.translate("en", False, "NO_SUCH_KEY") == "NO_SUCH_KEY"
        assert translator.tp("it", "NO_SUCH_KEY", 1, 2) == "NO_SUCH_KEY"

    def test_unknown_locale_uses_default(self, translator):
        """Locales that were never loaded fall back to the default table."""
        assert translator.t("fr", GEM, "Marco") == "Something went wrong Marco"

    def test_missing_default_table_returns_key(self):
        """Without any table the key is returned."""
        translator = Translator({}, default_locale="en")
        assert translator.t("it", GEM) == GEM

    def test_key_missing_in_locale_is_not_borrowed(self):
        """A key missing in a loaded locale renders as the key."""
        table = make_localizations()
        del table["it"]["ITEMS"]
        translator = Translator(table, default_locale="en")
        assert translator.t("it", "ITEMS", 2) == "ITEMS"

    def test_parameter_mismatch_never_raises(self, translator):
        """Missing and surplus params degrade gracefully."""
        assert translator.t("en", GEM) == "Something went wrong %s"
        assert translator.t("en", GEM, "a", "b") == "Something went wrong a"

    def test_has_key(self, translator):
        """has_key() checks the exact locale only."""
        assert translator.has_key(GEM, "it")
        assert not translator.has_key(GEM, "fr")
        assert not translator.has_key("NO_SUCH_KEY", "en")

    def test_get_localization(self, translator):
        """get_localization() returns the raw entry."""
        assert translator.get_localization("en", "ITEMS") == Localization(
            "%d item", "%d items"
        )
        assert translator.get_localization("fr", "ITEMS") is None

    def test_load_returns_new_translator(self, translator):
        """load() swaps in a new snapshot without touching the original."""
        updated = translator.load({"en": {GEM: Localization("New %s", "News %s")}})
        assert updated is not translator
        assert updated.default_locale == "en"
        assert updated.t("en", GEM, "x") == "New x"
        assert translator.t("en", GEM, "x") == "Something went wrong x"

    def test_from_loader(self):
        """from_loader() loads every locale and uses the first as default."""
        loader = MappingLocalizationLoader({"it": {GEM: "Ops %s"}, "en": {GEM: "Oops %s"}})
        translator = Translator.from_loader(loader, ["it", "en"])
        assert translator.default_locale == "it"
        assert translator.t("de", GEM, "!") == "Ops !"


class TestEndToEnd:
    """Scenario from the supported locales down to rendered text."""

    def test_generic_error_message(self, i18n):
        """en singular and it plural render with the parameter."""
        assert i18n.translate("en", False, GEM, "Marco") == "Something went wrong Marco"
        assert i18n.translate("it", True, GEM, "Marco") == (
            "Alcune cose sono andate storte Marco"
        )


class TestLocaleKeys:
    """Tests for locale key handling."""

    def test_table_keys_are_normalized(self):
        """Table keys match the identifiers produced by the matcher."""
        translator = Translator({"en_us": {GEM: Localization("Oops %s", "Oops %s")}}, "en_US")
        assert translator.default_locale == "en-US"
        assert translator.locales == ["en-US"]
        assert translator.t("en-US", GEM, "x") == "Oops x"

    def test_lookup_locale_is_normalized(self, translator):
        """Callers may pass identifiers in any casing or separator."""
        assert translator.has_key(GEM, "IT")
        assert translator.t("it", GEM, "x") == translator.t("IT", GEM, "x")

    def test_locale_without_source_uses_default(self):
        """A supported locale missing from the source falls back to the default."""
        loader = MappingLocalizationLoader({"en": {GEM: {"one": "Oops %s", "other": "Oopses %s"}}})
        translator = Translator.from_loader(loader, ["en", "it"])
        assert translator.t("it", GEM, "Marco") == "Oops Marco"


class TestRaisingParameters:
    """Translation never raises on odd parameters."""

    def test_parameter_with_failing_str(self, translator):
        """A parameter whose __str__ raises renders a placeholder."""

        class Unprintable:
            def __str__(self):
                raise RuntimeError("boom")

        assert translator.t("en", GEM, Unprintable()) == (
            "Something went wrong %!v(PANIC=String method: RuntimeError)"
        )
