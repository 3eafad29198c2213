"""Tests for infrastructure.i18n.service module."""

from infrastructure.i18n import I18n, Localization, LocaleMatcher, Translator
from tests.factories.i18n import GEM, make_localizations, make_request


class TestI18n:
    """Tests for the I18n facade."""

    def test_properties(self, i18n):
        """The facade exposes its components and locales."""
        assert i18n.default_locale == "en"
        assert i18n.locales == ["en", "it"]
        assert isinstance(i18n.matcher, LocaleMatcher)
        assert isinstance(i18n.translator, Translator)
        assert i18n.resolver.matcher is i18n.matcher

    def test_default_resolver(self):
        """A resolver with the default strategy is built when omitted."""
        matcher = LocaleMatcher(["en", "it"])
        service = I18n(matcher, Translator(make_localizations(), "en"))
        request = make_request(query="lang=it")
        assert service.get_locale(request) == "it"

    def test_match_locale(self, i18n):
        """match_locale() resolves raw candidates."""
        assert i18n.match_locale("it-CH") == "it"
        assert i18n.match_locale("de") == "en"
        assert i18n.match_locale(None) == "en"

    def test_get_locale(self, i18n):
        """get_locale() follows the lookup strategy."""
        request = make_request(headers={"Accept-Language": "it-IT,en;q=0.5"})
        assert i18n.get_locale(request) == "it"
        assert i18n.get_locale(None) == "en"

    def test_get_locale_tag(self, i18n):
        """get_locale_tag() returns the matched tag."""
        tag = i18n.get_locale_tag(make_request(cookies={"lang": "it"}))
        assert tag.language == "it"

    def test_t_and_tp(self, i18n):
        """t() and tp() translate for an explicit locale."""
        assert i18n.t("en", GEM, "Marco") == "Something went wrong Marco"
        assert i18n.tp("en", GEM, "Marco") == "Some things went wrong Marco"

    def test_auto_t_uses_request_locale(self, i18n):
        """auto_t() translates in the request locale."""
        request = make_request(cookies={"lang": "it"})
        assert i18n.auto_t(request, GEM, "Marco") == "Qualcosa è andato storto Marco"

    def test_auto_tp_uses_request_locale(self, i18n):
        """auto_tp() translates in the request locale with the plural form."""
        request = make_request(query="lang=it")
        assert i18n.auto_tp(request, "ITEMS", 4) == "4 elementi"

    def test_auto_translate_without_request(self, i18n):
        """No request translates in the default locale."""
        assert i18n.auto_translate(None, True, "ITEMS", 2) == "2 items"

    def test_auto_t_missing_key(self, i18n):
        """Missing keys render as the key."""
        request = make_request(cookies={"lang": "it"})
        assert i18n.auto_t(request, "UNKNOWN") == "UNKNOWN"

    def test_with_override(self, i18n):
        """with_override() returns a new service consulting the hook first."""
        overridden = i18n.with_override(lambda request: "it")
        request = make_request(headers={"Accept-Language": "en"})

        assert overridden is not i18n
        assert overridden.get_locale(request) == "it"
        assert i18n.get_locale(request) == "en"
        assert overridden.translator is i18n.translator

    def test_with_override_unsupported_value(self, i18n):
        """Override results are matched like any other candidate."""
        overridden = i18n.with_override(lambda request: "ja")
        assert overridden.get_locale(make_request()) == "en"

    def test_with_localizations(self, i18n):
        """with_localizations() swaps the table in a new service."""
        updated = i18n.with_localizations(
            {"en": {GEM: Localization("Oops %s", "Oopses %s")}}
        )
        assert updated.t("en", GEM, "!") == "Oops !"
        assert i18n.t("en", GEM, "!") == "Something went wrong !"
        assert updated.resolver is i18n.resolver
