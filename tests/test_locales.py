"""
Unit tests for locale fallback resolution.
"""
import pytest

from workbench.locales import Locale, LocaleHierarchy, fallbacks, normalize_locale


def codes(chain):
    return [locale.code for locale in chain]


class TestNormalizeLocale:
    """Tests for normalize_locale"""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("en", "en"),
            ("EN_us", "en-US"),
            ("zh-hant-tw", "zh-Hant-TW"),
            ("es-419", "es-419"),
            (" fr-ca ", "fr-CA"),
        ],
    )
    def test_canonical_casing(self, raw, expected):
        """Subtags get their canonical case and separator"""
        assert normalize_locale(raw) == expected


class TestLocale:
    """Tests for the Locale value type"""

    def test_parent_code_drops_last_subtag(self):
        assert Locale("zh-Hant-TW").parent_code == "zh-Hant"

    def test_bare_language_has_no_parent(self):
        assert Locale("fr").parent_code is None

    def test_language(self):
        assert Locale("pt-BR").language == "pt"


class TestLocaleHierarchy:
    """Tests for LocaleHierarchy.fallbacks"""

    def test_unlisted_locale_truncates_subtags(self):
        """Locales missing from the table fall back by dropping subtags"""
        hierarchy = LocaleHierarchy({}, root="en")
        assert codes(hierarchy.fallbacks("zh-Hant-TW")) == ["zh-Hant-TW", "zh-Hant", "zh", "en"]

    def test_table_overrides_truncation(self):
        """Configured parents replace the implicit parent"""
        hierarchy = LocaleHierarchy({"es-MX": ["es-419"]}, root="en")
        assert codes(hierarchy.fallbacks("es-MX")) == ["es-MX", "es-419", "es", "en"]

    def test_parents_expanded_depth_first(self):
        """Each parent's own chain is walked before the next parent"""
        hierarchy = LocaleHierarchy(
            {"pt-AO": ["pt-PT", "pt-BR"], "pt-PT": ["pt"]},
            root="en",
        )
        assert codes(hierarchy.fallbacks("pt-AO")) == ["pt-AO", "pt-PT", "pt", "pt-BR", "en"]

    def test_root_is_last_and_unique(self):
        """Root appears once, at the end, even when listed as a parent"""
        hierarchy = LocaleHierarchy({"en-GB": ["en", "en-US"]}, root="en")
        assert codes(hierarchy.fallbacks("en-GB")) == ["en-GB", "en-US", "en"]

    def test_root_alone(self):
        hierarchy = LocaleHierarchy({}, root="en")
        assert codes(hierarchy.fallbacks("en")) == ["en"]

    def test_cycles_terminate(self):
        """A cyclic table still yields a finite chain"""
        hierarchy = LocaleHierarchy({"ca": ["es"], "es": ["ca"]}, root="en")
        assert codes(hierarchy.fallbacks("ca")) == ["ca", "es", "en"]

    def test_input_is_normalized(self):
        hierarchy = LocaleHierarchy({"es-MX": ["es-419"]}, root="EN")
        assert codes(hierarchy.fallbacks("es_mx")) == ["es-MX", "es-419", "es", "en"]

    def test_deterministic(self):
        hierarchy = LocaleHierarchy({"es-MX": ["es-419"]}, root="en")
        assert hierarchy.fallbacks("es-MX") == hierarchy.fallbacks("es-MX")


class TestConfiguredFallbacks:
    """Tests for the settings-driven fallbacks()"""

    def test_uses_configured_table(self, spanish_hierarchy):
        assert codes(fallbacks("es-MX")) == ["es-MX", "es-419", "es", "en"]

    def test_new_family_without_code_change(self, monkeypatch, spanish_hierarchy):
        """Adding a table entry changes the chain"""
        from workbench.core.config import settings

        monkeypatch.setattr(settings, "LOCALE_FALLBACKS", {"gl": ["pt", "es"]})
        assert codes(fallbacks("gl")) == ["gl", "pt", "es", "en"]
