"""Unit tests for modules.content.core.resolver.

Tests cover:
- Exact lookup and first-translation lookup
- One-hop fallback
- Available languages and counts
"""

import pytest

from modules.content.core.resolver import (
    get_available_languages,
    get_translation,
    get_translation_with_fallback,
    has_translation,
    translations_count,
)
from modules.content.models import Feature, FeatureTranslation, Language


def _feature(*codes):
    feature = Feature(slug="fast")
    for code in codes:
        feature.translations.append(
            FeatureTranslation(language=Language(code=code), title=f"title-{code}")
        )
    return feature


@pytest.mark.unit
class TestGetTranslation:
    def test_exact_match(self):
        """Returns the translation whose language code matches."""
        feature = _feature("fr", "en")

        assert get_translation(feature, "en").title == "title-en"

    def test_no_match_returns_none(self):
        """Returns None when the language is absent."""
        assert get_translation(_feature("fr"), "de") is None

    def test_without_code_returns_first(self):
        """Without a code the first translation in insertion order wins."""
        assert get_translation(_feature("en", "fr")).title == "title-en"

    def test_empty_parent_returns_none(self):
        """A parent without translations resolves to None."""
        assert get_translation(_feature()) is None
        assert get_translation(_feature(), "fr") is None

    def test_match_is_case_sensitive(self):
        """Codes are compared exactly."""
        assert get_translation(_feature("fr"), "FR") is None


@pytest.mark.unit
class TestGetTranslationWithFallback:
    def test_falls_back_to_fallback_language(self):
        """Requested locale missing: the fallback translation is returned."""
        feature = _feature("fr")

        translation = get_translation_with_fallback(feature, "en", "fr")

        assert translation.language.code == "fr"

    def test_exact_match_preferred(self):
        """The requested locale wins over the fallback."""
        translation = get_translation_with_fallback(_feature("fr", "en"), "en", "fr")

        assert translation.language.code == "en"

    def test_single_hop_only(self):
        """No third language is tried when both lookups miss."""
        assert get_translation_with_fallback(_feature("de"), "en", "fr") is None

    def test_default_fallback_comes_from_settings(self):
        """Without an explicit fallback the configured code (fr) is used."""
        translation = get_translation_with_fallback(_feature("fr"), "en")

        assert translation.language.code == "fr"


@pytest.mark.unit
class TestAvailability:
    def test_has_translation(self):
        """has_translation reflects exact matches."""
        feature = _feature("fr")

        assert has_translation(feature, "fr") is True
        assert has_translation(feature, "en") is False

    def test_available_languages(self):
        """All translation codes are reported as a set."""
        assert get_available_languages(_feature("fr", "en")) == {"fr", "en"}
        assert get_available_languages(_feature()) == set()

    def test_translations_count(self):
        """Counts the loaded translations."""
        assert translations_count(_feature("fr", "en", "de")) == 3
