"""Unit tests for modules.content.infrastructure.languages."""

import pytest

from modules.content.domain.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from modules.content.infrastructure.languages import (
    LanguageRegistry,
    is_valid_language_code,
)


@pytest.mark.unit
class TestLanguageCodes:
    @pytest.mark.parametrize("code", ["en", "fr", "deu", "pt-BR", "zh-Hant"])
    def test_valid_codes(self, code):
        assert is_valid_language_code(code) is True

    @pytest.mark.parametrize("code", ["", None, "e", "EN", "en_US", "english", "en-"])
    def test_malformed_codes(self, code):
        assert is_valid_language_code(code) is False


@pytest.mark.unit
class TestLanguageRegistry:
    def test_find_by_code(self, languages):
        assert languages.find_by_code("en").name == "English"
        assert languages.find_by_code("es") is None
        assert languages.find_by_code("") is None

    def test_find_active_puts_default_first(self, languages):
        """Default language first, the others sorted by code."""
        codes = [language.code for language in languages.find_active()]

        assert codes == ["fr", "de", "en"]

    def test_find_active_excludes_inactive(self, session, languages):
        languages.create("es", "Español", is_active=False)

        assert "es" not in [language.code for language in languages.find_active()]

    def test_flagged_default(self, languages):
        assert languages.find_default().code == "fr"

    def test_fallback_code_is_default_by_convention(self, session):
        """With no flag, the language matching the fallback code is default."""
        registry = LanguageRegistry(session, fallback_code="en")
        registry.create("de", "Deutsch")
        registry.create("en", "English")

        assert registry.find_default().code == "en"

    def test_first_active_when_no_flag_and_no_fallback(self, session):
        registry = LanguageRegistry(session, fallback_code="fr")
        registry.create("it", "Italiano")
        registry.create("de", "Deutsch")

        assert registry.find_default().code == "de"

    def test_no_languages(self, session):
        assert LanguageRegistry(session).find_default() is None

    def test_set_default_moves_flag(self, languages):
        languages.set_default("en")

        assert languages.find_default().code == "en"
        assert languages.find_by_code("fr").is_default is False

    def test_set_default_unknown(self, languages):
        with pytest.raises(NotFoundError):
            languages.set_default("xx")

    def test_create_duplicate_code(self, languages):
        with pytest.raises(ConflictError):
            languages.create("fr", "Français")

    def test_create_malformed_code(self, languages):
        with pytest.raises(InvalidArgumentError):
            languages.create("French", "Français")

    def test_create_default_clears_previous(self, languages):
        languages.create("es", "Español", is_default=True)

        assert languages.find_default().code == "es"
        assert languages.find_by_code("fr").is_default is False
