"""Translation resolution.

Resolution only reads the parent's loaded translation collection. Fallback
is a single hop: requested language, then the fallback language, then
nothing.
"""

from typing import Optional, Set

from modules.content.domain.types import HasTranslations, T


def _code_of(translation) -> Optional[str]:
    language = getattr(translation, "language", None)
    return getattr(language, "code", None)


def get_translation(
    parent: HasTranslations[T], language_code: Optional[str] = None
) -> Optional[T]:
    """Return the translation for ``language_code``.

    Without a code, the first translation in insertion order is returned.
    """
    translations = parent.translations or []
    if language_code is None:
        return translations[0] if translations else None
    for translation in translations:
        if _code_of(translation) == language_code:
            return translation
    return None


def get_translation_with_fallback(
    parent: HasTranslations[T],
    language_code: Optional[str],
    fallback_language_code: Optional[str] = None,
) -> Optional[T]:
    """Return the exact translation, else the fallback one, else ``None``.

    Args:
        parent: Entity owning the translations.
        language_code: Requested locale.
        fallback_language_code: Language used when the requested one is
            missing. Defaults to the configured FALLBACK_LANGUAGE_CODE.
    """
    if fallback_language_code is None:
        from infrastructure.services.providers import get_settings

        fallback_language_code = get_settings().content.fallback_language_code

    if language_code:
        translation = get_translation(parent, language_code)
        if translation is not None:
            return translation
    return get_translation(parent, fallback_language_code)


def has_translation(parent: HasTranslations[T], language_code: str) -> bool:
    return get_translation(parent, language_code) is not None


def get_available_languages(parent: HasTranslations[T]) -> Set[str]:
    return {
        code
        for code in (_code_of(t) for t in parent.translations or [])
        if code is not None
    }


def translations_count(parent: HasTranslations[T]) -> int:
    return len(parent.translations or [])
