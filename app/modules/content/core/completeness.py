"""Completeness evaluation and aggregation.

A translation is judged only on its own fields, using the field lists its
class declares (COMPLETE_FIELDS, PARTIAL_FIELDS, TRACKED_FIELDS). Nothing
computed here is persisted.

A field counts as filled when it is not None, not a blank string and not an
empty collection. Percentages round half up.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Sequence

from modules.content.core.resolver import get_translation
from modules.content.domain.types import (
    HasTranslations,
    LanguageLike,
    LanguageStatisticsTypedDict,
    LanguageStatusTypedDict,
    ParentStatusTypedDict,
    TranslationLike,
)

_WHOLE = Decimal("1")
_ONE_DECIMAL = Decimal("0.1")


def _percent(numerator: int, denominator: int) -> int:
    if denominator <= 0:
        return 0
    value = Decimal(numerator * 100) / Decimal(denominator)
    return int(value.quantize(_WHOLE, rounding=ROUND_HALF_UP))


def _percent_one_decimal(numerator, denominator) -> float:
    if not denominator:
        return 0.0
    value = Decimal(numerator * 100) / Decimal(denominator)
    return float(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def is_filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) > 0
    return True


def filled_count(translation: TranslationLike) -> int:
    return sum(
        1 for name in translation.TRACKED_FIELDS if is_filled(getattr(translation, name, None))
    )


def is_complete(translation: TranslationLike) -> bool:
    return all(
        is_filled(getattr(translation, name, None))
        for name in translation.COMPLETE_FIELDS
    )


def is_partial(translation: TranslationLike) -> bool:
    return any(
        is_filled(getattr(translation, name, None))
        for name in translation.PARTIAL_FIELDS
    )


def completion_percentage(translation: TranslationLike) -> int:
    """Share of tracked fields that are filled, as an integer 0..100."""
    return _percent(filled_count(translation), len(translation.TRACKED_FIELDS))


def translation_status(parent: HasTranslations) -> Dict[str, Dict[str, bool]]:
    """Complete/partial flags for each existing translation, keyed by code."""
    return {
        t.language.code: {"complete": is_complete(t), "partial": is_partial(t)}
        for t in parent.translations or []
    }


def are_all_translations_complete(parent: HasTranslations) -> bool:
    translations = parent.translations or []
    if not translations:
        return False
    return all(is_complete(t) for t in translations)


def average_completion_percentage(parent: HasTranslations) -> float:
    """Mean of the per-translation percentages, one decimal."""
    translations = parent.translations or []
    if not translations:
        return 0.0
    total = sum(completion_percentage(t) for t in translations)
    value = Decimal(total) / Decimal(len(translations))
    return float(value.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def parent_language_status(
    parent: HasTranslations, languages: Iterable[LanguageLike]
) -> Dict[str, LanguageStatusTypedDict]:
    """Status of the parent in every given language, missing ones included."""
    status: Dict[str, LanguageStatusTypedDict] = {}
    for language in languages:
        translation = get_translation(parent, language.code)
        if translation is None:
            status[language.code] = {
                "language": language.code,
                "complete": False,
                "partial": False,
                "missing": True,
                "completion_percentage": 0,
            }
            continue
        status[language.code] = {
            "language": language.code,
            "complete": is_complete(translation),
            "partial": is_partial(translation),
            "missing": False,
            "completion_percentage": completion_percentage(translation),
        }
    return status


def parent_completion_percentage(
    parent: HasTranslations,
    languages: Iterable[LanguageLike],
    tracked_fields: Sequence[str],
) -> int:
    """Entity completion across the given languages.

    Missing languages contribute their full tracked-field count to the
    denominator and nothing to the numerator.
    """
    filled = 0
    expected = 0
    for language in languages:
        expected += len(tracked_fields)
        translation = get_translation(parent, language.code)
        if translation is not None:
            filled += filled_count(translation)
    return _percent(filled, expected)


def parent_status(
    parent: Any, languages: Sequence[LanguageLike], tracked_fields: Sequence[str]
) -> ParentStatusTypedDict:
    return {
        "id": parent.id,
        "slug": parent.slug,
        "translations": parent_language_status(parent, languages),
        "completion_percentage": parent_completion_percentage(
            parent, languages, tracked_fields
        ),
    }


def language_statistics(
    parents: Sequence[HasTranslations], languages: Iterable[LanguageLike]
) -> List[LanguageStatisticsTypedDict]:
    """Per-language counts over the given parents.

    ``completion_percentage`` is complete / total, one decimal, 0.0 when
    there are no parents.
    """
    statistics: List[LanguageStatisticsTypedDict] = []
    total = len(parents)
    for language in languages:
        translated = 0
        complete = 0
        for parent in parents:
            translation = get_translation(parent, language.code)
            if translation is None:
                continue
            translated += 1
            if is_complete(translation):
                complete += 1
        statistics.append(
            {
                "language": language.code,
                "total": total,
                "translated": translated,
                "complete": complete,
                "incomplete": translated - complete,
                "missing": total - translated,
                "completion_percentage": _percent_one_decimal(complete, total),
            }
        )
    return statistics
