"""Domain layer - errors, capability protocols and typed dicts."""

from modules.content.domain.errors import (
    ConflictError,
    ContentError,
    InvalidArgumentError,
    NotFoundError,
)
from modules.content.domain.types import (
    FieldMap,
    HasSlug,
    HasTimestamps,
    HasTranslations,
    LanguageStatisticsTypedDict,
    LanguageStatusTypedDict,
    ParentStatusTypedDict,
    TranslationLike,
    TranslationsPayload,
)

__all__ = [
    "ContentError",
    "ConflictError",
    "InvalidArgumentError",
    "NotFoundError",
    "FieldMap",
    "HasSlug",
    "HasTimestamps",
    "HasTranslations",
    "LanguageStatisticsTypedDict",
    "LanguageStatusTypedDict",
    "ParentStatusTypedDict",
    "TranslationLike",
    "TranslationsPayload",
]
