"""Capability protocols and typed dicts for translatable content.

Entities never inherit shared behaviour; they expose a small set of
attributes and the free functions in ``modules.content.core`` operate on
anything that satisfies these protocols.

Key distinctions:
  - models.py: SQLAlchemy entities (persisted shape)
  - schemas.py: payload and response contracts with Pydantic (validation)
  - types.py: structural protocols and TypedDicts (no validation)
"""

from datetime import datetime
from typing import (
    Any,
    ClassVar,
    Dict,
    Optional,
    Protocol,
    Sequence,
    TypedDict,
    TypeVar,
    runtime_checkable,
)


class LanguageLike(Protocol):
    code: str
    is_active: bool


@runtime_checkable
class HasTimestamps(Protocol):
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


class HasSlug(Protocol):
    id: Optional[int]
    slug: Optional[str]


class TranslationLike(Protocol):
    """A per-language translation record.

    Field lists are declared on the class:
        COMPLETE_FIELDS: all must be filled for the translation to be complete
        PARTIAL_FIELDS: any filled makes the translation partial
        TRACKED_FIELDS: counted by the completion percentage
    """

    COMPLETE_FIELDS: ClassVar[tuple[str, ...]]
    PARTIAL_FIELDS: ClassVar[tuple[str, ...]]
    TRACKED_FIELDS: ClassVar[tuple[str, ...]]

    language: LanguageLike


T = TypeVar("T", bound=TranslationLike)


class HasTranslations(Protocol[T]):
    translations: Sequence[T]


class LanguageStatusTypedDict(TypedDict):
    language: str
    complete: bool
    partial: bool
    missing: bool
    completion_percentage: int


class ParentStatusTypedDict(TypedDict):
    id: Optional[int]
    slug: Optional[str]
    translations: Dict[str, LanguageStatusTypedDict]
    completion_percentage: int


class LanguageStatisticsTypedDict(TypedDict):
    language: str
    total: int
    translated: int
    complete: int
    incomplete: int
    missing: int
    completion_percentage: float


FieldMap = Dict[str, Any]
TranslationsPayload = Dict[str, FieldMap]
