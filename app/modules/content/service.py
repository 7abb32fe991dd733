"""Caller-facing operations for translatable content.

Each function takes plain data, opens one transactional session scope, binds
a logging context and returns an OperationResult whose ``data`` is plain
dicts/lists. Domain errors become error results:

    NotFoundError         -> NOT_FOUND, "not_found"
    InvalidArgumentError  -> PERMANENT_ERROR, "invalid_argument"
    ConflictError         -> PERMANENT_ERROR, "conflict"

Any other exception propagates after the session is rolled back.

Usage:
    from modules.content import service

    result = service.upsert_translations(
        "feature",
        {"fr": {"title": "Rapide", "description": "..."}},
        attributes={"icon": "bolt"},
    )
    if result.is_success:
        slug = result.data["slug"]
"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session, sessionmaker

from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.operations import OperationResult
from infrastructure.persistence import session_scope
from infrastructure.services.providers import get_settings
from modules.content.core.completeness import (
    completion_percentage,
    is_complete,
    is_partial,
)
from modules.content.core.lifecycle import TranslationLifecycleService
from modules.content.core.resolver import (
    get_available_languages,
    get_translation_with_fallback,
)
from modules.content.core.slugs import SlugGenerator
from modules.content.domain.errors import ContentError, NotFoundError
from modules.content.families import FamilyConfig, get_family
from modules.content.infrastructure.languages import LanguageRegistry
from modules.content.infrastructure.repository import ContentRepository
from modules.content.schemas import (
    LocalizedContentResponse,
    ParentResponse,
    SearchResultResponse,
    TranslationResponse,
)

logger = get_module_logger()


def build_lifecycle_service(
    session: Session, family: FamilyConfig
) -> TranslationLifecycleService:
    """Wire repository, registry and slug generator for one session."""
    settings = get_settings().content
    repository = ContentRepository(session)
    languages = LanguageRegistry(session, settings.fallback_language_code)
    slugs = SlugGenerator(
        repository,
        max_attempts=settings.slug_max_attempts,
        placeholder_prefix=settings.slug_placeholder_prefix,
    )
    return TranslationLifecycleService(family, repository, languages, slugs)


def _error_result(exc: ContentError) -> OperationResult:
    logger.warning(
        "content_operation_failed",
        error_code=exc.error_code,
        error=exc.message,
        details=exc.details,
    )
    if isinstance(exc, NotFoundError):
        return OperationResult.not_found(exc.message, error_code=exc.error_code)
    return OperationResult.permanent_error(exc.message, error_code=exc.error_code)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _fields(family: FamilyConfig, translation: Any) -> Dict[str, Any]:
    return {name: getattr(translation, name) for name in family.tracked_fields}


def _attributes(family: FamilyConfig, parent: Any) -> Dict[str, Any]:
    return {
        name: getattr(parent, name)
        for name in family.parent_attributes
        if name != "slug"
    }


def serialize_translation(family: FamilyConfig, translation: Any) -> Dict[str, Any]:
    return TranslationResponse(
        id=translation.id,
        parent_id=translation.parent_id,
        language=translation.language.code,
        fields=_fields(family, translation),
        is_complete=is_complete(translation),
        is_partial=is_partial(translation),
        completion_percentage=completion_percentage(translation),
        updated_at=translation.updated_at,
    ).model_dump()


def serialize_parent(family: FamilyConfig, parent: Any) -> Dict[str, Any]:
    return ParentResponse(
        id=parent.id,
        family=family.name,
        slug=parent.slug,
        attributes=_attributes(family, parent),
        languages=sorted(get_available_languages(parent)),
        translations=[serialize_translation(family, t) for t in parent.translations],
        created_at=parent.created_at,
        updated_at=parent.updated_at,
    ).model_dump()


def serialize_localized(
    family: FamilyConfig, parent: Any, locale: str, fallback_code: str
) -> Dict[str, Any]:
    translation = get_translation_with_fallback(parent, locale, fallback_code)
    language = translation.language.code if translation is not None else None
    return LocalizedContentResponse(
        id=parent.id,
        family=family.name,
        slug=parent.slug,
        requested_language=locale,
        language=language,
        fallback_used=language is not None and language != locale,
        attributes=_attributes(family, parent),
        fields=_fields(family, translation) if translation is not None else {},
    ).model_dump()


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def upsert_translations(
    family: str,
    translations: Mapping[str, Mapping[str, Any]],
    parent_id: Optional[int] = None,
    attributes: Optional[Mapping[str, Any]] = None,
    session_factory: Optional[sessionmaker] = None,
) -> OperationResult:
    """Create a parent (no ``parent_id``) or update one, with its translations."""
    with bind_request_context(operation="upsert_translations", family=family):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                if parent_id is None:
                    parent = config.parent_model()
                else:
                    parent = _load_parent(lifecycle, parent_id, for_update=True)
                parent = lifecycle.upsert(parent, translations, attributes)
                data = serialize_parent(config, parent)
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(data=data, message="translations saved")


def duplicate_translation(
    family: str,
    parent_id: int,
    source: str,
    target: str,
    session_factory: Optional[sessionmaker] = None,
) -> OperationResult:
    with bind_request_context(
        operation="duplicate_translation", family=family, parent_id=parent_id
    ):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                parent = _load_parent(lifecycle, parent_id, for_update=True)
                translation = lifecycle.duplicate(parent, source, target)
                data = serialize_translation(config, translation)
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(data=data, message="translation duplicated")


def create_missing_translations(
    family: str,
    language_code: str,
    source: Optional[str] = None,
    session_factory: Optional[sessionmaker] = None,
) -> OperationResult:
    with bind_request_context(
        operation="create_missing_translations", family=family, language=language_code
    ):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                created = lifecycle.create_missing_translations(language_code, source)
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(
            data={"created": created}, message=f"{created} translations created"
        )


def remove_translations_for_language(
    family: str,
    language_code: str,
    session_factory: Optional[sessionmaker] = None,
) -> OperationResult:
    with bind_request_context(
        operation="remove_translations_for_language",
        family=family,
        language=language_code,
    ):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                removed = lifecycle.remove_translations_for_language(language_code)
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(
            data={"removed": removed}, message=f"{removed} translations removed"
        )


def get_localized(
    family: str,
    slug: str,
    locale: str,
    session_factory: Optional[sessionmaker] = None,
) -> OperationResult:
    """Active parent by slug, rendered with the fallback-resolved translation."""
    with bind_request_context(operation="get_localized", family=family, locale=locale):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                parent = lifecycle.repository.load_parent_by_slug(config, slug)
                if parent is None or not parent.is_active:
                    raise NotFoundError(
                        f"No active {config.name} with slug {slug!r}",
                        details={"slug": slug},
                    )
                data = serialize_localized(
                    config, parent, locale, lifecycle.languages.fallback_code
                )
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(data=data)


def list_localized(
    family: str,
    locale: str,
    session_factory: Optional[sessionmaker] = None,
) -> OperationResult:
    """Active parents, by sort order, whose resolved translation has content."""
    with bind_request_context(operation="list_localized", family=family, locale=locale):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                fallback = lifecycle.languages.fallback_code
                items = []
                for parent in lifecycle.repository.find_active_parents(config):
                    translation = get_translation_with_fallback(
                        parent, locale, fallback
                    )
                    if translation is None or not is_partial(translation):
                        continue
                    items.append(serialize_localized(config, parent, locale, fallback))
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(data=items)


def get_translation_status(
    family: str, session_factory: Optional[sessionmaker] = None
) -> OperationResult:
    with bind_request_context(operation="get_translation_status", family=family):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                status = build_lifecycle_service(
                    session, config
                ).get_translation_status()
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(data=status)


def get_global_statistics(
    family: str, session_factory: Optional[sessionmaker] = None
) -> OperationResult:
    with bind_request_context(operation="get_global_statistics", family=family):
        try:
            config = get_family(family)
            with session_scope(session_factory) as session:
                statistics = build_lifecycle_service(
                    session, config
                ).get_global_statistics()
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(data=statistics)


def search(
    family: str,
    query: str,
    language_code: Optional[str] = None,
    limit: Optional[int] = None,
    session_factory: Optional[sessionmaker] = None,
) -> OperationResult:
    """Case-insensitive text search over a family's translations."""
    with bind_request_context(operation="search", family=family):
        try:
            config = get_family(family)
            if limit is None:
                limit = get_settings().content.search_default_limit
            with session_scope(session_factory) as session:
                lifecycle = build_lifecycle_service(session, config)
                results = [
                    SearchResultResponse(
                        parent_id=t.parent_id,
                        slug=t.parent.slug,
                        language=t.language.code,
                        fields=_fields(config, t),
                    ).model_dump()
                    for t in lifecycle.search(query, language_code, limit)
                ]
        except ContentError as exc:
            return _error_result(exc)
        return OperationResult.success(data=results)


def _load_parent(
    lifecycle: TranslationLifecycleService, parent_id: int, for_update: bool = False
) -> Any:
    parent = lifecycle.repository.load_parent(
        lifecycle.family, parent_id, for_update=for_update
    )
    if parent is None:
        raise NotFoundError(
            f"{lifecycle.family.name} {parent_id} not found",
            details={"parent_id": parent_id},
        )
    return parent
