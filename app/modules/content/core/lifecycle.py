"""Translation lifecycle service, generic over the content family.

One service instance works on one session through the repository. Each
mutating call ends with a single commit; an IntegrityError raised while
flushing or committing is rolled back and surfaced as ConflictError.
"""

import html
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from infrastructure.logging import get_module_logger
from modules.content.core.completeness import (
    is_complete,
    language_statistics,
    parent_status,
)
from modules.content.core.resolver import get_translation, has_translation
from modules.content.core.slugs import SlugGenerator, is_valid_slug
from modules.content.core.timestamps import stamp_created, touch, utcnow
from modules.content.domain.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from modules.content.domain.types import (
    FieldMap,
    LanguageStatisticsTypedDict,
    ParentStatusTypedDict,
)
from modules.content.families import FamilyConfig
from modules.content.infrastructure.languages import (
    LanguageRegistry,
    is_valid_language_code,
)
from modules.content.infrastructure.repository import ContentRepository
from modules.content.models import Language

logger = get_module_logger()

BILLING_PERIODS = ("monthly", "yearly")


class TranslationLifecycleService:
    """Creates, copies, backfills and purges translations for one family."""

    def __init__(
        self,
        family: FamilyConfig,
        repository: ContentRepository,
        languages: LanguageRegistry,
        slugs: SlugGenerator,
    ):
        self.family = family
        self.repository = repository
        self.languages = languages
        self.slugs = slugs

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def upsert(
        self,
        parent: Any,
        payload: Mapping,
        attributes: Optional[Mapping] = None,
    ) -> Any:
        """Create or update a parent's translations from a bulk payload.

        Every tracked field of each listed language is overwritten; fields
        the payload omits go back to the family default. Unknown or inactive
        languages are skipped.

        Args:
            parent: Existing parent, or a new unsaved instance.
            payload: ``{language_code: {field: value}}``.
            attributes: Optional family scalars to set on the parent.

        Returns:
            The parent, committed.

        Raises:
            InvalidArgumentError: Malformed payload or attribute.
            ConflictError: Slug or (parent, language) uniqueness violated.
        """
        entries = self._validate_entries(payload)
        is_new = parent.id is None
        now = utcnow()

        if attributes:
            self._apply_attributes(parent, attributes)
        if is_new:
            stamp_created(parent, now)
            if parent.sort_order is None:
                parent.sort_order = self.repository.next_sort_order(self.family)
        else:
            touch(parent, now)

        if not parent.slug:
            parent.slug = self.slugs.generate_slug_from_multiple_sources(
                self._slug_seeds(parent, entries), self.family, parent.id
            )

        if is_new:
            self.repository.save(parent)
            self._flush()

        written = []
        for code, fields in entries.items():
            language = self.languages.find_by_code(code)
            if language is None or not language.is_active:
                logger.info(
                    "language_skipped",
                    family=self.family.name,
                    parent_id=parent.id,
                    language=code,
                )
                continue

            translation = get_translation(parent, code)
            if translation is None:
                translation = self._new_translation(language, fields, now)
                parent.translations.append(translation)
            else:
                self._assign_fields(translation, fields)
                touch(translation, now)
            written.append(code)

        self._commit()
        logger.info(
            "translation_upserted",
            family=self.family.name,
            parent_id=parent.id,
            slug=parent.slug,
            created=is_new,
            languages=written,
        )
        return parent

    def duplicate(self, parent: Any, source_code: str, target_code: str) -> Any:
        """Copy the source-language translation into the target language.

        An existing target translation is returned unchanged.

        Raises:
            InvalidArgumentError: A language code is malformed.
            NotFoundError: A language or the source translation is missing.
        """
        self._require_language(source_code)
        target_language = self._require_language(target_code)

        source = get_translation(parent, source_code)
        if source is None:
            raise NotFoundError(
                f"No {source_code} translation to duplicate",
                details={"parent_id": parent.id, "language": source_code},
            )

        existing = get_translation(parent, target_code)
        if existing is not None:
            return existing

        translation = self._copy_translation(source, target_language, utcnow())
        parent.translations.append(translation)
        self._commit()
        logger.info(
            "translation_duplicated",
            family=self.family.name,
            parent_id=parent.id,
            source=source_code,
            target=target_code,
        )
        return translation

    def create_missing_translations(
        self, language_code: str, source_language_code: Optional[str] = None
    ) -> int:
        """Give every active parent a translation in ``language_code``.

        New translations copy the source-language text when the parent has
        it, family defaults otherwise. The source language is the given code
        when it resolves, else the registry default.

        Returns:
            Number of translations created; 0 when the target language is
            unknown or inactive.
        """
        target = self.languages.find_by_code(language_code)
        if target is None or not target.is_active:
            logger.warning(
                "backfill_target_unavailable",
                family=self.family.name,
                language=language_code,
            )
            return 0

        source_language = None
        if source_language_code:
            source_language = self.languages.find_by_code(source_language_code)
        if source_language is None:
            source_language = self.languages.find_default()

        now = utcnow()
        created = 0
        for parent in self.repository.find_active_parents(self.family):
            if has_translation(parent, target.code):
                continue
            source = None
            if source_language is not None:
                source = get_translation(parent, source_language.code)
            if source is not None:
                translation = self._copy_translation(source, target, now)
            else:
                translation = self._new_translation(target, {}, now)
            parent.translations.append(translation)
            created += 1

        if created:
            self._commit()
        logger.info(
            "translations_backfilled",
            family=self.family.name,
            language=target.code,
            source=source_language.code if source_language else None,
            count=created,
        )
        return created

    def remove_translations_for_language(self, language_code: str) -> int:
        """Delete every translation of the family in ``language_code``."""
        translations = self.repository.find_translations_by_language_code(
            self.family, language_code
        )
        for translation in translations:
            # removing from the collection keeps loaded parents consistent
            translation.parent.translations.remove(translation)

        if translations:
            self._commit()
        logger.info(
            "translations_purged",
            family=self.family.name,
            language=language_code,
            count=len(translations),
        )
        return len(translations)

    def attach_translation(self, parent: Any, translation: Any) -> Any:
        """Attach a new translation; never overwrites an existing language.

        Raises:
            ConflictError: The parent already has a translation in that
                language.
        """
        code = translation.language.code
        if has_translation(parent, code):
            raise ConflictError(
                f"{self.family.name} {parent.id} already has a {code} translation",
                details={"parent_id": parent.id, "language": code},
            )
        stamp_created(translation)
        parent.translations.append(translation)
        self._commit()
        logger.info(
            "translation_attached",
            family=self.family.name,
            parent_id=parent.id,
            language=code,
        )
        return translation

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_translation_status(self) -> List[ParentStatusTypedDict]:
        languages = self.languages.find_active()
        return [
            parent_status(parent, languages, self.family.tracked_fields)
            for parent in self.repository.find_active_parents(self.family)
        ]

    def get_global_statistics(self) -> List[LanguageStatisticsTypedDict]:
        return language_statistics(
            self.repository.find_active_parents(self.family),
            self.languages.find_active(),
        )

    def search(
        self, query: str, language_code: Optional[str] = None, limit: int = 20
    ) -> List[Any]:
        query = (query or "").strip()
        if not query:
            return []
        return self.repository.search_translations(
            self.family, query, language_code, limit
        )

    def find_incomplete_translations(
        self, language_code: Optional[str] = None
    ) -> List[Any]:
        return [
            t
            for t in self.repository.find_translations(self.family, language_code)
            if not is_complete(t)
        ]

    def validate_payload(self, payload: Any) -> List[str]:
        """Human-readable problems with a payload; empty when it is usable."""
        if not isinstance(payload, Mapping) or not payload:
            return ["At least one translation is required"]

        errors = []
        required = self.family.required_field
        for code, fields in payload.items():
            if not isinstance(fields, Mapping):
                errors.append(f"{code}: translation data must be a mapping")
                continue
            try:
                validated = self.family.payload_schema.model_validate(dict(fields))
            except ValidationError as exc:
                for error in exc.errors():
                    location = ".".join(str(part) for part in error["loc"])
                    errors.append(f"{code}: {location}: {error['msg']}")
                continue
            value = getattr(validated, required)
            if value is None or (isinstance(value, str) and not value):
                errors.append(f"{code}: {required} is required")
        return errors

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_entries(self, payload: Any) -> Dict[str, FieldMap]:
        if not isinstance(payload, Mapping):
            raise InvalidArgumentError(
                "Translations payload must map language codes to field maps"
            )
        entries: Dict[str, FieldMap] = {}
        for code, fields in payload.items():
            if not isinstance(code, str) or not isinstance(fields, Mapping):
                raise InvalidArgumentError(
                    f"Invalid translation entry for {code!r}",
                    details={"language": code},
                )
            try:
                validated = self.family.payload_schema.model_validate(dict(fields))
            except ValidationError as exc:
                raise InvalidArgumentError(
                    f"Invalid {self.family.name} translation for {code}",
                    details={"language": code, "errors": exc.errors()},
                ) from exc
            entries[code] = validated.model_dump()
        return entries

    def _apply_attributes(self, parent: Any, attributes: Mapping) -> None:
        unknown = sorted(set(attributes) - set(self.family.parent_attributes))
        if unknown:
            raise InvalidArgumentError(
                f"Unknown {self.family.name} attributes: {', '.join(unknown)}",
                details={"attributes": unknown},
            )

        for name, value in attributes.items():
            if name == "slug":
                value = self._checked_slug(parent, value)
            elif name == "price":
                value = self._checked_price(value)
            elif name == "rating" and value is not None:
                if not isinstance(value, int) or not 1 <= value <= 5:
                    raise InvalidArgumentError(
                        "Rating must be an integer between 1 and 5",
                        details={"rating": value},
                    )
            elif name == "billing_period" and value not in BILLING_PERIODS:
                raise InvalidArgumentError(
                    f"Billing period must be one of {', '.join(BILLING_PERIODS)}",
                    details={"billing_period": value},
                )
            setattr(parent, name, value)

    def _checked_slug(self, parent: Any, slug: Any) -> Optional[str]:
        if slug is None or slug == "":
            return None
        if not isinstance(slug, str) or not is_valid_slug(slug):
            raise InvalidArgumentError(f"Invalid slug: {slug!r}", details={"slug": slug})
        if self.repository.slug_exists(self.family, slug, parent.id):
            raise ConflictError(
                f"Slug already in use: {slug}",
                details={"family": self.family.name, "slug": slug},
            )
        return slug

    @staticmethod
    def _checked_price(value: Any) -> Decimal:
        try:
            price = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidArgumentError(
                f"Invalid price: {value!r}", details={"price": value}
            ) from exc
        if not price.is_finite() or price < 0:
            raise InvalidArgumentError(
                f"Invalid price: {value!r}", details={"price": value}
            )
        return price.quantize(Decimal("0.01"))

    def _slug_seeds(self, parent: Any, entries: Dict[str, FieldMap]) -> List[Any]:
        seeds: List[Any] = []
        slug_field = self.family.slug_field
        if slug_field and entries:
            default = self.languages.find_default()
            entry = entries.get(default.code) if default is not None else None
            if entry is None:
                entry = next(iter(entries.values()))
            seed = entry.get(slug_field)
            # slugs are built from the text as typed, not its escaped form
            seeds.append(html.unescape(seed) if isinstance(seed, str) else seed)
        seeds.extend(
            self.family.slug_sources(parent, self.languages.fallback_code)
        )
        return seeds

    def _require_language(self, code: str) -> Language:
        if not is_valid_language_code(code):
            raise InvalidArgumentError(
                f"Malformed language code: {code!r}", details={"language": code}
            )
        language = self.languages.find_by_code(code)
        if language is None:
            raise NotFoundError(
                f"Language not found: {code}", details={"language": code}
            )
        return language

    def _assign_fields(self, translation: Any, fields: FieldMap) -> None:
        for name in self.family.tracked_fields:
            value = fields.get(name)
            if value is None:
                value = self.family.default_for(name)
            setattr(translation, name, value)

    def _new_translation(
        self, language: Language, fields: FieldMap, now: datetime
    ) -> Any:
        # fully populated before it joins the session so autoflush never
        # sees a half-built row
        translation = self.family.translation_model(language=language)
        self._assign_fields(translation, fields)
        stamp_created(translation, now)
        return translation

    def _copy_translation(self, source: Any, language: Language, now: datetime) -> Any:
        fields = {}
        for name in self.family.tracked_fields:
            value = getattr(source, name)
            fields[name] = list(value) if isinstance(value, list) else value
        return self._new_translation(language, fields, now)

    def _flush(self) -> None:
        try:
            self.repository.flush()
        except IntegrityError as exc:
            self.repository.rollback()
            raise ConflictError(
                f"Uniqueness violated while saving {self.family.name}",
                details={"error": str(exc.orig)},
            ) from exc

    def _commit(self) -> None:
        try:
            self.repository.commit()
        except IntegrityError as exc:
            self.repository.rollback()
            raise ConflictError(
                f"Uniqueness violated while saving {self.family.name}",
                details={"error": str(exc.orig)},
            ) from exc
