"""SQLAlchemy repository for translatable content.

Generic queries take a ``FamilyConfig`` and work on its parent and
translation classes; family-specific aggregates (FAQ categories, pricing
range, testimonial rating) are plain methods.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from modules.content.models import FAQ, Language, PricingPlan, Testimonial

if TYPE_CHECKING:
    from modules.content.families import FamilyConfig

UNCATEGORIZED = "General"


def _like_pattern(query: str) -> str:
    escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ContentRepository:
    """Persistence operations on one session.

    The repository never commits on its own except through ``commit``; the
    lifecycle service decides when a unit of work ends.
    """

    def __init__(self, session: Session):
        self.session = session

    # -- parents ---------------------------------------------------------

    def load_parent(
        self, family: "FamilyConfig", parent_id: int, for_update: bool = False
    ) -> Optional[Any]:
        model = family.parent_model
        stmt = select(model).where(model.id == parent_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.scalars(stmt).first()

    def load_parent_by_slug(self, family: "FamilyConfig", slug: str) -> Optional[Any]:
        model = family.parent_model
        return self.session.scalars(select(model).where(model.slug == slug)).first()

    def slug_exists(
        self, family: "FamilyConfig", slug: str, exclude_id: Optional[int] = None
    ) -> bool:
        model = family.parent_model
        stmt = select(model.id).where(model.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        return self.session.scalars(stmt.limit(1)).first() is not None

    def find_active_parents(self, family: "FamilyConfig") -> List[Any]:
        model = family.parent_model
        stmt = (
            select(model)
            .where(model.is_active.is_(True))
            .order_by(model.sort_order, model.id)
        )
        return list(self.session.scalars(stmt))

    def find_featured_parents(
        self, family: "FamilyConfig", limit: Optional[int] = None
    ) -> List[Any]:
        model = family.parent_model
        stmt = (
            select(model)
            .where(model.is_active.is_(True), model.is_featured.is_(True))
            .order_by(model.sort_order, model.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.scalars(stmt))

    def find_parents_missing_slug(self, family: "FamilyConfig") -> List[Any]:
        model = family.parent_model
        stmt = (
            select(model)
            .where(or_(model.slug.is_(None), model.slug == ""))
            .order_by(model.id)
        )
        return list(self.session.scalars(stmt))

    def count_total(self, family: "FamilyConfig") -> int:
        model = family.parent_model
        return self.session.scalar(select(func.count(model.id))) or 0

    def count_active(self, family: "FamilyConfig") -> int:
        model = family.parent_model
        stmt = select(func.count(model.id)).where(model.is_active.is_(True))
        return self.session.scalar(stmt) or 0

    def next_sort_order(self, family: "FamilyConfig") -> int:
        model = family.parent_model
        current = self.session.scalar(select(func.max(model.sort_order)))
        return (current or 0) + 1

    # -- translations ----------------------------------------------------

    def find_translation(
        self, family: "FamilyConfig", parent: Any, language: Language
    ) -> Optional[Any]:
        model = family.translation_model
        stmt = select(model).where(
            model.parent_id == parent.id, model.language_id == language.id
        )
        return self.session.scalars(stmt).first()

    def find_translations(
        self, family: "FamilyConfig", language_code: Optional[str] = None
    ) -> List[Any]:
        model = family.translation_model
        stmt = select(model).join(Language, model.language_id == Language.id)
        if language_code is not None:
            stmt = stmt.where(Language.code == language_code)
        return list(self.session.scalars(stmt.order_by(model.parent_id, model.id)))

    def find_translations_by_language_code(
        self, family: "FamilyConfig", language_code: str
    ) -> List[Any]:
        return self.find_translations(family, language_code)

    def search_translations(
        self,
        family: "FamilyConfig",
        query: str,
        language_code: Optional[str] = None,
        limit: int = 20,
    ) -> List[Any]:
        """Case-insensitive substring match over the family's searchable fields.

        Only translations of active parents are returned.
        """
        translation = family.translation_model
        parent = family.parent_model
        pattern = _like_pattern(query)
        matches = [
            func.lower(getattr(translation, name)).like(pattern, escape="\\")
            for name in family.searchable_fields
        ]
        stmt = (
            select(translation)
            .join(parent, translation.parent_id == parent.id)
            .join(Language, translation.language_id == Language.id)
            .where(parent.is_active.is_(True), or_(*matches))
        )
        if language_code is not None:
            stmt = stmt.where(Language.code == language_code)
        stmt = stmt.order_by(parent.sort_order, translation.id).limit(limit)
        return list(self.session.scalars(stmt))

    # -- FAQ -------------------------------------------------------------

    def find_faq_categories(self) -> List[str]:
        stmt = (
            select(FAQ.category)
            .where(FAQ.is_active.is_(True), FAQ.category.is_not(None))
            .distinct()
            .order_by(FAQ.category)
        )
        return list(self.session.scalars(stmt))

    def find_faqs_by_category(self, category: str) -> List[FAQ]:
        stmt = (
            select(FAQ)
            .where(FAQ.is_active.is_(True), FAQ.category == category)
            .order_by(FAQ.sort_order, FAQ.id)
        )
        return list(self.session.scalars(stmt))

    def find_faqs_grouped_by_category(self) -> Dict[str, List[FAQ]]:
        grouped: Dict[str, List[FAQ]] = {}
        stmt = (
            select(FAQ)
            .where(FAQ.is_active.is_(True))
            .order_by(FAQ.category, FAQ.sort_order, FAQ.id)
        )
        for faq in self.session.scalars(stmt):
            grouped.setdefault(faq.category or UNCATEGORIZED, []).append(faq)
        return grouped

    def count_faqs_by_category(self) -> Dict[str, int]:
        stmt = (
            select(FAQ.category, func.count(FAQ.id))
            .where(FAQ.is_active.is_(True))
            .group_by(FAQ.category)
        )
        counts: Dict[str, int] = {}
        for category, count in self.session.execute(stmt):
            key = category or UNCATEGORIZED
            counts[key] = counts.get(key, 0) + count
        return counts

    # -- PricingPlan -----------------------------------------------------

    def get_price_range(self) -> Dict[str, Optional[Decimal]]:
        """Lowest and highest price among active, non-free plans."""
        stmt = select(func.min(PricingPlan.price), func.max(PricingPlan.price)).where(
            PricingPlan.is_active.is_(True), PricingPlan.is_free.is_(False)
        )
        low, high = self.session.execute(stmt).one()
        return {
            "min": Decimal(low) if low is not None else None,
            "max": Decimal(high) if high is not None else None,
        }

    # -- Testimonial -----------------------------------------------------

    def get_average_rating(self) -> float:
        """Mean rating of active, rated testimonials; one decimal."""
        stmt = select(func.avg(Testimonial.rating)).where(
            Testimonial.is_active.is_(True), Testimonial.rating.is_not(None)
        )
        average = self.session.scalar(stmt)
        if average is None:
            return 0.0
        value = Decimal(str(average)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return float(value)

    # -- unit of work ----------------------------------------------------

    def save(self, entity: Any) -> None:
        self.session.add(entity)

    def delete(self, entity: Any) -> None:
        self.session.delete(entity)

    def flush(self) -> None:
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
