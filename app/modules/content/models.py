"""SQLAlchemy entities for translatable site content.

Four families share one shape: a language-independent parent (flags,
ordering, slug, family scalars) owning one translation row per language.

Every translation class exposes the same Python attributes regardless of
its table layout:
  - ``parent`` / ``parent_id``: the owning entity (the database column keeps
    the family name, e.g. ``feature_id``); a family-named synonym such as
    ``FeatureTranslation.feature`` is provided for readability
  - ``language`` / ``language_id``
  - ``COMPLETE_FIELDS``, ``PARTIAL_FIELDS``, ``TRACKED_FIELDS``: field lists
    read by ``modules.content.core.completeness``

Parents expose ``slug``, ``is_active``, ``is_featured`` (``is_popular`` on
pricing plans), ``sort_order``, ``created_at``, ``updated_at`` and
``translations``. Shared columns are declared on each entity rather than
inherited; timestamps are assigned explicitly by the lifecycle service.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym

from infrastructure.persistence import Base


def _excerpt(text: Optional[str], length: int) -> str:
    if not text:
        return ""
    if len(text) <= length:
        return text
    return text[:length] + "..."


class Language(Base):
    """A language content can be translated into."""

    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(10), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Language {self.code}>"


# ---------------------------------------------------------------------------
# Feature
# ---------------------------------------------------------------------------


class Feature(Base):
    __tablename__ = "features"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    icon: Mapped[Optional[str]] = mapped_column(String(100))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    translations: Mapped[List["FeatureTranslation"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="FeatureTranslation.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Feature {self.slug or self.id}>"


class FeatureTranslation(Base):
    __tablename__ = "feature_translations"
    __table_args__ = (
        UniqueConstraint(
            "feature_id", "language_id", name="uq_feature_translation_language"
        ),
    )

    COMPLETE_FIELDS = ("title", "description")
    PARTIAL_FIELDS = ("title", "description")
    TRACKED_FIELDS = ("title", "description", "meta_title", "meta_description")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parent_id: Mapped[int] = mapped_column(
        "feature_id",
        ForeignKey("features.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    language_id: Mapped[int] = mapped_column(
        ForeignKey("languages.id"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[Optional[str]] = mapped_column(Text)
    meta_title: Mapped[Optional[str]] = mapped_column(String(500))
    meta_description: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    parent: Mapped[Feature] = relationship(back_populates="translations")
    language: Mapped[Language] = relationship(lazy="joined")
    feature = synonym("parent")

    def __str__(self) -> str:
        return f"{self.title} ({self.language.code if self.language else ''})"


# ---------------------------------------------------------------------------
# Testimonial
# ---------------------------------------------------------------------------


class Testimonial(Base):
    __tablename__ = "testimonials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    client_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    client_position: Mapped[Optional[str]] = mapped_column(String(255))
    client_company: Mapped[Optional[str]] = mapped_column(String(255))
    client_email: Mapped[Optional[str]] = mapped_column(String(255))
    rating: Mapped[Optional[int]] = mapped_column(Integer)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    translations: Mapped[List["TestimonialTranslation"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="TestimonialTranslation.id",
        lazy="selectin",
    )

    @property
    def client_full_info(self) -> str:
        """Client name followed by position and company when known."""
        info = self.client_name
        if self.client_position:
            info += f", {self.client_position}"
        if self.client_company:
            info += f" at {self.client_company}"
        return info

    @property
    def rating_stars(self) -> str:
        """Five-star rendering of the rating, empty when unrated."""
        if self.rating is None:
            return ""
        rating = max(0, min(5, self.rating))
        return "★" * rating + "☆" * (5 - rating)

    def __repr__(self) -> str:
        return f"<Testimonial {self.slug or self.id}>"


class TestimonialTranslation(Base):
    __tablename__ = "testimonial_translations"
    __table_args__ = (
        UniqueConstraint(
            "testimonial_id",
            "language_id",
            name="uq_testimonial_translation_language",
        ),
    )

    COMPLETE_FIELDS = ("content",)
    PARTIAL_FIELDS = ("content",)
    TRACKED_FIELDS = ("content",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parent_id: Mapped[int] = mapped_column(
        "testimonial_id",
        ForeignKey("testimonials.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    language_id: Mapped[int] = mapped_column(
        ForeignKey("languages.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    parent: Mapped[Testimonial] = relationship(back_populates="translations")
    language: Mapped[Language] = relationship(lazy="joined")
    testimonial = synonym("parent")

    def content_excerpt(self, length: int = 100) -> str:
        return _excerpt(self.content, length)

    def __str__(self) -> str:
        code = self.language.code if self.language else ""
        return f"{self.content_excerpt(50)} ({code})"


# ---------------------------------------------------------------------------
# PricingPlan
# ---------------------------------------------------------------------------


class PricingPlan(Base):
    __tablename__ = "pricing_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0.00")
    )
    billing_period: Mapped[str] = mapped_column(
        String(10), nullable=False, default="monthly"
    )
    currency: Mapped[str] = mapped_column(String(10), nullable=False, default="EUR")
    features: Mapped[Optional[list]] = mapped_column(JSON)
    max_users: Mapped[Optional[int]] = mapped_column(Integer)
    max_projects: Mapped[Optional[int]] = mapped_column(Integer)
    storage_limit: Mapped[Optional[int]] = mapped_column(Integer)  # GB
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(
        "is_popular", Boolean, nullable=False, default=False
    )
    is_free: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    stripe_product_id: Mapped[Optional[str]] = mapped_column(String(255))
    stripe_price_id: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    translations: Mapped[List["PricingPlanTranslation"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="PricingPlanTranslation.id",
        lazy="selectin",
    )

    is_popular = synonym("is_featured")

    @property
    def formatted_price(self) -> str:
        """Price with two decimals and thousands separators, then currency."""
        return f"{Decimal(self.price or 0):,.2f} {self.currency}"

    @property
    def monthly_price(self) -> Decimal:
        """Price per month; yearly plans are divided by twelve."""
        price = Decimal(self.price or 0)
        if self.billing_period == "yearly":
            price = price / 12
        return price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    def __repr__(self) -> str:
        return f"<PricingPlan {self.slug or self.id}>"


class PricingPlanTranslation(Base):
    __tablename__ = "pricing_plan_translations"
    __table_args__ = (
        UniqueConstraint(
            "pricing_plan_id",
            "language_id",
            name="uq_pricing_plan_translation_language",
        ),
    )

    COMPLETE_FIELDS = ("name", "description")
    PARTIAL_FIELDS = ("name", "description")
    TRACKED_FIELDS = ("name", "description", "features", "cta_text")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parent_id: Mapped[int] = mapped_column(
        "pricing_plan_id",
        ForeignKey("pricing_plans.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    language_id: Mapped[int] = mapped_column(
        ForeignKey("languages.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[Optional[str]] = mapped_column(Text)
    features: Mapped[Optional[list]] = mapped_column(JSON)
    cta_text: Mapped[Optional[str]] = mapped_column(String(255))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    parent: Mapped[PricingPlan] = relationship(back_populates="translations")
    language: Mapped[Language] = relationship(lazy="joined")
    pricing_plan = synonym("parent")

    # JSON columns are not mutation-tracked; always assign a new list
    def add_feature(self, feature: str) -> None:
        current = list(self.features or [])
        if feature not in current:
            current.append(feature)
        self.features = current

    def remove_feature(self, feature: str) -> None:
        self.features = [f for f in (self.features or []) if f != feature]

    def features_list(self) -> list:
        return list(self.features or [])

    def __str__(self) -> str:
        return f"{self.name} ({self.language.code if self.language else ''})"


# ---------------------------------------------------------------------------
# FAQ
# ---------------------------------------------------------------------------


class FAQ(Base):
    __tablename__ = "faqs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    slug: Mapped[Optional[str]] = mapped_column(String(255), unique=True)
    category: Mapped[Optional[str]] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    translations: Mapped[List["FAQTranslation"]] = relationship(
        back_populates="parent",
        cascade="all, delete-orphan",
        order_by="FAQTranslation.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<FAQ {self.slug or self.id}>"


class FAQTranslation(Base):
    __tablename__ = "faq_translations"
    __table_args__ = (
        UniqueConstraint("faq_id", "language_id", name="uq_faq_translation_language"),
    )

    COMPLETE_FIELDS = ("question", "answer")
    PARTIAL_FIELDS = ("question", "answer")
    TRACKED_FIELDS = ("question", "answer")

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    parent_id: Mapped[int] = mapped_column(
        "faq_id",
        ForeignKey("faqs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    language_id: Mapped[int] = mapped_column(
        ForeignKey("languages.id"), nullable=False, index=True
    )
    question: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    answer: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    parent: Mapped[FAQ] = relationship(back_populates="translations")
    language: Mapped[Language] = relationship(lazy="joined")
    faq = synonym("parent")

    def question_excerpt(self, length: int = 100) -> str:
        return _excerpt(self.question, length)

    def answer_excerpt(self, length: int = 150) -> str:
        return _excerpt(self.answer, length)

    def __str__(self) -> str:
        code = self.language.code if self.language else ""
        return f"{self.question_excerpt(50)} ({code})"
