"""Per-family configuration table.

Everything the generic engine needs to know about a family lives here:
entity classes, payload schema, field defaults, slug seeding and the
fields searched by text queries. Slug sources are explicit accessors so the
backfill job never looks attributes up by name.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel

from modules.content.core.resolver import get_translation_with_fallback
from modules.content.domain.errors import InvalidArgumentError
from modules.content.models import (
    FAQ,
    FAQTranslation,
    Feature,
    FeatureTranslation,
    PricingPlan,
    PricingPlanTranslation,
    Testimonial,
    TestimonialTranslation,
)
from modules.content.schemas import (
    FAQTranslationPayload,
    FeatureTranslationPayload,
    PricingPlanTranslationPayload,
    TestimonialTranslationPayload,
)

SlugSources = Callable[[Any, str], List[Optional[str]]]


@dataclass(frozen=True)
class FamilyConfig:
    """Static description of one content family.

    Attributes:
        name: Family identifier used at the service boundary.
        parent_model: ORM class of the language-independent entity.
        translation_model: ORM class of the per-language record.
        payload_schema: Pydantic model validating one language entry.
        field_defaults: Value written for a tracked field the payload omits.
        required_field: Field a payload entry must fill to pass validation.
        slug_field: Translation field seeding the slug on upsert, if any.
        slug_sources: Parent-level slug seeds, tried in order.
        searchable_fields: Translation fields matched by text search.
        parent_attributes: Family scalars callers may set and read back.
    """

    name: str
    parent_model: Type[Any]
    translation_model: Type[Any]
    payload_schema: Type[BaseModel]
    field_defaults: Mapping[str, Any]
    required_field: str
    slug_field: Optional[str]
    slug_sources: SlugSources
    searchable_fields: Tuple[str, ...]
    parent_attributes: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def tracked_fields(self) -> Tuple[str, ...]:
        return self.translation_model.TRACKED_FIELDS

    def default_for(self, field_name: str) -> Any:
        value = self.field_defaults.get(field_name)
        # lists are copied so translations never share one default instance
        return list(value) if isinstance(value, list) else value


def _translated(parent: Any, field_name: str, fallback_code: str) -> Optional[str]:
    translation = get_translation_with_fallback(parent, fallback_code, fallback_code)
    if translation is None and parent.translations:
        translation = parent.translations[0]
    if translation is None:
        return None
    return getattr(translation, field_name, None)


def _feature_slug_sources(parent: Feature, fallback_code: str) -> List[Optional[str]]:
    return [_translated(parent, "title", fallback_code), parent.icon]


def _testimonial_slug_sources(
    parent: Testimonial, fallback_code: str
) -> List[Optional[str]]:
    return [parent.client_name, parent.client_company]


def _pricing_plan_slug_sources(
    parent: PricingPlan, fallback_code: str
) -> List[Optional[str]]:
    price = str(parent.price) if parent.price is not None else None
    return [_translated(parent, "name", fallback_code), price]


def _faq_slug_sources(parent: FAQ, fallback_code: str) -> List[Optional[str]]:
    return [_translated(parent, "question", fallback_code), parent.category]


_SHARED_ATTRIBUTES = ("slug", "is_active", "is_featured", "sort_order")

FEATURE = FamilyConfig(
    name="feature",
    parent_model=Feature,
    translation_model=FeatureTranslation,
    payload_schema=FeatureTranslationPayload,
    field_defaults={
        "title": "",
        "description": "",
        "meta_title": None,
        "meta_description": None,
    },
    required_field="title",
    slug_field="title",
    slug_sources=_feature_slug_sources,
    searchable_fields=("title", "description"),
    parent_attributes=_SHARED_ATTRIBUTES + ("icon",),
)

TESTIMONIAL = FamilyConfig(
    name="testimonial",
    parent_model=Testimonial,
    translation_model=TestimonialTranslation,
    payload_schema=TestimonialTranslationPayload,
    field_defaults={"content": ""},
    required_field="content",
    slug_field=None,
    slug_sources=_testimonial_slug_sources,
    searchable_fields=("content",),
    parent_attributes=_SHARED_ATTRIBUTES
    + (
        "client_name",
        "client_position",
        "client_company",
        "client_email",
        "rating",
    ),
)

PRICING_PLAN = FamilyConfig(
    name="pricing_plan",
    parent_model=PricingPlan,
    translation_model=PricingPlanTranslation,
    payload_schema=PricingPlanTranslationPayload,
    field_defaults={
        "name": "",
        "description": "",
        "features": [],
        "cta_text": None,
    },
    required_field="name",
    slug_field="name",
    slug_sources=_pricing_plan_slug_sources,
    searchable_fields=("name", "description"),
    parent_attributes=_SHARED_ATTRIBUTES
    + (
        "price",
        "billing_period",
        "currency",
        "features",
        "max_users",
        "max_projects",
        "storage_limit",
        "is_free",
        "stripe_product_id",
        "stripe_price_id",
    ),
)

FAQ_FAMILY = FamilyConfig(
    name="faq",
    parent_model=FAQ,
    translation_model=FAQTranslation,
    payload_schema=FAQTranslationPayload,
    field_defaults={"question": "", "answer": ""},
    required_field="question",
    slug_field="question",
    slug_sources=_faq_slug_sources,
    searchable_fields=("question", "answer"),
    parent_attributes=_SHARED_ATTRIBUTES + ("category",),
)

FAMILIES: Dict[str, FamilyConfig] = {
    config.name: config for config in (FEATURE, TESTIMONIAL, PRICING_PLAN, FAQ_FAMILY)
}


def get_family(name: str) -> FamilyConfig:
    """Look up a family by name (case-insensitive, ``-`` accepted for ``_``).

    Raises:
        InvalidArgumentError: If no family has that name.
    """
    key = (name or "").strip().lower().replace("-", "_")
    config = FAMILIES.get(key)
    if config is None:
        raise InvalidArgumentError(
            f"Unknown content family: {name!r}",
            details={"family": name, "known": sorted(FAMILIES)},
        )
    return config
