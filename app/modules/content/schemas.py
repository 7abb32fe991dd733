"""Payload and response contracts for translatable content.

Payload schemas validate one language entry of an upsert payload
(``{"fr": {...}, "en": {...}}``): strings are stripped, lengths are checked
and unknown keys are ignored. Every field is optional; a missing or ``None``
value is replaced by the family default when the translation is written.

Response schemas are the plain shapes returned by ``modules.content.service``.
"""

import html
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationInfo, field_validator

from infrastructure.models import InfrastructureModel


# ---------------------------------------------------------------------------
# Translation payloads
# ---------------------------------------------------------------------------


# Column widths of FeatureTranslation; escaping can lengthen a value.
_ESCAPED_LIMITS = {"title": 255, "meta_title": 500}


class FeatureTranslationPayload(InfrastructureModel):
    """Feature text fields. Markup is escaped before storage."""

    title: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    meta_title: Optional[str] = Field(default=None, max_length=500)
    meta_description: Optional[str] = None

    @field_validator("title", "description", "meta_title", "meta_description")
    @classmethod
    def _escape_markup(
        cls, value: Optional[str], info: ValidationInfo
    ) -> Optional[str]:
        if value is None:
            return None
        escaped = html.escape(value, quote=True)
        limit = _ESCAPED_LIMITS.get(info.field_name)
        if limit is not None and len(escaped) > limit:
            raise ValueError(
                f"must be at most {limit} characters once markup is escaped"
            )
        return escaped


class TestimonialTranslationPayload(InfrastructureModel):
    content: Optional[str] = None


class PricingPlanTranslationPayload(InfrastructureModel):
    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    cta_text: Optional[str] = Field(default=None, max_length=255)

    @field_validator("features")
    @classmethod
    def _drop_blank_features(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        return [item for item in value if item]


class FAQTranslationPayload(InfrastructureModel):
    question: Optional[str] = Field(default=None, max_length=500)
    answer: Optional[str] = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class TranslationResponse(InfrastructureModel):
    """A single translation with its computed completeness."""

    id: Optional[int] = None
    parent_id: Optional[int] = None
    language: str
    fields: Dict[str, Any]
    is_complete: bool
    is_partial: bool
    completion_percentage: int
    updated_at: Optional[datetime] = None


class ParentResponse(InfrastructureModel):
    """A parent entity with its family attributes and translation summary."""

    id: Optional[int] = None
    family: str
    slug: Optional[str] = None
    attributes: Dict[str, Any]
    languages: List[str]
    translations: List[TranslationResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LocalizedContentResponse(InfrastructureModel):
    """A parent rendered for one locale.

    ``language`` is the language actually served; it differs from
    ``requested_language`` when the fallback translation was used and is
    ``None`` when neither translation exists.
    """

    id: Optional[int] = None
    family: str
    slug: Optional[str] = None
    requested_language: str
    language: Optional[str] = None
    fallback_used: bool = False
    attributes: Dict[str, Any]
    fields: Dict[str, Any]


class SearchResultResponse(InfrastructureModel):
    parent_id: int
    slug: Optional[str] = None
    language: str
    fields: Dict[str, Any]
