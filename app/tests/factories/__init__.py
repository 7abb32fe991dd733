"""Test data factories for deterministic test data generation."""

from tests.factories.content import (
    make_faq,
    make_feature,
    make_pricing_plan,
    make_testimonial,
    make_translation,
)

__all__ = [
    "make_faq",
    "make_feature",
    "make_pricing_plan",
    "make_testimonial",
    "make_translation",
]
