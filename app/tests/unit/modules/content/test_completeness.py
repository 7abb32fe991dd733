"""Unit tests for modules.content.core.completeness.

Tests cover:
- Filled-field semantics (None, blank strings, empty collections)
- Per-family complete/partial/percentage rules
- Per-parent aggregation with missing languages
- Per-language statistics
"""

import itertools

import pytest

from modules.content.core.completeness import (
    are_all_translations_complete,
    average_completion_percentage,
    completion_percentage,
    is_complete,
    is_filled,
    is_partial,
    language_statistics,
    parent_completion_percentage,
    parent_language_status,
    translation_status,
)
from modules.content.models import (
    FAQ,
    FAQTranslation,
    Feature,
    FeatureTranslation,
    Language,
    PricingPlanTranslation,
    TestimonialTranslation,
)

FR = Language(code="fr", is_active=True)
EN = Language(code="en", is_active=True)
DE = Language(code="de", is_active=True)


@pytest.mark.unit
class TestIsFilled:
    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t", [], (), {}])
    def test_empty_values(self, value):
        """None, blank strings and empty collections are not filled."""
        assert is_filled(value) is False

    @pytest.mark.parametrize("value", ["x", " x ", ["a"], 0, False])
    def test_filled_values(self, value):
        """Any other value counts as filled."""
        assert is_filled(value) is True


@pytest.mark.unit
class TestFeatureTranslation:
    def test_complete_with_title_and_description(self):
        """Feature needs title and description to be complete."""
        translation = FeatureTranslation(title="Fast", description="Very fast")

        assert is_complete(translation) is True
        assert is_partial(translation) is True
        assert completion_percentage(translation) == 50

    def test_all_tracked_fields_filled(self):
        """SEO fields only count toward the percentage."""
        translation = FeatureTranslation(
            title="Fast",
            description="Very fast",
            meta_title="Fast | Site",
            meta_description="Fast things",
        )

        assert completion_percentage(translation) == 100

    def test_title_only_is_partial(self):
        """One filled field makes the translation partial."""
        translation = FeatureTranslation(title="Fast", description="")

        assert is_complete(translation) is False
        assert is_partial(translation) is True
        assert completion_percentage(translation) == 25

    def test_whitespace_title_is_empty(self):
        """Whitespace-only strings do not count as content."""
        translation = FeatureTranslation(title="   ", description=None)

        assert is_partial(translation) is False
        assert completion_percentage(translation) == 0


@pytest.mark.unit
class TestOtherFamilies:
    def test_faq_rules(self):
        """FAQ needs question and answer."""
        translation = FAQTranslation(question="Why?", answer="")

        assert is_complete(translation) is False
        assert is_partial(translation) is True
        assert completion_percentage(translation) == 50

    def test_testimonial_percentage_is_all_or_nothing(self):
        """Testimonial tracks a single field."""
        assert completion_percentage(TestimonialTranslation(content="Great")) == 100
        assert completion_percentage(TestimonialTranslation(content="")) == 0

    def test_pricing_plan_partial(self):
        """Name without description is partial, not complete."""
        translation = PricingPlanTranslation(
            name="Pro", description="", features=[], cta_text=None
        )

        assert is_complete(translation) is False
        assert is_partial(translation) is True
        assert completion_percentage(translation) < 100
        assert completion_percentage(translation) == 25

    def test_pricing_plan_empty_feature_list_is_not_filled(self):
        """An empty features list does not count."""
        translation = PricingPlanTranslation(
            name="Pro", description="All", features=["SSO"], cta_text="Buy"
        )

        assert completion_percentage(translation) == 100
        translation.features = []
        assert completion_percentage(translation) == 75


@pytest.mark.unit
class TestCompletionIsMonotonic:
    """Filling an empty tracked field never lowers the percentage."""

    @pytest.mark.parametrize(
        "model",
        [
            FeatureTranslation,
            TestimonialTranslation,
            PricingPlanTranslation,
            FAQTranslation,
        ],
    )
    def test_filling_fields_in_any_order(self, model):
        for order in itertools.permutations(model.TRACKED_FIELDS):
            translation = model()
            previous = completion_percentage(translation)
            assert previous == 0

            for field_name in order:
                value = ["item"] if field_name == "features" else "text"
                setattr(translation, field_name, value)
                current = completion_percentage(translation)
                assert current >= previous, order
                previous = current

            assert previous == 100

    def test_parent_percentage_in_any_order(self):
        slots = [
            (language, field_name)
            for language in (FR, EN)
            for field_name in FAQTranslation.TRACKED_FIELDS
        ]
        for order in itertools.permutations(slots):
            faq = FAQ()
            previous = parent_completion_percentage(
                faq, [FR, EN], FAQTranslation.TRACKED_FIELDS
            )
            assert previous == 0

            for language, field_name in order:
                translation = next(
                    (t for t in faq.translations if t.language is language), None
                )
                if translation is None:
                    translation = FAQTranslation(language=language)
                    faq.translations.append(translation)
                setattr(translation, field_name, "text")
                current = parent_completion_percentage(
                    faq, [FR, EN], FAQTranslation.TRACKED_FIELDS
                )
                assert current >= previous, order
                previous = current

            assert previous == 100


@pytest.mark.unit
class TestRounding:
    def test_fraction_rounds_to_nearest(self):
        """2 of 12 tracked fields is 16.67 and rounds to 17."""
        feature = Feature()
        feature.translations.append(
            FeatureTranslation(language=FR, title="a", description="b")
        )
        assert parent_completion_percentage(
            feature, [FR, EN, DE], FeatureTranslation.TRACKED_FIELDS
        ) == 17

    def test_half_rounds_up(self):
        """Exact halves round up."""
        feature = Feature()
        feature.translations.append(
            FeatureTranslation(
                language=FR, title="a", description="b", meta_title="c"
            )
        )
        # 3 of 8 = 37.5 -> 38
        assert parent_completion_percentage(
            feature, [FR, EN], FeatureTranslation.TRACKED_FIELDS
        ) == 38


@pytest.mark.unit
class TestParentAggregation:
    def test_parent_without_translations_is_zero(self):
        """An FAQ without translations has entity completion 0."""
        faq = FAQ()

        assert parent_completion_percentage(
            faq, [FR, EN], FAQTranslation.TRACKED_FIELDS
        ) == 0

    def test_no_languages_is_zero(self):
        """No active languages means nothing to complete."""
        assert parent_completion_percentage(
            FAQ(), [], FAQTranslation.TRACKED_FIELDS
        ) == 0

    def test_missing_languages_add_to_denominator(self):
        """A fully translated language plus a missing one is 50%."""
        faq = FAQ()
        faq.translations.append(FAQTranslation(language=FR, question="Q", answer="A"))

        assert parent_completion_percentage(
            faq, [FR, EN], FAQTranslation.TRACKED_FIELDS
        ) == 50

    def test_language_status_marks_missing(self):
        """Every requested language appears, missing ones flagged."""
        faq = FAQ()
        faq.translations.append(FAQTranslation(language=FR, question="Q", answer=""))

        status = parent_language_status(faq, [FR, EN])

        assert status["fr"]["missing"] is False
        assert status["fr"]["partial"] is True
        assert status["fr"]["complete"] is False
        assert status["fr"]["completion_percentage"] == 50
        assert status["en"] == {
            "language": "en",
            "complete": False,
            "partial": False,
            "missing": True,
            "completion_percentage": 0,
        }

    def test_translation_status_only_lists_existing(self):
        """translation_status reports existing translations only."""
        faq = FAQ()
        faq.translations.append(FAQTranslation(language=FR, question="Q", answer="A"))

        assert translation_status(faq) == {"fr": {"complete": True, "partial": True}}

    def test_all_complete_false_without_translations(self):
        """An entity with no translations is never all-complete."""
        assert are_all_translations_complete(FAQ()) is False

    def test_all_complete(self):
        faq = FAQ()
        faq.translations.append(FAQTranslation(language=FR, question="Q", answer="A"))
        faq.translations.append(FAQTranslation(language=EN, question="Q", answer=""))

        assert are_all_translations_complete(faq) is False
        faq.translations[1].answer = "A"
        assert are_all_translations_complete(faq) is True

    def test_average_completion_percentage(self):
        """Mean of per-translation percentages with one decimal."""
        feature = Feature()
        feature.translations.append(
            FeatureTranslation(language=FR, title="a", description="b")
        )
        feature.translations.append(FeatureTranslation(language=EN, title="a"))

        assert average_completion_percentage(feature) == 37.5
        assert average_completion_percentage(Feature()) == 0.0


@pytest.mark.unit
class TestLanguageStatistics:
    def test_counts_per_language(self):
        """total/translated/complete/incomplete/missing per language."""
        complete = FAQ()
        complete.translations.append(
            FAQTranslation(language=FR, question="Q", answer="A")
        )
        partial = FAQ()
        partial.translations.append(FAQTranslation(language=FR, question="Q"))
        untranslated = FAQ()

        stats = language_statistics([complete, partial, untranslated], [FR, EN])

        assert stats[0] == {
            "language": "fr",
            "total": 3,
            "translated": 2,
            "complete": 1,
            "incomplete": 1,
            "missing": 1,
            "completion_percentage": 33.3,
        }
        assert stats[1]["translated"] == 0
        assert stats[1]["missing"] == 3
        assert stats[1]["completion_percentage"] == 0.0

    def test_no_parents(self):
        """Zero parents gives 0.0 instead of dividing by zero."""
        stats = language_statistics([], [FR])

        assert stats[0]["total"] == 0
        assert stats[0]["completion_percentage"] == 0.0

    def test_invariants(self):
        """incomplete = translated - complete and missing = total - translated."""
        parents = []
        for question, answer in [("Q", "A"), ("Q", ""), ("", "")]:
            faq = FAQ()
            faq.translations.append(
                FAQTranslation(language=EN, question=question, answer=answer)
            )
            parents.append(faq)
        parents.append(FAQ())

        for row in language_statistics(parents, [FR, EN]):
            assert row["incomplete"] == row["translated"] - row["complete"]
            assert row["missing"] == row["total"] - row["translated"]
