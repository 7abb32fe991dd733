import pytest

from jobs.generate_missing_slugs import generate_missing_slugs, main
from modules.content.domain.errors import InvalidArgumentError
from modules.content.models import FAQ, Feature, Testimonial
from tests.factories.content import make_faq, make_feature, make_testimonial


@pytest.fixture
def missing(session, languages):
    make_feature(session, {"fr": {"title": "Rapide"}}, slug=None)
    make_feature(session, slug="", icon="rocket")
    make_faq(session, slug=None, category="Billing")
    make_testimonial(session, slug=None, client_name="Ana Silva")
    make_feature(session, slug="has-one")
    session.commit()


@pytest.mark.unit
class TestGenerateMissingSlugs:
    def test_all_families(self, missing, session_factory):
        counts = generate_missing_slugs(session_factory=session_factory)

        assert counts == {"feature": 2, "testimonial": 1, "pricing_plan": 0, "faq": 1}
        with session_factory() as check:
            slugs = sorted(feature.slug for feature in check.query(Feature))
            assert slugs == ["has-one", "rapide", "rocket"]
            assert check.query(FAQ).one().slug == "billing"
            assert check.query(Testimonial).one().slug == "ana-silva"

    def test_single_family(self, missing, session_factory):
        counts = generate_missing_slugs("faq", session_factory=session_factory)

        assert counts == {"faq": 1}

    def test_dry_run_changes_nothing(self, missing, session_factory):
        counts = generate_missing_slugs(dry_run=True, session_factory=session_factory)

        assert counts["feature"] == 2
        with session_factory() as check:
            assert check.query(Feature).filter(Feature.slug.is_(None)).count() == 1

    def test_second_run_is_a_no_op(self, missing, session_factory):
        generate_missing_slugs(session_factory=session_factory)

        counts = generate_missing_slugs(session_factory=session_factory)

        assert sum(counts.values()) == 0

    def test_unknown_family(self, session_factory):
        with pytest.raises(InvalidArgumentError):
            generate_missing_slugs("blog", session_factory=session_factory)


@pytest.fixture
def default_factory(monkeypatch, session_factory):
    """Route the application session factory to the test database."""
    monkeypatch.setattr(
        "infrastructure.services.providers.get_session_factory",
        lambda: session_factory,
    )


@pytest.mark.unit
class TestMain:
    def test_reports_counts(self, missing, default_factory, session_factory, capsys):
        main(["--family", "faq"])

        assert capsys.readouterr().out == "faq: 1 received a slug\n"
        with session_factory() as check:
            assert check.query(FAQ).one().slug == "billing"

    def test_dry_run(self, missing, default_factory, session_factory, capsys):
        main(["--dry-run"])

        output = capsys.readouterr().out
        assert "feature: 2 would receive a slug" in output
        with session_factory() as check:
            assert check.query(FAQ).one().slug is None

    def test_unknown_family_rejected(self, default_factory):
        with pytest.raises(SystemExit):
            main(["--family", "blog_post"])
