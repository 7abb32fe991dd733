"""Shared fixtures: in-memory database, session and seeded languages."""

import pytest
from sqlalchemy.pool import StaticPool

import modules.content.models  # noqa: F401  registers tables on Base
from infrastructure.configuration import DatabaseSettings
from infrastructure.persistence import (
    create_engine_from_settings,
    create_schema,
    create_session_factory,
)
from modules.content.core.slugs import SlugGenerator
from modules.content.infrastructure import ContentRepository, LanguageRegistry


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_engine_from_settings(
        DatabaseSettings(DATABASE_URL="sqlite://"),
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def languages(session):
    """Registry seeded with fr (default), en and de."""
    registry = LanguageRegistry(session, fallback_code="fr")
    registry.create("fr", "Français", is_default=True)
    registry.create("en", "English")
    registry.create("de", "Deutsch")
    session.commit()
    return registry


@pytest.fixture
def repository(session):
    return ContentRepository(session)


@pytest.fixture
def slugs(repository):
    return SlugGenerator(repository, max_attempts=100, placeholder_prefix="item")
