"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from infrastructure.configuration import Settings
from infrastructure.persistence.database import (
    create_engine_from_settings,
    create_session_factory,
)


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Usage:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_engine() -> Engine:
    """
    Get application-scoped SQLAlchemy engine singleton.

    Returns:
        Engine: Cached engine configured from settings.database.
    """
    return create_engine_from_settings(get_settings().database)


@lru_cache
def get_session_factory() -> sessionmaker:
    """
    Get application-scoped session factory singleton.

    Usage:
        from infrastructure.persistence import session_scope

        with session_scope(get_session_factory()) as session:
            ...

    Returns:
        sessionmaker: Cached factory bound to the application engine.
    """
    return create_session_factory(get_engine())
