"""Persistence layer for site content.

Provides the SQLAlchemy declarative base, engine and session construction,
and the transactional session scope used by every content operation.
"""

from infrastructure.persistence.database import (
    Base,
    create_engine_from_settings,
    create_schema,
    create_session_factory,
    session_scope,
)

__all__ = [
    "Base",
    "create_engine_from_settings",
    "create_schema",
    "create_session_factory",
    "session_scope",
]
