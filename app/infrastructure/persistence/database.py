"""SQLAlchemy engine, session factory and transactional scope.

Every content operation runs inside one session obtained from
``session_scope``: the session is committed when the block exits normally,
rolled back when it raises, and always closed.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from infrastructure.configuration import DatabaseSettings
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class Base(DeclarativeBase):
    """Declarative base shared by every ORM entity."""


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_from_settings(
    database: DatabaseSettings, **engine_kwargs
) -> Engine:
    """Build an Engine from DatabaseSettings.

    SQLite connections get foreign key enforcement switched on so that the
    ON DELETE CASCADE rules declared on translation tables apply.

    Args:
        database: Database settings (URL, echo flag).
        **engine_kwargs: Extra keyword arguments forwarded to create_engine.

    Returns:
        Configured SQLAlchemy Engine.
    """
    engine = create_engine(database.url, echo=database.echo, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    logger.info("engine_created", dialect=engine.dialect.name)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to the engine.

    Objects stay usable after commit (expire_on_commit=False) so callers can
    serialize what an operation returned without another round trip.
    """
    return sessionmaker(bind=engine, expire_on_commit=False, class_=Session)


def create_schema(engine: Engine) -> None:
    """Create all tables registered on the declarative base."""
    Base.metadata.create_all(engine)


@contextmanager
def session_scope(
    session_factory: Optional[sessionmaker] = None,
) -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations.

    Args:
        session_factory: Factory to open the session with. Defaults to the
            application-scoped factory from infrastructure.services.

    Yields:
        An open Session; committed on success, rolled back on error.
    """
    if session_factory is None:
        from infrastructure.services.providers import get_session_factory

        session_factory = get_session_factory()

    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
