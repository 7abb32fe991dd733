"""Database infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class DatabaseSettings(InfrastructureSettings):
    """Relational database connection configuration.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL (default: sqlite:///./content.db)
        DATABASE_ECHO: Log every SQL statement emitted by the engine

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        engine = create_engine(settings.database.url)
        ```
    """

    url: str = Field(
        default="sqlite:///./content.db",
        alias="DATABASE_URL",
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(
        default=False,
        alias="DATABASE_ECHO",
        description="Echo emitted SQL statements (debugging only)",
    )
