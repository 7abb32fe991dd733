"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the site
content application using Pydantic BaseSettings with domain-based
organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    ContentFeatureSettings: Translatable content settings class
    DatabaseSettings: Database connection settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    fallback = settings.content.fallback_language_code
    database_url = settings.database.url
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features.content import ContentFeatureSettings
from infrastructure.configuration.infrastructure.database import DatabaseSettings

__all__ = ["Settings", "ContentFeatureSettings", "DatabaseSettings"]
