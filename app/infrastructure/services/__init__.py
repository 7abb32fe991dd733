"""
Service providers.

Provides application-scoped singleton accessors for infrastructure services.
"""

from infrastructure.services.providers import (
    get_settings,
    get_engine,
    get_session_factory,
)

__all__ = [
    "get_settings",
    "get_engine",
    "get_session_factory",
]
