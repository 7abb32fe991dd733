"""Persistence adapters for translatable content."""

from modules.content.infrastructure.languages import LanguageRegistry
from modules.content.infrastructure.repository import ContentRepository

__all__ = ["ContentRepository", "LanguageRegistry"]
