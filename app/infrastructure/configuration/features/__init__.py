"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.content import ContentFeatureSettings

__all__ = [
    "ContentFeatureSettings",
]
