"""Site content feature settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class ContentFeatureSettings(FeatureSettings):
    """Configuration for translatable site content.

    Environment Variables:
        FALLBACK_LANGUAGE_CODE: Language used when none is flagged default and
            as the fallback hop during translation resolution (default: fr)
        SLUG_MAX_ATTEMPTS: Numbered suffixes tried before the timestamp
            fallback kicks in (default: 100)
        SLUG_PLACEHOLDER_PREFIX: Prefix for slugs generated from empty seeds
            (default: item)
        SEARCH_DEFAULT_LIMIT: Maximum results returned by translation search
            (default: 20)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        fallback = settings.content.fallback_language_code
        ```
    """

    fallback_language_code: str = Field(
        default="fr",
        alias="FALLBACK_LANGUAGE_CODE",
        description="Conventional default language code",
    )
    slug_max_attempts: int = Field(
        default=100,
        alias="SLUG_MAX_ATTEMPTS",
        description="Bounded number of numbered slug candidates",
    )
    slug_placeholder_prefix: str = Field(
        default="item",
        alias="SLUG_PLACEHOLDER_PREFIX",
        description="Prefix used when a slug seed normalizes to nothing",
    )
    search_default_limit: int = Field(
        default=20,
        alias="SEARCH_DEFAULT_LIMIT",
        description="Default maximum number of search results",
    )

    @field_validator("fallback_language_code", mode="before")
    @classmethod
    def _normalize_fallback(cls, value):
        if value is None:
            return "fr"
        text = str(value).strip()
        return text or "fr"

    @field_validator("slug_max_attempts")
    @classmethod
    def _positive_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("SLUG_MAX_ATTEMPTS must be at least 1")
        return value
