"""URL slug generation, unique within a family."""

import random
import re
import time
import unicodedata
import uuid
from typing import TYPE_CHECKING, Iterable, Optional

from infrastructure.logging import get_module_logger
from modules.content.core.timestamps import touch

if TYPE_CHECKING:
    from modules.content.families import FamilyConfig
    from modules.content.infrastructure.repository import ContentRepository

logger = get_module_logger()

# letters NFKD does not decompose into ASCII
_TRANSLITERATIONS = {
    "ß": "ss",
    "æ": "ae",
    "Æ": "ae",
    "ø": "o",
    "Ø": "o",
    "œ": "oe",
    "Œ": "oe",
    "ł": "l",
    "Ł": "l",
    "đ": "d",
    "Đ": "d",
    "þ": "th",
    "Þ": "th",
}
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")
_VALID_SLUG = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


def clean_slug(text: Optional[str]) -> str:
    """Normalize text into slug form without any uniqueness check.

    Diacritics are transliterated, the result is lowercased, every run of
    characters outside ``[a-z0-9]`` becomes one hyphen and edge hyphens are
    trimmed. May return an empty string.
    """
    if not text:
        return ""
    text = "".join(_TRANSLITERATIONS.get(char, char) for char in text)
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALPHANUMERIC.sub("-", text).strip("-")


def is_valid_slug(slug: Optional[str]) -> bool:
    return bool(slug) and _VALID_SLUG.match(slug) is not None


class SlugGenerator:
    """Generates slugs that no other record of the family holds.

    Candidates are ``base``, then ``base-1`` up to ``base-<max_attempts>``.
    When all are taken, ``base-<unix time>-<100..999>`` is returned without
    another lookup and a warning is logged.
    """

    def __init__(
        self,
        repository: "ContentRepository",
        max_attempts: int = 100,
        placeholder_prefix: str = "item",
    ):
        self.repository = repository
        self.max_attempts = max_attempts
        self.placeholder_prefix = placeholder_prefix

    def placeholder(self) -> str:
        return f"{self.placeholder_prefix}-{uuid.uuid4().hex[:13]}"

    def generate_unique_slug(
        self,
        seed_text: Optional[str],
        family: "FamilyConfig",
        exclude_id: Optional[int] = None,
    ) -> str:
        base = clean_slug(seed_text) or self.placeholder()

        if not self.repository.slug_exists(family, base, exclude_id):
            return base

        for counter in range(1, self.max_attempts + 1):
            candidate = f"{base}-{counter}"
            if not self.repository.slug_exists(family, candidate, exclude_id):
                return candidate

        fallback = f"{base}-{int(time.time())}-{random.randint(100, 999)}"
        logger.warning(
            "slug_attempts_exhausted",
            family=family.name,
            base=base,
            attempts=self.max_attempts,
            slug=fallback,
        )
        return fallback

    def generate_slug_from_multiple_sources(
        self,
        sources: Iterable[Optional[str]],
        family: "FamilyConfig",
        exclude_id: Optional[int] = None,
    ) -> str:
        """Use the first source that is not blank; fall back to a placeholder."""
        for source in sources:
            if source is not None and str(source).strip():
                return self.generate_unique_slug(str(source), family, exclude_id)
        return self.generate_unique_slug(None, family, exclude_id)

    def count_missing_slugs(self, family: "FamilyConfig") -> int:
        return len(self.repository.find_parents_missing_slug(family))

    def generate_missing_slugs(self, family: "FamilyConfig", fallback_code: str) -> int:
        """Assign slugs to every parent without one and commit once.

        Returns:
            Number of parents that received a slug.
        """
        parents = self.repository.find_parents_missing_slug(family)
        for parent in parents:
            parent.slug = self.generate_slug_from_multiple_sources(
                family.slug_sources(parent, fallback_code), family, parent.id
            )
            touch(parent)
            logger.debug(
                "slug_generated", family=family.name, id=parent.id, slug=parent.slug
            )

        if parents:
            self.repository.commit()
        logger.info("missing_slugs_generated", family=family.name, count=len(parents))
        return len(parents)
