"""Language registry backed by the ``languages`` table."""

import re
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from infrastructure.logging import get_module_logger
from modules.content.domain.errors import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
)
from modules.content.models import Language

logger = get_module_logger()

# en, fr, pt-BR, zh-Hant
LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2,3}(-[A-Za-z0-9]{2,8})?$")


def is_valid_language_code(code: Optional[str]) -> bool:
    return bool(code) and LANGUAGE_CODE_PATTERN.match(code) is not None


class LanguageRegistry:
    """Reads languages and resolves the default one.

    When no language is flagged default, the language whose code equals
    ``fallback_code`` is the default by convention, then the first active
    language by code.
    """

    def __init__(self, session: Session, fallback_code: str = "fr"):
        self.session = session
        self.fallback_code = fallback_code

    def find_by_code(self, code: Optional[str]) -> Optional[Language]:
        if not code:
            return None
        stmt = select(Language).where(Language.code == code)
        return self.session.scalars(stmt).first()

    def find_active(self) -> List[Language]:
        """Active languages, the default one first, the rest by code."""
        stmt = (
            select(Language).where(Language.is_active.is_(True)).order_by(Language.code)
        )
        languages = list(self.session.scalars(stmt))
        default = self.find_default()
        if default is not None and default in languages:
            languages.remove(default)
            languages.insert(0, default)
        return languages

    def find_default(self) -> Optional[Language]:
        flagged = self.session.scalars(
            select(Language).where(Language.is_default.is_(True)).order_by(Language.id)
        ).first()
        if flagged is not None:
            return flagged

        conventional = self.find_by_code(self.fallback_code)
        if conventional is not None:
            return conventional

        return self.session.scalars(
            select(Language).where(Language.is_active.is_(True)).order_by(Language.code)
        ).first()

    def create(
        self,
        code: str,
        name: str,
        is_active: bool = True,
        is_default: bool = False,
    ) -> Language:
        """Register a language. Flagging it default clears the previous flag.

        Raises:
            InvalidArgumentError: If the code is malformed.
            ConflictError: If the code is already registered.
        """
        if not is_valid_language_code(code):
            raise InvalidArgumentError(
                f"Malformed language code: {code!r}", details={"code": code}
            )
        if self.find_by_code(code) is not None:
            raise ConflictError(
                f"Language already exists: {code}", details={"code": code}
            )

        if is_default:
            self._clear_default()
        language = Language(
            code=code, name=name, is_active=is_active, is_default=is_default
        )
        self.session.add(language)
        self.session.flush()
        logger.info("language_created", code=code, is_default=is_default)
        return language

    def set_default(self, code: str) -> Language:
        language = self.find_by_code(code)
        if language is None:
            raise NotFoundError(f"Language not found: {code}", details={"code": code})
        self._clear_default()
        language.is_default = True
        self.session.flush()
        logger.info("default_language_changed", code=code)
        return language

    def _clear_default(self) -> None:
        for language in self.session.scalars(
            select(Language).where(Language.is_default.is_(True))
        ):
            language.is_default = False
