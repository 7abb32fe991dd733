"""Errors for the content module."""

from typing import Any, Optional


class ContentError(Exception):
    """Base class for content operation failures.

    Attributes:
        message: human-friendly message
        error_code: machine-readable code used by the service boundary
        details: optional structured context (family, ids, codes)
    """

    error_code = "content_error"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ContentError):
    """Requested parent, language or source translation does not exist."""

    error_code = "not_found"


class InvalidArgumentError(ContentError):
    """Malformed language code, invalid payload, bad slug or unknown family."""

    error_code = "invalid_argument"


class ConflictError(ContentError):
    """A second translation for an existing (parent, language) pair, or any
    other uniqueness violation reported by the database."""

    error_code = "conflict"
