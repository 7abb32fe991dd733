"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of content
operations for callers (controllers, commands) that only deal in plain data.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        PERMANENT_ERROR: Non-retryable error (invalid argument, conflict)
        NOT_FOUND: Parent, language or source translation not found
    """

    SUCCESS = "success"
    PERMANENT_ERROR = "permanent_error"
    NOT_FOUND = "not_found"
