"""Request context binding for structured logging.

This module provides utilities for binding operation-scoped context to logs,
enabling correlation IDs and operation metadata to flow through all log
entries emitted while a request or command is being handled.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(family="feature", operation="upsert"):
        # All logs within this block will include the context
        logger.info("processing_request")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    operation: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind operation-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique request identifier. Auto-generated if not provided.
        operation: Name of the public operation being executed.
        **extra_context: Additional key-value pairs to include in logs.
            ``None`` values are dropped.

    Yields:
        None - context is automatically bound to structlog's context vars.

    Example:
        with bind_request_context(operation="duplicate_translation", family="faq"):
            service.duplicate_translation(...)
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if operation is not None:
        context["operation"] = operation

    context.update({k: v for k, v in extra_context.items() if v is not None})

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
