"""Explicit timestamp assignment for entities and translations."""

from datetime import datetime, timezone
from typing import Optional

from modules.content.domain.types import HasTimestamps


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def stamp_created(entity: HasTimestamps, now: Optional[datetime] = None) -> None:
    """Set both timestamps on a record that has never been persisted."""
    now = now or utcnow()
    entity.created_at = now
    entity.updated_at = now


def touch(entity: HasTimestamps, now: Optional[datetime] = None) -> None:
    """Refresh ``updated_at``; stamps ``created_at`` too if it was never set."""
    now = now or utcnow()
    if entity.created_at is None:
        entity.created_at = now
    entity.updated_at = now
