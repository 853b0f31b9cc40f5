"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """Current UTC time, used as the Python-side default for timestamp columns."""
    return datetime.now(UTC)


class CreatedAtMixin:
    """Mixin to add a created_at column for append-only records."""

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
