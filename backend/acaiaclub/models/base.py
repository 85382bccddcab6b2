"""
Acaia Club Backend — Shared Model Columns
==========================================

What:  Primary key and timestamp columns reused by every table.
Why:   Every resource exposes the same `id` / `createdAt` / `updatedAt` trio.

Column Choices:
    - UUID primary key, generated in Python: non-sequential (no enumeration)
      and known immediately after flush without a round trip
    - sqlalchemy.Uuid instead of the postgresql dialect type: native UUID
      on PostgreSQL, CHAR(32) on SQLite, so the test suite runs the same models
    - TIMESTAMP WITH TIME ZONE, always written in UTC
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """Current time in UTC. Every timestamp the application writes comes from here."""
    return datetime.now(timezone.utc)


class UUIDPrimaryKeyMixin:
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
