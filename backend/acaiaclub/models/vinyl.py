"""
Acaia Club Backend — Vinyl Library and DJ Session Models
=========================================================

What:  ORM models for the record shelf (slots and records) and for live DJ
       sessions with the tracks played during them.
Why:   The DJ booth keeps a physical library organised as a grid of slots;
       each played record is logged against the running session.

Table Design Rationale:
    - (row, column) UNIQUE on slots: one physical cubby per grid cell
    - (slot_id, position_in_slot) UNIQUE on records: two records cannot
      claim the same place on the shelf
    - records → slots and tracks → records use RESTRICT: a slot that still
      holds records, or a record that has been played, cannot be deleted
      (the API answers 409)
    - tracks → sessions cascade: a session's play log goes with it
"""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from acaiaclub.database import Base
from acaiaclub.models.base import TimestampMixin, UUIDPrimaryKeyMixin, utcnow
from acaiaclub.models.enums import DJSessionStatus


class VinylLibrarySlot(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """One cell of the record shelf grid."""

    __tablename__ = "vinyl_library_slots"

    row: Mapped[int] = mapped_column(Integer, nullable=False)
    column: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=30)

    records: Mapped[List["VinylRecord"]] = relationship(
        back_populates="slot",
        passive_deletes="all",
    )

    __table_args__ = (
        UniqueConstraint("row", "column", name="uq_vinyl_library_slots_row_column"),
    )

    def __repr__(self) -> str:
        return f"<VinylLibrarySlot(id={self.id}, row={self.row}, column={self.column})>"


class VinylRecord(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "vinyl_records"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    artist: Mapped[str] = mapped_column(String(200), nullable=False)
    genre: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    slot_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("vinyl_library_slots.id", ondelete="RESTRICT"),
        nullable=False,
    )
    position_in_slot: Mapped[int] = mapped_column(Integer, nullable=False)

    slot: Mapped["VinylLibrarySlot"] = relationship(back_populates="records")
    plays: Mapped[List["DJSetTrack"]] = relationship(
        back_populates="vinyl_record",
        passive_deletes="all",
    )

    __table_args__ = (
        UniqueConstraint(
            "slot_id", "position_in_slot", name="uq_vinyl_records_slot_position"
        ),
        Index("idx_vinyl_records_artist", "artist"),
    )

    def __repr__(self) -> str:
        return f"<VinylRecord(id={self.id}, artist='{self.artist}', title='{self.title}')>"


class DJSession(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    A stretch of time a DJ is playing.

    Lifecycle:
        1. Created LIVE with actual_start_time = now ("go live")
        2. Tracks are appended while LIVE
        3. Ended: status ENDED and actual_end_time = now, in one write
    """

    __tablename__ = "dj_sessions"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[DJSessionStatus] = mapped_column(
        Enum(DJSessionStatus, name="dj_session_status"),
        nullable=False,
        default=DJSessionStatus.LIVE,
    )
    actual_start_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    actual_end_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    tracks: Mapped[List["DJSetTrack"]] = relationship(
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: DJSetTrack.played_at.desc(),
    )

    __table_args__ = (Index("idx_dj_sessions_status", "status"),)


class DJSetTrack(UUIDPrimaryKeyMixin, Base):
    """A record played during a session; played_at is stamped on insert."""

    __tablename__ = "dj_set_tracks"

    session_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("dj_sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    vinyl_record_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("vinyl_records.id", ondelete="RESTRICT"),
        nullable=False,
    )
    played_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    session: Mapped["DJSession"] = relationship(back_populates="tracks")
    vinyl_record: Mapped["VinylRecord"] = relationship(back_populates="plays")

    __table_args__ = (Index("idx_dj_set_tracks_session_id", "session_id"),)
