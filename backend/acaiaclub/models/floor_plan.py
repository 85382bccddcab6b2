"""
Acaia Club Backend — Floor Plan and Venue Object Models
========================================================

What:  ORM models for the `floor_plans` and `venue_objects` tables.
Why:   The floor-plan editor places tables, workstations, storage and
       fixtures on a named canvas; each placed item is a VenueObject.
Who:   Used by the floor-plan and venue-object services, and by the
       storage-locations listing.

Table Design Rationale:
    - width / height default to 100: a new plan is a 100x100 canvas until
      the editor resizes it
    - anchor_x / anchor_y are floats: objects are dragged freely, not snapped
    - reservation_cost is NUMERIC(10, 2): money never goes through a float;
      the API serializes it as a decimal string
    - workstation_id is UNIQUE: a workstation appears on the map at most once
      (NULLs are not compared, so any number of non-workstation objects fit)
    - venue_objects.floor_plan_id cascades on delete: objects belong to
      their plan and have no meaning without it
"""

import uuid
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from acaiaclub.database import Base
from acaiaclub.models.base import TimestampMixin, UUIDPrimaryKeyMixin
from acaiaclub.models.enums import VenueObjectType


class FloorPlan(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """
    A named drawing of (part of) the venue.

    Query Patterns:
        - List plans: ORDER BY name
        - Plan detail: plan + objects ORDER BY name, created_at, each with
          its workstation, loaded in one request via selectin loading
    """

    __tablename__ = "floor_plans"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    width: Mapped[int] = mapped_column(Integer, nullable=False, default=100)
    height: Mapped[int] = mapped_column(Integer, nullable=False, default=100)

    objects: Mapped[List["VenueObject"]] = relationship(
        back_populates="floor_plan",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: [VenueObject.name, VenueObject.created_at],
    )

    def __repr__(self) -> str:
        return f"<FloorPlan(id={self.id}, name='{self.name}')>"


class VenueObject(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A single item placed on a floor plan."""

    __tablename__ = "venue_objects"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    type: Mapped[VenueObjectType] = mapped_column(
        Enum(VenueObjectType, name="venue_object_type"),
        nullable=False,
    )

    # ── Geometry ──────────────────────────────────────────────────────────
    anchor_x: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    anchor_y: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    width: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    rotation: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # ── Reservations ──────────────────────────────────────────────────────
    capacity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_reservable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reservation_cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )

    # ── Relationships ─────────────────────────────────────────────────────
    floor_plan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("floor_plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    workstation_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("workstations.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    floor_plan: Mapped["FloorPlan"] = relationship(back_populates="objects")
    workstation: Mapped[Optional["Workstation"]] = relationship(  # noqa: F821
        back_populates="venue_object"
    )

    __table_args__ = (
        Index("idx_venue_objects_floor_plan_id", "floor_plan_id"),
        Index("idx_venue_objects_type", "type"),
    )

    def __repr__(self) -> str:
        return f"<VenueObject(id={self.id}, name='{self.name}', type={self.type})>"
