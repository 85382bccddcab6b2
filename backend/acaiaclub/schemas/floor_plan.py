"""
Acaia Club Backend — Floor Plan, Venue Object and Workstation Schemas
======================================================================

What:  Request and response bodies for /api/floorplans, /api/venue-objects,
       /api/storage-locations and /api/workstations.
Why:   Validation happens here, before any database call: shape, types,
       enum membership, UUID format, required fields.

Create vs Update:
    *Create schemas carry the real requirements. *Update schemas make every
    field optional; an absent field is left untouched, while a field that
    IS sent must still be valid (an explicit null on a required column is
    rejected rather than written).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator

from acaiaclub.models.enums import VenueObjectType
from acaiaclub.schemas.common import INT32_MAX, CamelModel, DecimalString


# ══════════════════════════════════════════════════════════════════════════
# Workstations
# ══════════════════════════════════════════════════════════════════════════


class WorkstationCreate(CamelModel):
    name: str = Field(min_length=1, max_length=120)


class WorkstationRead(CamelModel):
    id: uuid.UUID
    name: str
    created_at: datetime
    updated_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Venue Objects
# ══════════════════════════════════════════════════════════════════════════


class VenueObjectCreate(CamelModel):
    """
    What:  Body of POST /api/venue-objects.

    Rules:
        - name, type and floorPlanId are required
        - anchorX / anchorY default to 0 (top-left of the canvas)
        - a WORKSTATION object must carry a workstationId
    """

    name: str = Field(min_length=1, max_length=120)
    type: VenueObjectType
    floor_plan_id: uuid.UUID
    anchor_x: float = 0
    anchor_y: float = 0
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    rotation: Optional[float] = None
    capacity: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    is_reservable: bool = False
    reservation_cost: Optional[DecimalString] = Field(
        default=None, ge=0, max_digits=10, decimal_places=2
    )
    # validate_default so the check below also runs when the key is absent
    workstation_id: Optional[uuid.UUID] = Field(default=None, validate_default=True)

    @field_validator("workstation_id")
    @classmethod
    def workstation_objects_need_a_workstation(
        cls, value: Optional[uuid.UUID], info: ValidationInfo
    ) -> Optional[uuid.UUID]:
        if value is None and info.data.get("type") == VenueObjectType.WORKSTATION:
            raise ValueError("WORKSTATION objects must be linked to a workstation")
        return value


class VenueObjectUpdate(CamelModel):
    """Body of PATCH /api/venue-objects/{id}: move, resize, rename, relink."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    type: Optional[VenueObjectType] = None
    floor_plan_id: Optional[uuid.UUID] = None
    anchor_x: Optional[float] = None
    anchor_y: Optional[float] = None
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    rotation: Optional[float] = None
    capacity: Optional[int] = Field(default=None, ge=0, le=INT32_MAX)
    is_reservable: Optional[bool] = None
    reservation_cost: Optional[DecimalString] = Field(
        default=None, ge=0, max_digits=10, decimal_places=2
    )
    workstation_id: Optional[uuid.UUID] = None

    @field_validator("name", "type", "floor_plan_id", "anchor_x", "anchor_y", "is_reservable")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class VenueObjectRead(CamelModel):
    id: uuid.UUID
    name: str
    type: VenueObjectType
    floor_plan_id: uuid.UUID
    anchor_x: float
    anchor_y: float
    width: Optional[float]
    height: Optional[float]
    rotation: Optional[float]
    capacity: Optional[int]
    is_reservable: bool
    reservation_cost: Optional[DecimalString]
    workstation_id: Optional[uuid.UUID]
    workstation: Optional[WorkstationRead]
    created_at: datetime
    updated_at: datetime


class StorageLocationRead(CamelModel):
    """Trimmed venue object used by stock pickers."""

    id: uuid.UUID
    name: str
    type: VenueObjectType


# ══════════════════════════════════════════════════════════════════════════
# Floor Plans
# ══════════════════════════════════════════════════════════════════════════


class FloorPlanCreate(CamelModel):
    name: str = Field(min_length=1, max_length=120)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
    width: int = Field(default=100, gt=0, le=INT32_MAX)
    height: int = Field(default=100, gt=0, le=INT32_MAX)


class FloorPlanUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    description: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
    width: Optional[int] = Field(default=None, gt=0, le=INT32_MAX)
    height: Optional[int] = Field(default=None, gt=0, le=INT32_MAX)

    @field_validator("name", "width", "height")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class FloorPlanRead(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str]
    image_url: Optional[str]
    width: int
    height: int
    created_at: datetime
    updated_at: datetime


class FloorPlanDetail(FloorPlanRead):
    """A plan with every object on it (name, then creation order)."""

    objects: List[VenueObjectRead]
