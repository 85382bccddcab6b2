"""Request/response bodies for the vinyl library and DJ session endpoints."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from acaiaclub.models.enums import DJSessionStatus
from acaiaclub.schemas.common import INT32_MAX, CamelModel


# ── Library Slots ─────────────────────────────────────────────────────────


class VinylSlotCreate(CamelModel):
    row: int = Field(ge=0, le=INT32_MAX)
    column: int = Field(ge=0, le=INT32_MAX)
    capacity: int = Field(default=30, gt=0, le=INT32_MAX)


class VinylSlotRead(CamelModel):
    id: uuid.UUID
    row: int
    column: int
    capacity: int
    created_at: datetime
    updated_at: datetime


# ── Records ───────────────────────────────────────────────────────────────


class VinylRecordCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    artist: str = Field(min_length=1, max_length=200)
    genre: Optional[str] = Field(default=None, max_length=100)
    year: Optional[int] = Field(default=None, ge=1000, le=9999)
    image_url: Optional[str] = Field(default=None, max_length=500)
    slot_id: uuid.UUID
    position_in_slot: int = Field(ge=0, le=INT32_MAX)


class VinylRecordSummary(CamelModel):
    id: uuid.UUID
    title: str
    artist: str
    genre: Optional[str]
    year: Optional[int]
    image_url: Optional[str]
    slot_id: uuid.UUID
    position_in_slot: int


class VinylRecordRead(VinylRecordSummary):
    """A record together with the slot it lives in."""

    slot: VinylSlotRead
    created_at: datetime
    updated_at: datetime


# ── DJ Sessions ───────────────────────────────────────────────────────────


class DJSessionCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)


class DJSetTrackCreate(CamelModel):
    session_id: uuid.UUID
    vinyl_record_id: uuid.UUID


class DJSetTrackRead(CamelModel):
    id: uuid.UUID
    session_id: uuid.UUID
    vinyl_record_id: uuid.UUID
    played_at: datetime
    vinyl_record: VinylRecordSummary


class DJSessionRead(CamelModel):
    id: uuid.UUID
    name: str
    status: DJSessionStatus
    actual_start_time: datetime
    actual_end_time: Optional[datetime]
    # Most recent first
    tracks: List[DJSetTrackRead]
    created_at: datetime
    updated_at: datetime
