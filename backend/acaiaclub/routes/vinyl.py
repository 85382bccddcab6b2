"""
Acaia Club Backend — Vinyl Library Routes
==========================================

Route Inventory:
    GET    /api/vinyl-slots            slots by row, then column
    POST   /api/vinyl-slots            409 if (row, column) is taken
    DELETE /api/vinyl-slots/{id}       409 while records are still in it
    GET    /api/vinyl-records          records by artist, then title, with slot
    POST   /api/vinyl-records          409 if the slot position is taken
    DELETE /api/vinyl-records/{id}     409 once the record has been played
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import get_db_session
from acaiaclub.schemas.common import ERROR_RESPONSES, ApiResponse, DeletedResponse
from acaiaclub.schemas.vinyl import (
    VinylRecordCreate,
    VinylRecordRead,
    VinylSlotCreate,
    VinylSlotRead,
)
from acaiaclub.services.vinyl_service import vinyl_record_service, vinyl_slot_service

router = APIRouter(prefix="/api", tags=["Vinyl Library"])


# ── Slots ─────────────────────────────────────────────────────────────────


@router.get(
    "/vinyl-slots",
    response_model=ApiResponse[List[VinylSlotRead]],
    responses=ERROR_RESPONSES,
    summary="List library slots",
)
async def list_vinyl_slots(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[VinylSlotRead]]:
    slots = await vinyl_slot_service.list(db)
    return ApiResponse(data=[VinylSlotRead.model_validate(slot) for slot in slots])


@router.post(
    "/vinyl-slots",
    response_model=ApiResponse[VinylSlotRead],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a library slot",
)
async def create_vinyl_slot(
    payload: VinylSlotCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[VinylSlotRead]:
    slot = await vinyl_slot_service.create(db, payload.model_dump())
    return ApiResponse(data=VinylSlotRead.model_validate(slot))


@router.delete(
    "/vinyl-slots/{slot_id}",
    response_model=ApiResponse[DeletedResponse],
    responses=ERROR_RESPONSES,
    summary="Delete an empty library slot",
)
async def delete_vinyl_slot(
    slot_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DeletedResponse]:
    deleted_id = await vinyl_slot_service.delete(db, slot_id)
    return ApiResponse(data=DeletedResponse(id=deleted_id))


# ── Records ───────────────────────────────────────────────────────────────


@router.get(
    "/vinyl-records",
    response_model=ApiResponse[List[VinylRecordRead]],
    responses=ERROR_RESPONSES,
    summary="List vinyl records",
)
async def list_vinyl_records(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[VinylRecordRead]]:
    records = await vinyl_record_service.list(db)
    return ApiResponse(data=[VinylRecordRead.model_validate(record) for record in records])


@router.post(
    "/vinyl-records",
    response_model=ApiResponse[VinylRecordRead],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Add a record to the library",
)
async def create_vinyl_record(
    payload: VinylRecordCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[VinylRecordRead]:
    record = await vinyl_record_service.create(db, payload.model_dump())
    return ApiResponse(data=VinylRecordRead.model_validate(record))


@router.delete(
    "/vinyl-records/{record_id}",
    response_model=ApiResponse[DeletedResponse],
    responses=ERROR_RESPONSES,
    summary="Remove a record from the library",
)
async def delete_vinyl_record(
    record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DeletedResponse]:
    deleted_id = await vinyl_record_service.delete(db, record_id)
    return ApiResponse(data=DeletedResponse(id=deleted_id))
