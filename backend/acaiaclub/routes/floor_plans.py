"""
Acaia Club Backend — Floor Plan and Venue Object Routes
========================================================

What:  /api/floorplans, /api/venue-objects and /api/storage-locations.
Why:   The floor-plan editor loads a plan with every object on it, then
       creates, drags, renames and deletes objects one at a time.
How:   Thin handlers: validated body → one service call → envelope.

Route Inventory:
    GET    /api/floorplans              list plans (by name)
    POST   /api/floorplans              create a plan (100x100 by default)
    GET    /api/floorplans/{id}         plan + objects + their workstations
    PATCH  /api/floorplans/{id}         partial update
    DELETE /api/floorplans/{id}         delete plan and its objects
    GET    /api/venue-objects           list objects (by name)
    POST   /api/venue-objects           place an object
    GET    /api/venue-objects/{id}      one object
    PATCH  /api/venue-objects/{id}      move / resize / rename / relink
    DELETE /api/venue-objects/{id}      remove an object
    GET    /api/storage-locations       storage-type objects (login required)
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import get_db_session
from acaiaclub.schemas.common import (
    AUTH_RESPONSES,
    ERROR_RESPONSES,
    ApiResponse,
    DeletedResponse,
)
from acaiaclub.schemas.floor_plan import (
    FloorPlanCreate,
    FloorPlanDetail,
    FloorPlanRead,
    FloorPlanUpdate,
    StorageLocationRead,
    VenueObjectCreate,
    VenueObjectRead,
    VenueObjectUpdate,
)
from acaiaclub.services.floor_plan_service import (
    floor_plan_detail_service,
    floor_plan_service,
    venue_object_service,
)
from acaiaclub.services.session_service import require_user

router = APIRouter(prefix="/api", tags=["Floor Plans"])


# ══════════════════════════════════════════════════════════════════════════
# Floor Plans
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/floorplans",
    response_model=ApiResponse[List[FloorPlanRead]],
    responses=ERROR_RESPONSES,
    summary="List floor plans",
)
async def list_floor_plans(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[FloorPlanRead]]:
    plans = await floor_plan_service.list(db)
    return ApiResponse(data=[FloorPlanRead.model_validate(plan) for plan in plans])


@router.post(
    "/floorplans",
    response_model=ApiResponse[FloorPlanRead],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a floor plan",
)
async def create_floor_plan(
    payload: FloorPlanCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[FloorPlanRead]:
    plan = await floor_plan_service.create(db, payload.model_dump())
    return ApiResponse(data=FloorPlanRead.model_validate(plan))


@router.get(
    "/floorplans/{floor_plan_id}",
    response_model=ApiResponse[FloorPlanDetail],
    responses=ERROR_RESPONSES,
    summary="Get a floor plan with its objects",
)
async def get_floor_plan(
    floor_plan_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[FloorPlanDetail]:
    """Objects come ordered by name, then creation time, each with its workstation."""
    plan = await floor_plan_detail_service.get(db, floor_plan_id)
    return ApiResponse(data=FloorPlanDetail.model_validate(plan))


@router.patch(
    "/floorplans/{floor_plan_id}",
    response_model=ApiResponse[FloorPlanRead],
    responses=ERROR_RESPONSES,
    summary="Update a floor plan",
)
async def update_floor_plan(
    floor_plan_id: uuid.UUID,
    payload: FloorPlanUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[FloorPlanRead]:
    plan = await floor_plan_service.update(
        db, floor_plan_id, payload.model_dump(exclude_unset=True)
    )
    return ApiResponse(data=FloorPlanRead.model_validate(plan))


@router.delete(
    "/floorplans/{floor_plan_id}",
    response_model=ApiResponse[DeletedResponse],
    responses=ERROR_RESPONSES,
    summary="Delete a floor plan and everything on it",
)
async def delete_floor_plan(
    floor_plan_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DeletedResponse]:
    deleted_id = await floor_plan_service.delete(db, floor_plan_id)
    return ApiResponse(data=DeletedResponse(id=deleted_id))


# ══════════════════════════════════════════════════════════════════════════
# Venue Objects
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/venue-objects",
    response_model=ApiResponse[List[VenueObjectRead]],
    responses=ERROR_RESPONSES,
    summary="List venue objects",
)
async def list_venue_objects(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[VenueObjectRead]]:
    objects = await venue_object_service.list(db)
    return ApiResponse(data=[VenueObjectRead.model_validate(obj) for obj in objects])


@router.post(
    "/venue-objects",
    response_model=ApiResponse[VenueObjectRead],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Place an object on a floor plan",
)
async def create_venue_object(
    payload: VenueObjectCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[VenueObjectRead]:
    """
    404 when floorPlanId or workstationId matches nothing; 409 when the
    workstation is already placed on the map.
    """
    obj = await venue_object_service.create(db, payload.model_dump())
    return ApiResponse(data=VenueObjectRead.model_validate(obj))


@router.get(
    "/venue-objects/{object_id}",
    response_model=ApiResponse[VenueObjectRead],
    responses=ERROR_RESPONSES,
    summary="Get a venue object",
)
async def get_venue_object(
    object_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[VenueObjectRead]:
    obj = await venue_object_service.get(db, object_id)
    return ApiResponse(data=VenueObjectRead.model_validate(obj))


@router.patch(
    "/venue-objects/{object_id}",
    response_model=ApiResponse[VenueObjectRead],
    responses=ERROR_RESPONSES,
    summary="Update a venue object",
)
async def update_venue_object(
    object_id: uuid.UUID,
    payload: VenueObjectUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[VenueObjectRead]:
    obj = await venue_object_service.update(
        db, object_id, payload.model_dump(exclude_unset=True)
    )
    return ApiResponse(data=VenueObjectRead.model_validate(obj))


@router.delete(
    "/venue-objects/{object_id}",
    response_model=ApiResponse[DeletedResponse],
    responses=ERROR_RESPONSES,
    summary="Delete a venue object",
)
async def delete_venue_object(
    object_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DeletedResponse]:
    deleted_id = await venue_object_service.delete(db, object_id)
    return ApiResponse(data=DeletedResponse(id=deleted_id))


@router.get(
    "/storage-locations",
    response_model=ApiResponse[List[StorageLocationRead]],
    responses=AUTH_RESPONSES,
    dependencies=[Depends(require_user)],
    summary="List storage locations",
)
async def list_storage_locations(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[StorageLocationRead]]:
    """Venue objects of type STORAGE, FREEZER, SHELF or WORKSTATION_STORAGE."""
    locations = await venue_object_service.list_storage_locations(db)
    return ApiResponse(data=[StorageLocationRead.model_validate(loc) for loc in locations])
