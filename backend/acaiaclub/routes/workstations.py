"""Routes for /api/workstations (bar, kitchen and POS stations)."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import get_db_session
from acaiaclub.schemas.common import ERROR_RESPONSES, ApiResponse
from acaiaclub.schemas.floor_plan import WorkstationCreate, WorkstationRead
from acaiaclub.services.floor_plan_service import workstation_service

router = APIRouter(prefix="/api", tags=["Workstations"])


@router.get(
    "/workstations",
    response_model=ApiResponse[List[WorkstationRead]],
    responses=ERROR_RESPONSES,
    summary="List workstations",
)
async def list_workstations(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[WorkstationRead]]:
    workstations = await workstation_service.list(db)
    return ApiResponse(data=[WorkstationRead.model_validate(ws) for ws in workstations])


@router.post(
    "/workstations",
    response_model=ApiResponse[WorkstationRead],
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a workstation",
)
async def create_workstation(
    payload: WorkstationCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[WorkstationRead]:
    workstation = await workstation_service.create(db, payload.model_dump())
    return ApiResponse(data=WorkstationRead.model_validate(workstation))
