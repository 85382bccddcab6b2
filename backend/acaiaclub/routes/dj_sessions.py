"""
Acaia Club Backend — DJ Session Routes
=======================================

What:  The booth's "now playing" screen and the DJ's go-live / end / log
       track actions.

Route Inventory:
    GET   /api/djsessions              the live session (404 when none)
    POST  /api/djsessions              go live (409 if one is already live)
    PATCH /api/djsessions/{id}/end     LIVE → ENDED
    POST  /api/djsessions/tracks       log a played record (played_at = now)

Only the read is public: the now-playing display runs without a login.
The writes need a DJ, MANAGER or OWNER session; other roles get 403.
"""

import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import get_db_session
from acaiaclub.schemas.common import AUTH_RESPONSES, ERROR_RESPONSES, ApiResponse
from acaiaclub.schemas.vinyl import (
    DJSessionCreate,
    DJSessionRead,
    DJSetTrackCreate,
    DJSetTrackRead,
)
from acaiaclub.services.session_service import DJ_OPERATORS, require_role
from acaiaclub.services.vinyl_service import dj_session_service

router = APIRouter(prefix="/api/djsessions", tags=["DJ Sessions"])

DJ_ONLY = Depends(require_role(*DJ_OPERATORS))


@router.get(
    "",
    response_model=ApiResponse[DJSessionRead],
    responses=ERROR_RESPONSES,
    summary="Get the live DJ session",
)
async def get_live_session(
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DJSessionRead]:
    """Tracks come most recent first, each with its record."""
    session = await dj_session_service.get_live(db)
    return ApiResponse(data=DJSessionRead.model_validate(session))


@router.post(
    "",
    response_model=ApiResponse[DJSessionRead],
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_RESPONSES,
    dependencies=[DJ_ONLY],
    summary="Go live",
)
async def go_live(
    payload: DJSessionCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DJSessionRead]:
    session = await dj_session_service.go_live(db, payload.name)
    return ApiResponse(data=DJSessionRead.model_validate(session))


@router.patch(
    "/{session_id}/end",
    response_model=ApiResponse[DJSessionRead],
    responses=AUTH_RESPONSES,
    dependencies=[DJ_ONLY],
    summary="End a live DJ session",
)
async def end_session(
    session_id: uuid.UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DJSessionRead]:
    session = await dj_session_service.end_session(db, session_id)
    return ApiResponse(data=DJSessionRead.model_validate(session))


@router.post(
    "/tracks",
    response_model=ApiResponse[DJSetTrackRead],
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_RESPONSES,
    dependencies=[DJ_ONLY],
    summary="Log a played record",
)
async def add_track(
    payload: DJSetTrackCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[DJSetTrackRead]:
    track = await dj_session_service.add_track(db, payload.session_id, payload.vinyl_record_id)
    return ApiResponse(data=DJSetTrackRead.model_validate(track))
