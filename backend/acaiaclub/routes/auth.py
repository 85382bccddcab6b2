"""
Acaia Club Backend — Login, Logout and Session Routes
======================================================

What:  POST /api/auth (PIN login), DELETE /api/auth (logout) and
       GET /api/session (who am I).
How:   auth_service resolves the PIN; session_service writes the identity
       into the signed session cookie.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from acaiaclub.database import get_db_session
from acaiaclub.schemas.auth import LoginRequest, UserSession
from acaiaclub.schemas.common import AUTH_RESPONSES, ApiResponse
from acaiaclub.services.auth_service import auth_service
from acaiaclub.services.session_service import require_user, session_service

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/auth",
    response_model=ApiResponse[UserSession],
    responses=AUTH_RESPONSES,
    summary="Log in with a staff PIN",
)
async def login(
    payload: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[UserSession]:
    """
    Check the PIN against every active user and start a session.

    Wrong PIN and inactive user both answer 401 with the same message.
    On success the response sets the session cookie.
    """
    user = await auth_service.authenticate(db, payload.pin)
    session_service.persist(request, user)
    return ApiResponse(data=user)


@router.delete(
    "/auth",
    response_model=ApiResponse[str],
    summary="Log out",
)
async def logout(request: Request) -> ApiResponse[str]:
    """Clear the session. Succeeds whether or not anyone was logged in."""
    session_service.destroy(request)
    return ApiResponse(data="Logout successful")


@router.get(
    "/session",
    response_model=ApiResponse[UserSession],
    responses={401: AUTH_RESPONSES[401]},
    summary="Current staff session",
)
async def get_session(user: UserSession = Depends(require_user)) -> ApiResponse[UserSession]:
    return ApiResponse(data=user)
