"""
Acaia Club Backend — Session Service
=====================================

What:  Reads, writes and clears the logged-in user carried in the session
       cookie, plus the FastAPI dependencies that guard authenticated and
       role-restricted routes.
Why:   Handlers should only ask "who is logged in?"; cookie signing and
       expiry are not their concern.
How:   Starlette's SessionMiddleware (registered in main.py) signs the
       cookie with AUTH_SECRET via itsdangerous and exposes it as the
       `request.session` dict. This service stores one UserSession under
       the "user" key of that dict.

Cookie:
    name       SESSION_COOKIE_NAME (acaiaclub_session)
    httponly   always (SessionMiddleware default)
    secure     only when ENVIRONMENT=production
    max-age    SESSION_MAX_AGE (14 days)

A tampered or expired cookie is dropped by the middleware before it
reaches this service, so load() just sees an empty session.

Role Matrix (require_role):
    ┌──────────────────────────────────┬─────────────────────────────────┐
    │ Action                           │ Roles                           │
    ├──────────────────────────────────┼─────────────────────────────────┤
    │ read suppliers / purchase orders │ FINANCIAL, MANAGER, OWNER, COOK │
    │ write suppliers / purchase orders│ FINANCIAL, MANAGER, OWNER       │
    │ delete suppliers                 │ MANAGER, OWNER                  │
    │ write company clients            │ SALES, MANAGER, OWNER           │
    │ delete company clients           │ MANAGER, OWNER                  │
    │ go live / end / log DJ tracks     │ MANAGER, OWNER, DJ              │
    └──────────────────────────────────┴─────────────────────────────────┘
    Anything else behind a login is open to every role.
"""

import logging
from typing import Callable, FrozenSet, Optional

from fastapi import Request
from pydantic import ValidationError as PydanticValidationError

from acaiaclub.exceptions import AuthenticationRequiredError, ForbiddenError
from acaiaclub.models.enums import Role
from acaiaclub.schemas.auth import UserSession

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


class SessionService:
    def load(self, request: Request) -> Optional[UserSession]:
        """The logged-in user, or None when the session holds no valid user."""
        data = request.session.get(SESSION_USER_KEY)
        if not data:
            return None
        try:
            return UserSession.model_validate(data)
        except PydanticValidationError:
            # Signed by us but written by an older shape of UserSession
            logger.warning("Discarding session with unreadable user payload")
            request.session.pop(SESSION_USER_KEY, None)
            return None

    def persist(self, request: Request, user: UserSession) -> None:
        request.session[SESSION_USER_KEY] = user.model_dump(mode="json")

    def destroy(self, request: Request) -> None:
        # An empty session makes SessionMiddleware expire the cookie
        request.session.clear()


session_service = SessionService()


# ── Request Dependencies ──────────────────────────────────────────────────
def require_user(request: Request) -> UserSession:
    """
    FastAPI dependency for authenticated endpoints.

    Raises:
        AuthenticationRequiredError: No logged-in user (→ 401)
    """
    user = session_service.load(request)
    if user is None or not user.is_logged_in:
        raise AuthenticationRequiredError()
    return user


# ── Role Groups ───────────────────────────────────────────────────────────

PURCHASING_READERS = (Role.FINANCIAL, Role.MANAGER, Role.OWNER, Role.COOK)
PURCHASING_WRITERS = (Role.FINANCIAL, Role.MANAGER, Role.OWNER)
SALES_WRITERS = (Role.SALES, Role.MANAGER, Role.OWNER)
ADMINS = (Role.MANAGER, Role.OWNER)
DJ_OPERATORS = (Role.MANAGER, Role.OWNER, Role.DJ)


def require_role(*roles: Role) -> Callable[[Request], UserSession]:
    """
    Build a dependency that admits only the given roles.

    Usage:
        @router.post("/suppliers", dependencies=[Depends(require_role(*PURCHASING_WRITERS))])

    Raises (from the returned dependency):
        AuthenticationRequiredError: No logged-in user (→ 401)
        ForbiddenError: Logged in with another role (→ 403)
    """
    allowed: FrozenSet[Role] = frozenset(roles)

    def dependency(request: Request) -> UserSession:
        user = require_user(request)
        if user.role not in allowed:
            logger.warning(
                "Role %s refused on %s %s", user.role.value, request.method, request.url.path
            )
            raise ForbiddenError(
                context={"user_id": str(user.id), "role": user.role.value, "path": request.url.path}
            )
        return user

    return dependency
