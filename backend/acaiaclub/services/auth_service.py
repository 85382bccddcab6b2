"""
Acaia Club Backend — PIN Authentication
========================================

What:  Hashes and checks staff PINs and resolves a PIN to an active user.
Why:   Staff log in at shared terminals with a short numeric PIN. PINs are
       not unique identifiers, so the PIN is checked against every active
       user's bcrypt hash until one matches.
How:   bcrypt (work factor from PIN_HASH_ROUNDS). Hash checks are CPU-bound,
       so they run in Starlette's threadpool instead of on the event loop.

Failure Semantics:
    Wrong PIN, inactive user and no users at all all produce the same
    AuthenticationRequiredError, so a caller learns nothing about which
    PINs exist.
"""

import logging

import bcrypt
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from acaiaclub.exceptions import AuthenticationRequiredError, DatabaseError
from acaiaclub.models import User
from acaiaclub.schemas.auth import UserSession

logger = logging.getLogger(__name__)


def hash_pin(pin: str, rounds: int = 12) -> str:
    """bcrypt hash of `pin`, as stored in users.pin_hash."""
    return bcrypt.hashpw(pin.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_pin(pin: str, pin_hash: str) -> bool:
    try:
        return bcrypt.checkpw(pin.encode("utf-8"), pin_hash.encode("ascii"))
    except ValueError:
        logger.warning("Stored PIN hash is not a valid bcrypt hash")
        return False


class AuthService:
    async def authenticate(self, db: AsyncSession, pin: str) -> UserSession:
        """
        Resolve a PIN to the session identity of the first matching active user.

        Raises:
            AuthenticationRequiredError: No active user has this PIN (→ 401)
            DatabaseError: Users could not be read (→ 500)
        """
        try:
            result = await db.execute(
                select(User).where(User.is_active.is_(True)).order_by(User.created_at)
            )
        except SQLAlchemyError as e:
            logger.error("Database error loading users for login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        for user in result.scalars().all():
            if await run_in_threadpool(verify_pin, pin, user.pin_hash):
                logger.info("User logged in: %s (%s)", user.id, user.role.value)
                return UserSession(id=user.id, name=user.name, role=user.role)

        logger.warning("Login failed: PIN matched no active user")
        raise AuthenticationRequiredError(message="Invalid PIN or inactive user")


auth_service = AuthService()
