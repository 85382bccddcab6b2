"""Login body and the session payload returned by /api/auth and /api/session."""

import uuid
from typing import Literal

from pydantic import Field, field_validator

from acaiaclub.models.enums import Role
from acaiaclub.schemas.common import CamelModel


class LoginRequest(CamelModel):
    pin: str = Field(min_length=1, max_length=32)

    @field_validator("pin", mode="before")
    @classmethod
    def accept_numeric_pin(cls, value):
        # Keypads post the PIN as a JSON number
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class UserSession(CamelModel):
    """
    The identity carried in the signed session cookie.

    Stored in the cookie as plain JSON (see services/session_service.py);
    nothing secret goes in here.
    """

    id: uuid.UUID
    name: str
    role: Role
    is_logged_in: Literal[True] = True
