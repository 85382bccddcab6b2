"""
Acaia Club Backend — Shared Schema Building Blocks
===================================================

What:  Base model, response envelope and wire types used by every resource.
Why:   Every endpoint answers with the same envelope and the same field
       naming rules, so they are defined once here.

Envelope:
    Success:  {"success": true, "data": <payload>}
    Failure:  {"success": false, "error": "<message>", "details": [...]}

    `details` only appears on validation failures; it is omitted (not null)
    everywhere else.

Naming:
    Python attributes are snake_case; JSON keys are camelCase
    (floor_plan_id ↔ floorPlanId). Input accepts either spelling.

Decimals:
    Money and quantities are NUMERIC in the database and Decimal in Python.
    They leave the API as strings ("25.00"), never as JSON floats, so a
    client cannot lose precision by parsing them.
"""

import uuid
from decimal import Decimal
from typing import Annotated, Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

# Largest value an INTEGER column holds (PostgreSQL int4); larger input is a 400
INT32_MAX = 2**31 - 1

# Decimal on the way in (number or numeric string), string on the way out
DecimalString = Annotated[
    Decimal,
    PlainSerializer(lambda value: str(value), return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base for every request/response body: camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope. `data` is the resource (or list of resources)."""

    success: bool = True
    data: DataT


class FieldError(BaseModel):
    field: str = Field(description="Dotted path of the offending field (camelCase)")
    message: str = Field(description="Human-readable reason")
    type: str = Field(description="Machine-readable error type, e.g. 'missing'")


class ErrorResponse(BaseModel):
    """
    Failure envelope, documented on every route's OpenAPI entry.

    Example:
        {
            "success": false,
            "error": "Invalid request body",
            "details": [{"field": "name", "message": "Field required", "type": "missing"}]
        }
    """

    success: bool = False
    error: str = Field(description="Human-readable error description")
    details: Optional[List[FieldError]] = Field(
        default=None, description="Per-field validation failures"
    )


class DeletedResponse(CamelModel):
    """Acknowledgement payload for DELETE: the id that was removed."""

    id: uuid.UUID


def error_body(message: str, details: Optional[List[Any]] = None) -> dict:
    """Build the failure envelope as a plain dict, omitting empty details."""
    body: dict = {"success": False, "error": message}
    if details:
        body["details"] = details
    return body


# OpenAPI `responses=` fragments shared by the routers
ERROR_RESPONSES = {
    400: {"description": "Malformed or invalid request body", "model": ErrorResponse},
    404: {"description": "Resource not found", "model": ErrorResponse},
    409: {"description": "Conflicts with existing data", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
AUTH_RESPONSES = {
    401: {"description": "Not logged in", "model": ErrorResponse},
    403: {"description": "Role not allowed", "model": ErrorResponse},
    **ERROR_RESPONSES,
}
