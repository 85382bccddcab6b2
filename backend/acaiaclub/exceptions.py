"""
Acaia Club Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for each failure kind.
Why:   Services and dependencies raise a precise failure kind; the error
       mapper (error_handlers.py) turns it into an envelope and status code.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.
Who:   Raised by services, validation and the session layer.
When:  During request processing whenever a request cannot succeed.

Exception Hierarchy:
    AcaiaClubError (base)
    ├── AuthenticationRequiredError  → 401 Unauthorized
    ├── ForbiddenError               → 403 Forbidden (logged in, wrong role)
    ├── MalformedPayloadError        → 400 Bad Request (body is not JSON)
    ├── ValidationError              → 400 Bad Request (per-field details)
    ├── NotFoundError                → 404 Not Found
    ├── ConflictError                → 409 Conflict (uniqueness / in use)
    └── DatabaseError                → 500 Internal Server Error

Exceptions carry no status code; the mapping lives in one
table in error_handlers.py.
"""

from typing import Any, Dict, List, Optional


class AcaiaClubError(Exception):
    """
    Base exception for all Acaia Club application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthenticationRequiredError(AcaiaClubError):
    """
    Raised when an endpoint needs a logged-in user and the session has none.

    Also raised by the login endpoint for a wrong PIN or an inactive user,
    so a caller cannot tell the two apart.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(AcaiaClubError):
    """
    Raised when the logged-in user's role may not perform the action.

    What:    The session is valid, but e.g. a COOK tries to create a
             purchase order or a SALES user tries to delete a client.
    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "Your role is not allowed to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedPayloadError(AcaiaClubError):
    """Raised when the request body cannot be parsed as JSON at all."""

    def __init__(
        self,
        message: str = "Malformed request body: expected valid JSON",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(AcaiaClubError):
    """
    Raised when client input fails schema or business-rule validation.

    What:    The payload parsed, but one or more fields are wrong.
    HTTP:    400 Bad Request

    `details` is a list of per-field errors, each shaped like
    {"field": "floorPlanId", "message": "Field required", "type": "missing"}.
    Every violated field is listed, not just the first one.

    Example response:
        {
            "success": false,
            "error": "Invalid request body",
            "details": [{"field": "name", "message": "Field required", "type": "missing"}]
        }
    """

    def __init__(
        self,
        message: str = "Invalid request body",
        details: Optional[List[Dict[str, Any]]] = None,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.details = list(details or [])
        if field and not self.details:
            self.details.append({"field": field, "message": message, "type": "value_error"})
        super().__init__(message=message, context=context)
        self.field = field


class NotFoundError(AcaiaClubError):
    """
    Raised when a requested (or referenced) resource does not exist.

    What:    The id in the path, or an id inside the payload, matches no row.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records (not an exception); the
    persistence layer converts that None into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(AcaiaClubError):
    """
    Raised when a write collides with existing data.

    When:    A uniqueness constraint is violated (duplicate vinyl slot
             row/column, duplicate company name), a row is still referenced
             by others on delete, or a second DJ session goes live.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The request conflicts with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(AcaiaClubError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        Detailed error info (SQL, constraint name, driver error) is logged
        server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
