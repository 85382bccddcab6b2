"""
Acaia Club Backend — Error Mapper
==================================

What:  Global exception handlers that turn every failure into the error
       envelope {"success": false, "error": ..., "details"?: [...]}.
Why:   Route handlers never build error responses themselves; they raise,
       and this module is the single place that picks the status code.
How:   ERROR_STATUS maps exception classes to status codes. The handler
       walks the raised exception's MRO, so a subclass inherits its
       parent's status unless it is listed itself.

Handler Layers:
    AcaiaClubError          → ERROR_STATUS lookup
    RequestValidationError  → 400 (malformed JSON or per-field details)
    StarletteHTTPException  → its own status (unknown route, bad method)
    Exception (catch-all)   → 500, generic message, stack trace logged

Security:
    5xx responses always carry a generic message. The exception message,
    its context dict and the stack trace go to the log, tagged with the
    request id, and never into the response.
"""

import logging
from typing import Dict, List, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from acaiaclub.exceptions import (
    AcaiaClubError,
    AuthenticationRequiredError,
    ConflictError,
    DatabaseError,
    ForbiddenError,
    MalformedPayloadError,
    NotFoundError,
    ValidationError,
)
from acaiaclub.middleware.request_id import request_id_var
from acaiaclub.schemas.common import error_body

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

ERROR_STATUS: Dict[Type[AcaiaClubError], int] = {
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    MalformedPayloadError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: AcaiaClubError) -> int:
    """Status code for an application error; unlisted kinds are 500."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def validation_details(exc: RequestValidationError) -> List[dict]:
    """
    Flatten FastAPI's validation errors into field errors.

    loc is ("body", "items", 0, "unitCost") → field "items.0.unitCost".
    A failure on the body as a whole (missing, wrong JSON type) is "body";
    path and query parameters use their own name.

    Body paths are camelCased part by part. Field validators that run on a
    default value (validate_default) report the Python name, not the alias,
    and the wire only knows the alias.
    """
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] == "body":
            loc = [to_camel(part) if "_" in part else part for part in loc]
        field = ".".join(loc[1:]) or (loc[0] if loc else "body")
        details.append({"field": field, "message": error["msg"], "type": error["type"]})
    return details


def _request_id(request: Request) -> str:
    # The catch-all runs outside the middleware that set the ContextVar
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to `app`. Called once by create_app()."""

    @app.exception_handler(AcaiaClubError)
    async def handle_application_error(request: Request, exc: AcaiaClubError):
        rid = _request_id(request)
        status_code = status_for(exc)

        if status_code >= 500:
            logger.error(
                "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context
            )
            return JSONResponse(status_code=status_code, content=error_body(INTERNAL_ERROR_MESSAGE))

        logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        details = exc.details if isinstance(exc, ValidationError) else None
        return JSONResponse(status_code=status_code, content=error_body(exc.message, details))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """
        Body/path validation failures from FastAPI.

        A body that is not JSON at all is reported as malformed (no field
        details: there are no fields yet). Everything else lists every
        violated field.
        """
        rid = _request_id(request)
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            malformed = MalformedPayloadError()
            logger.warning("[%s] Malformed JSON body on %s", rid, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=error_body(malformed.message),
            )

        invalid = ValidationError(details=validation_details(exc))
        logger.warning(
            "[%s] Validation error on %s: %s", rid, request.url.path, invalid.details
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(invalid.message, invalid.details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Anything nobody anticipated: generic 500, full trace to the log."""
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            _request_id(request),
            request.method,
            request.url.path,
            str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(INTERNAL_ERROR_MESSAGE),
        )
