"""
Acaia Club Backend — Request Correlation Ids
=============================================

What:  Gives every request an id, echoes it in X-Request-ID and stamps it
       on every log record written while the request is in flight.
Why:   Error bodies carry no internals. When a manager reports "the order
       screen said Internal server error", the id on that response is the
       only link to the stack trace in the container logs.
How:   RequestIDMiddleware keeps a well-formed client id (a proxy or the
       frontend may already have one) or mints a fresh one, and parks it
       in a ContextVar. RequestIDLogFilter reads that ContextVar, so any
       logger can print %(request_id)s without being handed the request.

Accepted client ids:
    1-64 characters of [A-Za-z0-9._-]. Anything else (empty, too long,
    spaces, newlines) is replaced; the header value ends up in log lines
    and must not be able to forge or split them.

    X-Request-ID: 3f9c2a1b            → kept
    X-Request-ID: abc FAKE LINE      → replaced with a new id
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    # 8 hex chars: short enough to read aloud, unique enough within a day of logs
    return uuid.uuid4().hex[:8]


def accept_request_id(candidate: Optional[str]) -> str:
    """The client's id when it is safe to log, otherwise a new one."""
    if candidate and _VALID_REQUEST_ID.fullmatch(candidate):
        return candidate
    return new_request_id()


class RequestIDLogFilter(logging.Filter):
    """
    Adds `request_id` to every record ("-" outside a request).

    Installed on the root handler by setup_logging(); never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
