"""
Acaia Club Backend — Access Log
================================

What:  One line per HTTP request naming who asked for what, how it ended
       and how long it took.
Why:   Staff share tablets behind the bar, so "who changed this order's
       status" is answered from these lines. The request id on each line
       ties it to anything the handlers logged in between.
How:   Wraps the downstream app and times it. The staff member comes from
       the signed session cookie, which SessionMiddleware (further out)
       has already decoded into scope["session"].
When:  Runs inside RequestIDMiddleware and SessionMiddleware.

Line Format:
    GET /api/purchase-orders 200 12.4ms user=<uuid>/FINANCIAL from 10.0.0.7

Log Levels:
    ┌────────────────────────────────────────┬─────────┐
    │ Outcome                                │ Level   │
    ├────────────────────────────────────────┼─────────┤
    │ 5xx or an exception escaping the app   │ ERROR   │
    │ 4xx (validation, 401, 403, 404, 409)   │ WARNING │
    │ slower than SLOW_REQUEST_MS            │ WARNING │
    │ health checks and API docs             │ DEBUG   │
    │ everything else                        │ INFO    │
    └────────────────────────────────────────┴─────────┘

Never logged: request bodies (PINs, client phone numbers), cookies.
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from acaiaclub.middleware.request_id import request_id_var

logger = logging.getLogger("acaiaclub.access")

SLOW_REQUEST_MS = 1000.0

# Polled by load balancers or opened by developers; noise at INFO
QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})


def describe_user(request: Request) -> str:
    """"<id>/<role>" for a logged-in request, "anonymous" otherwise."""
    session: Dict[str, Any] = request.scope.get("session") or {}
    user = session.get("user")
    if not isinstance(user, dict) or "id" not in user:
        return "anonymous"
    return f"{user['id']}/{user.get('role', '?')}"


def level_for(status: int, duration_ms: float, path: str) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400 or duration_ms >= SLOW_REQUEST_MS:
        return logging.WARNING
    if path in QUIET_PATHS:
        return logging.DEBUG
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            # The catch-all handler further out answers 500; this keeps the access line
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "%s %s 500 %.1fms user=%s from %s",
                method,
                path,
                duration_ms,
                describe_user(request),
                client_ip,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        user = describe_user(request)
        logger.log(
            level_for(status, duration_ms, path),
            "%s %s %d %.1fms user=%s from %s",
            method,
            path,
            status,
            duration_ms,
            user,
            client_ip,
            extra={
                "request_id": request_id_var.get(""),
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "user": user,
                "client_ip": client_ip,
            },
        )
        return response
