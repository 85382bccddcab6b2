"""
Acaia Club Backend — Health Check Route
========================================

What:  GET /health for Docker and load balancer health checks.
Why:   A backend that cannot reach its database cannot serve a single
       resource endpoint, so the check covers the database too.
How:   SELECT 1 through the application's Database handle.

Status levels:
    healthy:   database reachable (HTTP 200)
    unhealthy: database unreachable (HTTP 503, stop routing traffic)

Unlike /api/* routes this one answers with a bare object, not the
success envelope: load balancers look at the status code, monitoring at the body.
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from acaiaclub import __version__
from acaiaclub.database import get_database
from acaiaclub.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await get_database(request).ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
