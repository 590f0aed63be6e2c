"""
Notes Service: Health Check Route
=================================

What:  Health check endpoint for monitoring and container health checks.
How:   Pings the database through the storage component and reports the
       aggregate status.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from notes_api import __version__
from notes_api.dependencies import get_storage
from notes_api.schemas.note import HealthResponse
from notes_api.storage.base import NoteStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Uptime is reported relative to module import
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    storage: NoteStorage = Depends(get_storage),
) -> HealthResponse:
    """
    Check that the service can reach its database.

    Database: executes SELECT 1 under the usual query deadline.
    """
    db_status = "connected"
    overall = "healthy"

    if not await storage.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
