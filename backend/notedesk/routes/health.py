"""
NoteDesk Backend: Health Check Route
=======================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs `SELECT 1` against the notes database and reports uptime.

Status levels:
    - healthy:   database answered (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notedesk import __version__
from notedesk.database import Database
from notedesk.dependencies import get_database
from notedesk.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(database: Database = Depends(get_database)):
    """Probe the database and return aggregate status with uptime."""
    reachable = await database.ping()
    health = HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not reachable:
        logger.warning("Health check: database unreachable")
        return JSONResponse(status_code=503, content=health.model_dump())
    return health
