"""
Developer Registry — Health Check Route
=========================================

What:  GET /healthcheck, reporting whether the store answers SELECT 1.
Who:   Docker health checks, load balancers and the web client.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 500)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from devregistry import __version__
from devregistry import database
from devregistry.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/healthcheck",
    response_model=HealthResponse,
    responses={500: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check():
    """Probe the database and report overall status with uptime."""
    connected = await database.is_database_connected(database.engine)
    uptime = round(time.time() - _start_time, 2)

    if connected:
        return HealthResponse(
            message="Database connection successful!",
            status="healthy",
            version=__version__,
            database="connected",
            uptime_seconds=uptime,
        )

    logger.warning("Health check: database unreachable")
    body = HealthResponse(
        message="Failed to connect to the database.",
        status="unhealthy",
        version=__version__,
        database="disconnected",
        uptime_seconds=uptime,
    )
    return JSONResponse(status_code=500, content=body.model_dump())
