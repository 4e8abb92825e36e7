"""
Portfolio API — Health Check Route
====================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs SELECT 1 against the store and reports aggregate status.
Who:   Called by Docker health checks and uptime monitors.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from portfolio_api import __version__
from portfolio_api.database import Database, get_database
from portfolio_api.schemas.portfolio import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(database: Database = Depends(get_database)):
    """
    Check the health of the service and its store.

    Returns:
        HealthResponse with store status and uptime; HTTP 503 when unhealthy.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
