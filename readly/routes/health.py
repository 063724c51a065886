"""
Readly Backend: Liveness and Health Routes
===========================================

What:  GET / (plain-text banner) and GET /health (dependency check).
Who:   Called by uptime monitors, container health checks and load balancers.

Status levels:
    healthy:   Database answered `ping` (HTTP 200)
    unhealthy: Database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from pymongo.errors import PyMongoError

from readly import __version__
from readly.database import Database, get_database
from readly.schemas.resources import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

BANNER = "Readly is reading and writing blogs"

# Initialized once when the module loads
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness banner")
async def root() -> str:
    return BANNER


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response, db: Database = Depends(get_database)) -> HealthResponse:
    """
    Check that the database answers.

    How:     Sends the `ping` admin command; any driver error marks the
             service unhealthy and switches the status code to 503.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await db.ping()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
