"""
Fire Survey Backend: Liveness & Health Routes
=============================================

What:  GET /ping (plain-text liveness) and GET /health (dependency status).
Who:   /ping is what the survey page and the alarm device poll; /health is for
       monitoring and container health checks.

Status levels (/health):
    - healthy:   database and generation service reachable
    - degraded:  generation service down (surveys and alerts still work)
    - unhealthy: database unreachable
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from firesurvey import __version__
from firesurvey.database import ping_database
from firesurvey.schemas.common import HealthResponse
from firesurvey.services.ollama_service import ollama_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

PING_MESSAGE = "Server is running!"

_start_time = time.time()


@router.get(
    "/ping",
    response_class=PlainTextResponse,
    summary="Liveness check",
)
async def ping() -> PlainTextResponse:
    return PlainTextResponse(PING_MESSAGE)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the status of the backend and its dependencies. Always HTTP 200; "
        "read the `status` field."
    ),
)
async def health_check() -> HealthResponse:
    """
    Probe the database (SELECT 1) and the generation service (GET /).

    Both probes swallow their own errors and report False, so this handler
    never fails.
    """
    db_status = "connected"
    generation_status = "available"
    overall = "healthy"

    if not await ping_database():
        db_status = "disconnected"
        overall = "unhealthy"

    if not await ollama_service.health_check():
        generation_status = "unavailable"
        overall = "degraded" if overall != "unhealthy" else overall

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        generation=generation_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
