"""
Happy Thoughts API — Health Check and Index Routes
===================================================

What:  GET /health for monitoring and load balancer probes, and GET / which
       greets the visitor and lists the available endpoints.

Status levels:
    healthy:   database reachable (HTTP 200)
    unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from happythoughts import __version__
from happythoughts.schemas.common import EndpointInfo, HealthResponse, IndexResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/",
    response_model=IndexResponse,
    summary="Welcome message and endpoint listing",
)
async def index(request: Request) -> IndexResponse:
    # The OpenAPI document flattens included routers into one path table.
    paths = request.app.openapi()["paths"]
    endpoints = [
        EndpointInfo(path=path, methods=sorted(method.upper() for method in operations))
        for path, operations in paths.items()
    ]
    return IndexResponse(message="Welcome to the Happy Thoughts & Dogs API!", endpoints=endpoints)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    """
    Run SELECT 1 against the database and report uptime.

    A 503 tells the load balancer to stop routing traffic to this instance.
    """
    connected = await request.app.state.database.ping()
    health = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not connected:
        logger.warning("Health check: database unreachable")
        return JSONResponse(status_code=503, content=health.model_dump())
    return health
