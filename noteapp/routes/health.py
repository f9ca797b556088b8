"""
Notes Backend — Health Check Route
===================================

What:  GET /health for container and load balancer probes.
How:   Runs `SELECT 1` through the app's database handle.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from noteapp import __version__
from noteapp.database import Database, get_database
from noteapp.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(database: Database = Depends(get_database)):
    connected = await database.ping()
    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if connected else 503, content=body.model_dump())
