"""Health Probes — liveness and store readiness.

Invariants:
    - GET /api/v1/health/ answers 200 whenever the process can serve HTTP
    - GET /api/v1/health/ready answers 503 until the product store answers SELECT 1
    - Probes never touch the products table and need no credential

Design Decisions:
    - db_manager read from the module at call time: the lifespan assigns it after import
"""

import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import catalog_api.infrastructure.database as database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "catalog-api"


@router.get("/", status_code=status.HTTP_200_OK, summary="Liveness")
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready", summary="Readiness")
async def readiness_check():
    """Ready when the product store is reachable."""
    manager = database.db_manager
    if manager is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_not_initialized"},
        )
    started = time.perf_counter()
    reachable = await manager.health_check()
    latency_ms = round((time.perf_counter() - started) * 1000, 2)
    if not reachable:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "service": SERVICE_NAME,
        "checks": {
            "database": "healthy",
            "backend": manager.engine.url.get_backend_name(),
            "latency_ms": latency_ms,
        },
    }
