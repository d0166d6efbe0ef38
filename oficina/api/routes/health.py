"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from oficina import __version__
from oficina.application.dto.responses import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service status and uptime. No authentication."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    from oficina.infrastructure.storage.sqlite import get_connection

    db_status: dict = {"name": "sqlite", "available": False}

    try:
        start = time.time()
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
        db_status = {
            "name": "sqlite",
            "available": True,
            "latency_ms": round((time.time() - start) * 1000, 2),
        }
    except Exception as e:
        db_status["error"] = str(e)

    return HealthResponse(
        status="healthy" if db_status["available"] else "unhealthy",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
