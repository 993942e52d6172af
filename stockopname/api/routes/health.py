"""
Health check endpoints.
"""

import time

from fastapi import APIRouter, Depends

from stockopname.api.dependencies import get_app_settings, get_db_pool
from stockopname.application.dto.responses import ComponentHealthResponse, HealthResponse
from stockopname.config import Settings, get_logger
from stockopname.infrastructure.storage.sqlite import ConnectionPool

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Basic health check: service status and uptime."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health(
    settings: Settings = Depends(get_app_settings),
    pool: ConnectionPool = Depends(get_db_pool),
) -> HealthResponse:
    """
    Database health check.

    Tests SQLite connectivity and response time.
    """
    try:
        start = time.perf_counter()
        available = await pool.ping()
        db_status = ComponentHealthResponse(
            name="sqlite",
            available=available,
            latency_ms=(time.perf_counter() - start) * 1000,
        )
    except Exception as e:
        logger.warning("db_health_check_failed", error=str(e))
        db_status = ComponentHealthResponse(name="sqlite", available=False, error=str(e))

    return HealthResponse(
        status="healthy" if db_status.available else "unhealthy",
        version=settings.app_version,
        uptime_seconds=time.time() - _start_time,
        database=db_status,
    )
