"""Health Probe: store connectivity check.

Invariants:
    - GET /health returns 200 only when SELECT 1 succeeds against the store
    - Unreachable store → 503 and one error-counter increment
    - Response shapes are fixed (not the {"error": ...} envelope)

Design Decisions:
    - db_manager read through the module at call time: it is assigned during
      lifespan startup, after this module is imported
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import users_api.infrastructure.database as database
from users_api.api.dependencies import get_metrics
from users_api.core.metrics import MetricsCollector

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(metrics: MetricsCollector = Depends(get_metrics)):
    """Liveness probe including database connectivity."""
    logger.info("Health check requested")
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        metrics.record_error()
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "disconnected"},
        )
    return {"status": "healthy", "database": "connected"}
