"""Metrics Endpoint: request/error counter snapshot."""

from fastapi import APIRouter, Depends

from users_api.api.dependencies import get_metrics
from users_api.core.metrics import MetricsCollector
from users_api.schemas.user import MetricsResponse

router = APIRouter(tags=["metrics"])


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics_snapshot(
    metrics: MetricsCollector = Depends(get_metrics),
):
    return metrics.get_stats().to_response()
