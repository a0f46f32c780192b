"""
Health check endpoints for the application.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from customs_sync.api.dependencies import get_metrics, get_sync_service
from customs_sync.application.services.data_sync_service import DataSyncService
from customs_sync.infrastructure.monitoring.metrics import SyncMetrics

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(
    service: DataSyncService = Depends(get_sync_service),
) -> Dict[str, Any]:
    """Basic health check: the scheduler is ticking."""
    return {
        "status": "healthy" if service.is_running else "stopped",
        "scheduler_running": service.is_running,
        "queue_depth": service.stats().total,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/metrics")
async def metrics(
    sync_metrics: Optional[SyncMetrics] = Depends(get_metrics),
) -> Response:
    """Prometheus metrics endpoint."""
    if sync_metrics is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Metrics are disabled"
        )
    return Response(content=sync_metrics.render(), media_type=sync_metrics.content_type())
