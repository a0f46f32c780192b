"""
FastAPI dependencies resolving the engine objects held on app state.
"""

from typing import Optional

from fastapi import Request

from customs_sync.application.services.data_sync_service import DataSyncService
from customs_sync.infrastructure.monitoring.metrics import SyncMetrics


def get_sync_service(request: Request) -> DataSyncService:
    """Get the sync engine created at application startup."""
    return request.app.state.sync_service


def get_metrics(request: Request) -> Optional[SyncMetrics]:
    """Get the metrics collector, None when metrics are disabled."""
    return getattr(request.app.state, "metrics", None)
