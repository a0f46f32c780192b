"""
Administrative routes for the sync engine.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from customs_sync.api.dependencies import get_sync_service
from customs_sync.api.schemas.common import BaseResponse
from customs_sync.api.schemas.sync import (
    BatchSummaryResponse,
    ClearResponse,
    DeliveryStatsResponse,
    EnqueueRequest,
    EnqueueResponse,
    QueueStatsResponse,
    SyncEventResponse,
)
from customs_sync.application.services.data_sync_service import DataSyncService
from customs_sync.config.logging import get_logger
from customs_sync.domain.exceptions.sync_error import SyncEventNotFoundError
from customs_sync.domain.value_objects.sync_status import SyncStatus

logger = get_logger(__name__)
router = APIRouter(prefix="/sync", tags=["sync"])


@router.get("/stats", response_model=QueueStatsResponse)
async def get_queue_stats(
    service: DataSyncService = Depends(get_sync_service),
) -> QueueStatsResponse:
    """Get counts of the active queue."""
    return QueueStatsResponse.from_stats(service.stats(), is_running=service.is_running)


@router.get("/stats/delivery", response_model=DeliveryStatsResponse)
async def get_delivery_stats(
    service: DataSyncService = Depends(get_sync_service),
) -> DeliveryStatsResponse:
    """Get cumulative delivery outcomes."""
    return DeliveryStatsResponse.from_stats(service.delivery_stats())


@router.get("/events", response_model=List[SyncEventResponse])
async def list_events(
    status_filter: Optional[SyncStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=1000),
    service: DataSyncService = Depends(get_sync_service),
) -> List[SyncEventResponse]:
    """List events in the active queue."""
    return [
        SyncEventResponse.from_entity(event)
        for event in service.list(status_filter, limit)
    ]


@router.post(
    "/events", response_model=EnqueueResponse, status_code=status.HTTP_201_CREATED
)
async def enqueue_event(
    request: EnqueueRequest,
    service: DataSyncService = Depends(get_sync_service),
) -> EnqueueResponse:
    """Enqueue a domain change for delivery."""
    event_id = service.enqueue(request.kind, request.action, request.payload)
    return EnqueueResponse(id=event_id)


@router.delete("/events", response_model=ClearResponse)
async def clear_events(
    status_filter: Optional[SyncStatus] = Query(None, alias="status"),
    service: DataSyncService = Depends(get_sync_service),
) -> ClearResponse:
    """Clear the queue, or only events in the given status."""
    cleared = service.clear(status_filter)

    logger.info(
        "Sync events cleared via admin API",
        status=status_filter.value if status_filter else None,
        cleared=cleared,
    )

    return ClearResponse(cleared=cleared)


@router.get("/events/{event_id}", response_model=SyncEventResponse)
async def get_event(
    event_id: str,
    service: DataSyncService = Depends(get_sync_service),
) -> SyncEventResponse:
    """Get one event from the queue or the history."""
    event = service.get(event_id)
    if event is None:
        raise SyncEventNotFoundError(event_id)
    return SyncEventResponse.from_entity(event)


@router.post("/events/{event_id}/retry", response_model=BaseResponse)
async def retry_event(
    event_id: str,
    service: DataSyncService = Depends(get_sync_service),
) -> BaseResponse:
    """Reset an event's retry budget and put it back in the queue."""
    if not service.retry(event_id):
        raise SyncEventNotFoundError(event_id)
    return BaseResponse(message=f"Sync event {event_id} queued for retry")


@router.delete("/events/{event_id}", response_model=BaseResponse)
async def remove_event(
    event_id: str,
    service: DataSyncService = Depends(get_sync_service),
) -> BaseResponse:
    """Remove an event from the queue."""
    if not service.remove(event_id):
        raise SyncEventNotFoundError(event_id)
    return BaseResponse(message=f"Sync event {event_id} removed")


@router.get("/history", response_model=List[SyncEventResponse])
async def list_history(
    status_filter: Optional[SyncStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=1000),
    service: DataSyncService = Depends(get_sync_service),
) -> List[SyncEventResponse]:
    """List recently synced or failed events, newest first."""
    return [
        SyncEventResponse.from_entity(event)
        for event in service.history_events(status_filter, limit)
    ]


@router.post("/drain", response_model=BatchSummaryResponse)
async def drain(
    service: DataSyncService = Depends(get_sync_service),
) -> BatchSummaryResponse:
    """Run a drain cycle now."""
    summary = await service.drain_now()
    return BatchSummaryResponse.from_summary(summary)


@router.post("/start", response_model=BaseResponse)
async def start_sync(
    service: DataSyncService = Depends(get_sync_service),
) -> BaseResponse:
    """Start periodic draining."""
    started = service.start()

    logger.info("Periodic sync start requested via admin API", started=started)

    return BaseResponse(
        message="Periodic sync started" if started else "Periodic sync already running"
    )


@router.post("/stop", response_model=BaseResponse)
async def stop_sync(
    service: DataSyncService = Depends(get_sync_service),
) -> BaseResponse:
    """Stop periodic draining; queued events stay queued."""
    stopped = await service.stop()

    logger.info("Periodic sync stop requested via admin API", stopped=stopped)

    return BaseResponse(
        message="Periodic sync stopped" if stopped else "Periodic sync was not running"
    )
