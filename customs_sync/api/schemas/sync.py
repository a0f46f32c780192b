"""
Sync engine API schemas.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from customs_sync.api.schemas.common import BaseResponse
from customs_sync.application.services.statistics import DeliveryStats, QueueStats
from customs_sync.domain.entities.sync_event import SyncEvent
from customs_sync.domain.events.batch_completed import BatchCompleted
from customs_sync.domain.value_objects.event_kind import EventAction, EventKind
from customs_sync.domain.value_objects.sync_status import SyncStatus


class EnqueueRequest(BaseModel):
    """Request schema for enqueueing a sync event."""

    kind: EventKind = Field(..., description="Domain source of the change")
    action: EventAction = Field(..., description="Change applied to the record")
    payload: Dict[str, Any] = Field(default_factory=dict)


class EnqueueResponse(BaseModel):
    """Response schema for an enqueued event."""

    id: str
    status: SyncStatus = SyncStatus.PENDING


class SyncEventResponse(BaseModel):
    """Response schema for a sync event."""

    id: str
    kind: EventKind
    action: EventAction
    payload: Dict[str, Any]
    status: SyncStatus
    retry_count: int
    last_error: Optional[str] = None
    created_at: datetime
    last_attempt_at: Optional[datetime] = None
    next_attempt_at: Optional[datetime] = None
    synced_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, event: SyncEvent) -> "SyncEventResponse":
        return cls(
            id=event.id,
            kind=event.kind,
            action=event.action,
            payload=event.payload,
            status=event.status,
            retry_count=event.retry_count,
            last_error=event.last_error,
            created_at=event.created_at,
            last_attempt_at=event.last_attempt_at,
            next_attempt_at=event.next_attempt_at,
            synced_at=event.synced_at,
            failed_at=event.failed_at,
        )


class QueueStatsResponse(BaseModel):
    """Response schema for queue statistics."""

    total: int
    pending: int
    syncing: int
    failed: int
    is_draining: bool
    is_running: bool
    last_sync_time: Optional[datetime] = None

    @classmethod
    def from_stats(cls, stats: QueueStats, is_running: bool) -> "QueueStatsResponse":
        return cls(is_running=is_running, **stats.to_dict())


class DeliveryStatsResponse(BaseModel):
    """Response schema for cumulative delivery statistics."""

    total_synced: int
    total_failed: int
    total_retried: int
    success_rate: float
    average_sync_time_ms: Optional[float] = None

    @classmethod
    def from_stats(cls, stats: DeliveryStats) -> "DeliveryStatsResponse":
        return cls(**stats.to_dict())


class BatchSummaryResponse(BaseResponse):
    """Response schema for a manual drain."""

    drained: bool
    batch_size: int = 0
    synced: int = 0
    requeued: int = 0
    failed: int = 0
    dropped: int = 0
    duration_ms: Optional[float] = None

    @classmethod
    def from_summary(cls, summary: Optional[BatchCompleted]) -> "BatchSummaryResponse":
        if summary is None:
            return cls(
                drained=False,
                message="Nothing drained: queue empty or a drain is in progress",
            )
        return cls(
            drained=True,
            batch_size=summary.batch_size,
            synced=summary.synced,
            requeued=summary.requeued,
            failed=summary.failed,
            dropped=summary.dropped,
            duration_ms=summary.duration_ms,
        )


class ClearResponse(BaseResponse):
    """Response schema for clearing events."""

    cleared: int
