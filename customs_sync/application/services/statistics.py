"""
Statistics aggregation for the sync queue.
"""

import threading
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from customs_sync.application.services.event_store import EventStore
from customs_sync.application.services.notifier import SyncNotification, SyncNotifier
from customs_sync.domain.entities.sync_event import SyncEvent
from customs_sync.domain.value_objects.sync_status import SyncStatus


@dataclass
class QueueStats:
    """Point-in-time view of the active queue."""

    total: int
    pending: int
    syncing: int
    failed: int
    is_draining: bool
    last_sync_time: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DeliveryStats:
    """Cumulative delivery outcomes since the engine was created."""

    total_synced: int
    total_failed: int
    total_retried: int
    success_rate: float
    average_sync_time_ms: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class SyncStatisticsAggregator:
    """
    Derives queue counts on demand and keeps cumulative delivery counters.

    Queue counts are never cached: each call reads a fresh snapshot of the
    store. Delivery counters are fed by notifier subscriptions because
    terminal events leave the store.
    """

    def __init__(self, store: EventStore, notifier: SyncNotifier):
        self.store = store
        self._lock = threading.Lock()
        self._synced = 0
        self._failed = 0
        self._retried = 0
        self._sync_time_total_ms = 0.0
        self._timed_syncs = 0

        notifier.subscribe(SyncNotification.EVENT_SYNCED, self._on_event_synced)
        notifier.subscribe(SyncNotification.EVENT_FAILED, self._on_event_failed)
        notifier.subscribe(SyncNotification.EVENT_REQUEUED, self._on_event_requeued)

    def queue_stats(
        self, is_draining: bool, last_sync_time: Optional[datetime]
    ) -> QueueStats:
        counts = self.store.count_by_status()
        return QueueStats(
            total=sum(counts.values()),
            pending=counts[SyncStatus.PENDING],
            syncing=counts[SyncStatus.SYNCING],
            failed=counts[SyncStatus.FAILED],
            is_draining=is_draining,
            last_sync_time=last_sync_time,
        )

    def delivery_stats(self) -> DeliveryStats:
        with self._lock:
            finished = self._synced + self._failed
            return DeliveryStats(
                total_synced=self._synced,
                total_failed=self._failed,
                total_retried=self._retried,
                success_rate=(self._synced / finished) * 100 if finished > 0 else 0.0,
                average_sync_time_ms=(self._sync_time_total_ms / self._timed_syncs)
                if self._timed_syncs > 0
                else None,
            )

    def _on_event_synced(self, event: SyncEvent) -> None:
        with self._lock:
            self._synced += 1
            if event.duration_ms is not None:
                self._sync_time_total_ms += event.duration_ms
                self._timed_syncs += 1

    def _on_event_failed(self, event: SyncEvent) -> None:
        with self._lock:
            self._failed += 1

    def _on_event_requeued(self, event: SyncEvent) -> None:
        with self._lock:
            self._retried += 1
