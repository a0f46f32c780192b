"""
Data sync service: the engine facade handed to domain collaborators.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from customs_sync.application.interfaces.transport import TransportInterface
from customs_sync.application.services.event_store import EventStore
from customs_sync.application.services.notifier import (
    Subscriber,
    SyncNotification,
    SyncNotifier,
)
from customs_sync.application.services.retry_policy import RetryPolicy, RetryStrategy
from customs_sync.application.services.statistics import (
    DeliveryStats,
    QueueStats,
    SyncStatisticsAggregator,
)
from customs_sync.application.services.sync_history import SyncHistory
from customs_sync.background.workers.sync_worker import SyncWorker
from customs_sync.config.logging import get_logger
from customs_sync.config.settings import Settings
from customs_sync.domain.entities.sync_event import SyncEvent
from customs_sync.domain.events.batch_completed import BatchCompleted
from customs_sync.domain.value_objects.event_kind import EventAction, EventKind
from customs_sync.domain.value_objects.sync_status import SyncStatus

logger = get_logger(__name__)


@dataclass
class SyncEngineConfig:
    """Tunables of the sync engine."""

    tick_interval_ms: int = 5000
    max_retries: int = 3
    batch_size: int = 10
    transport_timeout_seconds: Optional[float] = 30.0
    history_size: int = 100
    retry_strategy: RetryStrategy = RetryStrategy.FIXED
    retry_base_delay_seconds: float = 5.0
    retry_max_delay_seconds: float = 300.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "SyncEngineConfig":
        return cls(
            tick_interval_ms=settings.SYNC_TICK_INTERVAL_MS,
            max_retries=settings.SYNC_MAX_RETRIES,
            batch_size=settings.SYNC_BATCH_SIZE,
            transport_timeout_seconds=settings.SYNC_TRANSPORT_TIMEOUT_SECONDS,
            history_size=settings.SYNC_HISTORY_SIZE,
            retry_strategy=RetryStrategy(settings.SYNC_RETRY_STRATEGY),
            retry_base_delay_seconds=settings.SYNC_RETRY_BASE_DELAY_SECONDS,
            retry_max_delay_seconds=settings.SYNC_RETRY_MAX_DELAY_SECONDS,
        )


def _coerce_status(status: Optional[Union[SyncStatus, str]]) -> Optional[SyncStatus]:
    return SyncStatus(status) if status is not None else None


class DataSyncService:
    """
    Outbox engine forwarding customs domain changes to the government system.

    Construct one instance at process start and inject it into the
    collaborators that produce events. Delivery is at-least-once and retried
    events are appended behind newer ones, so there is no ordering guarantee
    across retries. Nothing survives a restart.
    """

    def __init__(
        self,
        transport: TransportInterface,
        config: Optional[SyncEngineConfig] = None,
        notifier: Optional[SyncNotifier] = None,
    ):
        self.config = config or SyncEngineConfig()
        self.transport = transport
        self.notifier = notifier or SyncNotifier()
        self.store = EventStore()
        self.history = SyncHistory(max_size=self.config.history_size)
        self.retry_policy = RetryPolicy(
            max_retries=self.config.max_retries,
            strategy=self.config.retry_strategy,
            base_delay=self.config.retry_base_delay_seconds,
            max_delay=self.config.retry_max_delay_seconds,
        )
        self.statistics = SyncStatisticsAggregator(self.store, self.notifier)
        self.worker = SyncWorker(
            store=self.store,
            transport=transport,
            retry_policy=self.retry_policy,
            notifier=self.notifier,
            history=self.history,
            batch_size=self.config.batch_size,
            tick_interval_seconds=self.config.tick_interval_ms / 1000,
            transport_timeout_seconds=self.config.transport_timeout_seconds,
        )
        self.logger = logger

        self.logger.info(
            "Data sync service initialized",
            transport=transport.name,
            tick_interval_ms=self.config.tick_interval_ms,
            max_retries=self.config.max_retries,
            batch_size=self.config.batch_size,
            retry_strategy=self.config.retry_strategy.value,
        )

    # Producer API

    def enqueue(
        self,
        kind: Union[EventKind, str],
        action: Union[EventAction, str],
        payload: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Queue a domain change for delivery and return its id.

        Never waits on delivery. The payload is copied, so later changes by
        the caller do not leak into the queued event.

        Raises:
            ValueError: If ``kind`` or ``action`` is not a known value
        """
        event = self.store.enqueue(kind, action, payload)
        self.notifier.emit(SyncNotification.EVENT_ADDED, event)
        return event.id

    # Lifecycle

    @property
    def is_running(self) -> bool:
        return self.worker.is_running

    def start(self) -> bool:
        """Start periodic draining; must be called from a running event loop."""
        started = self.worker.start()
        if started:
            self.logger.info("Periodic sync started")
        return started

    async def stop(self) -> bool:
        """Stop future ticks; an in-flight drain runs to completion."""
        stopped = await self.worker.stop()
        if stopped:
            self.logger.info("Periodic sync stopped")
        return stopped

    async def drain_now(self) -> Optional[BatchCompleted]:
        """Trigger a drain cycle outside the schedule."""
        return await self.worker.drain_once()

    async def close(self) -> None:
        await self.stop()
        await self.transport.close()

    # Administrative API

    def retry(self, event_id: str) -> bool:
        """
        Reset an event to pending with a fresh retry budget.

        Works for queued events and for failed events still held in the
        history, which are moved back to the tail of the queue. Returns
        False if the id is unknown or the event is currently in flight.
        """
        if self.store.reset_for_retry(event_id):
            self.logger.info("Sync event reset for retry", event_id=event_id)
            return True

        recorded = self.history.get(event_id)
        if recorded is None or recorded.status != SyncStatus.FAILED:
            return False

        event = self.history.pop(event_id)
        event.reset_for_retry()
        self.store.append(event)
        self.logger.info(
            "Failed sync event resurrected from history", event_id=event_id
        )
        return True

    def remove(self, event_id: str) -> bool:
        return self.store.remove(event_id)

    def clear(self, status: Optional[Union[SyncStatus, str]] = None) -> int:
        """
        Remove queued events, all of them or only those in ``status``.

        Clearing ``failed`` also empties failed events out of the history,
        since that is where dead-lettered events live; they are included in
        the returned count.
        """
        status = _coerce_status(status)
        cleared = self.store.clear(status)

        if status == SyncStatus.FAILED:
            for event in self.history.list(SyncStatus.FAILED, limit=len(self.history)):
                if self.history.pop(event.id) is not None:
                    cleared += 1

        return cleared

    def get(self, event_id: str) -> Optional[SyncEvent]:
        event = self.store.get(event_id)
        if event is not None:
            return event
        return self.history.get(event_id)

    def list(
        self, status: Optional[Union[SyncStatus, str]] = None, limit: int = 50
    ) -> List[SyncEvent]:
        """Snapshots of events in the active queue."""
        return self.store.list(_coerce_status(status), limit)

    def history_events(
        self, status: Optional[Union[SyncStatus, str]] = None, limit: int = 50
    ) -> List[SyncEvent]:
        """Snapshots of recently synced or failed events, newest first."""
        return self.history.list(_coerce_status(status), limit)

    def stats(self) -> QueueStats:
        return self.statistics.queue_stats(
            is_draining=self.worker.is_draining,
            last_sync_time=self.worker.last_sync_time,
        )

    def delivery_stats(self) -> DeliveryStats:
        return self.statistics.delivery_stats()

    def subscribe(
        self, channel: Union[SyncNotification, str], callback: Subscriber
    ) -> Callable[[], None]:
        return self.notifier.subscribe(SyncNotification(channel), callback)
