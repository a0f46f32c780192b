"""
Sync Worker: the drain cycle and the periodic scheduler driving it.
"""

import asyncio
import time
from datetime import datetime
from typing import List, Optional

from customs_sync.application.interfaces.transport import (
    DeliveryResult,
    TransportInterface,
)
from customs_sync.application.services.event_store import EventStore
from customs_sync.application.services.notifier import SyncNotification, SyncNotifier
from customs_sync.application.services.retry_policy import RetryPolicy
from customs_sync.application.services.sync_history import SyncHistory
from customs_sync.config.logging import get_logger
from customs_sync.domain.entities.sync_event import SyncEvent, utc_now
from customs_sync.domain.events.batch_completed import BatchCompleted
from customs_sync.domain.events.batch_failed import BatchFailed
from customs_sync.domain.exceptions.transport_error import TransportTimeoutError
from customs_sync.domain.value_objects.sync_status import SyncStatus

logger = get_logger(__name__)


class SyncWorker:
    """Worker that drains the event store into the transport."""

    def __init__(
        self,
        store: EventStore,
        transport: TransportInterface,
        retry_policy: RetryPolicy,
        notifier: SyncNotifier,
        history: Optional[SyncHistory] = None,
        batch_size: int = 10,
        tick_interval_seconds: float = 5.0,
        transport_timeout_seconds: Optional[float] = 30.0,
    ):
        self.store = store
        self.transport = transport
        self.retry_policy = retry_policy
        self.notifier = notifier
        self.history = history if history is not None else SyncHistory(max_size=0)
        self.batch_size = batch_size
        self.tick_interval_seconds = tick_interval_seconds
        self.transport_timeout_seconds = transport_timeout_seconds
        self.logger = logger

        # Single-flight guard
        self.is_draining = False
        self.last_sync_time: Optional[datetime] = None

        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None

    @property
    def is_running(self) -> bool:
        return (
            self._task is not None
            and not self._task.done()
            and self._stop_event is not None
            and not self._stop_event.is_set()
        )

    async def drain_once(self) -> Optional[BatchCompleted]:
        """
        Run one drain cycle.

        Returns:
            The batch summary, or None when the tick was a no-op (another
            cycle in progress, nothing due) or the batch was interrupted
        """
        # Check and set happen without an await in between.
        if self.is_draining:
            self.logger.debug("Drain skipped, another cycle is in progress")
            return None

        if not self.store.has_due_events():
            return None

        self.is_draining = True
        started = time.monotonic()
        batch: List[SyncEvent] = []
        finished = 0
        outcomes = {
            SyncStatus.SYNCED: 0,
            SyncStatus.PENDING: 0,
            SyncStatus.FAILED: 0,
            None: 0,
        }

        try:
            batch = self.store.take_batch(self.batch_size)

            self.logger.info("Starting sync batch", batch_size=len(batch))

            for event in batch:
                outcome = await self._sync_event(event)
                outcomes[outcome] += 1
                finished += 1

            self.last_sync_time = utc_now()
            summary = BatchCompleted(
                batch_size=len(batch),
                synced=outcomes[SyncStatus.SYNCED],
                requeued=outcomes[SyncStatus.PENDING],
                failed=outcomes[SyncStatus.FAILED],
                dropped=outcomes[None],
                completed_at=self.last_sync_time,
                duration_ms=(time.monotonic() - started) * 1000,
            )

            self.logger.info(
                "Sync batch completed",
                batch_size=summary.batch_size,
                synced=summary.synced,
                requeued=summary.requeued,
                failed=summary.failed,
                dropped=summary.dropped,
                duration_ms=round(summary.duration_ms, 2),
            )

            self.notifier.emit(SyncNotification.BATCH_COMPLETE, summary)
            return summary

        except Exception as e:
            self.last_sync_time = utc_now()
            returned = self._return_unfinished(batch[finished:])

            self.logger.error(
                "Error processing sync batch",
                error=str(e),
                processed=finished,
                returned_to_queue=returned,
                exc_info=True,
            )

            self.notifier.emit(
                SyncNotification.BATCH_ERROR,
                BatchFailed(
                    error_message=str(e),
                    error_type=type(e).__name__,
                    failed_at=self.last_sync_time,
                    processed=finished,
                    returned_to_queue=returned,
                ),
            )
            return None

        except asyncio.CancelledError:
            self._return_unfinished(batch[finished:])
            raise

        finally:
            self.is_draining = False

    async def _sync_event(self, event: SyncEvent) -> Optional[SyncStatus]:
        """
        Drive one event through the transport and the retry policy.

        Returns the status the event ended in, or None when a failed event
        had been removed while in flight and was dropped instead of requeued.
        """
        event.mark_syncing()
        started = time.monotonic()

        try:
            result = await self._deliver(event)
            error = None if result.success else (result.error_message or "Delivery failed")
        except Exception as e:
            error = str(e) or type(e).__name__

        duration_ms = (time.monotonic() - started) * 1000

        if error is None:
            event.mark_synced(duration_ms)
            self.store.release(event)
            self.history.record(event)

            self.logger.info(
                "Sync event synced",
                event_id=event.id,
                kind=event.kind.value,
                action=event.action.value,
                retry_count=event.retry_count,
            )

            self.notifier.emit(SyncNotification.EVENT_SYNCED, event.snapshot())
            return SyncStatus.SYNCED

        retry_count = event.record_failure(error, duration_ms)

        if self.retry_policy.should_retry(retry_count):
            event.mark_requeued(self.retry_policy.next_attempt_at(retry_count, utc_now()))
            if not self.store.requeue(event):
                self.logger.warning(
                    "Sync event failed after removal, dropped",
                    event_id=event.id,
                    retry_count=retry_count,
                    error=error,
                )
                return None

            self.logger.warning(
                "Sync event failed, requeued for retry",
                event_id=event.id,
                retry_count=retry_count,
                max_retries=self.retry_policy.max_retries,
                error=error,
            )

            self.notifier.emit(SyncNotification.EVENT_REQUEUED, event.snapshot())
            return SyncStatus.PENDING

        event.mark_failed()
        self.store.release(event)
        self.history.record(event)

        self.logger.error(
            "Sync event failed after all retries",
            event_id=event.id,
            kind=event.kind.value,
            retry_count=retry_count,
            error=error,
        )

        self.notifier.emit(SyncNotification.EVENT_FAILED, event.snapshot())
        return SyncStatus.FAILED

    async def _deliver(self, event: SyncEvent) -> DeliveryResult:
        # The transport only ever sees a copy.
        delivery = self.transport.deliver(event.snapshot())

        if self.transport_timeout_seconds is None:
            return await delivery

        try:
            return await asyncio.wait_for(delivery, timeout=self.transport_timeout_seconds)
        except asyncio.TimeoutError:
            raise TransportTimeoutError(self.transport_timeout_seconds)

    def _return_unfinished(self, events: List[SyncEvent]) -> int:
        """Put events of an interrupted batch back at the tail as pending."""
        returned = 0
        for event in events:
            if event.status == SyncStatus.SYNCING:
                event.mark_requeued()
            if event.status == SyncStatus.PENDING and self.store.requeue(event):
                returned += 1
        return returned

    async def start_continuous_sync(self) -> None:
        """Tick every ``tick_interval_seconds`` until stopped."""
        self.logger.info(
            "Starting continuous sync processing",
            interval_seconds=self.tick_interval_seconds,
            batch_size=self.batch_size,
        )

        stop_event = self._stop_event

        while True:
            try:
                await asyncio.wait_for(
                    stop_event.wait(), timeout=self.tick_interval_seconds
                )
                break
            except asyncio.TimeoutError:
                pass

            try:
                await self.drain_once()
            except Exception as e:
                self.logger.error(
                    "Error in continuous sync processing", error=str(e), exc_info=True
                )

        self.logger.info("Continuous sync processing stopped")

    def start(self) -> bool:
        """Schedule the tick loop on the running event loop; False if already running."""
        if self.is_running:
            return False

        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(
            self.start_continuous_sync()
        )
        return True

    async def stop(self) -> bool:
        """
        Prevent future ticks and wait for an in-flight drain to finish.

        Returns False if the scheduler was not running.
        """
        if self._task is None:
            return False

        self.logger.info("Stopping continuous sync processing")

        self._stop_event.set()
        task, self._task = self._task, None
        await task
        return True
