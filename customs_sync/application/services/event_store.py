"""
In-memory event store backing the sync queue.
"""

import threading
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from customs_sync.config.logging import get_logger
from customs_sync.domain.entities.sync_event import SyncEvent, utc_now
from customs_sync.domain.value_objects.event_kind import EventAction, EventKind
from customs_sync.domain.value_objects.sync_status import SyncStatus

logger = get_logger(__name__)


class EventStore:
    """
    Ordered, mutable collection of pending and in-flight sync events.

    Events taken by a drain cycle move to an in-flight section until the
    cycle finishes with them, so readers still see them as ``syncing``.
    Only the active drain cycle mutates events; every read returns detached
    snapshots. The lock covers producers calling ``enqueue`` from threads
    other than the one driving the event loop.
    """

    def __init__(self):
        self._queued: List[SyncEvent] = []
        self._in_flight: Dict[str, SyncEvent] = {}
        self._lock = threading.RLock()
        self.logger = logger

    def __len__(self) -> int:
        with self._lock:
            return len(self._in_flight) + len(self._queued)

    def is_empty(self) -> bool:
        return len(self) == 0

    def _all(self) -> List[SyncEvent]:
        # In-flight events were taken from the head of the queue.
        return list(self._in_flight.values()) + self._queued

    def enqueue(
        self,
        kind: Union[EventKind, str],
        action: Union[EventAction, str],
        payload: Optional[Dict[str, Any]] = None,
    ) -> SyncEvent:
        """Append a new pending event and return a snapshot of it."""
        event = SyncEvent.create(kind, action, payload)

        with self._lock:
            self._queued.append(event)
            snapshot = event.snapshot()

        self.logger.info(
            "Sync event enqueued",
            event_id=event.id,
            kind=event.kind.value,
            action=event.action.value,
        )

        return snapshot

    def append(self, event: SyncEvent) -> None:
        """Append an event that is not currently tracked (e.g. from history)."""
        with self._lock:
            self._queued.append(event)

    def take_batch(
        self, batch_size: int, now: Optional[datetime] = None
    ) -> List[SyncEvent]:
        """
        Move up to ``batch_size`` due events, in FIFO order, to in-flight.

        Events deferred by a backoff retry strategy stay queued until due.
        """
        now = now or utc_now()

        with self._lock:
            batch: List[SyncEvent] = []
            remaining: List[SyncEvent] = []

            for event in self._queued:
                if (
                    len(batch) < batch_size
                    and event.status == SyncStatus.PENDING
                    and event.is_due(now)
                ):
                    batch.append(event)
                else:
                    remaining.append(event)

            self._queued = remaining
            for event in batch:
                self._in_flight[event.id] = event

        return batch

    def requeue(self, event: SyncEvent) -> bool:
        """
        Move an in-flight event back to the tail of the queue.

        Returns False when the event was removed administratively while in
        flight; the event is then dropped.
        """
        with self._lock:
            if self._in_flight.pop(event.id, None) is None:
                self.logger.info(
                    "Sync event removed while in flight, not requeued",
                    event_id=event.id,
                )
                return False
            self._queued.append(event)
            return True

    def release(self, event: SyncEvent) -> None:
        """Forget an in-flight event that reached a terminal status."""
        with self._lock:
            self._in_flight.pop(event.id, None)

    def has_due_events(self, now: Optional[datetime] = None) -> bool:
        now = now or utc_now()
        with self._lock:
            return any(
                event.status == SyncStatus.PENDING and event.is_due(now)
                for event in self._queued
            )

    def list(
        self, status: Optional[SyncStatus] = None, limit: int = 50
    ) -> List[SyncEvent]:
        """Return snapshots of stored events, optionally filtered by status."""
        with self._lock:
            events = self._all()
            if status is not None:
                events = [e for e in events if e.status == status]
            return [e.snapshot() for e in events[: max(limit, 0)]]

    def get(self, event_id: str) -> Optional[SyncEvent]:
        with self._lock:
            for event in self._all():
                if event.id == event_id:
                    return event.snapshot()
        return None

    def reset_for_retry(self, event_id: str) -> bool:
        """
        Reset a queued event's retry budget.

        Returns False if the id is unknown or the event is in flight.
        """
        with self._lock:
            for event in self._queued:
                if event.id == event_id:
                    event.reset_for_retry()
                    return True
        return False

    def remove(self, event_id: str) -> bool:
        with self._lock:
            if self._in_flight.pop(event_id, None) is not None:
                self.logger.info(
                    "Sync event removed", event_id=event_id, in_flight=True
                )
                return True

            for index, event in enumerate(self._queued):
                if event.id == event_id:
                    del self._queued[index]
                    self.logger.info(
                        "Sync event removed", event_id=event_id, in_flight=False
                    )
                    return True
        return False

    def clear(self, status: Optional[SyncStatus] = None) -> int:
        """Remove every event, or only those in ``status``; return the count."""
        with self._lock:
            if status is None:
                cleared = len(self._queued) + len(self._in_flight)
                self._queued = []
                self._in_flight = {}
            else:
                kept = [e for e in self._queued if e.status != status]
                cleared = len(self._queued) - len(kept)
                self._queued = kept

                flying = {
                    event_id: e
                    for event_id, e in self._in_flight.items()
                    if e.status != status
                }
                cleared += len(self._in_flight) - len(flying)
                self._in_flight = flying

        self.logger.info(
            "Sync events cleared",
            status=status.value if status else None,
            cleared_count=cleared,
        )

        return cleared

    def count_by_status(self) -> Dict[SyncStatus, int]:
        with self._lock:
            counts = {status: 0 for status in SyncStatus}
            for event in self._all():
                counts[event.status] += 1
        return counts
