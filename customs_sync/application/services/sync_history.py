"""
Bounded audit trail of events that left the active queue.
"""

import threading
from collections import deque
from typing import Deque, List, Optional

from customs_sync.domain.entities.sync_event import SyncEvent
from customs_sync.domain.value_objects.sync_status import SyncStatus


class SyncHistory:
    """Ring buffer of terminal (synced or failed) events, newest last."""

    def __init__(self, max_size: int = 100):
        self.max_size = max_size
        self._events: Deque[SyncEvent] = deque(maxlen=max_size)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def record(self, event: SyncEvent) -> None:
        if self.max_size == 0:
            return
        with self._lock:
            self._events.append(event.snapshot())

    def list(
        self, status: Optional[SyncStatus] = None, limit: int = 50
    ) -> List[SyncEvent]:
        """Most recent events first."""
        with self._lock:
            events = [
                e for e in reversed(self._events) if status is None or e.status == status
            ]
            return [e.snapshot() for e in events[: max(limit, 0)]]

    def get(self, event_id: str) -> Optional[SyncEvent]:
        with self._lock:
            for event in self._events:
                if event.id == event_id:
                    return event.snapshot()
        return None

    def pop(self, event_id: str) -> Optional[SyncEvent]:
        """Remove and return a recorded event, or None."""
        with self._lock:
            for event in self._events:
                if event.id == event_id:
                    self._events.remove(event)
                    return event
        return None

    def clear(self) -> int:
        with self._lock:
            count = len(self._events)
            self._events.clear()
        return count
