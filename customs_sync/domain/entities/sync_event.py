"""
Sync event entity: one domain change waiting to reach the customs system.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union
from uuid import uuid4

from customs_sync.domain.exceptions.sync_error import InvalidStatusTransitionError
from customs_sync.domain.value_objects.event_kind import EventAction, EventKind
from customs_sync.domain.value_objects.sync_status import SyncStatus


def new_event_id() -> str:
    """Generate a process-unique sync event id."""
    return f"sync-{uuid4().hex}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SyncEvent:
    """Sync event domain entity."""

    kind: EventKind
    action: EventAction
    payload: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=new_event_id)
    created_at: datetime = field(default_factory=utc_now)
    status: SyncStatus = SyncStatus.PENDING
    retry_count: int = 0
    last_error: Optional[str] = None
    last_attempt_at: Optional[datetime] = None
    next_attempt_at: Optional[datetime] = None
    synced_at: Optional[datetime] = None
    failed_at: Optional[datetime] = None
    duration_ms: Optional[float] = None

    @classmethod
    def create(
        cls,
        kind: Union[EventKind, str],
        action: Union[EventAction, str],
        payload: Optional[Dict[str, Any]] = None,
    ) -> "SyncEvent":
        """
        Build a pending event, taking ownership of a private copy of ``payload``.

        Raises:
            ValueError: If ``kind`` or ``action`` is not a known value
        """
        return cls(
            kind=EventKind(kind),
            action=EventAction(action),
            payload=copy.deepcopy(payload) if payload is not None else {},
        )

    def _transition(self, target: SyncStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransitionError(
                self.id, self.status.value, target.value
            )
        self.status = target

    def mark_syncing(self) -> None:
        """Mark the event as picked up by a drain cycle."""
        self._transition(SyncStatus.SYNCING)
        self.last_attempt_at = utc_now()

    def mark_synced(self, duration_ms: Optional[float] = None) -> None:
        """Mark delivery as successful."""
        self._transition(SyncStatus.SYNCED)
        self.synced_at = utc_now()
        self.duration_ms = duration_ms
        self.next_attempt_at = None

    def record_failure(
        self, error_message: str, duration_ms: Optional[float] = None
    ) -> int:
        """Count a failed delivery attempt and return the new retry count."""
        if self.status != SyncStatus.SYNCING:
            raise InvalidStatusTransitionError(
                self.id, self.status.value, "failed attempt"
            )
        self.retry_count += 1
        self.last_error = error_message
        self.duration_ms = duration_ms
        return self.retry_count

    def mark_requeued(self, next_attempt_at: Optional[datetime] = None) -> None:
        """Send the event back to the queue after a failed attempt."""
        self._transition(SyncStatus.PENDING)
        self.next_attempt_at = next_attempt_at

    def mark_failed(self) -> None:
        """Mark the event as dead-lettered after exhausting its retries."""
        self._transition(SyncStatus.FAILED)
        self.failed_at = utc_now()
        self.next_attempt_at = None

    def reset_for_retry(self) -> None:
        """Administrative reset: back to pending with a fresh retry budget."""
        if not self.status.can_retry():
            raise InvalidStatusTransitionError(
                self.id, self.status.value, SyncStatus.PENDING.value
            )
        self.status = SyncStatus.PENDING
        self.retry_count = 0
        self.last_error = None
        self.next_attempt_at = None
        self.failed_at = None

    def is_due(self, now: Optional[datetime] = None) -> bool:
        """Check if a pending event may be picked up at ``now``."""
        if self.next_attempt_at is None:
            return True
        return self.next_attempt_at <= (now or utc_now())

    def snapshot(self) -> "SyncEvent":
        """Return a detached copy safe to hand to readers."""
        return copy.deepcopy(self)
