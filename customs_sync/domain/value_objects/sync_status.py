"""
Sync status value object.
"""

from enum import Enum


class SyncStatus(str, Enum):
    """Sync event status enumeration."""

    PENDING = "pending"
    SYNCING = "syncing"
    SYNCED = "synced"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """Check if no further automatic transition happens from this status."""
        return self in [SyncStatus.SYNCED, SyncStatus.FAILED]

    def can_retry(self) -> bool:
        """Check if a manual retry may reset an event in this status."""
        return self in [SyncStatus.PENDING, SyncStatus.FAILED]

    def can_transition_to(self, target: "SyncStatus") -> bool:
        """Check if the state machine allows moving to ``target``."""
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    SyncStatus.PENDING: frozenset([SyncStatus.SYNCING]),
    SyncStatus.SYNCING: frozenset(
        [SyncStatus.SYNCED, SyncStatus.PENDING, SyncStatus.FAILED]
    ),
    SyncStatus.SYNCED: frozenset(),
    SyncStatus.FAILED: frozenset(),
}
