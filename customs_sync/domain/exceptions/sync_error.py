"""
Sync-related domain exceptions.
"""


class SyncError(Exception):
    """Base exception for sync-related errors."""

    pass


class InvalidStatusTransitionError(SyncError):
    """Raised when a sync event is moved along an edge the state machine forbids."""

    def __init__(self, event_id: str, current_status: str, target_status: str):
        self.event_id = event_id
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Invalid status transition for sync event {event_id}: "
            f"'{current_status}' -> '{target_status}'"
        )


class SyncEventNotFoundError(SyncError):
    """Raised when a sync event id is unknown to the queue and the history."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Sync event {event_id} not found")
