"""
Domain value objects package.
"""

from .event_kind import EventAction, EventKind
from .sync_status import SyncStatus

__all__ = [
    "EventAction",
    "EventKind",
    "SyncStatus",
]
