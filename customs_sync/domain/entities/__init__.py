"""
Domain entities package.
"""

from .sync_event import SyncEvent

__all__ = [
    "SyncEvent",
]
