"""
Domain exceptions package.
"""

from .sync_error import InvalidStatusTransitionError, SyncError, SyncEventNotFoundError
from .transport_error import TransportError, TransportTimeoutError

__all__ = [
    "InvalidStatusTransitionError",
    "SyncError",
    "SyncEventNotFoundError",
    "TransportError",
    "TransportTimeoutError",
]
