"""
Background workers package.
"""

from .sync_worker import SyncWorker

__all__ = [
    "SyncWorker",
]
