"""
Monitoring package.
"""

from .metrics import SyncMetrics

__all__ = [
    "SyncMetrics",
]
