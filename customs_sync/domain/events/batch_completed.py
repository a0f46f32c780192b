"""
Batch completed domain event.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BatchCompleted:
    """Event raised when a drain cycle finishes its batch."""

    batch_size: int
    synced: int
    requeued: int
    failed: int
    completed_at: datetime
    duration_ms: float
    dropped: int = 0
