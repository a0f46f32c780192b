"""
Batch failed domain event.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class BatchFailed:
    """Event raised when an unexpected error interrupts a drain cycle."""

    error_message: str
    error_type: str
    failed_at: datetime
    processed: int = 0
    returned_to_queue: int = 0
