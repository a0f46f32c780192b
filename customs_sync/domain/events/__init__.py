"""
Domain events package.
"""

from .batch_completed import BatchCompleted
from .batch_failed import BatchFailed

__all__ = [
    "BatchCompleted",
    "BatchFailed",
]
