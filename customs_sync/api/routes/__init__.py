"""
API routes package.
"""

from . import health, sync

__all__ = [
    "health",
    "sync",
]
