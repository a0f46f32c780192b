"""
Mock transport package.
"""

from .transport import MockTransport

__all__ = [
    "MockTransport",
]
