"""
Transport-related domain exceptions.
"""

from .sync_error import SyncError


class TransportError(SyncError):
    """Raised by transports when a delivery attempt fails."""

    pass


class TransportTimeoutError(TransportError):
    """Raised when a delivery attempt exceeds the configured timeout."""

    def __init__(self, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Transport timed out after {timeout_seconds:g}s")
