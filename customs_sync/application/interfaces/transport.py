"""
Transport interface for delivering sync events to the customs system.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from customs_sync.domain.entities.sync_event import SyncEvent


@dataclass
class DeliveryResult:
    """Outcome of a single delivery attempt."""

    success: bool
    error_message: Optional[str] = None

    @classmethod
    def ok(cls) -> "DeliveryResult":
        return cls(success=True)

    @classmethod
    def failure(cls, error_message: str) -> "DeliveryResult":
        return cls(success=False, error_message=error_message)


class TransportInterface(ABC):
    """Base interface for delivering events to the system of record."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Transport name."""
        pass

    @abstractmethod
    async def deliver(self, event: SyncEvent) -> DeliveryResult:
        """
        Attempt to deliver one event.

        Raising is treated the same as returning a failed result; the engine
        never interprets the reason, it only counts attempts.
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the transport."""
        return None
