"""
Mock transport for testing and development.
"""

import asyncio
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional, Union

from customs_sync.application.interfaces.transport import (
    DeliveryResult,
    TransportInterface,
)
from customs_sync.config.logging import get_logger
from customs_sync.domain.entities.sync_event import SyncEvent

logger = get_logger(__name__)

# True succeeds, False or a message fails, an exception instance is raised.
Outcome = Union[bool, str, Exception]


class MockTransport(TransportInterface):
    """
    Deterministic transport double.

    Outcomes come from, in order of precedence: a per-event failure budget
    set with ``fail_event``, the scripted ``outcomes`` consumed one per
    call, then ``default_success``.
    """

    def __init__(
        self,
        default_success: bool = True,
        outcomes: Optional[Iterable[Outcome]] = None,
        delay_seconds: float = 0.0,
        error_message: str = "Customs system rejected the event",
    ):
        self.default_success = default_success
        self.delay_seconds = delay_seconds
        self.error_message = error_message
        self._script: Deque[Outcome] = deque(outcomes or [])
        self._event_failures: Dict[str, Optional[int]] = {}

        self.attempts: List[SyncEvent] = []
        self.delivered: List[SyncEvent] = []

    @property
    def name(self) -> str:
        return "Mock Transport"

    @property
    def call_count(self) -> int:
        return len(self.attempts)

    def fail_event(self, event_id: str, times: Optional[int] = None) -> None:
        """Fail deliveries of ``event_id``; ``times=None`` fails forever."""
        self._event_failures[event_id] = times

    def script(self, *outcomes: Outcome) -> None:
        self._script.extend(outcomes)

    def _next_outcome(self, event: SyncEvent) -> Outcome:
        if event.id in self._event_failures:
            remaining = self._event_failures[event.id]
            if remaining is None:
                return False
            if remaining > 0:
                self._event_failures[event.id] = remaining - 1
                return False
            del self._event_failures[event.id]

        if self._script:
            return self._script.popleft()

        return self.default_success

    async def deliver(self, event: SyncEvent) -> DeliveryResult:
        self.attempts.append(event)

        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        outcome = self._next_outcome(event)

        if isinstance(outcome, Exception):
            raise outcome

        if outcome is True:
            self.delivered.append(event)
            logger.debug("Mock delivery succeeded", event_id=event.id)
            return DeliveryResult.ok()

        message = outcome if isinstance(outcome, str) else self.error_message
        logger.debug("Mock delivery failed", event_id=event.id, error=message)
        return DeliveryResult.failure(message)
