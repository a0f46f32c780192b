"""
Publish/subscribe notifier for sync lifecycle notifications.
"""

import asyncio
import inspect
from enum import Enum
from typing import Any, Callable, Dict, List, Set

from customs_sync.config.logging import get_logger

logger = get_logger(__name__)

Subscriber = Callable[[Any], Any]


class SyncNotification(str, Enum):
    """Channels a subscriber can listen on."""

    EVENT_ADDED = "event-added"
    EVENT_SYNCED = "event-synced"
    EVENT_FAILED = "event-failed"
    EVENT_REQUEUED = "event-requeued"
    BATCH_COMPLETE = "batch-complete"
    BATCH_ERROR = "batch-error"


class SyncNotifier:
    """
    Dispatches lifecycle notifications to registered subscribers.

    Subscribers may be plain callables or coroutine functions; coroutines are
    scheduled on the running loop rather than awaited, so a slow subscriber
    never holds up the drain cycle. A failing subscriber is logged and
    skipped. No ordering is guaranteed between subscribers of one emission.
    """

    def __init__(self):
        self._subscribers: Dict[SyncNotification, List[Subscriber]] = {
            channel: [] for channel in SyncNotification
        }
        self._pending_tasks: Set[asyncio.Task] = set()

    def subscribe(
        self, channel: SyncNotification, callback: Subscriber
    ) -> Callable[[], None]:
        """Register ``callback`` on ``channel`` and return an unsubscribe handle."""
        channel = SyncNotification(channel)
        self._subscribers[channel].append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(channel, callback)

        return unsubscribe

    def unsubscribe(self, channel: SyncNotification, callback: Subscriber) -> bool:
        subscribers = self._subscribers[SyncNotification(channel)]
        if callback in subscribers:
            subscribers.remove(callback)
            return True
        return False

    def subscriber_count(self, channel: SyncNotification) -> int:
        return len(self._subscribers[SyncNotification(channel)])

    def emit(self, channel: SyncNotification, payload: Any) -> None:
        """Deliver ``payload`` to every subscriber of ``channel``."""
        for callback in list(self._subscribers[channel]):
            try:
                result = callback(payload)
                if inspect.isawaitable(result):
                    self._schedule(channel, result)
            except Exception as e:
                logger.error(
                    "Sync notification subscriber failed",
                    channel=channel.value,
                    subscriber=getattr(callback, "__qualname__", repr(callback)),
                    error=str(e),
                    exc_info=True,
                )

    def _schedule(self, channel: SyncNotification, awaitable: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "No running event loop for async subscriber, notification dropped",
                channel=channel.value,
            )
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        task = loop.create_task(awaitable)
        self._pending_tasks.add(task)
        task.add_done_callback(
            lambda finished: self._on_task_done(channel, finished)
        )

    def _on_task_done(self, channel: SyncNotification, task: asyncio.Task) -> None:
        self._pending_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Async sync notification subscriber failed",
                channel=channel.value,
                error=str(error),
            )

    async def wait_for_subscribers(self) -> None:
        """Wait until scheduled async subscribers have finished."""
        if self._pending_tasks:
            await asyncio.gather(*list(self._pending_tasks), return_exceptions=True)
