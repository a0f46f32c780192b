"""
Application services package.
"""

from .event_store import EventStore
from .notifier import SyncNotification, SyncNotifier
from .retry_policy import RetryPolicy, RetryStrategy
from .statistics import DeliveryStats, QueueStats, SyncStatisticsAggregator
from .sync_history import SyncHistory

__all__ = [
    "DeliveryStats",
    "EventStore",
    "QueueStats",
    "RetryPolicy",
    "RetryStrategy",
    "SyncHistory",
    "SyncNotification",
    "SyncNotifier",
    "SyncStatisticsAggregator",
]
