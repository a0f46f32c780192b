"""
Unit tests for statistics aggregation.
"""

from customs_sync.application.services.notifier import SyncNotification
from customs_sync.application.services.statistics import SyncStatisticsAggregator
from customs_sync.domain.entities.sync_event import SyncEvent


def _synced_event(duration_ms):
    event = SyncEvent.create("payment", "create")
    event.mark_syncing()
    event.mark_synced(duration_ms)
    return event


class TestSyncStatisticsAggregator:
    """Test cases for SyncStatisticsAggregator."""

    def test_queue_stats_reflect_store(self, event_store, notifier):
        aggregator = SyncStatisticsAggregator(event_store, notifier)
        for _ in range(3):
            event_store.enqueue("declaration", "create")
        taken = event_store.take_batch(1)
        taken[0].mark_syncing()

        stats = aggregator.queue_stats(is_draining=True, last_sync_time=None)

        assert stats.total == 3
        assert stats.pending == 2
        assert stats.syncing == 1
        assert stats.failed == 0
        assert stats.is_draining is True
        assert stats.last_sync_time is None

    def test_queue_stats_are_not_cached(self, event_store, notifier):
        aggregator = SyncStatisticsAggregator(event_store, notifier)
        assert aggregator.queue_stats(False, None).total == 0

        event_store.enqueue("tariff", "create")

        assert aggregator.queue_stats(False, None).total == 1

    def test_empty_delivery_stats(self, event_store, notifier):
        stats = SyncStatisticsAggregator(event_store, notifier).delivery_stats()

        assert stats.total_synced == 0
        assert stats.success_rate == 0.0
        assert stats.average_sync_time_ms is None

    def test_delivery_stats_from_notifications(self, event_store, notifier):
        aggregator = SyncStatisticsAggregator(event_store, notifier)

        notifier.emit(SyncNotification.EVENT_SYNCED, _synced_event(10.0))
        notifier.emit(SyncNotification.EVENT_SYNCED, _synced_event(30.0))
        notifier.emit(SyncNotification.EVENT_SYNCED, _synced_event(20.0))
        notifier.emit(SyncNotification.EVENT_FAILED, SyncEvent.create("payment", "create"))
        requeued = SyncEvent.create("payment", "create")
        notifier.emit(SyncNotification.EVENT_REQUEUED, requeued)
        notifier.emit(SyncNotification.EVENT_REQUEUED, requeued)

        stats = aggregator.delivery_stats()

        assert stats.total_synced == 3
        assert stats.total_failed == 1
        assert stats.total_retried == 2
        assert stats.success_rate == 75.0
        assert stats.average_sync_time_ms == 20.0
        assert stats.to_dict()["total_synced"] == 3
