"""
Prometheus metrics for the sync engine.
"""

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from customs_sync.application.services.event_store import EventStore
from customs_sync.application.services.notifier import SyncNotification, SyncNotifier
from customs_sync.domain.entities.sync_event import SyncEvent
from customs_sync.domain.events.batch_completed import BatchCompleted
from customs_sync.domain.events.batch_failed import BatchFailed


class SyncMetrics:
    """
    Sync engine metrics fed by notifier subscriptions.

    Each instance owns its registry so several engines (e.g. in tests) can
    coexist without duplicate-registration errors.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()

        self.events_enqueued = Counter(
            "customs_sync_events_enqueued_total",
            "Total number of sync events enqueued",
            ["kind"],
            registry=self.registry,
        )

        self.events_synced = Counter(
            "customs_sync_events_synced_total",
            "Total number of sync events delivered",
            ["kind"],
            registry=self.registry,
        )

        self.events_failed = Counter(
            "customs_sync_events_failed_total",
            "Total number of sync events that exhausted their retries",
            ["kind"],
            registry=self.registry,
        )

        self.retries = Counter(
            "customs_sync_retries_total",
            "Total number of failed attempts requeued for retry",
            registry=self.registry,
        )

        self.batches = Counter(
            "customs_sync_batches_total",
            "Total number of drain cycles",
            ["outcome"],
            registry=self.registry,
        )

        self.batch_duration = Histogram(
            "customs_sync_batch_duration_seconds",
            "Time spent draining one batch",
            buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
            registry=self.registry,
        )

        self.queue_depth = Gauge(
            "customs_sync_queue_depth",
            "Number of events in the active queue",
            registry=self.registry,
        )

    def attach(self, notifier: SyncNotifier, store: Optional[EventStore] = None) -> None:
        """Subscribe to every notification channel."""
        notifier.subscribe(SyncNotification.EVENT_ADDED, self._on_event_added)
        notifier.subscribe(SyncNotification.EVENT_SYNCED, self._on_event_synced)
        notifier.subscribe(SyncNotification.EVENT_FAILED, self._on_event_failed)
        notifier.subscribe(SyncNotification.EVENT_REQUEUED, self._on_event_requeued)
        notifier.subscribe(SyncNotification.BATCH_COMPLETE, self._on_batch_complete)
        notifier.subscribe(SyncNotification.BATCH_ERROR, self._on_batch_error)

        if store is not None:
            self.queue_depth.set_function(lambda: len(store))

    def _on_event_added(self, event: SyncEvent) -> None:
        self.events_enqueued.labels(kind=event.kind.value).inc()

    def _on_event_synced(self, event: SyncEvent) -> None:
        self.events_synced.labels(kind=event.kind.value).inc()

    def _on_event_failed(self, event: SyncEvent) -> None:
        self.events_failed.labels(kind=event.kind.value).inc()

    def _on_event_requeued(self, event: SyncEvent) -> None:
        self.retries.inc()

    def _on_batch_complete(self, summary: BatchCompleted) -> None:
        self.batches.labels(outcome="complete").inc()
        self.batch_duration.observe(summary.duration_ms / 1000)

    def _on_batch_error(self, failure: BatchFailed) -> None:
        self.batches.labels(outcome="error").inc()

    def render(self) -> bytes:
        """Metrics in the Prometheus text exposition format."""
        return generate_latest(self.registry)

    @staticmethod
    def content_type() -> str:
        return CONTENT_TYPE_LATEST
