"""
Unit tests for the SyncEvent entity.
"""

import pytest

from customs_sync.domain.entities.sync_event import SyncEvent
from customs_sync.domain.exceptions.sync_error import InvalidStatusTransitionError
from customs_sync.domain.value_objects.event_kind import EventAction, EventKind
from customs_sync.domain.value_objects.sync_status import SyncStatus


class TestSyncEvent:
    """Test cases for SyncEvent."""

    def test_create_defaults(self, sample_declaration):
        event = SyncEvent.create("declaration", "create", sample_declaration)

        assert event.kind == EventKind.DECLARATION
        assert event.action == EventAction.CREATE
        assert event.status == SyncStatus.PENDING
        assert event.retry_count == 0
        assert event.last_error is None
        assert event.id.startswith("sync-")
        assert event.created_at.tzinfo is not None

    def test_create_copies_payload(self, sample_declaration):
        event = SyncEvent.create(EventKind.DECLARATION, EventAction.UPDATE, sample_declaration)

        sample_declaration["customs_value"] = 0
        sample_declaration["items"][0]["quantity"] = 1

        assert event.payload["customs_value"] == 12500.0
        assert event.payload["items"][0]["quantity"] == 25

    def test_create_without_payload(self):
        event = SyncEvent.create("tariff", "delete")
        assert event.payload == {}

    def test_create_rejects_unknown_values(self):
        with pytest.raises(ValueError):
            SyncEvent.create("invoice", "create", {})
        with pytest.raises(ValueError):
            SyncEvent.create("payment", "archive", {})

    def test_ids_are_unique(self):
        ids = {SyncEvent.create("payment", "create").id for _ in range(500)}
        assert len(ids) == 500

    def test_success_path(self):
        event = SyncEvent.create("shipment", "create")

        event.mark_syncing()
        assert event.status == SyncStatus.SYNCING
        assert event.last_attempt_at is not None

        event.mark_synced(duration_ms=12.5)
        assert event.status == SyncStatus.SYNCED
        assert event.synced_at is not None
        assert event.duration_ms == 12.5

    def test_failure_then_requeue(self):
        event = SyncEvent.create("payment", "update")
        event.mark_syncing()

        assert event.record_failure("gateway down") == 1
        event.mark_requeued()

        assert event.status == SyncStatus.PENDING
        assert event.retry_count == 1
        assert event.last_error == "gateway down"

    def test_failure_then_dead_letter(self):
        event = SyncEvent.create("payment", "update")
        event.mark_syncing()
        event.record_failure("rejected")
        event.mark_failed()

        assert event.status == SyncStatus.FAILED
        assert event.failed_at is not None
        assert event.last_error == "rejected"

    def test_cannot_skip_syncing(self):
        event = SyncEvent.create("declaration", "create")

        with pytest.raises(InvalidStatusTransitionError):
            event.mark_synced()
        with pytest.raises(InvalidStatusTransitionError):
            event.mark_failed()
        with pytest.raises(InvalidStatusTransitionError):
            event.record_failure("not in flight")

    def test_terminal_states_are_final(self):
        event = SyncEvent.create("declaration", "create")
        event.mark_syncing()
        event.mark_synced()

        with pytest.raises(InvalidStatusTransitionError):
            event.mark_syncing()

    def test_reset_for_retry(self):
        event = SyncEvent.create("declaration", "create")
        for _ in range(3):
            event.mark_syncing()
            event.record_failure("timeout")
            if event.retry_count < 3:
                event.mark_requeued()
        event.mark_failed()

        event.reset_for_retry()

        assert event.status == SyncStatus.PENDING
        assert event.retry_count == 0
        assert event.last_error is None
        assert event.failed_at is None

    def test_reset_for_retry_rejected_while_syncing(self):
        event = SyncEvent.create("declaration", "create")
        event.mark_syncing()

        with pytest.raises(InvalidStatusTransitionError):
            event.reset_for_retry()

    def test_snapshot_is_detached(self, sample_declaration):
        event = SyncEvent.create("declaration", "create", sample_declaration)
        snapshot = event.snapshot()

        snapshot.payload["importer"] = "Someone else"
        snapshot.retry_count = 99

        assert event.payload["importer"] == "Amman Trading Co."
        assert event.retry_count == 0
