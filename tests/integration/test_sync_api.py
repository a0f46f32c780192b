"""Integration tests for the sync admin API."""

import pytest
from fastapi.testclient import TestClient

from customs_sync.api.app import create_app
from customs_sync.application.services.data_sync_service import DataSyncService
from customs_sync.infrastructure.monitoring.metrics import SyncMetrics

PREFIX = "/api/v1/sync"


@pytest.mark.integration
class TestSyncAPI:
    """Integration tests for the sync admin routes."""

    @pytest.fixture
    def metrics(self, sync_service):
        sync_metrics = SyncMetrics()
        sync_metrics.attach(sync_service.notifier, sync_service.store)
        return sync_metrics

    @pytest.fixture
    def client(self, sync_service, test_settings, metrics):
        app = create_app(sync_service, settings=test_settings, metrics=metrics)
        with TestClient(app) as test_client:
            yield test_client

    def _enqueue(self, client, kind="declaration", action="create", payload=None):
        response = client.post(
            f"{PREFIX}/events",
            json={"kind": kind, "action": action, "payload": payload or {}},
        )
        assert response.status_code == 201
        return response.json()["id"]

    def test_enqueue_and_list(self, client, sample_declaration):
        event_id = self._enqueue(client, payload=sample_declaration)

        response = client.get(f"{PREFIX}/events")

        assert response.status_code == 200
        events = response.json()
        assert [e["id"] for e in events] == [event_id]
        assert events[0]["status"] == "pending"
        assert events[0]["payload"]["hs_code"] == "8471.30"
        assert "X-Request-ID" in response.headers

    def test_enqueue_rejects_unknown_kind(self, client):
        response = client.post(
            f"{PREFIX}/events", json={"kind": "invoice", "action": "create"}
        )

        assert response.status_code == 422

    def test_drain_and_history(self, client):
        event_id = self._enqueue(client, kind="payment", payload={"amount": 120})

        drained = client.post(f"{PREFIX}/drain").json()
        assert drained["drained"] is True
        assert drained["synced"] == 1

        assert client.get(f"{PREFIX}/stats").json()["total"] == 0

        history = client.get(f"{PREFIX}/history").json()
        assert history[0]["id"] == event_id
        assert history[0]["status"] == "synced"

        event = client.get(f"{PREFIX}/events/{event_id}").json()
        assert event["status"] == "synced"

        delivery = client.get(f"{PREFIX}/stats/delivery").json()
        assert delivery["total_synced"] == 1
        assert delivery["success_rate"] == 100.0

    def test_drain_empty_queue(self, client):
        response = client.post(f"{PREFIX}/drain")

        assert response.status_code == 200
        assert response.json()["drained"] is False

    def test_failed_event_retry(self, client, mock_transport):
        event_id = self._enqueue(client, kind="tariff", action="update")
        mock_transport.fail_event(event_id, times=3)

        for _ in range(3):
            client.post(f"{PREFIX}/drain")

        failed = client.get(f"{PREFIX}/history", params={"status": "failed"}).json()
        assert [e["id"] for e in failed] == [event_id]
        assert failed[0]["retry_count"] == 3

        response = client.post(f"{PREFIX}/events/{event_id}/retry")
        assert response.status_code == 200
        assert response.json()["success"] is True

        pending = client.get(f"{PREFIX}/events", params={"status": "pending"}).json()
        assert pending[0]["id"] == event_id
        assert pending[0]["retry_count"] == 0

        assert client.post(f"{PREFIX}/drain").json()["synced"] == 1

    def test_stats(self, client):
        for _ in range(3):
            self._enqueue(client)

        stats = client.get(f"{PREFIX}/stats").json()

        assert stats["total"] == 3
        assert stats["pending"] == 3
        assert stats["syncing"] == 0
        assert stats["is_draining"] is False
        assert stats["is_running"] is False

    def test_unknown_event(self, client):
        assert client.get(f"{PREFIX}/events/sync-missing").status_code == 404
        assert client.post(f"{PREFIX}/events/sync-missing/retry").status_code == 404

        response = client.delete(f"{PREFIX}/events/sync-missing")
        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error_type"] == "not_found"
        assert body["details"] == {"event_id": "sync-missing"}

    def test_remove_and_clear(self, client):
        removed = self._enqueue(client)
        self._enqueue(client)
        self._enqueue(client)

        assert client.delete(f"{PREFIX}/events/{removed}").status_code == 200

        response = client.delete(f"{PREFIX}/events", params={"status": "pending"})
        assert response.json()["cleared"] == 2
        assert client.get(f"{PREFIX}/stats").json()["total"] == 0

    def test_invalid_status_filter(self, client):
        response = client.get(f"{PREFIX}/events", params={"status": "archived"})

        assert response.status_code == 422

    def test_start_and_stop(self, client):
        started = client.post(f"{PREFIX}/start").json()
        assert started["message"] == "Periodic sync started"
        assert client.get("/api/v1/health").json()["scheduler_running"] is True

        again = client.post(f"{PREFIX}/start").json()
        assert again["message"] == "Periodic sync already running"

        stopped = client.post(f"{PREFIX}/stop").json()
        assert stopped["message"] == "Periodic sync stopped"

        health = client.get("/api/v1/health").json()
        assert health["status"] == "stopped"
        assert health["scheduler_running"] is False

    def test_metrics(self, client):
        self._enqueue(client, kind="shipment")
        client.post(f"{PREFIX}/drain")

        response = client.get("/api/v1/health/metrics")

        assert response.status_code == 200
        body = response.text
        assert 'customs_sync_events_enqueued_total{kind="shipment"} 1.0' in body
        assert 'customs_sync_events_synced_total{kind="shipment"} 1.0' in body
        assert "customs_sync_queue_depth 0.0" in body

    def test_retry_metrics(self, client, mock_transport):
        event_id = self._enqueue(client, kind="payment")
        mock_transport.fail_event(event_id, times=1)

        drained = client.post(f"{PREFIX}/drain").json()
        assert drained["requeued"] == 1
        assert drained["dropped"] == 0

        body = client.get("/api/v1/health/metrics").text
        assert "customs_sync_retries_total 1.0" in body
        assert client.get(f"{PREFIX}/stats/delivery").json()["total_retried"] == 1


@pytest.mark.integration
class TestAppLifespan:
    """Test scheduler wiring in the application lifespan."""

    def test_autostart(self, mock_transport, engine_config, test_settings):
        service = DataSyncService(transport=mock_transport, config=engine_config)
        settings = test_settings.model_copy(update={"SYNC_AUTOSTART": True})

        with TestClient(create_app(service, settings=settings)) as client:
            assert client.get("/api/v1/health").json()["status"] == "healthy"

        assert service.is_running is False

    def test_metrics_disabled(self, sync_service, test_settings):
        with TestClient(create_app(sync_service, settings=test_settings)) as client:
            response = client.get("/api/v1/health/metrics")

        assert response.status_code == 404
        assert response.json()["error_type"] == "http_error"
        assert response.json()["message"] == "Metrics are disabled"
