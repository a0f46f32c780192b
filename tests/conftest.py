"""
Pytest configuration and fixtures.
"""

from collections import defaultdict
from typing import Any, Dict, List

import pytest

from customs_sync.application.services.data_sync_service import (
    DataSyncService,
    SyncEngineConfig,
)
from customs_sync.application.services.event_store import EventStore
from customs_sync.application.services.notifier import SyncNotification, SyncNotifier
from customs_sync.application.services.retry_policy import RetryPolicy
from customs_sync.application.services.sync_history import SyncHistory
from customs_sync.background.workers.sync_worker import SyncWorker
from customs_sync.config.settings import Settings
from customs_sync.infrastructure.transports.mock.transport import MockTransport


@pytest.fixture(scope="session")
def test_settings():
    """Test settings configuration."""
    return Settings(
        ENVIRONMENT="test",
        LOG_LEVEL="DEBUG",
        DEBUG=True,
        MOCK_TRANSPORT=True,
        SYNC_AUTOSTART=False,
        SYNC_TICK_INTERVAL_MS=10,
    )


@pytest.fixture
def engine_config():
    """Engine configuration used by the concrete scenarios: 3 retries, batches of 10."""
    return SyncEngineConfig(
        tick_interval_ms=10,
        max_retries=3,
        batch_size=10,
        transport_timeout_seconds=1.0,
        history_size=100,
    )


@pytest.fixture
def mock_transport():
    """Transport double that succeeds unless told otherwise."""
    return MockTransport()


@pytest.fixture
def sync_service(mock_transport, engine_config):
    """Sync engine wired to the mock transport."""
    return DataSyncService(transport=mock_transport, config=engine_config)


@pytest.fixture
def event_store():
    return EventStore()


@pytest.fixture
def notifier():
    return SyncNotifier()


@pytest.fixture
def sync_worker(event_store, mock_transport, notifier):
    """Worker wired to a bare store, for drain cycle tests."""
    return SyncWorker(
        store=event_store,
        transport=mock_transport,
        retry_policy=RetryPolicy(max_retries=3),
        notifier=notifier,
        history=SyncHistory(max_size=100),
        batch_size=10,
        tick_interval_seconds=0.01,
        transport_timeout_seconds=1.0,
    )


class NotificationRecorder:
    """Collects every payload emitted on every channel."""

    def __init__(self, notifier: SyncNotifier):
        self.received: Dict[SyncNotification, List[Any]] = defaultdict(list)
        for channel in SyncNotification:
            notifier.subscribe(channel, self._recorder(channel))

    def _recorder(self, channel: SyncNotification):
        def record(payload: Any) -> None:
            self.received[channel].append(payload)

        return record

    def __getitem__(self, channel: SyncNotification) -> List[Any]:
        return self.received[channel]


@pytest.fixture
def notifications(notifier):
    """Records notifications emitted by the bare notifier fixture."""
    return NotificationRecorder(notifier)


@pytest.fixture
def service_notifications(sync_service):
    """Records notifications emitted by the sync_service fixture."""
    return NotificationRecorder(sync_service.notifier)


@pytest.fixture
def sample_declaration():
    """Sample customs declaration payload."""
    return {
        "id": "DEC-2024-000123",
        "declaration_number": "JO-IMP-000123",
        "importer": "Amman Trading Co.",
        "hs_code": "8471.30",
        "customs_value": 12500.0,
        "currency": "JOD",
        "items": [{"description": "Laptops", "quantity": 25}],
    }
