"""
Main application entry point.
"""

from fastapi import FastAPI

from customs_sync.api.app import create_app
from customs_sync.application.services.data_sync_service import (
    DataSyncService,
    SyncEngineConfig,
)
from customs_sync.config.logging import configure_logging, get_logger
from customs_sync.config.settings import Settings, settings
from customs_sync.infrastructure.monitoring.metrics import SyncMetrics
from customs_sync.infrastructure.transports.factory import TransportFactory

logger = get_logger(__name__)


def build_sync_service(app_settings: Settings) -> DataSyncService:
    """Wire the sync engine and its collaborators from settings."""
    transport = TransportFactory.create(app_settings)
    return DataSyncService(
        transport=transport,
        config=SyncEngineConfig.from_settings(app_settings),
    )


def create_main_app(app_settings: Settings = settings) -> FastAPI:
    """Create the main FastAPI application."""
    configure_logging(app_settings)

    service = build_sync_service(app_settings)

    metrics = None
    if app_settings.ENABLE_METRICS:
        metrics = SyncMetrics()
        metrics.attach(service.notifier, service.store)

    return create_app(service, settings=app_settings, metrics=metrics)


def run() -> None:
    import uvicorn

    logger.info("Starting Customs Sync Engine server")

    uvicorn.run(
        "customs_sync.main:create_main_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
