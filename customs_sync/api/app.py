"""
FastAPI application factory.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from customs_sync.api.middleware.error_handler import add_error_handlers
from customs_sync.api.middleware.logging import add_logging_middleware
from customs_sync.api.routes import health, sync
from customs_sync.application.services.data_sync_service import DataSyncService
from customs_sync.config.logging import get_logger
from customs_sync.config.settings import Settings, settings as default_settings
from customs_sync.infrastructure.monitoring.metrics import SyncMetrics

logger = get_logger(__name__)


def create_app(
    service: DataSyncService,
    settings: Optional[Settings] = None,
    metrics: Optional[SyncMetrics] = None,
) -> FastAPI:
    """Create the admin API around an already constructed sync engine."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup", environment=settings.ENVIRONMENT)

        if settings.SYNC_AUTOSTART:
            service.start()

        try:
            yield
        finally:
            logger.info("Application shutdown")
            await service.close()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Outbox engine syncing customs declarations, payments, "
        "shipments and tariffs with the government customs system",
        openapi_url=f"{settings.API_PREFIX}/openapi.json" if settings.DEBUG else None,
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    app.state.sync_service = service
    app.state.metrics = metrics

    add_error_handlers(app)
    add_logging_middleware(app)

    app.include_router(health.router, prefix=settings.API_PREFIX)
    app.include_router(sync.router, prefix=settings.API_PREFIX)

    return app
