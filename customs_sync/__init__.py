"""
Customs Sync Engine.

Reliable outbox that forwards customs declaration, payment, shipment and
tariff changes to the government customs system.
"""

__version__ = "0.1.0"
__description__ = "Customs Sync Engine"

from .application.services.data_sync_service import DataSyncService, SyncEngineConfig
from .config import settings

__all__ = [
    "DataSyncService",
    "SyncEngineConfig",
    "settings",
]
