"""
API schemas package.
"""

from .common import BaseResponse, ErrorResponse
from .sync import (
    BatchSummaryResponse,
    ClearResponse,
    DeliveryStatsResponse,
    EnqueueRequest,
    EnqueueResponse,
    QueueStatsResponse,
    SyncEventResponse,
)

__all__ = [
    "BaseResponse",
    "BatchSummaryResponse",
    "ClearResponse",
    "DeliveryStatsResponse",
    "EnqueueRequest",
    "EnqueueResponse",
    "ErrorResponse",
    "QueueStatsResponse",
    "SyncEventResponse",
]
