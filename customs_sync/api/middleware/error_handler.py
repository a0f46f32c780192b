"""
Error handling for the admin API.
"""

import traceback
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from customs_sync.api.schemas.common import ErrorResponse
from customs_sync.config.logging import get_logger
from customs_sync.domain.exceptions.sync_error import SyncError, SyncEventNotFoundError

logger = get_logger(__name__)


def _error_response(
    status_code: int,
    message: str,
    error_type: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, error_type=error_type, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def add_error_handlers(app: FastAPI) -> None:
    """Add custom error handlers to FastAPI app."""

    @app.exception_handler(SyncEventNotFoundError)
    async def not_found_error_handler(request: Request, exc: SyncEventNotFoundError):
        logger.info("Sync event not found", event_id=exc.event_id, path=request.url.path)
        return _error_response(
            404, str(exc), "not_found", details={"event_id": exc.event_id}
        )

    @app.exception_handler(SyncError)
    async def sync_error_handler(request: Request, exc: SyncError):
        logger.error("Sync error", error=str(exc), path=request.url.path)
        return _error_response(409, str(exc), "sync_error")

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        logger.warning("Validation error", error=str(exc), path=request.url.path)
        return _error_response(422, str(exc), "validation_error")

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return _error_response(exc.status_code, str(exc.detail), "http_error")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            error=str(exc),
            path=request.url.path,
            traceback=traceback.format_exc(),
        )
        return _error_response(500, "An unexpected error occurred", "internal_error")
