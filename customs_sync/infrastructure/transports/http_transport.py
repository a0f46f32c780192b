"""
HTTP transport delivering sync events to the government customs API.
"""

import time
from typing import Any, Dict, Optional, Tuple

import httpx
import structlog

from customs_sync.application.interfaces.transport import (
    DeliveryResult,
    TransportInterface,
)
from customs_sync.domain.entities.sync_event import SyncEvent
from customs_sync.domain.value_objects.event_kind import EventAction

logger = structlog.get_logger()

_METHODS = {
    EventAction.CREATE: "POST",
    EventAction.UPDATE: "PUT",
    EventAction.DELETE: "DELETE",
}


class HTTPTransport(TransportInterface):
    """
    Sends each event as a JSON request to the customs system.

    Creates are POSTed to the kind's collection; updates and deletes target
    the record named by ``payload["id"]`` (falling back to the event id).
    The event id travels as ``Idempotency-Key`` so the receiver can discard
    the duplicates that at-least-once delivery produces.
    """

    def __init__(
        self,
        base_url: str,
        api_token: Optional[str] = None,
        timeout: Optional[float] = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def name(self) -> str:
        return "Government Customs API"

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def build_request(self, event: SyncEvent) -> Tuple[str, str, Dict[str, Any]]:
        """Return the method, URL and JSON body for ``event``."""
        collection = f"{self.base_url}/{event.kind.resource_path}"

        if event.action == EventAction.CREATE:
            url = collection
        else:
            entity_id = event.payload.get("id", event.id)
            url = f"{collection}/{entity_id}"

        body = {
            "event_id": event.id,
            "kind": event.kind.value,
            "action": event.action.value,
            "payload": event.payload,
            "created_at": event.created_at.isoformat(),
        }

        return _METHODS[event.action], url, body

    def _headers(self, event: SyncEvent) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Idempotency-Key": event.id,
        }
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def deliver(self, event: SyncEvent) -> DeliveryResult:
        method, url, body = self.build_request(event)
        start_time = time.time()

        try:
            response = await self._get_client().request(
                method, url, json=body, headers=self._headers(event)
            )
        except httpx.TimeoutException:
            response_time = (time.time() - start_time) * 1000
            logger.error(
                "Customs API request timed out",
                event_id=event.id,
                method=method,
                url=url,
                response_time_ms=response_time,
            )
            if self.timeout is None:
                return DeliveryResult.failure("Request timed out")
            return DeliveryResult.failure(
                f"Request timed out after {self.timeout:g}s"
            )
        except httpx.HTTPError as e:
            response_time = (time.time() - start_time) * 1000
            logger.error(
                "Customs API request failed",
                event_id=event.id,
                method=method,
                url=url,
                error=str(e),
                response_time_ms=response_time,
            )
            return DeliveryResult.failure(f"Connection error: {e}")

        response_time = (time.time() - start_time) * 1000

        logger.debug(
            "Customs API request completed",
            event_id=event.id,
            method=method,
            url=url,
            status_code=response.status_code,
            response_time_ms=response_time,
        )

        if response.is_success:
            return DeliveryResult.ok()

        return DeliveryResult.failure(
            f"HTTP {response.status_code}: {response.text[:200]}"
        )

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
