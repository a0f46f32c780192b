"""
Transport factory for creating the configured transport.
"""

from customs_sync.application.interfaces.transport import TransportInterface
from customs_sync.config.logging import get_logger
from customs_sync.config.settings import Settings
from customs_sync.infrastructure.transports.http_transport import HTTPTransport
from customs_sync.infrastructure.transports.mock.transport import MockTransport

logger = get_logger(__name__)


class TransportFactory:
    """Factory for creating transport instances."""

    @staticmethod
    def create(settings: Settings) -> TransportInterface:
        """Mock transport when ``MOCK_TRANSPORT`` is set, HTTP otherwise."""
        if settings.MOCK_TRANSPORT:
            logger.info("Using mock transport")
            return MockTransport()

        # None when disabled in settings; httpx then waits indefinitely too.
        timeout = settings.SYNC_TRANSPORT_TIMEOUT_SECONDS
        logger.info(
            "Using HTTP transport",
            base_url=settings.GOVERNMENT_API_BASE_URL,
            timeout=timeout,
        )
        return HTTPTransport(
            base_url=settings.GOVERNMENT_API_BASE_URL,
            api_token=settings.GOVERNMENT_API_TOKEN,
            timeout=timeout,
        )
