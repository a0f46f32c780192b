"""
Transports package.
"""

from .factory import TransportFactory
from .http_transport import HTTPTransport
from .mock.transport import MockTransport

__all__ = [
    "HTTPTransport",
    "MockTransport",
    "TransportFactory",
]
