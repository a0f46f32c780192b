"""
Application interfaces package.
"""

from .transport import DeliveryResult, TransportInterface

__all__ = [
    "DeliveryResult",
    "TransportInterface",
]
