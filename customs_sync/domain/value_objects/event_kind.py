"""
Event kind and action value objects.
"""

from enum import Enum


class EventKind(str, Enum):
    """Domain source of a sync event."""

    DECLARATION = "declaration"
    PAYMENT = "payment"
    SHIPMENT = "shipment"
    TARIFF = "tariff"

    @property
    def resource_path(self) -> str:
        """Collection path on the customs system for this kind."""
        return f"{self.value}s"


class EventAction(str, Enum):
    """Change applied to the domain record."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
