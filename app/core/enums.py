"""Enum definitions for the application."""
from enum import Enum


class WarehouseStatusFilter(str, Enum):
    """Status filter accepted by the warehouse listing."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ALL = "all"


class ShipmentStatus(str, Enum):
    """Shipment lifecycle states known to this service."""
    CREATED = "CREATED"
    PICKUP_SCHEDULED = "PICKUP_SCHEDULED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    RTO = "RTO"
    CANCELLED = "CANCELLED"
