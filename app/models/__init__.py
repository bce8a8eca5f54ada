"""SQLAlchemy models."""
from app.models.account import Account
from app.models.warehouse import Warehouse
from app.models.shipment import Shipment

__all__ = ["Account", "Warehouse", "Shipment"]
