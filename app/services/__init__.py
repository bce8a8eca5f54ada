"""Business logic services."""
from app.services.exceptions import (
    DirectoryError, ValidationError, NotFoundError, ConflictError
)
from app.services.warehouse_service import WarehouseService

__all__ = [
    "DirectoryError", "ValidationError", "NotFoundError", "ConflictError",
    "WarehouseService",
]
