"""Pydantic schemas."""
from app.schemas.warehouse import (
    Address, ContactPerson, SupportContact,
    WarehouseCreate, WarehouseUpdate, WarehouseStatusUpdate,
    WarehouseResponse, WarehouseListResponse, WarehouseDropdownItem,
    SetDefaultResponse, WarehouseDeleteResponse, WarehouseStatistics,
    FieldError, ErrorResponse,
)

__all__ = [
    "Address", "ContactPerson", "SupportContact",
    "WarehouseCreate", "WarehouseUpdate", "WarehouseStatusUpdate",
    "WarehouseResponse", "WarehouseListResponse", "WarehouseDropdownItem",
    "SetDefaultResponse", "WarehouseDeleteResponse", "WarehouseStatistics",
    "FieldError", "ErrorResponse",
]
