"""Warehouse schemas."""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.core.config import settings
from app.schemas.validators import (
    blank_to_none, validate_phone, validate_pincode, validate_gstin
)


def _all_blank(value: Any) -> bool:
    """True for a mapping whose every value is empty (an untouched form section)."""
    return isinstance(value, dict) and all(blank_to_none(v) is None for v in value.values())


class Address(BaseModel):
    """Postal address; used for both the pickup and the return address."""
    full_address: str = Field(..., min_length=1, max_length=500)
    landmark: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    pincode: str
    country: str = Field(default_factory=lambda: settings.DEFAULT_COUNTRY, min_length=1)

    class Config:
        str_strip_whitespace = True

    @field_validator("landmark", mode="before")
    @classmethod
    def optional_blank(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("country", mode="before")
    @classmethod
    def default_country(cls, v: Any) -> Any:
        return blank_to_none(v) or settings.DEFAULT_COUNTRY

    @field_validator("pincode", mode="before")
    @classmethod
    def check_pincode(cls, v: Any) -> str:
        return validate_pincode(v)


class ContactPerson(BaseModel):
    """Person the courier calls at pickup."""
    name: str = Field(..., min_length=1, max_length=255)
    phone: str
    alternative_phone: Optional[str] = None
    email: Optional[EmailStr] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("phone", mode="before")
    @classmethod
    def check_phone(cls, v: Any) -> str:
        return validate_phone(v, required=True)

    @field_validator("alternative_phone", mode="before")
    @classmethod
    def check_alternative_phone(cls, v: Any) -> Optional[str]:
        return validate_phone(v, required=False)

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v: Any) -> Any:
        v = blank_to_none(v)
        return v.strip().lower() if isinstance(v, str) else v


class SupportContact(BaseModel):
    """Support details printed on shipping labels."""
    email: Optional[EmailStr] = None
    phone: Optional[str] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v: Any) -> Any:
        v = blank_to_none(v)
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("phone", mode="before")
    @classmethod
    def check_phone(cls, v: Any) -> Optional[str]:
        return validate_phone(v, required=False)


class WarehouseFields(BaseModel):
    """Validators shared by create and update payloads."""

    class Config:
        str_strip_whitespace = True
        extra = "ignore"

    @field_validator("registered_name", "notes", mode="before", check_fields=False)
    @classmethod
    def optional_blank(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("return_address", "support_contact", mode="before", check_fields=False)
    @classmethod
    def empty_section(cls, v: Any) -> Any:
        if _all_blank(v):
            return None
        return v

    @field_validator("gstin", mode="before", check_fields=False)
    @classmethod
    def check_gstin(cls, v: Any) -> Optional[str]:
        return validate_gstin(v)


class WarehouseCreate(WarehouseFields):
    """Warehouse creation payload.

    ``is_active`` is not accepted: new warehouses always start active.
    """
    name: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    registered_name: Optional[str] = Field(None, max_length=255)
    contact_person: ContactPerson
    address: Address
    return_address: Optional[Address] = None
    gstin: Optional[str] = None
    support_contact: Optional[SupportContact] = None
    is_default: bool = False
    notes: Optional[str] = None


class WarehouseUpdate(WarehouseFields):
    """Partial update payload; ``is_default`` / ``is_active`` are not part of it."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    registered_name: Optional[str] = Field(None, max_length=255)
    contact_person: Optional[ContactPerson] = None
    address: Optional[Address] = None
    return_address: Optional[Address] = None
    gstin: Optional[str] = None
    support_contact: Optional[SupportContact] = None
    notes: Optional[str] = None

    @field_validator("name", "title", "contact_person", "address", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Field cannot be empty")
        return v


class WarehouseStatusUpdate(BaseModel):
    """Activate / deactivate request."""
    is_active: bool


class WarehouseResponse(BaseModel):
    """Warehouse response schema."""
    id: str
    account_id: str
    code: str
    name: str
    title: str
    registered_name: Optional[str] = None
    contact_person: ContactPerson
    address: Address
    return_address: Optional[Address] = None
    effective_return_address: Address
    gstin: Optional[str] = None
    support_contact: Optional[SupportContact] = None
    is_default: bool
    is_active: bool
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WarehouseListResponse(BaseModel):
    """List of warehouses response."""
    warehouses: List[WarehouseResponse]
    total: int


class WarehouseDropdownItem(BaseModel):
    """Compact warehouse entry for pickup selectors."""
    id: str
    name: str
    title: str
    city: str
    state: str
    pincode: str
    is_default: bool


class SetDefaultResponse(BaseModel):
    """New default plus the warehouse it replaced."""
    warehouse: WarehouseResponse
    previous_default: Optional[WarehouseResponse] = None


class WarehouseDeleteResponse(BaseModel):
    message: str
    id: str


class WarehouseStatistics(BaseModel):
    """Directory counters for the account overview."""
    total: int
    active: int
    inactive: int
    default_warehouse: Optional[WarehouseResponse] = None


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every domain failure."""
    detail: str
    error_code: Optional[str] = None
    errors: Optional[List[FieldError]] = None
