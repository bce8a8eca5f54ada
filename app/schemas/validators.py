"""
Field validators
================

Format rules shared by the warehouse value types.
"""
import re
from typing import Any, Optional

PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")
PINCODE_PATTERN = re.compile(r"^\d{6}$")
GSTIN_PATTERN = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$")


def blank_to_none(value: Any) -> Any:
    """Treat empty / whitespace-only strings as an absent value."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_phone(value: str) -> str:
    """Strip formatting and the +91 country prefix from a phone number.

    >>> normalize_phone("+91 98765-43210")
    '9876543210'
    """
    digits = re.sub(r"\D", "", str(value))
    if len(digits) == 12 and digits.startswith("91"):
        return digits[2:]
    if len(digits) > 10:
        return digits[-10:]
    return digits


def validate_phone(value: Any, required: bool = True) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValueError("Phone number is required")
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError("Please enter a valid 10-digit mobile number")
    phone = normalize_phone(value)
    if not PHONE_PATTERN.match(phone):
        raise ValueError("Please enter a valid 10-digit mobile number")
    return phone


def validate_pincode(value: Any) -> str:
    pincode = str(value).strip() if value is not None else ""
    if not PINCODE_PATTERN.match(pincode):
        raise ValueError("Please enter a valid 6-digit pincode")
    return pincode


def validate_gstin(value: Any) -> Optional[str]:
    value = blank_to_none(value)
    if value is None:
        return None
    gstin = str(value).strip().upper()
    if not GSTIN_PATTERN.match(gstin):
        raise ValueError("Please enter a valid GST number")
    return gstin
