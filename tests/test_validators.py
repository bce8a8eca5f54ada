"""Field validator tests."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from app.schemas.warehouse import ContactPerson, SupportContact
from app.schemas.validators import (
    normalize_phone, validate_phone, validate_pincode, validate_gstin, blank_to_none
)


@pytest.mark.parametrize("raw, expected", [
    ("9876543210", "9876543210"),
    ("+91 98765 43210", "9876543210"),
    ("919876543210", "9876543210"),
    ("0091-98765-43210", "9876543210"),
    ("(987) 654-3210", "9876543210"),
])
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_validate_phone_rejects_landline_prefix():
    with pytest.raises(ValueError, match="valid 10-digit"):
        validate_phone("5876543210")


def test_validate_phone_blank():
    with pytest.raises(ValueError, match="required"):
        validate_phone("   ")
    assert validate_phone("", required=False) is None
    assert validate_phone(None, required=False) is None


def test_validate_pincode():
    assert validate_pincode(" 560001 ") == "560001"
    for bad in ("56000", "5600011", "56000A", None):
        with pytest.raises(ValueError):
            validate_pincode(bad)


def test_validate_gstin():
    assert validate_gstin("29abcde1234f1z5") == "29ABCDE1234F1Z5"
    assert validate_gstin("") is None
    with pytest.raises(ValueError, match="GST"):
        validate_gstin("29ABCDE1234F1Y5")


def test_blank_to_none():
    assert blank_to_none(" \t") is None
    assert blank_to_none("x") == "x"
    assert blank_to_none(0) == 0


@pytest.mark.parametrize("value", [[98765, 43210], {"number": "9876543210"}, True, 98765.4321])
def test_validate_phone_rejects_non_text(value):
    with pytest.raises(ValueError, match="valid 10-digit"):
        validate_phone(value)


def test_validate_phone_accepts_integer():
    assert validate_phone(9876543210) == "9876543210"


def test_contact_phone_rejects_list():
    with pytest.raises(PydanticValidationError) as exc_info:
        ContactPerson(name="Priya", phone=["98765", "43210"])

    assert exc_info.value.errors()[0]["loc"] == ("phone",)


def test_support_contact_strips_whitespace():
    contact = SupportContact(email="  help@example.com ", phone=" 98765 43210 ")

    assert SupportContact.model_config.get("str_strip_whitespace") is True
    assert contact.email == "help@example.com"
    assert contact.phone == "9876543210"
