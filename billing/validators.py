import re
from typing import Tuple

from .bill_numbers import VALID_BILL_NUMBER_REGEX

VALID_PHONE_REGEX = re.compile(r'^\+?\d{7,15}$')
MAX_NAME_LENGTH = 100


def validate_customer_name(name: str) -> Tuple[bool, str]:
    """Validate customer name"""
    if not name or name.strip() == "":
        return False, "Customer name is required"
    if len(name.strip()) > MAX_NAME_LENGTH:
        return False, f"Customer name is too long (max {MAX_NAME_LENGTH} characters)"
    return True, ""


def validate_phone(phone: str) -> Tuple[bool, str]:
    """Validate contact number; spaces and hyphens are ignored"""
    if not phone or phone.strip() == "":
        return False, "Contact number is required"
    digits = re.sub(r'[\s-]', '', phone.strip())
    if not VALID_PHONE_REGEX.match(digits):
        return False, "Invalid contact number. Use 7-15 digits, optionally starting with +"
    return True, ""


def validate_bill_number(bill_number: str) -> Tuple[bool, str]:
    """Validate bill number"""
    if not bill_number or bill_number.strip() == "":
        return False, "Bill number is required"
    if not VALID_BILL_NUMBER_REGEX.match(bill_number.strip()):
        return False, "Invalid bill number. Use the format INV-1234"
    return True, ""
