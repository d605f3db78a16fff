# app/utils/validators.py

import re
from typing import List

from app.core.errors import ValidationError

IFSC_REGEX = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")

ACCOUNT_NUMBER_MIN_LENGTH = 9
ACCOUNT_NUMBER_MAX_LENGTH = 18


def validate_registration(account_number: str, ifsc: str) -> List[str]:
    """Return every rule the registration input violates, empty if it is valid."""
    errors = []
    if not ACCOUNT_NUMBER_MIN_LENGTH <= len(account_number) <= ACCOUNT_NUMBER_MAX_LENGTH:
        errors.append("Account number must be between 9 and 18 digits.")
    if not IFSC_REGEX.fullmatch(ifsc):
        errors.append("Invalid IFSC code format.")
    return errors


def ensure_valid_registration(account_number: str, ifsc: str) -> None:
    errors = validate_registration(account_number, ifsc)
    if errors:
        raise ValidationError(", ".join(errors))
