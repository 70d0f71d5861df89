"""
Input validation utilities shared by the backend routes and the client.
"""

from __future__ import annotations

import re

# Minimal "something@something.tld" check, same rule on both sides of the wire
EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


class ValidationError(ValueError):
    """Raised when input validation fails."""

    pass


def is_valid_email(address: str | None) -> bool:
    """
    Check that an address has an @ and a dotted domain.

    Examples:
        >>> is_valid_email("user@example.com")
        True

        >>> is_valid_email("not-an-email")
        False

        >>> is_valid_email("user@localhost")
        False

        >>> is_valid_email("user@example.com\\n")
        False
    """
    if not address:
        return False
    return EMAIL_PATTERN.fullmatch(address) is not None


def validate_recipient_email(address: str | None) -> str:
    """
    Validate a summary recipient address.

    Returns:
        The stripped address

    Raises:
        ValidationError: If the address is missing or malformed
    """
    if address is None or not address.strip():
        raise ValidationError("Please enter a recipient email address.")

    address = address.strip()
    if not is_valid_email(address):
        raise ValidationError("Please enter a valid email address format.")

    return address
