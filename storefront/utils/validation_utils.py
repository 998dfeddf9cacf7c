"""
storefront/utils/validation_utils.py

Purpose: Input validation

- Mobile number normalization (Indian numbers to 10 digits)
- Password length limits imposed by bcrypt
- Input sanitization for display names
"""

import re
from typing import Optional

# bcrypt only looks at the first 72 bytes of a secret
MAX_PASSWORD_BYTES = 72


def normalize_mobile_number(mobile: str) -> Optional[str]:
    """
    Normalizes a mobile number to the form it is stored under.

    Indian numbers (optional +91 / 91 / 0 prefix) collapse to their
    10-digit form. Any other number of 7 to 15 digits is kept as given,
    minus separators, with its leading + if it had one.

    Args:
        mobile: Raw mobile number from the client

    Returns:
        Normalized number, or None if the input is not a phone number
    """
    if not mobile:
        return None

    compact = re.sub(r"[\s\-\(\)\.]", "", mobile)
    has_plus = compact.startswith("+")
    digits = compact[1:] if has_plus else compact

    if not re.fullmatch(r"[0-9]+", digits):
        return None

    indian = digits
    if len(indian) == 12 and indian.startswith("91"):
        indian = indian[2:]
    elif len(indian) == 11 and indian.startswith("0") and not has_plus:
        indian = indian[1:]

    if re.match(r"^[6-9]\d{9}$", indian):
        return indian

    if 7 <= len(digits) <= 15:
        return f"+{digits}" if has_plus else digits
    return None


def validate_password(password: str) -> bool:
    """
    Checks that a password is non-blank and fits bcrypt's input limit.
    """
    if not password or not password.strip():
        return False
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def sanitize_input(text: str, max_length: int = 100) -> str:
    """
    Sanitizes free-text input such as display names.

    Args:
        text: Input text
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = text[:max_length]

    # Remove markup-ish characters
    text = re.sub(r"[<>{}\[\]]", "", text)

    # Normalize whitespace
    text = " ".join(text.split())

    return text.strip()
