# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Input sanitising and validation shared by every router.

Routers call these *after* pydantic has parsed the body.  Request models
declare their fields optional so that a missing field and an empty string
produce the same ``Missing required fields`` error instead of a schema
error per field.
"""

import re
from typing import Any, Iterable, Optional

from fastapi import HTTPException, status

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# E.164: optional +, no leading zero, up to 15 digits
_PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")
_PHONE_NOISE_RE = re.compile(r"[\s\-()]")

MISSING_FIELDS = "Missing required fields"
INVALID_EMAIL = "Invalid email format"


def sanitize_input(value: str) -> str:
    """Strip ``<script>`` blocks and surrounding whitespace."""
    return _SCRIPT_RE.sub("", value.strip()).strip()


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Sanitize *value*, mapping empty / missing input to ``None``."""
    if not value:
        return None
    return sanitize_input(value) or None


def validate_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def validate_phone(phone: str) -> bool:
    return bool(_PHONE_RE.match(_PHONE_NOISE_RE.sub("", phone)))


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def require_fields(*values: Any) -> None:
    """Raise 400 if any value is missing or blank (``0`` counts as missing too)."""
    for value in values:
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "" or value == [] or value == 0:
            raise bad_request(MISSING_FIELDS)


def require_email(email: str) -> str:
    """Sanitize and validate an email address, returning the clean value."""
    cleaned = sanitize_input(email)
    if not validate_email(cleaned):
        raise bad_request(INVALID_EMAIL)
    return cleaned


def require_min_length(value: str, minimum: int, message: str) -> str:
    """Sanitize *value* and raise 400 with *message* if it is too short."""
    cleaned = sanitize_input(value)
    if len(cleaned) < minimum:
        raise bad_request(message)
    return cleaned


def require_choice(value: str, choices: Iterable[str], label: str = "status") -> str:
    """Raise 400 unless *value* is one of *choices*."""
    choices = tuple(choices)
    if value not in choices:
        raise bad_request(f"Invalid {label}. Must be one of: {', '.join(choices)}")
    return value


def clean_list(values: Optional[Iterable[str]]) -> list:
    """Sanitize every string of a list, dropping blanks."""
    if not values:
        return []
    return [item for item in (sanitize_input(v) for v in values) if item]


def validate_new_password(pw: str) -> Optional[str]:
    """
    Return an error string if the password does not meet the minimum policy,
    or None if it is acceptable.

    Policy: >= 8 chars, at least one uppercase, one lowercase, one digit.
    """
    if len(pw) < 8:
        return "Password must be at least 8 characters"
    if not re.search(r"[A-Z]", pw):
        return "Password must contain at least one uppercase letter"
    if not re.search(r"[a-z]", pw):
        return "Password must contain at least one lowercase letter"
    if not re.search(r"[0-9]", pw):
        return "Password must contain at least one digit"
    return None


def updated_text(value: Optional[str], required: bool = False) -> Optional[str]:
    """
    Clean a string taken from a partial update.  Required columns refuse a
    blank value; optional ones are cleared by it.
    """
    if required:
        require_fields(value)
        return sanitize_input(value)
    return clean_optional(value)


def as_text(value: Any) -> Optional[str]:
    """Numbers arrive where strings are stored (years, sizes, salaries)."""
    if value is None:
        return None
    return str(value)
