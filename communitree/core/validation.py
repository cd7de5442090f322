"""Input validation helpers used before anything is dispatched or sent."""

from __future__ import annotations

import re

from .errors import FieldValidationError

DARPAN_ID_LENGTH = 5
MAX_MESSAGE_LENGTH = 500

_DARPAN_RE = re.compile(r"^\d{5}$")
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_darpan_id(darpan_id: str) -> bool:
    return bool(_DARPAN_RE.match(darpan_id.strip()))


def validate_darpan_id(darpan_id: str) -> str:
    """Return the trimmed Darpan ID or raise :class:`FieldValidationError`."""
    trimmed = darpan_id.strip()
    if not trimmed:
        raise FieldValidationError("Darpan ID is required", "darpan_id", "required")
    if not trimmed.isdigit() or not trimmed.isascii():
        raise FieldValidationError("Darpan ID must contain only numbers", "darpan_id", "numeric")
    if len(trimmed) != DARPAN_ID_LENGTH:
        raise FieldValidationError(
            f"Darpan ID must be exactly {DARPAN_ID_LENGTH} digits (current: {len(trimmed)})",
            "darpan_id",
            "length",
        )
    return trimmed


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email.strip()))


def is_valid_name(name: str) -> bool:
    return 2 <= len(name.strip()) <= 50


def validate_message_content(content: str) -> str:
    text = content.strip()
    if not text:
        raise FieldValidationError("Message cannot be empty", "content", "required")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise FieldValidationError(
            f"Message must be at most {MAX_MESSAGE_LENGTH} characters",
            "content",
            "max_length",
        )
    return text


def validate_profile(name: str, email: str) -> tuple[str, str]:
    """Validate profile edits; returns the trimmed ``(name, email)``."""
    if not name.strip():
        raise FieldValidationError("Name is required", "name", "required")
    if not is_valid_name(name):
        raise FieldValidationError("Name must be between 2 and 50 characters", "name", "length")
    if not email.strip():
        raise FieldValidationError("Email is required", "email", "required")
    if not is_valid_email(email):
        raise FieldValidationError("Invalid email format", "email", "format")
    return name.strip(), email.strip()
