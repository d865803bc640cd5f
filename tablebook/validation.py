"""Input validation run before any database access.

Each function checks one field group and returns a ValidationResult; the
first failing rule wins, so messages stay specific.
"""

import re
from dataclasses import dataclass

from tablebook.errors import ErrorKind

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 5
PASSWORD_MAX_LENGTH = 128
MIN_RATING = 1
MAX_RATING = 5

MISSING_FIELDS = "Missing required fields"


@dataclass
class ValidationResult:
    """Outcome of a validation check."""

    valid: bool
    error: str | None = None
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error, kind=ErrorKind.VALIDATION)


def validate_email(email: str) -> ValidationResult:
    if not EMAIL_PATTERN.match(email.strip()):
        return ValidationResult.fail("Invalid email address")
    return ValidationResult.ok()


def validate_password(password: str) -> ValidationResult:
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return ValidationResult.fail(
            f"Password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters"
        )
    return ValidationResult.ok()


def validate_registration(name: str, email: str, password: str) -> ValidationResult:
    """Validate the registration form."""
    if not name or not email or not password:
        return ValidationResult.fail(MISSING_FIELDS)

    if not NAME_MIN_LENGTH <= len(name.strip()) <= NAME_MAX_LENGTH:
        return ValidationResult.fail(f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters")

    result = validate_email(email)
    if not result.valid:
        return result
    return validate_password(password)


def validate_credentials(email: str, password: str) -> ValidationResult:
    """Validate a login attempt."""
    if not email or not password:
        return ValidationResult.fail(MISSING_FIELDS)

    result = validate_email(email)
    if not result.valid:
        return result
    return validate_password(password)


def validate_password_reset(token: str, new_password: str) -> ValidationResult:
    if not token or not new_password:
        return ValidationResult.fail("Token and new password are required")
    return validate_password(new_password)


def validate_reservation(date: str, guests: int) -> ValidationResult:
    """Validate a booking request.

    A guest count of 0 counts as missing; the date is an opaque key and only
    has to be present.
    """
    if not date or not date.strip() or not guests:
        return ValidationResult.fail(MISSING_FIELDS)
    if guests < 0:
        return ValidationResult.fail("Guests must be a positive number")
    return ValidationResult.ok()


def validate_time_slot(time_slot: int, allowed_slots: list[int]) -> ValidationResult:
    """Check a slot against a restaurant's declared slots. An empty list allows any slot."""
    if allowed_slots and time_slot not in allowed_slots:
        allowed = ", ".join(str(slot) for slot in sorted(allowed_slots))
        return ValidationResult.fail(f"Invalid time slot {time_slot}. Available slots: {allowed}")
    return ValidationResult.ok()


def validate_review(rating: int, text: str) -> ValidationResult:
    if not text or not text.strip():
        return ValidationResult.fail(MISSING_FIELDS)
    if not MIN_RATING <= rating <= MAX_RATING:
        return ValidationResult.fail(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return ValidationResult.ok()
