"""Random one-time tokens for account verification and password reset."""

import secrets
from datetime import datetime, timedelta

TOKEN_BYTES = 32


def generate_token() -> str:
    """Return a 64 character hex token."""
    return secrets.token_hex(TOKEN_BYTES)


def expiry_after(delta: timedelta) -> datetime:
    return datetime.utcnow() + delta
