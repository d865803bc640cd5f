"""Shared FastAPI dependencies."""

from dataclasses import dataclass

from fastapi import HTTPException, Request

from tablebook.services.email import EmailService
from tablebook.services.jwt import get_jwt_service


@dataclass
class CurrentUser:
    """Authenticated user context taken from the session token."""

    email: str
    name: str


def get_current_user(request: Request) -> CurrentUser:
    """Extract and validate the user from the Bearer token. Raises 401 if missing or invalid."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(status_code=401, detail="Authorization header required")

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Token not found")

    jwt_service = get_jwt_service()
    payload = jwt_service.decode_token(token)
    if not payload or "email" not in payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return CurrentUser(email=payload["email"], name=payload.get("name", ""))


def get_email_service(request: Request) -> EmailService:
    """Return the email service built at startup."""
    return request.app.state.email_service
