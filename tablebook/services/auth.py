"""Authentication service: registration, verification, login and password reset."""

from dataclasses import dataclass
from datetime import datetime, timedelta

import bcrypt
from sqlalchemy.orm import Session

from tablebook.config import get_settings
from tablebook.errors import ErrorKind
from tablebook.models.user import User
from tablebook.services.tokens import expiry_after, generate_token


@dataclass
class AuthResult:
    """Result of an authentication operation."""

    success: bool
    error: str | None = None
    kind: ErrorKind | None = None
    user_id: int | None = None
    email: str | None = None
    name: str | None = None
    token: str | None = None
    created: bool = False

    @property
    def status_code(self) -> int:
        return self.kind.status_code if self.kind else 200

    @classmethod
    def failure(cls, kind: ErrorKind, error: str) -> "AuthResult":
        return cls(success=False, error=error, kind=kind)

    @classmethod
    def for_user(cls, user: User, token: str | None = None, created: bool = False) -> "AuthResult":
        return cls(success=True, user_id=user.id, email=user.email, name=user.name, token=token, created=created)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def normalize_email(email: str) -> str:
    return email.lower().strip()


class AuthService:
    """Handles the account lifecycle."""

    def __init__(self) -> None:
        settings = get_settings()
        self.verification_ttl = timedelta(hours=settings.VERIFICATION_TOKEN_HOURS)
        self.reset_ttl = timedelta(minutes=settings.RESET_TOKEN_MINUTES)

    def find_by_email(self, db: Session, email: str) -> User | None:
        return db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_verification_token(self, db: Session, token: str) -> User | None:
        """Find the user holding an unexpired verification token."""
        return (
            db.query(User)
            .filter(User.verification_token == token, User.verification_expires_at > datetime.utcnow())
            .first()
        )

    def find_by_reset_token(self, db: Session, token: str) -> User | None:
        """Find the user holding an unexpired password reset token."""
        return (
            db.query(User)
            .filter(User.password_reset_token == token, User.password_reset_expires_at > datetime.utcnow())
            .first()
        )

    def register(self, db: Session, name: str, email: str, password: str) -> AuthResult:
        """Register a new account, or refresh a pending one.

        An unverified account with the same email gets the new name and
        password plus a fresh verification token. A verified one is a conflict.
        The returned token is the verification token to mail out.
        """
        existing = self.find_by_email(db, email)
        if existing and existing.is_verified:
            return AuthResult.failure(ErrorKind.CONFLICT, "Email address already in use")

        token = generate_token()
        expires_at = expiry_after(self.verification_ttl)
        password_hash = hash_password(password)

        if existing:
            existing.name = name.strip()
            existing.password_hash = password_hash
            existing.verification_token = token
            existing.verification_expires_at = expires_at
            db.commit()
            return AuthResult.for_user(existing, token=token)

        user = User(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            is_verified=False,
            verification_token=token,
            verification_expires_at=expires_at,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        return AuthResult.for_user(user, token=token, created=True)

    def verify_account(self, db: Session, token: str) -> AuthResult:
        """Mark the account owning a valid verification token as verified."""
        user = self.find_by_verification_token(db, token)
        if not user:
            return AuthResult.failure(ErrorKind.VALIDATION, "Verification link is invalid or has expired.")

        user.is_verified = True
        user.verification_token = None
        user.verification_expires_at = None
        db.commit()

        return AuthResult.for_user(user)

    def authenticate(self, db: Session, email: str, password: str) -> AuthResult:
        """Authenticate a user by email and password.

        Unverified accounts are refused before the password is checked.
        """
        user = self.find_by_email(db, email)
        if not user:
            return AuthResult.failure(ErrorKind.UNAUTHORIZED, "Email not registered. Sign up for a new account.")

        if not user.is_verified:
            return AuthResult.failure(
                ErrorKind.FORBIDDEN, "Account not verified. Please check your email to verify your account."
            )

        if not check_password(password, user.password_hash):
            return AuthResult.failure(ErrorKind.UNAUTHORIZED, "Incorrect password")

        user.last_login_at = datetime.utcnow()
        db.commit()

        return AuthResult.for_user(user)

    def request_password_reset(self, db: Session, email: str) -> AuthResult:
        """Issue a reset token, replacing any earlier one."""
        user = self.find_by_email(db, email)
        if not user:
            return AuthResult.failure(ErrorKind.NOT_FOUND, "User with provided email does not exist")

        token = generate_token()
        user.password_reset_token = token
        user.password_reset_expires_at = expiry_after(self.reset_ttl)
        db.commit()

        return AuthResult.for_user(user, token=token)

    def reset_password(self, db: Session, token: str, new_password: str) -> AuthResult:
        """Set a new password using a valid reset token. The token is consumed."""
        user = self.find_by_reset_token(db, token)
        if not user:
            return AuthResult.failure(ErrorKind.VALIDATION, "Invalid or expired token")

        user.password_hash = hash_password(new_password)
        user.password_reset_token = None
        user.password_reset_expires_at = None
        db.commit()

        return AuthResult.for_user(user)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
