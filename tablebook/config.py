"""Configuration settings for Tablebook."""

import os
import secrets
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./tablebook.db")

    # JWT
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", secrets.token_urlsafe(32))
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(os.getenv("JWT_EXPIRE_MINUTES", "60"))

    # One-time tokens
    VERIFICATION_TOKEN_HOURS: int = int(os.getenv("VERIFICATION_TOKEN_HOURS", "24"))
    RESET_TOKEN_MINUTES: int = int(os.getenv("RESET_TOKEN_MINUTES", "60"))

    # Links in outgoing mail point at the frontend
    CLIENT_URL: str = os.getenv("CLIENT_URL", "http://localhost:3000")

    # Email
    EMAIL_BACKEND: str = os.getenv("EMAIL_BACKEND", "console")
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "no-reply@tablebook.local")
    SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
    SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
    SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

    # Upload
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    MAX_UPLOAD_SIZE_MB: int = int(os.getenv("MAX_UPLOAD_SIZE_MB", "10"))

    # Reservations
    RESERVATION_ENFORCE_TIME_SLOTS: bool = os.getenv("RESERVATION_ENFORCE_TIME_SLOTS", "true").lower() == "true"

    # Application
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def validate(self) -> list[str]:
        """Validate settings and return list of warnings."""
        errors = []
        if not os.getenv("JWT_SECRET_KEY"):
            errors.append("JWT_SECRET_KEY is not set - using auto-generated key (not persistent across restarts)")
        if self.EMAIL_BACKEND == "smtp" and not (self.SMTP_USERNAME and self.SMTP_PASSWORD):
            errors.append("EMAIL_BACKEND is smtp but SMTP_USERNAME/SMTP_PASSWORD are not set")
        if self.EMAIL_BACKEND not in ("console", "smtp"):
            errors.append(f"Unknown EMAIL_BACKEND '{self.EMAIL_BACKEND}'")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
