"""Transactional email: verification, password reset and booking confirmation."""

import logging
from abc import ABC, abstractmethod
from email.message import EmailMessage

import aiosmtplib

from tablebook.config import Settings, get_settings

logger = logging.getLogger("tablebook")


class EmailBackend(ABC):
    """Transport for outgoing mail."""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> bool:
        """Send a plain-text email.

        Args:
            to: Recipient email address
            subject: Email subject
            body: Plain text content

        Returns:
            True if sent successfully
        """


class ConsoleEmailBackend(EmailBackend):
    """Logs mail instead of sending it (development)."""

    async def send(self, to: str, subject: str, body: str) -> bool:
        logger.info(
            "\n%s\nEMAIL (console backend - not sent)\n%s\nTo: %s\nSubject: %s\n%s\n%s\n%s",
            "=" * 60,
            "=" * 60,
            to,
            subject,
            "=" * 60,
            body,
            "=" * 60,
        )
        return True


class SMTPEmailBackend(EmailBackend):
    """Sends mail through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        use_tls: bool = True,
        from_address: str = "",
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_address = from_address

    async def send(self, to: str, subject: str, body: str) -> bool:
        message = EmailMessage()
        message["From"] = self.from_address
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                start_tls=self.use_tls,
            )
        except aiosmtplib.SMTPException as e:
            logger.error("Failed to send email via SMTP to %s: %s", to, e)
            return False
        except OSError as e:
            logger.error("Could not reach SMTP server %s:%d: %s", self.host, self.port, e)
            return False

        logger.info("Email sent via SMTP to %s", to)
        return True


def get_email_backend(settings: Settings | None = None) -> EmailBackend:
    """Build the backend named by EMAIL_BACKEND."""
    settings = settings or get_settings()
    if settings.EMAIL_BACKEND == "console":
        return ConsoleEmailBackend()
    if settings.EMAIL_BACKEND == "smtp":
        return SMTPEmailBackend(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
            from_address=settings.EMAIL_FROM,
        )
    raise ValueError(f"Unknown email backend: {settings.EMAIL_BACKEND}")


class EmailService:
    """Composes application emails and hands them to the backend."""

    def __init__(self, backend: EmailBackend, client_url: str) -> None:
        self.backend = backend
        self.client_url = client_url.rstrip("/")

    async def send(self, to: str, subject: str, body: str) -> bool:
        return await self.backend.send(to=to, subject=subject, body=body)

    async def send_verification_email(self, to: str, token: str) -> bool:
        verify_url = f"{self.client_url}/verify-account/{token}"
        body = (
            "Thank you for registering.\n\n"
            "Please verify your account by clicking the link below (expires in 24 hours):\n\n"
            f"{verify_url}\n\n"
            "If you did not request this, please ignore this email."
        )
        return await self.send(to, "Verify Your Account", body)

    async def send_password_reset_email(self, to: str, token: str) -> bool:
        reset_url = f"{self.client_url}/reset-password?token={token}"
        body = (
            "You are receiving this email because you (or someone else) have requested "
            "to reset the password for your account.\n\n"
            "Please click on the following link, or paste it into your browser to complete the process:\n\n"
            f"{reset_url}\n\n"
            "This link will expire in one hour.\n\n"
            "If you did not request this, please ignore this email."
        )
        return await self.send(to, "Password Reset Request", body)

    async def send_reservation_confirmation(
        self, to: str, restaurant_name: str, date: str, time_slot: int, guests: int
    ) -> bool:
        body = (
            f"Your table at {restaurant_name} is booked.\n\n"
            f"Date: {date}\n"
            f"Time slot: {time_slot}\n"
            f"Guests: {guests}\n\n"
            "We look forward to seeing you."
        )
        return await self.send(to, f"Reservation Confirmed - {restaurant_name}", body)


def create_email_service(settings: Settings | None = None) -> EmailService:
    """Construct the process-wide email service. Called once at startup."""
    settings = settings or get_settings()
    return EmailService(get_email_backend(settings), settings.CLIENT_URL)


async def send_verification_in_background(email_service: EmailService, to: str, token: str) -> None:
    """Background task for verification mail; failures are only logged."""
    if not await email_service.send_verification_email(to, token):
        logger.warning("Verification email to %s was not delivered", to)
