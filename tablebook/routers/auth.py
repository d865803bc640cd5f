"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from tablebook.database import get_db
from tablebook.dependencies import get_email_service
from tablebook.rate_limit import limiter
from tablebook.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    ResetTokenInfo,
)
from tablebook.services.auth import get_auth_service
from tablebook.services.email import EmailService, send_verification_in_background
from tablebook.services.jwt import get_jwt_service
from tablebook.validation import validate_credentials, validate_password_reset, validate_registration

logger = logging.getLogger("tablebook")

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=MessageResponse, status_code=201)
@limiter.limit("5/minute")
def register(
    request: Request,
    response: Response,
    body: RegisterRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> MessageResponse:
    """Register a new account and mail a verification link."""
    validation = validate_registration(body.name, body.email, body.password)
    if not validation.valid:
        raise HTTPException(status_code=400, detail=validation.error)

    auth_service = get_auth_service()
    result = auth_service.register(db, body.name, body.email, body.password)

    if not result.success:
        raise HTTPException(status_code=result.status_code, detail=result.error)

    background_tasks.add_task(send_verification_in_background, email_service, result.email, result.token)

    if not result.created:
        response.status_code = 200
        return MessageResponse(message="Verification email resent. Please check your inbox.")

    return MessageResponse(message="Registration successful! Please check your email to verify your account.")


@router.get("/verify-account/{token}", response_model=MessageResponse)
def verify_account(token: str, db: Session = Depends(get_db)) -> MessageResponse:
    """Confirm email ownership with the emailed token."""
    auth_service = get_auth_service()
    result = auth_service.verify_account(db, token)

    if not result.success:
        raise HTTPException(status_code=result.status_code, detail=result.error)

    return MessageResponse(message="Account verified successfully. You can now login.")


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate and receive a session token."""
    validation = validate_credentials(body.email, body.password)
    if not validation.valid:
        raise HTTPException(status_code=400, detail=validation.error)

    auth_service = get_auth_service()
    result = auth_service.authenticate(db, body.email, body.password)

    if not result.success:
        raise HTTPException(status_code=result.status_code, detail=result.error)

    jwt_service = get_jwt_service()
    token = jwt_service.create_token(email=result.email, name=result.name)  # type: ignore[arg-type]

    return LoginResponse(message="Login Successful", token=token)


@router.post("/forgot-password", response_model=MessageResponse)
@limiter.limit("3/minute")
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> MessageResponse:
    """Mail a password reset link."""
    if not body.email:
        raise HTTPException(status_code=400, detail="Email is required")

    auth_service = get_auth_service()
    result = auth_service.request_password_reset(db, body.email)

    if not result.success:
        raise HTTPException(status_code=result.status_code, detail=result.error)

    sent = await email_service.send_password_reset_email(result.email, result.token)  # type: ignore[arg-type]
    if not sent:
        raise HTTPException(status_code=500, detail="Error sending password reset email")

    return MessageResponse(message="Password reset link has been sent to your email")


@router.get("/reset-password/verify", response_model=ResetTokenInfo)
def verify_reset_token(token: str | None = None, db: Session = Depends(get_db)) -> ResetTokenInfo:
    """Check a reset token before showing the new-password form."""
    if not token:
        raise HTTPException(status_code=400, detail="Token is required")

    auth_service = get_auth_service()
    user = auth_service.find_by_reset_token(db, token)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid or expired token")

    return ResetTokenInfo(username=user.name)


@router.post("/reset-password", response_model=MessageResponse)
@limiter.limit("5/minute")
def reset_password(request: Request, body: ResetPasswordRequest, db: Session = Depends(get_db)) -> MessageResponse:
    """Set a new password with a valid reset token."""
    validation = validate_password_reset(body.token, body.new_password)
    if not validation.valid:
        raise HTTPException(status_code=400, detail=validation.error)

    auth_service = get_auth_service()
    result = auth_service.reset_password(db, body.token, body.new_password)

    if not result.success:
        raise HTTPException(status_code=result.status_code, detail=result.error)

    return MessageResponse(message="Password updated successfully")
