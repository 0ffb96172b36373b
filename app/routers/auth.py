"""Authentication API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.schemas.auth import (
    ErrorResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
    TokenResponse,
    VerifyResponse,
)
from app.services.auth import AuthService, get_auth_service

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Authenticate and receive a session token."""
    token = auth_service.login(db, body.email, body.password)
    return TokenResponse(token=token)


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def forgot_password(
    body: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Email a password reset link to the account's address."""
    auth_service.request_password_reset(db, body.email)
    return MessageResponse(message="Password reset email sent")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def reset_password(
    body: ResetPasswordRequest,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Set a new password using a reset token."""
    auth_service.reset_password(db, body.token, body.password)
    return MessageResponse(message="Password updated successfully")


@router.get("/verify", response_model=VerifyResponse, responses={401: {"model": ErrorResponse}})
def verify(user: CurrentUser = Depends(get_current_user)) -> VerifyResponse:
    """Check a Bearer session token and return the user id it carries."""
    return VerifyResponse(valid=True, user_id=user.user_id)
