"""Auth router — registration, login, token refresh and sessions."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import get_db
from interviewexp.middleware.auth import get_current_user
from interviewexp.middleware.rate_limit import limiter
from interviewexp.models.user import User
from interviewexp.routers.responses import user_to_response
from interviewexp.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    RefreshRequest,
    LogoutRequest,
    ChangePasswordRequest,
    AuthResponse,
    TokenRefreshResponse,
)
from interviewexp.schemas.common import envelope
from interviewexp.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _client_info(request: Request) -> tuple[str, str | None]:
    device = request.headers.get("user-agent", "Unknown Device")
    ip = request.client.host if request.client else None
    return device, ip


def _auth_payload(db: Session, user: User, request: Request) -> AuthResponse:
    device, ip = _client_info(request)
    access_token, refresh_token = auth_service.issue_tokens(db, user, device, ip)
    return AuthResponse(
        user=user_to_response(user),
        access_token=access_token,
        refresh_token=refresh_token,
    )


@router.post("/register", status_code=201)
@limiter.limit(settings.AUTH_RATE_LIMIT)
def register(request: Request, req: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new student account and sign it in."""
    user = auth_service.register_user(
        db,
        name=req.name,
        email=req.email,
        password=req.password,
        college=req.college,
        course=req.course,
        year=req.year,
        roll_no=req.roll_no,
        degree=req.degree,
    )
    return envelope(_auth_payload(db, user, request), message="Account created successfully")


@router.post("/login")
@limiter.limit(settings.AUTH_RATE_LIMIT)
def login(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    """Login and get an access/refresh token pair."""
    user = auth_service.authenticate(db, req.email, req.password)
    return envelope(_auth_payload(db, user, request), message="Login successful")


@router.post("/admin/login")
@limiter.limit(settings.AUTH_RATE_LIMIT)
def admin_login(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    """Login restricted to admin accounts."""
    user = auth_service.authenticate(db, req.email, req.password, require_admin=True)
    return envelope(_auth_payload(db, user, request), message="Login successful")


@router.post("/refresh")
@limiter.limit(settings.AUTH_RATE_LIMIT)
def refresh(request: Request, req: RefreshRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new access token."""
    access_token, user = auth_service.refresh_access_token(db, req.refresh_token)
    return envelope(
        TokenRefreshResponse(access_token=access_token, user=user_to_response(user)),
        message="Token refreshed successfully",
    )


@router.post("/logout")
def logout(
    req: Optional[LogoutRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """End one session (when a refresh token is given) or all of them."""
    auth_service.logout(db, current_user, req.refresh_token if req else None)
    return envelope(message="Logged out successfully")


@router.post("/change-password")
def change_password(
    req: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    auth_service.change_password(db, current_user, req.current_password, req.new_password)
    return envelope(message="Password changed successfully")


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user info."""
    return envelope({"user": user_to_response(current_user)})
