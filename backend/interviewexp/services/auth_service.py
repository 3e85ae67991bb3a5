"""Auth service — accounts, credentials and refresh-token sessions."""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from interviewexp.errors import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from interviewexp.middleware.auth import (
    hash_password,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from interviewexp.models.user import User
from interviewexp.models.user_session import UserSession

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def issue_tokens(
    db: Session,
    user: User,
    device_info: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> tuple[str, str]:
    """Create an access/refresh pair and persist the refresh session."""
    access_token = create_access_token(user.id)
    refresh_token, expires_at = create_refresh_token(user.id)
    db.add(UserSession(
        id=str(uuid.uuid4()),
        user_id=user.id,
        refresh_token=refresh_token,
        device_info=(device_info or "Unknown Device")[:500],
        ip_address=ip_address,
        expires_at=expires_at,
    ))
    db.commit()
    return access_token, refresh_token


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    college: str,
    course: str,
    year: str,
    roll_no: Optional[str] = None,
    degree: Optional[str] = None,
) -> User:
    """Create a student account. Duplicate emails raise ConflictError."""
    email = _normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("User already exists with this email", error="Email Already Registered")

    user = User(
        id=str(uuid.uuid4()),
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        roll_no=_clean(roll_no),
        college=college.strip(),
        degree=_clean(degree),
        course=course.strip(),
        year=year.strip(),
        role="student",
        is_active=True,
        is_verified=False,
        skills=[],
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # A concurrent registration took the email after our check
        db.rollback()
        raise ConflictError("User already exists with this email", error="Email Already Registered")
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.college)
    return user


def authenticate(db: Session, email: str, password: str, require_admin: bool = False) -> User:
    """Check credentials; deactivated accounts cannot log in."""
    user = db.query(User).filter(User.email == _normalize_email(email)).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password", error="Authentication Failed")
    if not user.is_active:
        raise AuthenticationError(
            "Account is deactivated. Please contact support.", error="Account Deactivated"
        )
    if require_admin and user.role != "admin":
        raise AuthorizationError("Admin access required")
    return user


def refresh_access_token(db: Session, refresh_token: Optional[str]) -> tuple[str, User]:
    """Exchange a live refresh token for a new access token."""
    if not refresh_token:
        raise AuthenticationError("Refresh token required", error="Token Required")

    payload = decode_token(refresh_token, expected_type="refresh")
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    session = (
        db.query(UserSession)
        .filter(
            UserSession.refresh_token == refresh_token,
            UserSession.is_active.is_(True),
            UserSession.expires_at >= now,
        )
        .first()
    )
    if not session:
        raise AuthenticationError("Invalid or expired refresh token", error="Token Invalid")

    user = db.query(User).filter(User.id == payload["sub"]).first()
    if not user or not user.is_active or user.id != session.user_id:
        raise AuthenticationError("User not found or inactive", error="User Invalid")

    return create_access_token(user.id), user


def logout(db: Session, user: User, refresh_token: Optional[str] = None) -> int:
    """Deactivate one session (by token) or all of the user's sessions."""
    query = db.query(UserSession).filter(
        UserSession.user_id == user.id, UserSession.is_active.is_(True)
    )
    if refresh_token:
        query = query.filter(UserSession.refresh_token == refresh_token)
    count = query.update({UserSession.is_active: False}, synchronize_session=False)
    db.commit()
    return count


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """Replace the password hash and end every session of the user."""
    db_user = db.query(User).filter(User.id == user.id).first()
    if not db_user:
        raise NotFoundError("User not found")
    if not verify_password(current_password, db_user.password_hash):
        raise AuthenticationError("Current password is incorrect", error="Invalid Password")

    db_user.password_hash = hash_password(new_password)
    db.query(UserSession).filter(UserSession.user_id == db_user.id).update(
        {UserSession.is_active: False}, synchronize_session=False
    )
    db.commit()
    logger.info("Password changed for user %s", db_user.id)
