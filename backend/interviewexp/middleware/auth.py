"""JWT authentication middleware and dependencies."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import get_db
from interviewexp.errors import AuthenticationError, AuthorizationError
from interviewexp.models.user import User

# auto_error=False so a missing header renders in the standard envelope
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt directly (passlib is broken with bcrypt>=4.1)."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pwd_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash."""
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def _encode(user_id: str, token_type: str, expire: datetime) -> str:
    to_encode = {
        "sub": user_id,
        "type": token_type,
        "jti": str(uuid.uuid4()),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(user_id: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(user_id, "access", expire)


def create_refresh_token(user_id: str) -> tuple[str, datetime]:
    """Return a refresh token and its expiry (naive UTC, as stored in the DB)."""
    expire = datetime.now(timezone.utc) + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode(user_id, "refresh", expire), expire.replace(tzinfo=None)


def decode_token(token: str, expected_type: str = "access") -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("Token expired", error="Token Expired")
    except JWTError:
        raise AuthenticationError("Invalid token")

    if payload.get("type") != expected_type:
        raise AuthenticationError("Invalid token type", error="Invalid Token")
    if not payload.get("sub"):
        raise AuthenticationError("Invalid token payload")
    return payload


def _load_active_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthenticationError("Invalid token - user not found")
    if not user.is_active:
        raise AuthenticationError("Account is deactivated", error="Account Deactivated")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError("Access token required")
    payload = decode_token(credentials.credentials)
    return _load_active_user(db, payload["sub"])


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Like get_current_user, but anonymous or broken tokens yield None."""
    if credentials is None:
        return None
    try:
        payload = decode_token(credentials.credentials)
        return _load_active_user(db, payload["sub"])
    except AuthenticationError:
        return None


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise AuthorizationError("Admin access required")
    return current_user
