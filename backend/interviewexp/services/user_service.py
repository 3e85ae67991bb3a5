"""User profile service."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from interviewexp.errors import NotFoundError
from interviewexp.models.experience import Experience
from interviewexp.models.user import User

# Profile fields a user may edit on themselves
EDITABLE_FIELDS = (
    "name", "roll_no", "college", "degree", "course", "year", "profile_picture",
    "bio", "about", "skills", "resume_url", "github_url", "linkedin_url", "phone",
)
_REQUIRED_FIELDS = ("name", "college", "course", "year")


def get_active_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id, User.is_active.is_(True)).first()
    if not user:
        raise NotFoundError("User not found", error="User Not Found")
    return user


def approved_experience_count(db: Session, user_id: str) -> int:
    return (
        db.query(func.count(Experience.id))
        .filter(Experience.user_id == user_id, Experience.status == "approved")
        .scalar()
    ) or 0


def update_profile(db: Session, user: User, changes: dict) -> User:
    """Apply a partial profile edit. Required fields ignore null values."""
    for field in EDITABLE_FIELDS:
        if field not in changes:
            continue
        value = changes[field]
        if isinstance(value, str):
            value = value.strip() or None
        if field == "skills":
            value = [s.strip() for s in (value or []) if s and s.strip()]
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return user
