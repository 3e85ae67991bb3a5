"""Experience service — submission, public browsing, author edits and reactions."""

import logging
import uuid
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.errors import AuthorizationError, InvalidStatusError, NotFoundError, ValidationError
from interviewexp.models.company import Company
from interviewexp.models.experience import Experience
from interviewexp.models.reaction import ExperienceLike, ExperienceBookmark
from interviewexp.models.user import User
from interviewexp.models.audit_log import AuditLog
from interviewexp.services import company_service
from interviewexp.services.pagination import paginate

logger = logging.getLogger(__name__)

# Free-text fields an author may blank out on edit
_TEXT_FIELDS = ("location", "overall_experience", "technical_rounds", "hr_rounds", "tips_and_advice")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def derive_title(company_name: str, role: str) -> str:
    return f"{company_name} - {role}"


def submit_experience(
    db: Session,
    author: User,
    company_id: str,
    role: str,
    experience_type: str,
    result: str,
    custom_company: Optional[str] = None,
    title: Optional[str] = None,
    campus_type: Optional[str] = None,
    interview_date=None,
    location: Optional[str] = None,
    overall_experience: Optional[str] = None,
    technical_rounds: Optional[str] = None,
    hr_rounds: Optional[str] = None,
    tips_and_advice: Optional[str] = None,
) -> tuple[Experience, bool]:
    """Create a pending experience. Returns ``(experience, company_created)``."""
    role = role.strip()
    if not role:
        raise ValidationError("Role is required")

    company, created = company_service.get_or_create_company(db, company_id, custom_company)

    experience = Experience(
        id=str(uuid.uuid4()),
        user_id=author.id,
        company_id=company.id,
        title=_clean(title) or derive_title(company.name, role),
        role=role,
        experience_type=experience_type,
        campus_type=campus_type,
        result=result,
        interview_date=interview_date,
        location=_clean(location),
        overall_experience=_clean(overall_experience),
        technical_rounds=_clean(technical_rounds),
        hr_rounds=_clean(hr_rounds),
        tips_and_advice=_clean(tips_and_advice),
        # Every submission waits for moderation, whatever its content
        status="pending",
    )
    db.add(experience)
    db.commit()
    db.refresh(experience)
    logger.info("Experience %s submitted by %s for company %s", experience.id, author.id, company.id)
    return experience, created


def get_experience(db: Session, experience_id: str) -> Experience:
    experience = db.query(Experience).filter(Experience.id == experience_id).first()
    if not experience:
        raise NotFoundError("Experience not found")
    return experience


def can_view(experience: Experience, viewer: Optional[User]) -> bool:
    """Approved rows are public; others only to their author and admins."""
    if experience.status == "approved":
        return True
    return viewer is not None and (viewer.id == experience.user_id or viewer.role == "admin")


def get_visible_experience(db: Session, experience_id: str, viewer: Optional[User]) -> Experience:
    experience = db.query(Experience).filter(Experience.id == experience_id).first()
    if not experience or not can_view(experience, viewer):
        raise NotFoundError("Experience not found")
    return experience


def view_experience(db: Session, experience_id: str, viewer: Optional[User]) -> Experience:
    """Fetch for display, counting one view for non-author viewers of approved rows."""
    experience = get_visible_experience(db, experience_id, viewer)
    if experience.status == "approved" and (viewer is None or viewer.id != experience.user_id):
        db.query(Experience).filter(Experience.id == experience_id).update(
            {Experience.views_count: Experience.views_count + 1}, synchronize_session=False
        )
        db.commit()
        db.refresh(experience)
    return experience


def list_public_experiences(
    db: Session,
    page: int,
    limit: int,
    viewer: Optional[User] = None,
    company: Optional[str] = None,
    company_id: Optional[str] = None,
    experience_type: Optional[str] = None,
    result: Optional[str] = None,
    search: Optional[str] = None,
) -> tuple[list[Experience], int]:
    """Approved experiences only, newest first.

    Signed-in viewers only see submissions from their own college; admins of
    the system college see every college.
    """
    query = (
        db.query(Experience)
        .join(Company, Experience.company_id == Company.id)
        .join(User, Experience.user_id == User.id)
        .filter(Experience.status == "approved")
    )
    if viewer is not None and viewer.college != settings.SYSTEM_COLLEGE:
        query = query.filter(User.college == viewer.college)
    if company:
        query = query.filter(Company.slug == company)
    if company_id:
        query = query.filter(Experience.company_id == company_id)
    if experience_type:
        query = query.filter(Experience.experience_type == experience_type)
    if result:
        query = query.filter(Experience.result == result)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Experience.role.ilike(pattern), Company.name.ilike(pattern)))

    return paginate(query.order_by(Experience.created_at.desc()), page, limit)


def update_experience(db: Session, experience_id: str, author: User, changes: dict) -> Experience:
    """Apply a partial edit. Only the author, and only while pending."""
    experience = get_experience(db, experience_id)
    if experience.user_id != author.id:
        raise AuthorizationError("You can only edit your own experiences")
    if experience.status != "pending":
        raise InvalidStatusError("Can only edit pending experiences")

    if "role" in changes:
        role = _clean(changes["role"])
        if not role:
            raise ValidationError("Role cannot be empty")
        experience.role = role
    for field in ("experience_type", "result"):
        if changes.get(field) is not None:
            setattr(experience, field, changes[field])
    if "interview_date" in changes:
        experience.interview_date = changes["interview_date"]
    for field in _TEXT_FIELDS:
        if field in changes:
            setattr(experience, field, _clean(changes[field]))

    db.commit()
    db.refresh(experience)
    return experience


def delete_experience(db: Session, experience_id: str, actor: User) -> None:
    """Authors may delete their own rows in any status; admins may delete any.

    Comments, likes and bookmarks go with it.
    """
    experience = get_experience(db, experience_id)
    is_author = experience.user_id == actor.id
    if not is_author and actor.role != "admin":
        raise AuthorizationError("You can only delete your own experiences")

    if not is_author:
        db.add(AuditLog(
            entity_type="experience",
            entity_id=experience.id,
            action="deleted",
            actor_id=actor.id,
            old_data={"status": experience.status, "title": experience.title},
        ))
    db.delete(experience)
    db.commit()
    logger.info("Experience %s deleted by %s", experience_id, actor.id)


def _approved_or_404(db: Session, experience_id: str) -> Experience:
    experience = db.query(Experience).filter(Experience.id == experience_id).first()
    if not experience or experience.status != "approved":
        raise NotFoundError("Experience not found")
    return experience


def toggle_like(db: Session, experience_id: str, user: User) -> tuple[bool, int]:
    """Like if not liked, otherwise unlike. Returns ``(liked, likes_count)``."""
    experience = _approved_or_404(db, experience_id)
    existing = db.query(ExperienceLike).filter(
        ExperienceLike.experience_id == experience_id,
        ExperienceLike.user_id == user.id,
    ).first()
    if existing:
        db.delete(existing)
        liked = False
    else:
        db.add(ExperienceLike(id=str(uuid.uuid4()), user_id=user.id, experience_id=experience_id))
        liked = True
    db.flush()

    experience.likes_count = (
        db.query(func.count(ExperienceLike.id))
        .filter(ExperienceLike.experience_id == experience_id)
        .scalar()
    )
    db.commit()
    return liked, experience.likes_count


def toggle_bookmark(db: Session, experience_id: str, user: User) -> tuple[bool, int]:
    """Bookmark if not bookmarked, otherwise remove. Returns ``(bookmarked, likes_count)``."""
    experience = _approved_or_404(db, experience_id)
    existing = db.query(ExperienceBookmark).filter(
        ExperienceBookmark.experience_id == experience_id,
        ExperienceBookmark.user_id == user.id,
    ).first()
    if existing:
        db.delete(existing)
        bookmarked = False
    else:
        db.add(ExperienceBookmark(id=str(uuid.uuid4()), user_id=user.id, experience_id=experience_id))
        bookmarked = True
    db.commit()
    return bookmarked, experience.likes_count


def viewer_reactions(db: Session, experience_id: str, viewer: Optional[User]) -> tuple[Optional[bool], Optional[bool]]:
    """``(is_liked, is_bookmarked)`` for a signed-in viewer, ``(None, None)`` otherwise."""
    if viewer is None:
        return None, None
    liked = db.query(ExperienceLike.id).filter(
        ExperienceLike.experience_id == experience_id, ExperienceLike.user_id == viewer.id
    ).first() is not None
    bookmarked = db.query(ExperienceBookmark.id).filter(
        ExperienceBookmark.experience_id == experience_id, ExperienceBookmark.user_id == viewer.id
    ).first() is not None
    return liked, bookmarked


def list_user_experiences(
    db: Session, user_id: str, viewer: Optional[User], page: int, limit: int
) -> tuple[list[Experience], int]:
    """A user's experiences: all statuses for the owner, approved for everyone else."""
    query = db.query(Experience).filter(Experience.user_id == user_id)
    if viewer is None or viewer.id != user_id:
        query = query.filter(Experience.status == "approved")
    return paginate(query.order_by(Experience.created_at.desc()), page, limit)


def list_bookmarked(db: Session, user: User, page: int, limit: int) -> tuple[list[Experience], int]:
    query = (
        db.query(Experience)
        .join(ExperienceBookmark, ExperienceBookmark.experience_id == Experience.id)
        .filter(ExperienceBookmark.user_id == user.id, Experience.status == "approved")
    )
    return paginate(query.order_by(ExperienceBookmark.created_at.desc()), page, limit)
