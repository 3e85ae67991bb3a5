"""Moderation service — the pending -> approved | rejected workflow and admin views.

Approve and reject are single conditional UPDATEs (``WHERE status =
'pending'``), so when two admins resolve the same experience at once only
one statement matches a row; the other gets InvalidStatusError.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.errors import AuthorizationError, InvalidStatusError, NotFoundError, ValidationError
from interviewexp.models.audit_log import AuditLog
from interviewexp.models.comment import Comment
from interviewexp.models.company import Company
from interviewexp.models.experience import Experience
from interviewexp.models.user import User
from interviewexp.services.pagination import paginate

logger = logging.getLogger(__name__)


def _resolve(db: Session, experience_id: str, admin: User, values: dict, action: str) -> Experience:
    experience = db.query(Experience).filter(Experience.id == experience_id).first()
    if not experience:
        raise NotFoundError("Experience not found", error="Experience Not Found")
    if experience.status != "pending":
        raise InvalidStatusError("Experience is not pending approval")

    now = datetime.now(timezone.utc)
    updated = (
        db.query(Experience)
        .filter(Experience.id == experience_id, Experience.status == "pending")
        .update(
            {
                Experience.approved_by: admin.id,
                Experience.approved_at: now,
                **values,
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        # Another admin resolved it between our read and write
        db.rollback()
        raise InvalidStatusError("Experience is not pending approval")

    audit = AuditLog(
        entity_type="experience",
        entity_id=experience_id,
        action=action,
        actor_id=admin.id,
        old_data={"status": "pending"},
        new_data={k.key: v for k, v in values.items()},
    )
    db.add(audit)
    db.commit()
    db.refresh(experience)
    logger.info("Experience %s %s by admin %s", experience_id, action, admin.id)
    return experience


def approve_experience(db: Session, experience_id: str, admin: User) -> Experience:
    """pending -> approved, recording the approver and timestamp."""
    return _resolve(
        db,
        experience_id,
        admin,
        {Experience.status: "approved", Experience.rejection_reason: None},
        "approved",
    )


def reject_experience(db: Session, experience_id: str, admin: User, reason: Optional[str]) -> Experience:
    """pending -> rejected. The reason must be at least 10 characters once trimmed."""
    reason = (reason or "").strip()
    if len(reason) < settings.MIN_REJECTION_REASON_LENGTH:
        raise ValidationError(
            "Rejection reason is required and must be at least "
            f"{settings.MIN_REJECTION_REASON_LENGTH} characters long",
            error="Invalid Reason",
        )
    return _resolve(
        db,
        experience_id,
        admin,
        {Experience.status: "rejected", Experience.rejection_reason: reason},
        "rejected",
    )


def list_for_admin(
    db: Session,
    admin: User,
    page: int,
    limit: int,
    status: Optional[str] = None,
    college: Optional[str] = None,
    sort_order: str = "desc",
) -> tuple[list[Experience], int]:
    """Experiences in any status for review.

    College admins only ever see their own college's submissions; system
    admins see all colleges and may narrow with ``college``.
    """
    query = db.query(Experience).join(User, Experience.user_id == User.id)
    if status:
        query = query.filter(Experience.status == status)

    if admin.college and admin.college != settings.SYSTEM_COLLEGE:
        query = query.filter(User.college == admin.college)
    elif college:
        query = query.filter(User.college == college)

    order = Experience.created_at.asc() if sort_order == "asc" else Experience.created_at.desc()
    return paginate(query.order_by(order), page, limit)


def get_for_admin(db: Session, experience_id: str) -> Experience:
    experience = db.query(Experience).filter(Experience.id == experience_id).first()
    if not experience:
        raise NotFoundError("Experience not found", error="Experience Not Found")
    return experience


def dashboard_stats(db: Session) -> dict:
    """Aggregate counts for the admin dashboard."""
    total_users = (
        db.query(func.count(User.id))
        .filter(User.is_active.is_(True), User.role == "student")
        .scalar()
    )
    total_companies = db.query(func.count(Company.id)).filter(Company.is_active.is_(True)).scalar()
    total_comments = db.query(func.count(Comment.id)).scalar()

    by_status = dict(
        db.query(Experience.status, func.count(Experience.id)).group_by(Experience.status).all()
    )
    total = sum(by_status.values())
    selected = db.query(func.count(Experience.id)).filter(Experience.result == "Selected").scalar()
    internships = (
        db.query(func.count(Experience.id)).filter(Experience.experience_type == "Internship").scalar()
    )
    full_time = (
        db.query(func.count(Experience.id)).filter(Experience.experience_type == "Full-Time").scalar()
    )
    week_ago = datetime.now(timezone.utc) - timedelta(days=7)
    recent = db.query(func.count(Experience.id)).filter(Experience.created_at >= week_ago).scalar()

    return {
        "overview": {
            "total_users": total_users or 0,
            "total_companies": total_companies or 0,
            "total_experiences": total,
            "total_comments": total_comments or 0,
        },
        "experiences": {
            "total": total,
            "pending": by_status.get("pending", 0),
            "approved": by_status.get("approved", 0),
            "rejected": by_status.get("rejected", 0),
            "selected": selected or 0,
            "internships": internships or 0,
            "full_time": full_time or 0,
            "recent": recent or 0,
            "success_rate": round(selected / total * 100) if total else 0,
        },
    }


def list_users(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    college: Optional[str] = None,
    course: Optional[str] = None,
    year: Optional[str] = None,
    is_active: str = "true",
    sort_order: str = "desc",
) -> tuple[list[User], int]:
    """Non-admin accounts, filtered. ``is_active`` is ``true``, ``false`` or ``all``."""
    query = db.query(User).filter(User.role != "admin")
    if is_active != "all":
        query = query.filter(User.is_active.is_(is_active == "true"))
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(User.name.ilike(pattern), User.email.ilike(pattern), User.college.ilike(pattern))
        )
    if college:
        query = query.filter(User.college == college)
    if course:
        query = query.filter(User.course == course)
    if year:
        query = query.filter(User.year == year)

    order = User.created_at.asc() if sort_order == "asc" else User.created_at.desc()
    return paginate(query.order_by(order), page, limit)


def toggle_user_status(db: Session, user_id: str, admin: User) -> User:
    """Flip a student's active flag. Admin accounts cannot be toggled."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found", error="User Not Found")
    if user.role == "admin":
        raise AuthorizationError("Cannot modify admin users")

    old_status = user.is_active
    user.is_active = not old_status

    audit = AuditLog(
        entity_type="user",
        entity_id=user.id,
        action="activated" if user.is_active else "deactivated",
        actor_id=admin.id,
        old_data={"is_active": old_status},
        new_data={"is_active": user.is_active},
    )
    db.add(audit)
    db.commit()
    db.refresh(user)
    logger.info("User %s %s by admin %s", user.id, audit.action, admin.id)
    return user
