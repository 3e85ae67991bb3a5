"""Admin router — moderation queue, dashboard and user management.

Every route requires an active admin.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import get_db
from interviewexp.middleware.auth import require_admin
from interviewexp.models.user import User
from interviewexp.routers.responses import admin_user_to_response, experience_to_response
from interviewexp.schemas.admin import DashboardStats
from interviewexp.schemas.common import Pagination, envelope
from interviewexp.schemas.experience import RejectRequest
from interviewexp.services import experience_service, moderation

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/dashboard")
def dashboard(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    stats = DashboardStats(**moderation.dashboard_stats(db))
    return envelope({"stats": stats})


@router.get("/experiences")
def list_experiences(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    status: Optional[Literal["pending", "approved", "rejected"]] = Query(None),
    college: Optional[str] = Query(None),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Experiences for review, scoped to the admin's college."""
    experiences, total = moderation.list_for_admin(
        db, admin, page=page, limit=limit, status=status, college=college, sort_order=sort_order
    )
    return envelope({
        "experiences": [experience_to_response(e) for e in experiences],
        "pagination": Pagination.build(page, limit, total),
    })


@router.get("/experiences/{experience_id}")
def get_experience(
    experience_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    experience = moderation.get_for_admin(db, experience_id)
    return envelope({"experience": experience_to_response(experience)})


@router.put("/experiences/{experience_id}/approve")
def approve_experience(
    experience_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """pending -> approved."""
    experience = moderation.approve_experience(db, experience_id, admin)
    return envelope(
        {"experience": experience_to_response(experience)},
        message="Experience approved successfully",
    )


@router.put("/experiences/{experience_id}/reject")
def reject_experience(
    experience_id: str,
    req: RejectRequest,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """pending -> rejected, with a reason of at least 10 characters."""
    experience = moderation.reject_experience(db, experience_id, admin, req.reason)
    return envelope(
        {"experience": experience_to_response(experience)},
        message="Experience rejected successfully",
    )


@router.delete("/experiences/{experience_id}")
def delete_experience(
    experience_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    experience_service.delete_experience(db, experience_id, admin)
    return envelope(message="Experience deleted successfully")


@router.get("/users")
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None),
    college: Optional[str] = Query(None),
    course: Optional[str] = Query(None),
    year: Optional[str] = Query(None),
    is_active: Literal["true", "false", "all"] = Query("true", alias="isActive"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    users, total = moderation.list_users(
        db,
        page=page,
        limit=limit,
        search=search,
        college=college,
        course=course,
        year=year,
        is_active=is_active,
        sort_order=sort_order,
    )
    return envelope({
        "users": [admin_user_to_response(u) for u in users],
        "pagination": Pagination.build(page, limit, total),
    })


@router.put("/users/{user_id}/toggle-status")
def toggle_user_status(
    user_id: str,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = moderation.toggle_user_status(db, user_id, admin)
    state = "activated" if user.is_active else "deactivated"
    return envelope({"user": admin_user_to_response(user)}, message=f"User {state} successfully")
