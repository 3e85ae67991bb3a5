"""Users router — public profiles, profile edits and bookmarks."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import get_db
from interviewexp.middleware.auth import get_current_user, get_optional_user
from interviewexp.models.user import User
from interviewexp.routers.responses import experience_to_response, user_to_response
from interviewexp.schemas.common import Pagination, envelope
from interviewexp.schemas.user import ProfileUpdate, PublicProfileResponse
from interviewexp.services import experience_service, user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.put("/me")
def update_me(
    req: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = user_service.update_profile(db, current_user, req.model_dump(exclude_unset=True))
    return envelope({"user": user_to_response(user)}, message="Profile updated successfully")


@router.get("/me/bookmarks")
def my_bookmarks(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    experiences, total = experience_service.list_bookmarked(db, current_user, page, limit)
    return envelope({
        "experiences": [experience_to_response(e, is_bookmarked=True) for e in experiences],
        "pagination": Pagination.build(page, limit, total),
    })


@router.get("/{user_id}")
def get_user(user_id: str, db: Session = Depends(get_db)):
    """Public profile. Email and contact details stay private."""
    user = user_service.get_active_user(db, user_id)
    profile = PublicProfileResponse(
        id=user.id,
        name=user.name,
        college=user.college,
        course=user.course,
        year=user.year,
        profile_picture=user.profile_picture,
        degree=user.degree,
        bio=user.bio,
        about=user.about,
        skills=user.skills or [],
        github_url=user.github_url,
        linkedin_url=user.linkedin_url,
        role=user.role,
        created_at=user.created_at.isoformat(),
        experiences_count=user_service.approved_experience_count(db, user.id),
    )
    return envelope({"user": profile})


@router.get("/{user_id}/experiences")
def user_experiences(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    """A user's approved experiences; owners also see pending and rejected ones."""
    experiences, total = experience_service.list_user_experiences(db, user_id, viewer, page, limit)
    return envelope({
        "experiences": [experience_to_response(e) for e in experiences],
        "pagination": Pagination.build(page, limit, total),
    })
