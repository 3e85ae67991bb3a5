"""Experiences router — submission, browsing, author edits, likes and bookmarks."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import get_db
from interviewexp.middleware.auth import get_current_user, get_optional_user
from interviewexp.models.user import User
from interviewexp.routers.responses import company_summary, experience_to_response
from interviewexp.schemas.common import Pagination, envelope
from interviewexp.schemas.experience import ExperienceCreate, ExperienceUpdate, ReactionResponse
from interviewexp.services import experience_service

router = APIRouter(prefix="/api/experiences", tags=["experiences"])


@router.post("", status_code=201)
def create_experience(
    req: ExperienceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Submit an experience. It stays pending until an admin reviews it."""
    experience, company_created = experience_service.submit_experience(
        db,
        author=current_user,
        company_id=req.company_id,
        custom_company=req.custom_company,
        title=req.title,
        role=req.role,
        experience_type=req.experience_type,
        campus_type=req.campus_type,
        result=req.result,
        interview_date=req.interview_date,
        location=req.location,
        overall_experience=req.overall_experience,
        technical_rounds=req.technical_rounds,
        hr_rounds=req.hr_rounds,
        tips_and_advice=req.tips_and_advice,
    )
    return envelope(
        {
            "experience": experience_to_response(experience),
            "company": company_summary(experience.company),
            "company_created": company_created,
        },
        message="Experience submitted successfully! It will be reviewed by admins.",
    )


@router.get("")
def list_experiences(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    company: Optional[str] = Query(None, description="Company slug"),
    company_id: Optional[str] = Query(None, alias="companyId"),
    experience_type: Optional[str] = Query(None, alias="experienceType"),
    result: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    """List approved experiences with optional filters."""
    experiences, total = experience_service.list_public_experiences(
        db,
        page=page,
        limit=limit,
        viewer=viewer,
        company=company,
        company_id=company_id,
        experience_type=experience_type,
        result=result,
        search=search,
    )
    return envelope({
        "experiences": [experience_to_response(e) for e in experiences],
        "pagination": Pagination.build(page, limit, total),
    })


@router.get("/{experience_id}")
def get_experience(
    experience_id: str,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    """Get one experience. Counts a view for anyone but the author."""
    experience = experience_service.view_experience(db, experience_id, viewer)
    is_liked, is_bookmarked = experience_service.viewer_reactions(db, experience.id, viewer)
    return envelope({"experience": experience_to_response(experience, is_liked, is_bookmarked)})


@router.put("/{experience_id}")
def update_experience(
    experience_id: str,
    req: ExperienceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Edit a pending experience (author only)."""
    experience = experience_service.update_experience(
        db, experience_id, current_user, req.model_dump(exclude_unset=True)
    )
    return envelope(
        {"experience": experience_to_response(experience)},
        message="Experience updated successfully",
    )


@router.delete("/{experience_id}")
def delete_experience(
    experience_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    experience_service.delete_experience(db, experience_id, current_user)
    return envelope(message="Experience deleted")


@router.post("/{experience_id}/like")
def toggle_like(
    experience_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    liked, likes_count = experience_service.toggle_like(db, experience_id, current_user)
    return envelope(
        ReactionResponse(liked=liked, likes_count=likes_count),
        message="Experience liked" if liked else "Like removed",
    )


@router.post("/{experience_id}/bookmark")
def toggle_bookmark(
    experience_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    bookmarked, likes_count = experience_service.toggle_bookmark(db, experience_id, current_user)
    return envelope(
        ReactionResponse(bookmarked=bookmarked, likes_count=likes_count),
        message="Experience bookmarked" if bookmarked else "Bookmark removed",
    )
