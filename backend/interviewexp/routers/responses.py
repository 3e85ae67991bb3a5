"""ORM model -> response schema converters shared by the routers."""

from typing import Optional

from interviewexp.models.comment import Comment
from interviewexp.models.company import Company
from interviewexp.models.conversation import Message
from interviewexp.models.experience import Experience
from interviewexp.models.user import User
from interviewexp.schemas.admin import AdminUserResponse
from interviewexp.schemas.auth import UserResponse
from interviewexp.schemas.chat import MessageResponse
from interviewexp.schemas.comment import CommentResponse
from interviewexp.schemas.company import CompanySummary, CompanyResponse
from interviewexp.schemas.experience import ExperienceResponse
from interviewexp.schemas.user import UserSummary


def _iso(value) -> Optional[str]:
    return value.isoformat() if value else None


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        roll_no=user.roll_no,
        college=user.college,
        degree=user.degree,
        course=user.course,
        year=user.year,
        profile_picture=user.profile_picture,
        bio=user.bio,
        about=user.about,
        skills=user.skills or [],
        resume_url=user.resume_url,
        github_url=user.github_url,
        linkedin_url=user.linkedin_url,
        phone=user.phone,
        role=user.role,
        is_active=user.is_active,
        is_verified=user.is_verified,
        created_at=user.created_at.isoformat(),
    )


def admin_user_to_response(user: User) -> AdminUserResponse:
    return AdminUserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        roll_no=user.roll_no,
        college=user.college,
        degree=user.degree,
        course=user.course,
        year=user.year,
        role=user.role,
        is_active=user.is_active,
        is_verified=user.is_verified,
        created_at=user.created_at.isoformat(),
    )


def user_summary(user: Optional[User]) -> Optional[UserSummary]:
    if user is None:
        return None
    return UserSummary(
        id=user.id,
        name=user.name,
        college=user.college,
        course=user.course,
        year=user.year,
        profile_picture=user.profile_picture,
    )


def company_summary(company: Optional[Company]) -> Optional[CompanySummary]:
    if company is None:
        return None
    return CompanySummary(id=company.id, name=company.name, slug=company.slug, logo_url=company.logo_url)


def company_to_response(company: Company, experience_count: int = 0) -> CompanyResponse:
    return CompanyResponse(
        id=company.id,
        name=company.name,
        slug=company.slug,
        logo_url=company.logo_url,
        tier=company.tier,
        category=company.category,
        description=company.description,
        website=company.website,
        experience_count=experience_count,
        created_at=company.created_at.isoformat(),
    )


def experience_to_response(
    experience: Experience,
    is_liked: Optional[bool] = None,
    is_bookmarked: Optional[bool] = None,
) -> ExperienceResponse:
    return ExperienceResponse(
        id=experience.id,
        title=experience.title,
        role=experience.role,
        experience_type=experience.experience_type,
        campus_type=experience.campus_type,
        result=experience.result,
        interview_date=_iso(experience.interview_date),
        location=experience.location,
        overall_experience=experience.overall_experience,
        technical_rounds=experience.technical_rounds,
        hr_rounds=experience.hr_rounds,
        tips_and_advice=experience.tips_and_advice,
        status=experience.status,
        rejection_reason=experience.rejection_reason,
        approved_by=experience.approved_by,
        approved_at=_iso(experience.approved_at),
        views_count=experience.views_count or 0,
        likes_count=experience.likes_count or 0,
        comments_count=experience.comments_count or 0,
        created_at=experience.created_at.isoformat(),
        updated_at=_iso(experience.updated_at),
        company=company_summary(experience.company),
        author=user_summary(experience.author),
        is_liked=is_liked,
        is_bookmarked=is_bookmarked,
    )


def comment_to_response(comment: Comment, replies: Optional[list[Comment]] = None) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        experience_id=comment.experience_id,
        parent_id=comment.parent_id,
        content=comment.content,
        is_edited=comment.is_edited,
        created_at=comment.created_at.isoformat(),
        updated_at=_iso(comment.updated_at),
        author=user_summary(comment.author),
        replies=[comment_to_response(r) for r in (replies or [])],
    )


def message_to_response(message: Message) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        conversation_id=message.conversation_id,
        sender_id=message.sender_id,
        content=message.content,
        message_type=message.message_type,
        file_url=message.file_url,
        file_name=message.file_name,
        is_read=message.is_read,
        created_at=message.created_at.isoformat(),
    )
