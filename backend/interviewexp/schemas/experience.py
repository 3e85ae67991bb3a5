"""Experience request/response schemas."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field

from interviewexp.schemas.company import CompanySummary
from interviewexp.schemas.user import UserSummary

ExperienceType = Literal["Internship", "Full-Time", "Apprenticeship"]
Result = Literal["Selected", "Not Selected", "Pending"]
CampusType = Literal["on-campus", "off-campus"]


class ExperienceCreate(BaseModel):
    company_id: str = Field(alias="companyId", min_length=1)
    custom_company: Optional[str] = Field(None, alias="customCompany")
    title: Optional[str] = None
    role: str = Field(min_length=1, max_length=255)
    experience_type: ExperienceType = Field(alias="experienceType")
    campus_type: Optional[CampusType] = Field(None, alias="campusType")
    result: Result
    interview_date: Optional[date] = Field(None, alias="interviewDate")
    location: Optional[str] = None
    overall_experience: Optional[str] = Field(None, alias="overallExperience")
    technical_rounds: Optional[str] = Field(None, alias="technicalRounds")
    hr_rounds: Optional[str] = Field(None, alias="hrRounds")
    tips_and_advice: Optional[str] = Field(None, alias="tipsAndAdvice")

    class Config:
        populate_by_name = True


class ExperienceUpdate(BaseModel):
    role: Optional[str] = Field(None, min_length=1, max_length=255)
    experience_type: Optional[ExperienceType] = Field(None, alias="experienceType")
    result: Optional[Result] = None
    interview_date: Optional[date] = Field(None, alias="interviewDate")
    location: Optional[str] = None
    overall_experience: Optional[str] = Field(None, alias="overallExperience")
    technical_rounds: Optional[str] = Field(None, alias="technicalRounds")
    hr_rounds: Optional[str] = Field(None, alias="hrRounds")
    tips_and_advice: Optional[str] = Field(None, alias="tipsAndAdvice")

    class Config:
        populate_by_name = True


class RejectRequest(BaseModel):
    reason: Optional[str] = None


class ExperienceResponse(BaseModel):
    id: str
    title: str
    role: str
    experience_type: str
    campus_type: Optional[str]
    result: str
    interview_date: Optional[str]
    location: Optional[str]
    overall_experience: Optional[str]
    technical_rounds: Optional[str]
    hr_rounds: Optional[str]
    tips_and_advice: Optional[str]
    status: str
    rejection_reason: Optional[str]
    approved_by: Optional[str]
    approved_at: Optional[str]
    views_count: int
    likes_count: int
    comments_count: int
    created_at: str
    updated_at: Optional[str]
    company: Optional[CompanySummary]
    author: Optional[UserSummary]
    is_liked: Optional[bool] = None
    is_bookmarked: Optional[bool] = None

    class Config:
        from_attributes = True


class ReactionResponse(BaseModel):
    liked: Optional[bool] = None
    bookmarked: Optional[bool] = None
    likes_count: int
