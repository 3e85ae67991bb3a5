"""Admin dashboard and user-management schemas."""

from typing import Optional

from pydantic import BaseModel


class OverviewStats(BaseModel):
    total_users: int
    total_companies: int
    total_experiences: int
    total_comments: int


class ExperienceStats(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    selected: int
    internships: int
    full_time: int
    recent: int
    success_rate: int


class DashboardStats(BaseModel):
    overview: OverviewStats
    experiences: ExperienceStats


class AdminUserResponse(BaseModel):
    id: str
    name: str
    email: str
    roll_no: Optional[str]
    college: str
    degree: Optional[str]
    course: str
    year: str
    role: str
    is_active: bool
    is_verified: bool
    created_at: str
