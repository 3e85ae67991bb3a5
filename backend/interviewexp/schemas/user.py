"""Public profile schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class UserSummary(BaseModel):
    """The slice of a user shown next to experiences, comments and chats."""

    id: str
    name: str
    college: str
    course: str
    year: str
    profile_picture: Optional[str] = None


class PublicProfileResponse(UserSummary):
    degree: Optional[str]
    bio: Optional[str]
    about: Optional[str]
    skills: list[str] = []
    github_url: Optional[str]
    linkedin_url: Optional[str]
    role: str
    created_at: str
    experiences_count: int = 0


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    roll_no: Optional[str] = Field(None, alias="rollNo")
    college: Optional[str] = Field(None, min_length=1)
    degree: Optional[str] = None
    course: Optional[str] = Field(None, min_length=1)
    year: Optional[str] = Field(None, min_length=1)
    profile_picture: Optional[str] = Field(None, alias="profilePicture")
    bio: Optional[str] = Field(None, max_length=500)
    about: Optional[str] = None
    skills: Optional[list[str]] = None
    resume_url: Optional[str] = Field(None, alias="resumeUrl")
    github_url: Optional[str] = Field(None, alias="githubUrl")
    linkedin_url: Optional[str] = Field(None, alias="linkedinUrl")
    phone: Optional[str] = None

    class Config:
        populate_by_name = True
