"""Auth request/response schemas."""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    roll_no: Optional[str] = Field(None, alias="rollNo")
    college: str = Field(min_length=1)
    degree: Optional[str] = None
    course: str = Field(min_length=1)
    year: str = Field(min_length=1)

    class Config:
        populate_by_name = True


class LoginRequest(BaseModel):
    email: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: Optional[str] = Field(None, alias="refreshToken")

    class Config:
        populate_by_name = True


class LogoutRequest(RefreshRequest):
    pass


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(min_length=6, max_length=128, alias="newPassword")

    class Config:
        populate_by_name = True


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    roll_no: Optional[str]
    college: str
    degree: Optional[str]
    course: str
    year: str
    profile_picture: Optional[str]
    bio: Optional[str]
    about: Optional[str]
    skills: list[str] = []
    resume_url: Optional[str]
    github_url: Optional[str]
    linkedin_url: Optional[str]
    phone: Optional[str]
    role: str
    is_active: bool
    is_verified: bool
    created_at: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefreshResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
