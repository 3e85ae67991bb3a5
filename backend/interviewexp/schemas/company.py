"""Company request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class CompanyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    tier: str = "Unspecified"
    category: str = "Other"
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True


class CompanySummary(BaseModel):
    id: str
    name: str
    slug: str
    logo_url: Optional[str] = None


class CompanyResponse(CompanySummary):
    tier: str
    category: str
    description: Optional[str]
    website: Optional[str]
    experience_count: int = 0
    created_at: str
