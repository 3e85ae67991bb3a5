"""Comment request/response schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from interviewexp.schemas.user import UserSummary


class CommentCreate(BaseModel):
    content: str = Field(max_length=5000)
    parent_id: Optional[str] = Field(None, alias="parentId")

    class Config:
        populate_by_name = True


class CommentUpdate(BaseModel):
    content: str = Field(max_length=5000)


class CommentResponse(BaseModel):
    id: str
    experience_id: str
    parent_id: Optional[str]
    content: str
    is_edited: bool
    created_at: str
    updated_at: Optional[str]
    author: Optional[UserSummary]
    replies: list["CommentResponse"] = []


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
    total: int


CommentResponse.model_rebuild()
