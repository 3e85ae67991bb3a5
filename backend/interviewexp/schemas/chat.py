"""Chat request/response schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from interviewexp.schemas.user import UserSummary


class StartConversationRequest(BaseModel):
    user_id: str = Field(alias="userId")

    class Config:
        populate_by_name = True


class SendMessageRequest(BaseModel):
    content: Optional[str] = None
    message_type: Literal["text", "image", "file"] = Field("text", alias="messageType")
    file_url: Optional[str] = Field(None, alias="fileUrl")
    file_name: Optional[str] = Field(None, alias="fileName")

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    id: str
    conversation_id: str
    sender_id: str
    content: str
    message_type: str
    file_url: Optional[str]
    file_name: Optional[str]
    is_read: bool
    created_at: str


class ConversationResponse(BaseModel):
    id: str
    other_participant: Optional[UserSummary]
    last_message: Optional[MessageResponse]
    unread_count: int = 0
    last_message_at: str
    created_at: str


class MessagePage(BaseModel):
    messages: list[MessageResponse]
    page: int
    has_more: bool
