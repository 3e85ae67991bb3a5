"""Chats router — conversations and messages between two users."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from interviewexp.config import settings
from interviewexp.database import get_db
from interviewexp.middleware.auth import get_current_user
from interviewexp.models.user import User
from interviewexp.routers.responses import message_to_response, user_summary
from interviewexp.schemas.chat import (
    StartConversationRequest,
    SendMessageRequest,
    ConversationResponse,
    MessagePage,
)
from interviewexp.schemas.common import envelope
from interviewexp.services import chat_service

router = APIRouter(prefix="/api/chats", tags=["chats"])


def _conversation_to_response(summary: dict) -> ConversationResponse:
    conversation = summary["conversation"]
    last_message = summary["last_message"]
    return ConversationResponse(
        id=conversation.id,
        other_participant=user_summary(summary["other_participant"]),
        last_message=message_to_response(last_message) if last_message else None,
        unread_count=summary["unread_count"],
        last_message_at=conversation.last_message_at.isoformat(),
        created_at=conversation.created_at.isoformat(),
    )


@router.post("/conversations")
def start_conversation(
    req: StartConversationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the conversation with another user, creating it on first contact."""
    conversation, created = chat_service.start_conversation(db, current_user, req.user_id)
    if conversation.participant_one_id == current_user.id:
        other = conversation.participant_two
    else:
        other = conversation.participant_one
    return envelope({
        "conversation": ConversationResponse(
            id=conversation.id,
            other_participant=user_summary(other),
            last_message=None,
            unread_count=0,
            last_message_at=conversation.last_message_at.isoformat(),
            created_at=conversation.created_at.isoformat(),
        ),
        "created": created,
    })


@router.get("/conversations")
def list_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    summaries = chat_service.list_conversations(db, current_user)
    return envelope({"conversations": [_conversation_to_response(s) for s in summaries]})


@router.get("/conversations/{conversation_id}/messages")
def get_messages(
    conversation_id: str,
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """One page of messages, oldest first. Page 1 is the latest."""
    conversation = chat_service.get_conversation(db, conversation_id, current_user)
    messages, has_more = chat_service.get_messages(
        db, conversation, page, settings.MESSAGES_PAGE_SIZE
    )
    return envelope(MessagePage(
        messages=[message_to_response(m) for m in messages],
        page=page,
        has_more=has_more,
    ))


@router.post("/conversations/{conversation_id}/messages", status_code=201)
def send_message(
    conversation_id: str,
    req: SendMessageRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    conversation = chat_service.get_conversation(db, conversation_id, current_user)
    message = chat_service.send_message(
        db,
        conversation,
        current_user,
        content=req.content,
        message_type=req.message_type,
        file_url=req.file_url,
        file_name=req.file_name,
    )
    return envelope({"message": message_to_response(message)}, message="Message sent")


@router.put("/conversations/{conversation_id}/read")
def mark_read(
    conversation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    conversation = chat_service.get_conversation(db, conversation_id, current_user)
    updated = chat_service.mark_read(db, conversation, current_user)
    return envelope({"marked_read": updated})


@router.get("/unread-count")
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return envelope({"unread_count": chat_service.unread_total(db, current_user)})
