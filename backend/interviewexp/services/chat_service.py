"""Chat service — one conversation per pair of users, polled by the client.

There is no push channel: the web client re-fetches messages every
``CHAT_POLL_SECONDS`` and the conversation list every
``CONVERSATIONS_POLL_SECONDS``.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from interviewexp.errors import AuthorizationError, NotFoundError, ValidationError
from interviewexp.models.conversation import Conversation, Message
from interviewexp.models.user import User

logger = logging.getLogger(__name__)


def ordered_pair(user_a: str, user_b: str) -> tuple[str, str]:
    """Canonical storage order for an unordered pair of user ids."""
    return (user_a, user_b) if user_a < user_b else (user_b, user_a)


def _find_conversation(db: Session, user_a: str, user_b: str) -> Optional[Conversation]:
    one, two = ordered_pair(user_a, user_b)
    return (
        db.query(Conversation)
        .filter(Conversation.participant_one_id == one, Conversation.participant_two_id == two)
        .first()
    )


def start_conversation(db: Session, user: User, other_user_id: str) -> tuple[Conversation, bool]:
    """Return the pair's conversation, creating it on first contact.

    Returns ``(conversation, created)``.
    """
    if other_user_id == user.id:
        raise ValidationError("You cannot start a conversation with yourself")
    other = db.query(User).filter(User.id == other_user_id, User.is_active.is_(True)).first()
    if not other:
        raise NotFoundError("User not found")

    existing = _find_conversation(db, user.id, other.id)
    if existing:
        return existing, False

    one, two = ordered_pair(user.id, other.id)
    conversation = Conversation(id=str(uuid.uuid4()), participant_one_id=one, participant_two_id=two)
    db.add(conversation)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with the other participant; the unique pair wins
        db.rollback()
        return _find_conversation(db, user.id, other.id), False
    db.refresh(conversation)
    logger.info("Conversation %s started between %s and %s", conversation.id, one, two)
    return conversation, True


def get_conversation(db: Session, conversation_id: str, user: User) -> Conversation:
    conversation = db.query(Conversation).filter(Conversation.id == conversation_id).first()
    if not conversation:
        raise NotFoundError("Conversation not found")
    if not conversation.has_participant(user.id):
        raise AuthorizationError("You are not a participant in this conversation")
    return conversation


def _unread_query(db: Session, user: User):
    return (
        db.query(func.count(Message.id))
        .select_from(Message)
        .filter(Message.sender_id != user.id, Message.is_read.is_(False))
    )


def list_conversations(db: Session, user: User) -> list[dict]:
    """The user's conversations, most recent activity first."""
    conversations = (
        db.query(Conversation)
        .filter(or_(
            Conversation.participant_one_id == user.id,
            Conversation.participant_two_id == user.id,
        ))
        .order_by(Conversation.last_message_at.desc())
        .all()
    )

    summaries = []
    for conversation in conversations:
        other_id = conversation.other_participant_id(user.id)
        last_message = (
            db.query(Message)
            .filter(Message.conversation_id == conversation.id)
            .order_by(Message.created_at.desc())
            .first()
        )
        unread = _unread_query(db, user).filter(Message.conversation_id == conversation.id).scalar()
        summaries.append({
            "conversation": conversation,
            "other_participant": db.query(User).filter(User.id == other_id).first(),
            "last_message": last_message,
            "unread_count": unread or 0,
        })
    return summaries


def get_messages(
    db: Session, conversation: Conversation, page: int, page_size: int
) -> tuple[list[Message], bool]:
    """One page of messages, oldest to newest within the page.

    Page 1 holds the most recent ``page_size`` messages. Returns
    ``(messages, has_more)``.
    """
    query = db.query(Message).filter(Message.conversation_id == conversation.id)
    total = query.count()
    newest_first = (
        query.order_by(Message.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return list(reversed(newest_first)), total > page * page_size


def send_message(
    db: Session,
    conversation: Conversation,
    sender: User,
    content: Optional[str],
    message_type: str = "text",
    file_url: Optional[str] = None,
    file_name: Optional[str] = None,
) -> Message:
    """Store a message. The attachment payload is kept exactly as given.

    Content may be empty only for attachments, which then fall back to the
    file name.
    """
    content = (content or "").strip()
    if message_type != "text" and not file_url:
        raise ValidationError("fileUrl is required for image and file messages")
    if not content:
        if not file_url:
            raise ValidationError("Message content is required")
        content = file_name or "Attachment"

    now = datetime.now(timezone.utc)
    message = Message(
        id=str(uuid.uuid4()),
        conversation_id=conversation.id,
        sender_id=sender.id,
        content=content,
        message_type=message_type,
        file_url=file_url,
        file_name=file_name,
        is_read=False,
        created_at=now,
    )
    db.add(message)
    conversation.last_message_at = now
    db.commit()
    db.refresh(message)
    return message


def mark_read(db: Session, conversation: Conversation, user: User) -> int:
    """Mark the other participant's messages read. Returns how many changed."""
    count = (
        db.query(Message)
        .filter(
            Message.conversation_id == conversation.id,
            Message.sender_id != user.id,
            Message.is_read.is_(False),
        )
        .update({Message.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return count


def unread_total(db: Session, user: User) -> int:
    """Unread messages across all of the user's conversations."""
    total = (
        _unread_query(db, user)
        .join(Conversation, Message.conversation_id == Conversation.id)
        .filter(or_(
            Conversation.participant_one_id == user.id,
            Conversation.participant_two_id == user.id,
        ))
        .scalar()
    )
    return total or 0
