"""Conversation and Message models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship

from interviewexp.database import Base

MESSAGE_TYPES = ("text", "image", "file")


class Conversation(Base):
    __tablename__ = "conversations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # Stored as an ordered pair so (A, B) and (B, A) map to the same row
    participant_one_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    participant_two_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    last_message_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("participant_one_id", "participant_two_id", name="uq_conversation_pair"),
        CheckConstraint("participant_one_id < participant_two_id", name="ck_conversation_pair_order"),
    )

    # Relationships
    participant_one = relationship("User", foreign_keys=[participant_one_id])
    participant_two = relationship("User", foreign_keys=[participant_two_id])
    messages = relationship(
        "Message",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="Message.created_at",
    )

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.participant_one_id, self.participant_two_id)

    def other_participant_id(self, user_id: str) -> str:
        if user_id == self.participant_one_id:
            return self.participant_two_id
        return self.participant_one_id


class Message(Base):
    __tablename__ = "messages"
    __table_args__ = (
        CheckConstraint(
            "message_type IN (" + ", ".join(f"'{t}'" for t in MESSAGE_TYPES) + ")",
            name="ck_messages_type",
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    conversation_id = Column(
        String(36), ForeignKey("conversations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    message_type = Column(String(10), nullable=False, default="text")  # text | image | file
    # Inline data URI, stored exactly as the client sent it
    file_url = Column(Text, nullable=True)
    file_name = Column(String(255), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)

    # Relationships
    conversation = relationship("Conversation", back_populates="messages")
    sender = relationship("User")
