"""Comment model — top-level comments and their direct replies."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship, backref

from interviewexp.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    experience_id = Column(
        String(36), ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    # Always NULL or the id of a top-level comment; replies never nest further
    parent_id = Column(String(36), ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    is_edited = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=True)

    # Relationships
    experience = relationship("Experience", back_populates="comments")
    author = relationship("User", back_populates="comments")
    replies = relationship(
        "Comment",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
        backref=backref("parent", remote_side=[id]),
    )
