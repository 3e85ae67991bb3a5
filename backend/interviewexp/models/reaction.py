"""Like and bookmark join rows — one per (user, experience) pair."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from interviewexp.database import Base


class ExperienceLike(Base):
    __tablename__ = "experience_likes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    experience_id = Column(String(36), ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "experience_id", name="uq_like_user_experience"),
    )

    # Relationships
    experience = relationship("Experience", back_populates="likes")


class ExperienceBookmark(Base):
    __tablename__ = "experience_bookmarks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    experience_id = Column(String(36), ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("user_id", "experience_id", name="uq_bookmark_user_experience"),
    )

    # Relationships
    experience = relationship("Experience", back_populates="bookmarks")
