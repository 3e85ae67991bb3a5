"""User model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, Text, JSON
from sqlalchemy.orm import relationship

from interviewexp.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    roll_no = Column(String(50), nullable=True)
    college = Column(String(255), nullable=False)
    degree = Column(String(100), nullable=True)
    course = Column(String(100), nullable=False)
    year = Column(String(20), nullable=False)
    role = Column(String(20), nullable=False, default="student")  # student | admin
    is_active = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)

    # Profile
    profile_picture = Column(Text, nullable=True)
    bio = Column(String(500), nullable=True)
    about = Column(Text, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    resume_url = Column(String(500), nullable=True)
    github_url = Column(String(500), nullable=True)
    linkedin_url = Column(String(500), nullable=True)
    phone = Column(String(30), nullable=True)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    experiences = relationship(
        "Experience", back_populates="author", foreign_keys="[Experience.user_id]"
    )
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="author")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
