"""Experience model — a student's account of one company's interview process."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Date, CheckConstraint
from sqlalchemy.orm import relationship

from interviewexp.database import Base

EXPERIENCE_TYPES = ("Internship", "Full-Time", "Apprenticeship")
RESULTS = ("Selected", "Not Selected", "Pending")
CAMPUS_TYPES = ("on-campus", "off-campus")
STATUSES = ("pending", "approved", "rejected")


def _one_of(column: str, values: tuple) -> CheckConstraint:
    allowed = ", ".join(f"'{v}'" for v in values)
    return CheckConstraint(f"{column} IN ({allowed})", name=f"ck_experiences_{column}")


class Experience(Base):
    __tablename__ = "experiences"
    __table_args__ = (
        _one_of("experience_type", EXPERIENCE_TYPES),
        _one_of("campus_type", CAMPUS_TYPES),
        _one_of("result", RESULTS),
        _one_of("status", STATUSES),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    role = Column(String(255), nullable=False)
    experience_type = Column(String(20), nullable=False)  # Internship | Full-Time | Apprenticeship
    campus_type = Column(String(20), nullable=True)  # on-campus | off-campus
    result = Column(String(20), nullable=False)  # Selected | Not Selected | Pending
    interview_date = Column(Date, nullable=True)
    location = Column(String(255), nullable=True)

    overall_experience = Column(Text, nullable=True)
    technical_rounds = Column(Text, nullable=True)
    hr_rounds = Column(Text, nullable=True)
    tips_and_advice = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default="pending", index=True)  # pending | approved | rejected
    rejection_reason = Column(Text, nullable=True)
    approved_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime, nullable=True)

    views_count = Column(Integer, nullable=False, default=0)
    likes_count = Column(Integer, nullable=False, default=0)
    comments_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    author = relationship("User", back_populates="experiences", foreign_keys=[user_id])
    approver = relationship("User", foreign_keys=[approved_by])
    company = relationship("Company", back_populates="experiences")
    comments = relationship("Comment", back_populates="experience", cascade="all, delete-orphan")
    likes = relationship("ExperienceLike", back_populates="experience", cascade="all, delete-orphan")
    bookmarks = relationship("ExperienceBookmark", back_populates="experience", cascade="all, delete-orphan")
