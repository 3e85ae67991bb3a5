"""Company model."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, Text
from sqlalchemy.orm import relationship

from interviewexp.database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    # Not unique: two names that normalise to the same slug are not de-duplicated
    slug = Column(String(255), nullable=False, index=True)
    tier = Column(String(50), nullable=False, default="Unspecified")
    category = Column(String(100), nullable=False, default="Other")
    description = Column(Text, nullable=True)
    website = Column(String(500), nullable=True)
    logo_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    experiences = relationship("Experience", back_populates="company")
