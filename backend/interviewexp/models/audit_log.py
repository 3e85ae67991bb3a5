"""Audit trail of admin actions on experiences and accounts."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship

from interviewexp.database import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"
    __table_args__ = (Index("ix_audit_logs_entity", "entity_type", "entity_id"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    entity_type = Column(String(20), nullable=False)  # experience | user
    entity_id = Column(String(36), nullable=False)
    action = Column(String(20), nullable=False)  # approved | rejected | deleted | activated | deactivated
    actor_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    old_data = Column(JSON, nullable=True)
    new_data = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    actor = relationship("User")
