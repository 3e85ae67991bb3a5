"""SQLAlchemy ORM models."""

from interviewexp.models.user import User
from interviewexp.models.user_session import UserSession
from interviewexp.models.company import Company
from interviewexp.models.experience import Experience
from interviewexp.models.reaction import ExperienceLike, ExperienceBookmark
from interviewexp.models.comment import Comment
from interviewexp.models.conversation import Conversation, Message
from interviewexp.models.audit_log import AuditLog

__all__ = [
    "User",
    "UserSession",
    "Company",
    "Experience",
    "ExperienceLike",
    "ExperienceBookmark",
    "Comment",
    "Conversation",
    "Message",
    "AuditLog",
]
