"""Comment service — two-level threads (top-level comments and their replies)."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from interviewexp.errors import AuthorizationError, NotFoundError, ValidationError
from interviewexp.models.comment import Comment
from interviewexp.models.experience import Experience
from interviewexp.models.user import User
from interviewexp.services.experience_service import get_visible_experience


def thread_comments(comments: list) -> list[tuple]:
    """Group a flat list of comments into ``[(top_level, [replies]), ...]``.

    Top-level comments come newest first, replies oldest first. A row whose
    parent is itself a reply is attached to that reply's top-level ancestor,
    so the output never nests deeper than one level.
    """
    by_id = {c.id: c for c in comments}

    def root_of(comment):
        seen = set()
        while comment.parent_id and comment.parent_id in by_id and comment.id not in seen:
            seen.add(comment.id)
            comment = by_id[comment.parent_id]
        return comment

    replies: dict[str, list] = {}
    roots = []
    for comment in comments:
        root = root_of(comment)
        if root is comment:
            roots.append(comment)
        else:
            replies.setdefault(root.id, []).append(comment)

    roots.sort(key=lambda c: c.created_at, reverse=True)
    return [
        (root, sorted(replies.get(root.id, []), key=lambda c: c.created_at))
        for root in roots
    ]


def count_threaded(threads: list[tuple]) -> int:
    """Total comments shown: every top-level comment plus its replies."""
    return sum(1 + len(replies) for _, replies in threads)


def _refresh_comment_count(db: Session, experience_id: str) -> None:
    total = db.query(func.count(Comment.id)).filter(Comment.experience_id == experience_id).scalar()
    db.query(Experience).filter(Experience.id == experience_id).update(
        {Experience.comments_count: total}, synchronize_session=False
    )


def create_comment(
    db: Session,
    experience_id: str,
    author: User,
    content: str,
    parent_id: Optional[str] = None,
) -> Comment:
    """Add a comment, or a reply when ``parent_id`` is given.

    Replying to a reply attaches the new row to the top-level comment.
    """
    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment content is required")

    experience = get_visible_experience(db, experience_id, author)
    if experience.status != "approved":
        raise NotFoundError("Experience not found")

    if parent_id:
        parent = db.query(Comment).filter(Comment.id == parent_id).first()
        if not parent or parent.experience_id != experience.id:
            raise ValidationError("Parent comment not found on this experience")
        if parent.parent_id:
            parent_id = parent.parent_id

    comment = Comment(
        id=str(uuid.uuid4()),
        experience_id=experience.id,
        user_id=author.id,
        parent_id=parent_id or None,
        content=content,
    )
    db.add(comment)
    db.flush()
    _refresh_comment_count(db, experience.id)
    db.commit()
    db.refresh(comment)
    return comment


def list_comments(db: Session, experience_id: str, viewer: Optional[User]) -> list[tuple]:
    get_visible_experience(db, experience_id, viewer)
    rows = db.query(Comment).filter(Comment.experience_id == experience_id).all()
    return thread_comments(rows)


def _get_comment(db: Session, comment_id: str) -> Comment:
    comment = db.query(Comment).filter(Comment.id == comment_id).first()
    if not comment:
        raise NotFoundError("Comment not found")
    return comment


def update_comment(db: Session, comment_id: str, author: User, content: str) -> Comment:
    comment = _get_comment(db, comment_id)
    if comment.user_id != author.id:
        raise AuthorizationError("You can only edit your own comments")
    content = (content or "").strip()
    if not content:
        raise ValidationError("Comment content is required")

    comment.content = content
    comment.is_edited = True
    comment.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(comment)
    return comment


def delete_comment(db: Session, comment_id: str, actor: User) -> None:
    """Author or admin. A top-level comment takes its replies with it."""
    comment = _get_comment(db, comment_id)
    if comment.user_id != actor.id and actor.role != "admin":
        raise AuthorizationError("You can only delete your own comments")

    experience_id = comment.experience_id
    db.delete(comment)
    db.flush()
    _refresh_comment_count(db, experience_id)
    db.commit()
