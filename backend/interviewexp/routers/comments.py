"""Comments router — threaded comments on experiences.

The web client re-fetches the whole list every ``COMMENTS_POLL_SECONDS``;
there is no since-cursor.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from interviewexp.database import get_db
from interviewexp.middleware.auth import get_current_user, get_optional_user
from interviewexp.models.user import User
from interviewexp.routers.responses import comment_to_response
from interviewexp.schemas.comment import CommentCreate, CommentUpdate, CommentListResponse
from interviewexp.schemas.common import envelope
from interviewexp.services import comment_service

router = APIRouter(prefix="/api/comments", tags=["comments"])


@router.get("/experience/{experience_id}")
def list_comments(
    experience_id: str,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    """Top-level comments newest first, each with its replies oldest first."""
    threads = comment_service.list_comments(db, experience_id, viewer)
    return envelope(CommentListResponse(
        comments=[comment_to_response(root, replies) for root, replies in threads],
        total=comment_service.count_threaded(threads),
    ))


@router.post("/experience/{experience_id}", status_code=201)
def create_comment(
    experience_id: str,
    req: CommentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = comment_service.create_comment(
        db, experience_id, current_user, req.content, parent_id=req.parent_id
    )
    return envelope({"comment": comment_to_response(comment)}, message="Comment posted")


@router.put("/{comment_id}")
def update_comment(
    comment_id: str,
    req: CommentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = comment_service.update_comment(db, comment_id, current_user, req.content)
    return envelope({"comment": comment_to_response(comment)}, message="Comment updated")


@router.delete("/{comment_id}")
def delete_comment(
    comment_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment_service.delete_comment(db, comment_id, current_user)
    return envelope(message="Comment deleted")
