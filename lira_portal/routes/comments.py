"""
Comment thread routes attached to an activity.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.comment import Comment
from ..models.profile import Profile
from ..auth import get_required_user
from ..schemas.comment import CommentCreate, CommentResponse
from ..responses import require
from ..notify import notify_new_comment
from .activities import get_visible_activity

router = APIRouter(prefix="/api/activities/{activity_id}/comments", tags=["comments"])


def comment_to_dict(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "activity_id": comment.activity_id,
        "user_id": comment.user_id,
        "author_name": comment.user.full_name if comment.user else None,
        "content": comment.content,
        "created_at": comment.created_at,
    }


@router.get("", response_model=List[CommentResponse])
def list_comments(
    activity_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """Comments on an activity, oldest first."""
    get_visible_activity(db, activity_id, current_user)
    comments = (
        db.query(Comment)
        .filter(Comment.activity_id == activity_id)
        .order_by(Comment.created_at.asc(), Comment.id.asc())
        .all()
    )
    return [comment_to_dict(c) for c in comments]


@router.post("", response_model=CommentResponse)
def add_comment(
    activity_id: int,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """Append a comment; the activity owner is notified of others' comments."""
    activity = get_visible_activity(db, activity_id, current_user)
    comment = Comment(
        activity_id=activity.id,
        user_id=current_user.id,
        content=require(comment_data.content, "content").strip(),
    )
    db.add(comment)
    if activity.user_id != current_user.id:
        notify_new_comment(db, activity, current_user.full_name)
    db.commit()
    db.refresh(comment)
    return comment_to_dict(comment)
