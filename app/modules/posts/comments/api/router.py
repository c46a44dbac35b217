from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, status, Path, Query
from sqlalchemy.orm import Session
import logging

from app.core.mailer import Mailer, get_mailer
from app.db.session import get_db
from app.deps import get_current_user, get_post_type
from app.modules.user_management.models.user import User
from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import PostType
from app.modules.posts.services.post import get_post_of_type
from app.modules.posts.comments.schemas.comment import (
    Comment as CommentSchema, CommentCreate, CommentUpdate
)
from app.modules.posts.comments.services.comment import (
    get_comment, get_comments_with_authors, create_comment, update_comment, delete_comment, to_schema
)
from app.modules.notifications.services.notification_events import notify_post_comment

router = APIRouter()
logger = logging.getLogger("app")

def _validate_post(db: Session, post_id: str, post_type: PostType) -> Post:
    """Validate a post of this type exists and return it or raise HTTPException"""
    post = get_post_of_type(db, post_id, post_type)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )
    return post

def _validate_comment(db: Session, comment_id: str, post_id: str) -> Any:
    """Validate comment exists on this post and return it or raise HTTPException"""
    comment = get_comment(db, comment_id=comment_id)
    if not comment or comment.post_id != post_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Comment not found"
        )
    return comment

@router.post("", response_model=CommentSchema, status_code=status.HTTP_201_CREATED)
def create_new_comment(
    *,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(..., description="The ID of the post to comment on"),
    comment_in: CommentCreate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Comment on a post and let its author know by email"""
    post = _validate_post(db, post_id, post_type)
    comment = create_comment(db, comment_in, post.id, current_user.id)

    # The comment stands even when the notification fails
    notify_post_comment(db, mailer, post, comment)

    return to_schema(db, comment)

@router.get("", response_model=List[CommentSchema])
def read_comments(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(..., description="The ID of the post to get comments for"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get comments on a post"""
    _validate_post(db, post_id, post_type)
    return get_comments_with_authors(db, post_id, skip=skip, limit=limit)

@router.put("/{comment_id}", response_model=CommentSchema)
def update_comment_by_id(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(...),
    comment_id: str = Path(...),
    comment_in: CommentUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Edit your own comment"""
    _validate_post(db, post_id, post_type)
    comment = _validate_comment(db, comment_id, post_id)
    if comment.author_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    return to_schema(db, update_comment(db, comment, comment_in))

@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment_by_id(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(...),
    comment_id: str = Path(...),
    current_user: User = Depends(get_current_user),
) -> None:
    """Delete a comment. Comment authors and the post author may do this."""
    post = _validate_post(db, post_id, post_type)
    comment = _validate_comment(db, comment_id, post_id)
    if current_user.id not in (comment.author_id, post.author_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )
    delete_comment(db, comment)
    logger.info(f"Comment {comment_id} deleted by user {current_user.id}")
