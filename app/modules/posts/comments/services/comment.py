from typing import List, Optional
import uuid
from sqlalchemy.orm import Session

from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.comments.schemas.comment import CommentCreate, CommentUpdate, Comment as CommentSchema
from app.modules.user_management.models.user import User as UserModel
from app.modules.user_management.schemas.user import UserSummary

def get_comment(db: Session, comment_id: str) -> Optional[Comment]:
    """Get comment by ID"""
    return db.query(Comment).filter(Comment.id == comment_id).first()

def get_comments_by_post(db: Session, post_id: str, skip: int = 0, limit: int = 100) -> List[Comment]:
    """Get comments on a post, oldest first"""
    return (
        db.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def to_schema(db: Session, comment: Comment) -> CommentSchema:
    """Convert a Comment model to CommentSchema with its author"""
    author = db.query(UserModel).filter(UserModel.id == comment.author_id).first()
    return CommentSchema(
        id=comment.id,
        content=comment.content,
        author_id=comment.author_id,
        post_id=comment.post_id,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        author=UserSummary.model_validate(author) if author else None,
        is_edited=bool(comment.is_edited),
    )

def get_comments_with_authors(db: Session, post_id: str, skip: int = 0, limit: int = 100) -> List[CommentSchema]:
    return [to_schema(db, comment) for comment in get_comments_by_post(db, post_id, skip, limit)]

def create_comment(db: Session, comment_in: CommentCreate, post_id: str, author_id: str) -> Comment:
    """Create a new comment"""
    comment = Comment(
        id=str(uuid.uuid4()),
        author_id=author_id,
        post_id=post_id,
        content=comment_in.content,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment

def update_comment(db: Session, comment: Comment, comment_in: CommentUpdate) -> Comment:
    """Update comment"""
    comment.content = comment_in.content
    comment.is_edited = True
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment

def delete_comment(db: Session, comment: Comment) -> None:
    """Delete comment"""
    db.delete(comment)
    db.commit()
