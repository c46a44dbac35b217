from typing import Dict, List, Optional
import uuid
from sqlalchemy.orm import Session
from sqlalchemy import func
import logging

from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import PostCreate, PostType, PostUpdate, PostWithCounts
from app.modules.posts.comments.models.comment import Comment
from app.modules.posts.reactions.models.reaction import Reaction
from app.modules.posts.reactions.services.reaction import get_reaction_totals
from app.modules.notifications.models.notification import Notification

logger = logging.getLogger("app")

def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def get_post_of_type(db: Session, post_id: str, post_type: PostType) -> Optional[Post]:
    """Get post by ID only if it belongs to the given content type"""
    return (
        db.query(Post)
        .filter(Post.id == post_id, Post.post_type == post_type.value)
        .first()
    )

def get_posts_by_type(db: Session, post_type: PostType, skip: int = 0, limit: int = 20) -> List[Post]:
    """Get posts of one content type, newest first"""
    logger.debug(f"Getting {post_type.value} posts with skip={skip}, limit={limit}")
    return (
        db.query(Post)
        .filter(Post.post_type == post_type.value)
        .order_by(Post.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def _with_counts(db: Session, posts: List[Post]) -> List[PostWithCounts]:
    post_ids = [post.id for post in posts]
    reaction_totals = get_reaction_totals(db, post_ids)
    comment_totals = dict(
        db.query(Comment.post_id, func.count(Comment.id))
        .filter(Comment.post_id.in_(post_ids))
        .group_by(Comment.post_id)
        .all()
    ) if post_ids else {}

    return [
        PostWithCounts.model_validate(post).model_copy(update={
            "comment_count": comment_totals.get(post.id, 0),
            "reaction_count": reaction_totals.get(post.id, 0),
        })
        for post in posts
    ]

def get_posts_with_counts(db: Session, post_type: PostType, skip: int = 0, limit: int = 20) -> List[PostWithCounts]:
    """Get posts of one type with comment and reaction counts"""
    return _with_counts(db, get_posts_by_type(db, post_type, skip, limit))

def get_user_posts(db: Session, user_id: str, skip: int = 0, limit: int = 100) -> List[Post]:
    """Get posts by user ID"""
    return (
        db.query(Post)
        .filter(Post.author_id == user_id)
        .order_by(Post.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def get_user_posts_grouped(db: Session, user_id: str) -> Dict[str, List[Post]]:
    """A user's posts keyed by content type, every type present"""
    grouped = {post_type.value: [] for post_type in PostType}
    for post in get_user_posts(db, user_id, limit=1000):
        grouped[post.post_type].append(post)
    return grouped

def create_post(db: Session, post_in: PostCreate, author_id: str) -> Post:
    """Create new post"""
    logger.info(f"Creating {post_in.post_type.value} post for author ID: {author_id}")
    post_data = post_in.model_dump()
    post_data["post_type"] = post_in.post_type.value
    post = Post(
        id=str(uuid.uuid4()),
        author_id=author_id,
        **post_data,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post

def update_post(db: Session, post: Post, post_in: PostUpdate) -> Post:
    """Update post"""
    logger.info(f"Updating post with ID: {post.id}")
    update_data = post_in.model_dump(exclude_unset=True)

    for field, value in update_data.items():
        if value is not None:
            setattr(post, field, value)

    db.commit()
    db.refresh(post)

    return post

def media_urls(post: Post) -> List[str]:
    """Uploaded files referenced by a post"""
    return [url for url in (post.cover_image_url, post.video_url, post.code_file_url) if url]

def delete_post(db: Session, post: Post) -> Post:
    """
    Delete post and everything hanging off it: reactions, comments and
    comment notifications
    """
    logger.info(f"Deleting {post.post_type} post with ID: {post.id}")
    db.query(Reaction).filter(
        Reaction.post_id == post.id, Reaction.post_type == post.post_type
    ).delete(synchronize_session=False)
    db.query(Notification).filter(Notification.post_id == post.id).delete(synchronize_session=False)
    db.query(Comment).filter(Comment.post_id == post.id).delete(synchronize_session=False)

    db.delete(post)
    db.commit()
    return post
