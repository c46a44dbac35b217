"""
Notification events service.
This module handles the notifications fired when something happens to a post.
"""
from sqlalchemy.orm import Session
import logging

from app.core.config import settings
from app.core.mailer import Mailer
from app.modules.notifications.services.notification import create_notification
from app.modules.notifications.schemas.notification import NotificationCreate
from app.modules.posts.models.post import Post
from app.modules.posts.comments.models.comment import Comment
from app.modules.user_management.services.user import get_user

logger = logging.getLogger(__name__)

def post_url(post: Post) -> str:
    return f"{settings.BASE_URL}/{post.post_type}/{post.id}"

def build_comment_email(recipient_name: str, commenter_name: str, post: Post, comment_text: str) -> tuple:
    """Subject and body of the new-comment email"""
    first_name = recipient_name.split(" ")[0] if recipient_name and recipient_name.strip() else "there"
    subject = f"New comment on your {post.post_type} post!"
    body = (
        f"Hey {first_name},\n\n"
        f"{commenter_name} commented on your {post.post_type} post:\n\n"
        f"\"{comment_text}\"\n\n"
        f"Check it out:\n{post_url(post)}\n\n"
        f"Cheers,\n{settings.PROJECT_NAME} Team\n"
    )
    return subject, body

def notify_post_comment(db: Session, mailer: Mailer, post: Post, comment: Comment) -> bool:
    """
    Tell a post's author that someone commented on it.

    Args:
        db: Database session
        mailer: outbound mail client
        post: the post commented on
        comment: the new comment

    Returns:
        True if the author was notified, False otherwise
    """
    commenter_id = comment.author_id

    # Don't notify if the commenter is the post author
    if post.author_id == commenter_id:
        logger.debug(f"User {commenter_id} commented on their own post, no notification created")
        return False

    author = get_user(db, post.author_id)
    commenter = get_user(db, commenter_id)
    if not author or not commenter:
        logger.warning(f"User info missing for comment {comment.id} on post {post.id}")
        return False

    try:
        create_notification(db, NotificationCreate(
            user_id=author.id,
            actor_id=commenter.id,
            type="post_comment",
            content=f"{commenter.full_name} commented on your {post.post_type} post",
            related_id=comment.id,
            post_id=post.id,
            post_type=post.post_type,
        ))
        logger.info(f"Created post comment notification for user {author.id} from user {commenter.id}")
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating post comment notification: {e}")

    subject, body = build_comment_email(author.full_name, commenter.full_name, post, comment.content)
    try:
        mailer.send(author.email, subject, body)
    except Exception as e:
        logger.error(f"Error sending comment email to {author.email}: {e}")
        return False

    return True
