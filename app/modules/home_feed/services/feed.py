from sqlalchemy.orm import Session

from app.modules.home_feed.schemas.feed import FeedResponse
from app.modules.posts.schemas.post import PostType
from app.modules.posts.services.post import get_posts_with_counts

def get_home_feed(db: Session, limit_per_type: int = 20) -> FeedResponse:
    posts = {
        post_type.value: get_posts_with_counts(db, post_type, 0, limit_per_type)
        for post_type in PostType
    }
    return FeedResponse(
        posts=posts,
        total=sum(len(items) for items in posts.values()),
    )
