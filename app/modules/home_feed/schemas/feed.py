from typing import Dict, List
from pydantic import BaseModel

from app.modules.posts.schemas.post import PostWithCounts

class FeedResponse(BaseModel):
    """Latest posts of every content type"""
    posts: Dict[str, List[PostWithCounts]]
    total: int
