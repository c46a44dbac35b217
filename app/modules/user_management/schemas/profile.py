from typing import Dict, List
from pydantic import BaseModel

from app.modules.posts.schemas.post import Post
from app.modules.user_management.schemas.user import User

class Profile(BaseModel):
    """A user with the posts they created, keyed by content type"""
    user: User
    posts: Dict[str, List[Post]]
