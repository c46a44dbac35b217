from enum import Enum
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator

from app.modules.user_management.schemas.user import UserSummary
from app.modules.posts.comments.schemas.comment import Comment as CommentSchema

class PostType(str, Enum):
    code = "code"
    dance = "dance"
    game = "game"
    painting = "painting"
    photo = "photo"
    song = "song"

class PostBase(BaseModel):
    title: str
    body: str

class PostCreate(PostBase):
    post_type: PostType
    cover_image_url: Optional[str] = None
    video_url: Optional[str] = None
    code_text: Optional[str] = None
    code_file_url: Optional[str] = None

class PostUpdate(BaseModel):
    title: Optional[str] = None
    body: Optional[str] = None

    @field_validator("title", "body")
    @classmethod
    def not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Title and body cannot be empty")
        return v

class PostInDBBase(PostBase):
    id: str
    post_type: PostType
    cover_image_url: Optional[str] = None
    video_url: Optional[str] = None
    code_file_url: Optional[str] = None
    author_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class Post(PostInDBBase):
    """Post model returned to client"""
    pass

class PostWithCounts(PostInDBBase):
    """Post model with comment and reaction counts"""
    comment_count: int = 0
    reaction_count: int = 0

class PostDetail(PostInDBBase):
    """Single post view with everything the post page shows"""
    code_text: Optional[str] = None
    author: Optional[UserSummary] = None
    comments: List[CommentSchema] = []
    reaction_counts: Dict[str, int] = {}
    my_reaction: Optional[str] = None
