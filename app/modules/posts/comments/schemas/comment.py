from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator

from app.modules.user_management.schemas.user import UserSummary

class CommentBase(BaseModel):
    content: str

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Comment cannot be empty")
        return v

class CommentCreate(CommentBase):
    pass

class CommentUpdate(CommentBase):
    pass

class CommentInDBBase(BaseModel):
    id: str
    content: str
    author_id: str
    post_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class Comment(CommentInDBBase):
    """Comment model returned to client"""
    author: Optional[UserSummary] = None
    is_edited: bool = False
