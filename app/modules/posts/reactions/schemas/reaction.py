from enum import Enum
from typing import Dict, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.modules.posts.schemas.post import PostType

class ReactionType(str, Enum):
    like = "like"
    love = "love"
    care = "care"
    angry = "angry"
    sad = "sad"

class ReactionAction(str, Enum):
    created = "created"
    updated = "updated"
    removed = "removed"

class ReactionSubmit(BaseModel):
    # Plain strings so the ledger owns validation and answers with a 400
    reaction_type: str

class ReactionInDBBase(BaseModel):
    id: str
    reaction_type: ReactionType
    post_type: PostType
    post_id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class Reaction(ReactionInDBBase):
    """Reaction model returned to client"""
    pass

class ReactionResult(BaseModel):
    """Outcome of a submit: what happened and the counts afterwards"""
    action: ReactionAction
    reaction: Optional[Reaction] = None
    counts: Dict[str, int] = {}
