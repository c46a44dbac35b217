from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.modules.user_management.schemas.user import UserSummary

class NotificationBase(BaseModel):
    type: str
    content: str
    related_id: Optional[str] = None
    post_id: Optional[str] = None
    post_type: Optional[str] = None

class NotificationCreate(NotificationBase):
    user_id: str
    actor_id: Optional[str] = None  # ID of the user who triggered the notification

class NotificationUpdate(BaseModel):
    is_read: bool = True

class NotificationInDBBase(NotificationBase):
    id: str
    user_id: str
    is_read: bool
    created_at: datetime
    actor_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class Notification(NotificationInDBBase):
    """Notification model returned to client"""
    actor: Optional[UserSummary] = None
