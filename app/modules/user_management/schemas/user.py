from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr

class UserBase(BaseModel):
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    interested_fields: List[str] = ["ALL"]

class UserCreate(BaseModel):
    email: EmailStr
    full_name: str
    password: str
    interested_fields: List[str] = ["ALL"]
    profile_image_url: Optional[str] = None

class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    interested_fields: Optional[List[str]] = None
    password: Optional[str] = None

class UserInDBBase(UserBase):
    id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class User(UserInDBBase):
    """User model returned to client"""
    pass

class UserSummary(BaseModel):
    """Author block embedded in posts and comments"""
    id: str
    full_name: str
    profile_image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
