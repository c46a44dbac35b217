import logging
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.storage import IMAGE_EXTENSIONS, R2Storage
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate
from app.modules.user_management.services.user import create_user, get_user_by_email

logger = logging.getLogger("app")

class EmailAlreadyRegistered(Exception):
    pass

async def register_user(
    db: Session,
    storage: R2Storage,
    full_name: str,
    email: str,
    password: str,
    interested_fields: Optional[List[str]] = None,
    profile_image: Optional[UploadFile] = None,
) -> User:
    """Create an account, storing the profile image if one was sent"""
    if get_user_by_email(db, email):
        raise EmailAlreadyRegistered(email)

    user_in = UserCreate(
        email=email,
        full_name=full_name,
        password=password,
        interested_fields=[f for f in (interested_fields or []) if f] or ["ALL"],
        profile_image_url=settings.DEFAULT_PROFILE_IMAGE_URL,
    )
    if profile_image is not None and profile_image.filename:
        user_in.profile_image_url = await storage.upload_file(
            profile_image, "profile_images", IMAGE_EXTENSIONS
        )

    user = create_user(db, user_in)
    logger.info(f"Registered user {user.id}")
    return user
