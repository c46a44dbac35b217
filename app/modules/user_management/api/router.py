from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
import logging

from app.db.session import get_db
from app.deps import get_current_user
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.profile import Profile
from app.modules.user_management.schemas.user import User as UserSchema, UserUpdate
from app.modules.user_management.services.user import get_user, update_user
from app.modules.posts.schemas.post import Post as PostSchema
from app.modules.posts.services.post import get_user_posts, get_user_posts_grouped

router = APIRouter()
logger = logging.getLogger("app")

def _validate_user(db: Session, user_id: str) -> User:
    user = get_user(db, user_id=user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user

@router.get("/me", response_model=UserSchema)
def read_user_me(current_user: User = Depends(get_current_user)) -> Any:
    """Get current user"""
    return current_user

@router.put("/me", response_model=UserSchema)
def update_user_me(
    *,
    db: Session = Depends(get_db),
    user_in: UserUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """Update own profile"""
    logger.info(f"Updating profile of user {current_user.id}")
    return update_user(db, current_user, user_in)

@router.get("/profile", response_model=Profile)
def read_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Current user with everything they posted"""
    return Profile(
        user=UserSchema.model_validate(current_user),
        posts=get_user_posts_grouped(db, current_user.id),
    )

@router.get("/{user_id}", response_model=UserSchema)
def read_user_by_id(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get a specific user by id"""
    return _validate_user(db, user_id)

@router.get("/{user_id}/posts", response_model=List[PostSchema])
def read_user_posts(
    user_id: str,
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Posts created by a user, newest first"""
    _validate_user(db, user_id)
    return get_user_posts(db, user_id=user_id, skip=skip, limit=limit)
