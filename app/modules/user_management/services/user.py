from typing import Optional
import uuid
from sqlalchemy.orm import Session

from app.core.security import get_password_hash, verify_password
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate, UserUpdate

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get user by email"""
    return db.query(User).filter(User.email == email.lower()).first()

def create_user(db: Session, user_in: UserCreate) -> User:
    """Create a user with a hashed password"""
    user = User(
        id=str(uuid.uuid4()),
        email=user_in.email.lower(),
        full_name=user_in.full_name.strip(),
        hashed_password=get_password_hash(user_in.password),
        profile_image_url=user_in.profile_image_url,
        interested_fields=user_in.interested_fields or ["ALL"],
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user when the password matches"""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user

def update_user(db: Session, user: User, user_in: UserUpdate) -> User:
    """Update user"""
    update_data = user_in.model_dump(exclude_unset=True)

    # Handle password update separately to ensure proper hashing
    if update_data.get("password"):
        update_data["hashed_password"] = get_password_hash(update_data["password"])
    update_data.pop("password", None)

    for field, value in update_data.items():
        if value is not None:
            setattr(user, field, value)

    db.add(user)
    db.commit()
    db.refresh(user)

    return user
