"""Authentication router: sign-up, sign-in and logout"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import create_access_token
from app.core.storage import R2Storage, get_media_storage
from app.db.session import get_db
from app.modules.auth.schemas.auth import SignInRequest, Token
from app.modules.auth.services.auth import EmailAlreadyRegistered, register_user
from app.modules.user_management.schemas.user import User as UserSchema
from app.modules.user_management.services.user import authenticate

router = APIRouter()

@router.post("/signup", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
async def signup(
    *,
    db: Session = Depends(get_db),
    storage: R2Storage = Depends(get_media_storage),
    full_name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    interested_fields: Optional[List[str]] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
) -> UserSchema:
    """Create an account"""
    if not full_name.strip() or not email.strip() or not password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="All fields are required."
        )
    try:
        user = await register_user(
            db, storage, full_name, email, password, interested_fields, profile_image
        )
    except EmailAlreadyRegistered:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email address"
        )
    return user

@router.post("/signin", response_model=Token)
def signin(
    *,
    db: Session = Depends(get_db),
    response: Response,
    credentials: SignInRequest,
) -> Token:
    """Exchange email and password for an access token, also set as a cookie"""
    user = authenticate(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect Email or Password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )

    access_token = create_access_token(user.id)
    response.set_cookie(
        settings.TOKEN_COOKIE_NAME,
        access_token,
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        samesite="lax",
    )
    return Token(access_token=access_token)

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(response: Response) -> None:
    """Forget the token cookie"""
    response.delete_cookie(settings.TOKEN_COOKIE_NAME)
