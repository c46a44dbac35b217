from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status, Path, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.deps import get_current_user, get_post_type
from app.modules.user_management.models.user import User
from app.modules.posts.schemas.post import PostType
from app.modules.posts.services.post import get_post_of_type
from app.modules.posts.reactions.schemas.reaction import (
    Reaction as ReactionSchema, ReactionResult, ReactionSubmit
)
from app.modules.posts.reactions.services.reaction import (
    ReactionInputError, ReactionServerError,
    get_reaction, get_reactions_by_post, get_reaction_counts, submit_reaction
)

router = APIRouter()

def _validate_post(db: Session, post_id: str, post_type: PostType) -> None:
    """Validate a post of this type exists or raise HTTPException"""
    if not get_post_of_type(db, post_id, post_type):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

def _counts_or_error(db: Session, post_id: str, post_type: PostType) -> Dict[str, int]:
    try:
        return get_reaction_counts(db, post_id, post_type.value)
    except ReactionServerError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

@router.post("", response_model=ReactionResult)
def submit_post_reaction(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(..., description="The ID of the post to react to"),
    reaction_in: ReactionSubmit,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    React to a post. Sending the reaction you already left removes it,
    sending a different one replaces it.
    """
    _validate_post(db, post_id, post_type)

    try:
        action, reaction = submit_reaction(
            db, current_user.id, post_id, post_type.value, reaction_in.reaction_type
        )
    except ReactionInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ReactionServerError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return ReactionResult(
        action=action,
        reaction=ReactionSchema.model_validate(reaction) if reaction else None,
        counts=_counts_or_error(db, post_id, post_type),
    )

@router.get("", response_model=Dict[str, int])
def read_reaction_counts(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(..., description="The ID of the post to count reactions for"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get reaction counts by type for a post"""
    _validate_post(db, post_id, post_type)
    return _counts_or_error(db, post_id, post_type)

@router.get("/list", response_model=List[ReactionSchema])
def read_reactions(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(..., description="The ID of the post to get reactions for"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get individual reactions on a post"""
    _validate_post(db, post_id, post_type)
    return get_reactions_by_post(db, post_id, post_type.value, skip=skip, limit=limit)

@router.get("/me", response_model=ReactionSchema)
def read_my_reaction(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str = Path(..., description="The ID of the post"),
    current_user: User = Depends(get_current_user),
) -> Any:
    """Get the current user's reaction on a post"""
    _validate_post(db, post_id, post_type)
    reaction = get_reaction(db, current_user.id, post_id, post_type.value)
    if not reaction:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Reaction not found"
        )
    return reaction
