"""
Reaction ledger.

Keeps at most one reaction per (user, post, post type) and aggregates
counts per reaction type. Submitting the same reaction twice removes it,
submitting a different one switches it.
"""
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import uuid

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.modules.posts.reactions.models.reaction import Reaction
from app.modules.posts.reactions.schemas.reaction import ReactionAction, ReactionType
from app.modules.posts.schemas.post import PostType

logger = logging.getLogger(__name__)

class ReactionInputError(ValueError):
    """Reaction type or post type outside its enumerated set"""

class ReactionServerError(RuntimeError):
    """The reaction store failed while reading or writing"""

def _parse_reaction_type(reaction_type: str) -> ReactionType:
    try:
        return ReactionType(reaction_type)
    except ValueError:
        allowed = ", ".join(t.value for t in ReactionType)
        raise ReactionInputError(f"Reaction type must be one of: {allowed}")

def _parse_post_type(post_type: str) -> PostType:
    try:
        return PostType(post_type)
    except ValueError:
        allowed = ", ".join(t.value for t in PostType)
        raise ReactionInputError(f"Post type must be one of: {allowed}")

def _key(user_id: str, post_id: str, post_type: PostType) -> tuple:
    return (
        Reaction.user_id == user_id,
        Reaction.post_id == post_id,
        Reaction.post_type == post_type.value,
    )

def get_reaction(db: Session, user_id: str, post_id: str, post_type: str) -> Optional[Reaction]:
    """Get the reaction a user left on a post"""
    kind = _parse_post_type(post_type)
    return db.query(Reaction).filter(*_key(user_id, post_id, kind)).first()

def get_reactions_by_post(db: Session, post_id: str, post_type: str, skip: int = 0, limit: int = 100) -> List[Reaction]:
    """Get reactions on a post, newest first"""
    kind = _parse_post_type(post_type)
    return (
        db.query(Reaction)
        .filter(Reaction.post_id == post_id, Reaction.post_type == kind.value)
        .order_by(Reaction.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )

def _toggle_or_switch(
    db: Session, user_id: str, post_id: str, post_type: PostType, reaction_type: ReactionType
) -> Optional[Tuple[ReactionAction, Optional[Reaction]]]:
    """Apply the transition for an existing row. None means there was no row."""
    key = _key(user_id, post_id, post_type)

    removed = (
        db.query(Reaction)
        .filter(*key, Reaction.reaction_type == reaction_type.value)
        .delete(synchronize_session=False)
    )
    if removed:
        db.commit()
        return ReactionAction.removed, None

    updated = (
        db.query(Reaction)
        .filter(*key)
        .update(
            {Reaction.reaction_type: reaction_type.value, Reaction.updated_at: func.now()},
            synchronize_session=False,
        )
    )
    if updated:
        db.commit()
        reaction = db.query(Reaction).filter(*key).first()
        return ReactionAction.updated, reaction

    return None

def submit_reaction(
    db: Session, user_id: str, post_id: str, post_type: str, reaction_type: str
) -> Tuple[ReactionAction, Optional[Reaction]]:
    """
    Apply one reaction submission.

    Args:
        db: Database session
        user_id: ID of the reacting user, trusted from the auth layer
        post_id: ID of the post reacted to
        post_type: content type of the post
        reaction_type: one of like, love, care, angry, sad

    Returns:
        The action taken and the surviving reaction (None when removed)

    Raises:
        ReactionInputError: unknown reaction type or post type
        ReactionServerError: the database failed
    """
    reaction_kind = _parse_reaction_type(reaction_type)
    post_kind = _parse_post_type(post_type)

    try:
        outcome = _toggle_or_switch(db, user_id, post_id, post_kind, reaction_kind)
        if outcome is not None:
            logger.info(f"Reaction {outcome[0].value} for user {user_id} on {post_kind.value} {post_id}")
            return outcome

        reaction = Reaction(
            id=str(uuid.uuid4()),
            reaction_type=reaction_kind.value,
            post_type=post_kind.value,
            post_id=post_id,
            user_id=user_id,
        )
        db.add(reaction)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request created the row first, apply against it
            db.rollback()
            logger.info(f"Reaction insert raced for user {user_id} on {post_kind.value} {post_id}")
            outcome = _toggle_or_switch(db, user_id, post_id, post_kind, reaction_kind)
            if outcome is None:
                raise ReactionServerError("Reaction could not be stored")
            return outcome

        db.refresh(reaction)
        logger.info(f"Reaction created for user {user_id} on {post_kind.value} {post_id}")
        return ReactionAction.created, reaction
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error storing reaction for user {user_id} on {post_kind.value} {post_id}: {e}")
        raise ReactionServerError("Reaction could not be stored") from e

def get_reaction_counts(db: Session, post_id: str, post_type: str) -> Dict[str, int]:
    """Count reactions by type for a post. Types nobody used are left out."""
    post_kind = _parse_post_type(post_type)
    try:
        counts = (
            db.query(Reaction.reaction_type, func.count(Reaction.id))
            .filter(Reaction.post_id == post_id, Reaction.post_type == post_kind.value)
            .group_by(Reaction.reaction_type)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Error counting reactions on {post_kind.value} {post_id}: {e}")
        raise ReactionServerError("Reaction counts unavailable") from e

    return {reaction_type: count for reaction_type, count in counts}

def get_reaction_totals(db: Session, post_ids: Iterable[str]) -> Dict[str, int]:
    """Total reactions per post, for list views"""
    post_ids = list(post_ids)
    if not post_ids:
        return {}
    rows = (
        db.query(Reaction.post_id, func.count(Reaction.id))
        .filter(Reaction.post_id.in_(post_ids))
        .group_by(Reaction.post_id)
        .all()
    )
    return {post_id: count for post_id, count in rows}
