from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.modules.home_feed.schemas.feed import FeedResponse
from app.modules.home_feed.services.feed import get_home_feed

router = APIRouter()

@router.get("", response_model=FeedResponse)
def read_home_feed(
    db: Session = Depends(get_db),
    limit: int = Query(20, ge=1, le=100),
) -> FeedResponse:
    """Latest posts of every content type, for the home page"""
    return get_home_feed(db, limit_per_type=limit)
