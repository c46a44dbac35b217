from typing import Any, List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form, Query
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.storage import (
    IMAGE_EXTENSIONS, R2Storage, get_media_storage, read_limited
)
from app.db.session import get_db
from app.deps import get_current_user, get_post_type
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserSummary
from app.modules.user_management.services.user import get_user
from app.modules.posts.models.post import Post
from app.modules.posts.schemas.post import (
    Post as PostSchema, PostCreate, PostDetail, PostType, PostUpdate, PostWithCounts
)
from app.modules.posts.services.post import (
    get_post_of_type, get_posts_with_counts, create_post, update_post, delete_post, media_urls
)
from app.modules.posts.comments.services.comment import get_comments_with_authors
from app.modules.posts.reactions.services.reaction import get_reaction, get_reaction_counts

logger = logging.getLogger(__name__)

router = APIRouter()

VIDEO_EXTENSIONS = [".mp4", ".mov", ".webm", ".mp3", ".wav"]

# cover image required, media file rule ("required", "optional", None)
UPLOAD_RULES = {
    PostType.code: (False, "required"),
    PostType.dance: (False, "optional"),
    PostType.game: (False, "required"),
    PostType.song: (False, "optional"),
    PostType.painting: (True, None),
    PostType.photo: (True, None),
}

def _present(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)

async def _build_post(
    post_type: PostType,
    title: str,
    body: str,
    cover_image: Optional[UploadFile],
    media_file: Optional[UploadFile],
    storage: R2Storage,
) -> PostCreate:
    """Apply the per-type upload rules and push files to media storage"""
    cover_required, media_rule = UPLOAD_RULES[post_type]

    if not title.strip() or not body.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title and body are required")
    if cover_required and not _present(cover_image):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cover image is required")
    if media_rule == "required" and not _present(media_file):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Media file is required")
    if media_rule is None and _present(media_file):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{post_type.value} posts do not take a media file"
        )

    post_in = PostCreate(post_type=post_type, title=title.strip(), body=body.strip())

    if _present(cover_image):
        post_in.cover_image_url = await storage.upload_file(
            cover_image, f"{post_type.value}_images", IMAGE_EXTENSIONS
        )
    else:
        post_in.cover_image_url = settings.DEFAULT_COVER_IMAGE_URL

    if _present(media_file) and post_type == PostType.code:
        content = await read_limited(media_file)
        try:
            post_in.code_text = content.decode("utf-8")
        except UnicodeDecodeError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Code file must be UTF-8 text"
            )
        post_in.code_file_url = storage.upload_bytes(
            content, media_file.filename, "text/plain", "code_files"
        )
    elif _present(media_file):
        post_in.video_url = await storage.upload_file(
            media_file, f"{post_type.value}_videos", VIDEO_EXTENSIONS
        )

    return post_in

def _validate_post(db: Session, post_id: str, post_type: PostType) -> Post:
    post = get_post_of_type(db, post_id, post_type)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
        )
    return post

def _validate_ownership(post: Post, user: User) -> None:
    if post.author_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions",
        )

@router.get("", response_model=List[PostWithCounts])
def read_posts(
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=200),
) -> Any:
    """
    Retrieve posts of one type with comment and reaction counts.
    """
    return get_posts_with_counts(db, post_type, skip=skip, limit=limit)

@router.post("", response_model=PostSchema, status_code=status.HTTP_201_CREATED)
async def create_new_post(
    *,
    db: Session = Depends(get_db),
    storage: R2Storage = Depends(get_media_storage),
    post_type: PostType = Depends(get_post_type),
    title: str = Form(...),
    body: str = Form(...),
    cover_image: Optional[UploadFile] = File(None),
    media_file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Create new post. Which files are accepted depends on the post type.
    """
    post_in = await _build_post(post_type, title, body, cover_image, media_file, storage)
    try:
        return create_post(db, post_in, current_user.id)
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create {post_type.value} post: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post"
        )

@router.get("/{post_id}", response_model=PostDetail)
def read_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Get a post with its author, comments, reaction counts and the caller's
    own reaction.
    """
    post = _validate_post(db, post_id, post_type)
    author = get_user(db, post.author_id)
    mine = get_reaction(db, current_user.id, post.id, post_type.value)

    detail = PostDetail.model_validate(post)
    detail.author = UserSummary.model_validate(author) if author else None
    detail.comments = get_comments_with_authors(db, post.id)
    detail.reaction_counts = get_reaction_counts(db, post.id, post_type.value)
    detail.my_reaction = mine.reaction_type if mine else None
    return detail

@router.put("/{post_id}", response_model=PostSchema)
def update_post_by_id(
    *,
    db: Session = Depends(get_db),
    post_type: PostType = Depends(get_post_type),
    post_id: str,
    post_in: PostUpdate,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Update a post's title or body.
    """
    post = _validate_post(db, post_id, post_type)
    _validate_ownership(post, current_user)
    return update_post(db, post, post_in)

@router.delete("/{post_id}", response_model=PostSchema)
def delete_post_by_id(
    *,
    db: Session = Depends(get_db),
    storage: R2Storage = Depends(get_media_storage),
    post_type: PostType = Depends(get_post_type),
    post_id: str,
    current_user: User = Depends(get_current_user),
) -> Any:
    """
    Delete a post and all associated data:
    1. All reactions on this post
    2. All comments on this post and their notifications
    3. The post itself, then its uploaded files
    """
    post = _validate_post(db, post_id, post_type)
    _validate_ownership(post, current_user)

    response = PostSchema.model_validate(post)
    urls = media_urls(post)
    delete_post(db, post)

    for url in urls:
        if url != settings.DEFAULT_COVER_IMAGE_URL and not storage.delete_file(url):
            logger.warning(f"Could not delete media {url} of post {post_id}")

    return response
