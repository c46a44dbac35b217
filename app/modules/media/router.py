from fastapi import APIRouter, Depends
from starlette.responses import Response

from app.core.config import settings
from app.core.storage import R2Storage, get_media_storage
from app.modules.media.service import MediaService

router = APIRouter(prefix=f"{settings.API_V1_STR}/media", tags=["media"])

def get_media_service(storage: R2Storage = Depends(get_media_storage)) -> MediaService:
    return MediaService(storage)

@router.get("/{path:path}")
def serve_media(path: str, media_service: MediaService = Depends(get_media_service)) -> Response:
    """Proxy an uploaded file"""
    return media_service.get_media(path)
