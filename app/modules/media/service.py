import logging
import mimetypes
from pathlib import Path

from fastapi import HTTPException
from fastapi.responses import FileResponse
from starlette.responses import Response, StreamingResponse

from app.core.storage import R2Storage

logger = logging.getLogger(__name__)

CACHE_HEADERS = {"Cache-Control": "public, max-age=86400"}

class MediaService:
    def __init__(self, storage: R2Storage):
        self.storage = storage

    def get_media(self, path: str) -> Response:
        """Serve a stored object from R2, or from local uploads when R2 is off"""
        if ".." in Path(path).parts:
            raise HTTPException(status_code=400, detail="Invalid media path")

        if self.storage.client:
            try:
                obj = self.storage.client.get_object(Bucket=self.storage.bucket, Key=path)
            except self.storage.client.exceptions.NoSuchKey:
                raise HTTPException(status_code=404, detail="File not found")
            except Exception as e:
                logger.error(f"Failed to retrieve file {path} from R2: {str(e)}")
                raise HTTPException(status_code=500, detail="Failed to retrieve media file")

            logger.debug(f"Serving {path} from R2")
            return StreamingResponse(
                obj["Body"].iter_chunks(),
                media_type=obj.get("ContentType") or "application/octet-stream",
                headers=CACHE_HEADERS,
            )

        file_path = Path(self.storage.upload_directory) / path
        if not file_path.is_file():
            logger.warning(f"File {path} not found in local storage")
            raise HTTPException(status_code=404, detail="File not found")

        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        return FileResponse(file_path, media_type=content_type, headers=CACHE_HEADERS)
