import os
import uuid
import logging
import traceback
from functools import lru_cache
from typing import List, Optional

import boto3
from fastapi import UploadFile, HTTPException

from .config import settings

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".gif"]

def check_extension(upload: UploadFile, allowed: List[str]) -> None:
    """Reject uploads whose extension is not in the allowed list"""
    file_extension = os.path.splitext(upload.filename or "")[1].lower()
    if file_extension not in allowed:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format. Please use one of: {', '.join(allowed)}"
        )

async def read_limited(upload: UploadFile) -> bytes:
    """Read an upload, refusing anything over MAX_UPLOAD_SIZE"""
    content = await upload.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=413, detail="File too large")
    return content

class R2Storage:
    """Handles file storage using Cloudflare R2, with a local directory fallback"""

    def __init__(self, client=None):
        """Initialize the R2 client with settings from config unless one is given"""
        self.client = client
        self.bucket = settings.R2_BUCKET_NAME
        self.public_url = settings.R2_PUBLIC_URL
        self.base_url = settings.BASE_URL
        self.upload_directory = settings.UPLOAD_DIRECTORY

        if self.client is not None:
            return

        logger.info("Initializing R2Storage with configuration:")
        logger.info(f"  Bucket: {self.bucket}")
        logger.info(f"  Public URL: {self.public_url}")
        logger.info(f"  Endpoint: {settings.R2_ENDPOINT}")
        logger.info(f"  Access Key ID: {settings.R2_ACCESS_KEY_ID[:5]}..." if settings.R2_ACCESS_KEY_ID else "  Access Key ID: Not set")

        if all([settings.R2_ENDPOINT, settings.R2_ACCESS_KEY_ID, settings.R2_SECRET_ACCESS_KEY]):
            try:
                self.client = boto3.client(
                    's3',
                    endpoint_url=settings.R2_ENDPOINT,
                    aws_access_key_id=settings.R2_ACCESS_KEY_ID,
                    aws_secret_access_key=settings.R2_SECRET_ACCESS_KEY
                )
                logger.info("R2Storage S3 client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to create S3 client: {str(e)}")
                logger.error(traceback.format_exc())
                logger.warning("R2 storage will not be available, using local storage")
        else:
            missing = [
                name for name, value in (
                    ("R2_ENDPOINT", settings.R2_ENDPOINT),
                    ("R2_ACCESS_KEY_ID", settings.R2_ACCESS_KEY_ID),
                    ("R2_SECRET_ACCESS_KEY", settings.R2_SECRET_ACCESS_KEY),
                ) if not value
            ]
            logger.warning(f"R2 storage not configured - missing: {', '.join(missing)}. Using local storage")

    @property
    def proxy_prefix(self) -> str:
        return f"{self.base_url}{settings.API_V1_STR}/media/"

    @property
    def static_prefix(self) -> str:
        return f"{self.base_url}{settings.API_V1_STR}/static/"

    async def upload_file(self, file: UploadFile, prefix: str, allowed_extensions: List[str]) -> str:
        """Check and upload an incoming form file, returning its public URL"""
        logger.info(f"[UPLOAD] Received file: {file.filename} (prefix: {prefix})")
        check_extension(file, allowed_extensions)
        content = await read_limited(file)
        return self.upload_bytes(content, file.filename or "", file.content_type, prefix)

    def upload_bytes(self, content: bytes, filename: str, content_type: Optional[str], prefix: str) -> str:
        """Store raw bytes under a unique key and return the public URL"""
        file_extension = os.path.splitext(filename)[1].lower()
        unique_filename = f"{uuid.uuid4().hex}{file_extension}"
        key = f"{prefix}/{unique_filename}"

        if not self.client:
            local_dir = os.path.join(self.upload_directory, prefix)
            os.makedirs(local_dir, exist_ok=True)
            local_path = os.path.join(local_dir, unique_filename)
            try:
                with open(local_path, "wb") as out_file:
                    out_file.write(content)
            except OSError as e:
                logger.error(f"[UPLOAD] Failed to save file locally: {str(e)}")
                raise HTTPException(status_code=500, detail="Failed to save file locally")
            logger.info(f"[UPLOAD] Saved file locally at {local_path}")
            return f"{self.static_prefix}{key}"

        logger.info(f"[UPLOAD] Uploading '{filename}' to R2 bucket '{self.bucket}' with key '{key}'")
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or 'application/octet-stream'
            )
        except Exception as e:
            logger.error(f"[UPLOAD] Failed to upload to R2: {str(e)}")
            logger.error(traceback.format_exc())
            raise HTTPException(status_code=500, detail="Failed to upload media")

        logger.info("[UPLOAD] Successfully uploaded file to R2")
        # If R2 public URL is configured, prefer that for direct access
        if self.public_url:
            return f"{self.public_url}/{key}"
        return f"{self.proxy_prefix}{key}"

    def key_from_url(self, url: str) -> Optional[str]:
        if self.public_url and url.startswith(f"{self.public_url}/"):
            return url[len(self.public_url) + 1:]
        if url.startswith(self.proxy_prefix):
            return url[len(self.proxy_prefix):]
        if url.startswith(self.static_prefix):
            return url[len(self.static_prefix):]
        return None

    def delete_file(self, url: str) -> bool:
        """Delete a stored file using its URL"""
        if not url:
            logger.error("No URL provided for file deletion")
            return False

        key = self.key_from_url(url)
        if key is None:
            # Default images and foreign URLs are not ours to delete
            logger.debug(f"URL {url} doesn't match any storage URL pattern")
            return False

        if not self.client:
            local_path = os.path.join(self.upload_directory, key)
            if os.path.exists(local_path):
                os.remove(local_path)
                logger.info(f"Deleted local file {local_path}")
                return True
            return False

        try:
            logger.info(f"Deleting file with key '{key}' from bucket '{self.bucket}'")
            self.client.delete_object(Bucket=self.bucket, Key=key)
            return True
        except Exception as e:
            logger.error(f"Failed to delete from R2: {str(e)}")
            return False

@lru_cache()
def get_media_storage() -> R2Storage:
    """Dependency returning the app-wide storage backend"""
    return R2Storage()
