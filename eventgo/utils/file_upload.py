"""
File Upload Utility - validate media uploads before they hit storage.

Limits:
- Images (.jpg, .jpeg, .png, .gif, .webp): 5MB
- Videos (.mp4, .webm, .mov): 100MB

Avatars must be images.
"""

import secrets
import time
from typing import Optional, Tuple
from fastapi import UploadFile, HTTPException


MAX_IMAGE_SIZE_MB = 5
MAX_VIDEO_SIZE_MB = 100
MAX_IMAGE_SIZE_BYTES = MAX_IMAGE_SIZE_MB * 1024 * 1024
MAX_VIDEO_SIZE_BYTES = MAX_VIDEO_SIZE_MB * 1024 * 1024

CONTENT_TYPES = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.webp': 'image/webp',
    '.mp4': 'video/mp4',
    '.webm': 'video/webm',
    '.mov': 'video/quicktime',
}

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif', '.webp'}
VIDEO_EXTENSIONS = {'.mp4', '.webm', '.mov'}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def media_kind(filename: str) -> Optional[str]:
    """Classify an upload as 'image' or 'video' by extension (None if neither)."""
    ext = get_file_extension(filename)
    if ext in IMAGE_EXTENSIONS:
        return 'image'
    if ext in VIDEO_EXTENSIONS:
        return 'video'
    return None


def build_object_path(folder: str, filename: str) -> str:
    """Unique object path: {folder}/{millis}-{random}.{ext}"""
    ext = get_file_extension(filename).lstrip('.') or 'bin'
    folder = folder.strip('/') or 'uploads'
    return f"{folder}/{int(time.time() * 1000)}-{secrets.token_hex(4)}.{ext}"


async def read_media_upload(file: UploadFile, images_only: bool = False) -> Tuple[bytes, str, str]:
    """
    Read and validate an uploaded media file.

    Args:
        file: FastAPI UploadFile
        images_only: reject videos (avatar uploads)

    Returns:
        Tuple of (content, content_type, kind)

    Raises:
        HTTPException on validation errors
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    kind = media_kind(file.filename)
    if kind is None or (images_only and kind != 'image'):
        allowed = "an image" if images_only else "an image or video"
        raise HTTPException(status_code=400, detail=f"Invalid file type. Please upload {allowed}.")

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="File is empty")

    limit = MAX_IMAGE_SIZE_BYTES if kind == 'image' else MAX_VIDEO_SIZE_BYTES
    if len(content) > limit:
        max_mb = MAX_IMAGE_SIZE_MB if kind == 'image' else MAX_VIDEO_SIZE_MB
        raise HTTPException(status_code=413, detail=f"File too large. Maximum size is {max_mb}MB")

    # the stored type comes from the extension, never the client header
    return content, CONTENT_TYPES[get_file_extension(file.filename)], kind
