"""
Storage Routes

POST /api/storage/{bucket} - Upload an image/video (multipart: file, folder)
DELETE /api/storage/{bucket}/{path} - Remove an object (uploader or admin)
GET /storage/{bucket}/{path} - Public read
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import Response

from eventgo.core.auth import get_current_user
from eventgo.core.exceptions import NotFoundError, PermissionDeniedError
from eventgo.db.mongodb import BUCKETS
from eventgo.services.storage_service import get_storage, public_url
from eventgo.utils.file_upload import build_object_path, read_media_upload
from eventgo.schemas.schemas import UploadResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Storage"])


def _check_bucket(bucket: str) -> None:
    if bucket not in BUCKETS:
        raise NotFoundError("Bucket", bucket)


@router.post("/api/storage/{bucket}", response_model=UploadResponse, status_code=201)
async def upload_object(
    bucket: str,
    file: UploadFile = File(..., description="Image (max 5MB) or video (max 100MB)"),
    folder: str = Form("uploads"),
    user: dict = Depends(get_current_user),
    storage=Depends(get_storage)
):
    """
    Upload media and get its public URL.

    The caller stores the URL on whatever row it belongs to; the upload
    itself is not tied to any row.
    """
    _check_bucket(bucket)
    content, content_type, _ = await read_media_upload(file, images_only=(bucket == "avatars"))

    path = build_object_path(folder, file.filename)
    storage.upload(bucket, path, content, content_type, owner_id=user["user_id"])
    return UploadResponse(bucket=bucket, path=path, public_url=public_url(bucket, path))


@router.delete("/api/storage/{bucket}/{path:path}", response_model=MessageResponse)
async def delete_object(
    bucket: str,
    path: str,
    user: dict = Depends(get_current_user),
    storage=Depends(get_storage)
):
    _check_bucket(bucket)
    owner_id = storage.owner_of(bucket, path)
    if owner_id != user["user_id"] and user["role"] != "admin":
        raise PermissionDeniedError("You can only delete your own uploads")

    storage.remove(bucket, [path])
    logger.info("Removed %s/%s", bucket, path)
    return MessageResponse(message="Object deleted")


@router.get("/storage/{bucket}/{path:path}")
async def read_object(bucket: str, path: str, storage=Depends(get_storage)):
    """Serve an object's bytes. No auth."""
    _check_bucket(bucket)
    data, content_type = storage.open(bucket, path)
    return Response(content=data, media_type=content_type, headers={
        "Cache-Control": "public, max-age=3600",
        "X-Content-Type-Options": "nosniff",
    })
