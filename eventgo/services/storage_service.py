"""
Object Storage Service - bucket-scoped upload/remove/public-URL.

Buckets:
1. avatars - profile photos, one folder per user
2. media   - event banners/videos and opportunity images

Uploading bytes and writing the resulting URL onto a row are separate
steps; nothing ties them together.
"""

import logging
from typing import Iterable, Optional, Tuple

from gridfs.errors import NoFile
from pymongo.database import Database
from pymongo.errors import PyMongoError

from eventgo.core.config import get_settings
from eventgo.core.exceptions import NotFoundError, StorageError
from eventgo.db.mongodb import BUCKETS, get_gridfs_bucket

logger = logging.getLogger(__name__)

settings = get_settings()


def public_url(bucket: str, path: str) -> str:
    """Public URL for an object. Served by the /storage route."""
    return f"{settings.public_base_url.rstrip('/')}/storage/{bucket}/{path}"


def path_from_public_url(bucket: str, url: str) -> Optional[str]:
    """Reverse of public_url(); None if the URL is not one of ours."""
    marker = f"/storage/{bucket}/"
    if not url or marker not in url:
        return None
    return url.split(marker, 1)[1] or None


class GridFSStorage:
    """
    Object storage backed by MongoDB GridFS.
    Each object's filename is its path inside the bucket.

    Driver errors surface as StorageError.
    """

    def __init__(self, db: Optional[Database] = None):
        self.db = db

    def _bucket(self, bucket: str):
        if bucket not in BUCKETS:
            raise NotFoundError("Bucket", bucket)
        return get_gridfs_bucket(bucket, self.db)

    def upload(self, bucket: str, path: str, data: bytes, content_type: str, owner_id: str) -> str:
        """
        Store bytes under path. Refuses to overwrite an existing object.

        Returns:
            The stored path.
        """
        fs = self._bucket(bucket)
        if self.exists(bucket, path):
            raise StorageError(f"Object '{path}' already exists")
        try:
            fs.upload_from_stream(
                path,
                data,
                metadata={"content_type": content_type, "owner_id": owner_id},
            )
        except PyMongoError as e:
            logger.error("Upload to %s/%s failed: %s", bucket, path, e)
            raise StorageError(f"Upload failed: {e}")
        logger.info("Stored %s/%s (%d bytes)", bucket, path, len(data))
        return path

    def _find_first(self, bucket: str, path: str):
        fs = self._bucket(bucket)
        try:
            for grid_out in fs.find({"filename": path}).limit(1):
                return grid_out
        except PyMongoError as e:
            raise StorageError(f"Lookup failed: {e}")
        return None

    def exists(self, bucket: str, path: str) -> bool:
        return self._find_first(bucket, path) is not None

    def owner_of(self, bucket: str, path: str) -> Optional[str]:
        grid_out = self._find_first(bucket, path)
        if grid_out is None:
            raise NotFoundError("Object", path)
        return (grid_out.metadata or {}).get("owner_id")

    def open(self, bucket: str, path: str) -> Tuple[bytes, str]:
        """Read an object back. Returns (data, content_type)."""
        fs = self._bucket(bucket)
        try:
            stream = fs.open_download_stream_by_name(path)
            data = stream.read()
        except NoFile:
            raise NotFoundError("Object", path)
        except PyMongoError as e:
            raise StorageError(f"Read failed: {e}")
        content_type = (stream.metadata or {}).get("content_type", "application/octet-stream")
        return data, content_type

    def remove(self, bucket: str, paths: Iterable[str]) -> int:
        """Delete objects; missing paths are skipped. Returns count removed."""
        fs = self._bucket(bucket)
        removed = 0
        try:
            for path in paths:
                for grid_out in fs.find({"filename": path}):
                    fs.delete(grid_out._id)
                    removed += 1
        except PyMongoError as e:
            logger.error("Remove from %s failed: %s", bucket, e)
            raise StorageError(f"Remove failed: {e}")
        return removed



_storage: GridFSStorage = None


def get_storage() -> GridFSStorage:
    """FastAPI dependency - shared storage backend."""
    global _storage
    if _storage is None:
        _storage = GridFSStorage()
    return _storage
