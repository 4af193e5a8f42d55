"""
MongoDB Connection Utility

MongoDB stores:
- Uploaded media (event banners, videos, opportunity images)
- Profile avatars

Objects live in GridFS, one GridFS bucket per storage bucket, so the
relational database only ever holds the public URL.
"""
import logging
from typing import Optional

from gridfs import GridFSBucket
from pymongo import MongoClient
from pymongo.database import Database

from eventgo.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None

# Storage bucket name constants (avoid typos)
BUCKETS = {
    "avatars": "avatars",
    "media": "media",
}


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the storage database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_gridfs_bucket(name: str, db: Optional[Database] = None) -> GridFSBucket:
    """GridFS bucket backing one storage bucket (in the app database unless db is given)."""
    if name not in BUCKETS:
        raise KeyError(name)
    return GridFSBucket(db if db is not None else get_mongo_db(), bucket_name=BUCKETS[name])


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_storage_indexes():
    """
    Index object paths for lookups by filename.
    Call this once during app startup.
    """
    db = get_mongo_db()
    for bucket in BUCKETS.values():
        db[f"{bucket}.files"].create_index("filename", unique=True)
    logger.info("Storage indexes created")
