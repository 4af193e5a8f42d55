"""
User / Profile Routes

GET /api/users - Directory of active profiles (connections page)
GET /api/users/{user_id} - Profile + role
PUT /api/users/{user_id} - Update profile (owner or admin)
POST /api/users/{user_id}/avatar - Upload avatar (owner)
DELETE /api/users/{user_id}/avatar - Remove avatar (owner)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, File, Query, UploadFile
from typing import List, Optional

from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_all, fetch_one, update_row
from eventgo.db.tables import profiles, user_roles
from eventgo.core.auth import get_current_user
from eventgo.core.exceptions import EventGoError
from eventgo.services.storage_service import get_storage, public_url, path_from_public_url
from eventgo.utils.file_upload import build_object_path, read_media_upload
from eventgo.schemas.schemas import ProfileUpdate, ProfileResponse, UserDetailResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

AVATAR_BUCKET = "avatars"


def ensure_self_or_admin(user: dict, user_id: str) -> None:
    if user["user_id"] != user_id and user["role"] != "admin":
        raise HTTPException(status_code=403, detail="You can only modify your own profile")


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(
    search: Optional[str] = Query(None, description="Match name, email or college"),
    user: dict = Depends(get_current_user)
):
    """Active profiles other than the caller's own."""
    with get_db_session() as db:
        rows = fetch_all(db, profiles, profiles.c.user_id != user["user_id"],
                         order_by="full_name", descending=False, is_active=True)

    if search:
        needle = search.lower()
        rows = [
            r for r in rows
            if needle in r["full_name"].lower()
            or needle in r["email"].lower()
            or needle in (r["college_name"] or "").lower()
        ]
    return [ProfileResponse(**r) for r in rows]


@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(user_id: str, user: dict = Depends(get_current_user)):
    """Profile and role for any account."""
    with get_db_session() as db:
        profile = fetch_one(db, profiles, user_id=user_id)
        role_row = fetch_one(db, user_roles, user_id=user_id)

    if not profile:
        raise HTTPException(status_code=404, detail="User not found")

    return UserDetailResponse(profile=ProfileResponse(**profile), role=role_row["role"] if role_row else None)


@router.put("/{user_id}", response_model=ProfileResponse)
async def update_user(user_id: str, data: ProfileUpdate, user: dict = Depends(get_current_user)):
    """Update profile. Only provided fields are updated."""
    ensure_self_or_admin(user, user_id)

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    with get_db_session() as db:
        profile = fetch_one(db, profiles, user_id=user_id)
        if not profile:
            raise HTTPException(status_code=404, detail="User not found")
        profile = update_row(db, profiles, profile["id"], updates)

    return ProfileResponse(**profile)


def _discard_avatar(storage, avatar_url) -> None:
    """Best-effort removal of a stored avatar; failures are only logged."""
    path = path_from_public_url(AVATAR_BUCKET, avatar_url)
    if not path:
        return
    try:
        storage.remove(AVATAR_BUCKET, [path])
    except EventGoError as e:
        logger.warning("Could not delete old avatar %s: %s", path, e.message)


@router.post("/{user_id}/avatar", response_model=ProfileResponse)
async def upload_avatar(
    user_id: str,
    file: UploadFile = File(..., description="Avatar image (max 5MB)"),
    user: dict = Depends(get_current_user),
    storage=Depends(get_storage)
):
    """
    Replace the profile photo.

    Process:
    1. Remove the previous avatar object (failures ignored)
    2. Upload the new image to the avatars bucket
    3. Store its public URL on the profile
    """
    if user["user_id"] != user_id:
        raise HTTPException(status_code=403, detail="You can only change your own avatar")

    content, content_type, _ = await read_media_upload(file, images_only=True)

    with get_db_session() as db:
        profile = fetch_one(db, profiles, user_id=user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")

    _discard_avatar(storage, profile["avatar_url"])

    path = build_object_path(user_id, file.filename)
    try:
        storage.upload(AVATAR_BUCKET, path, content, content_type, owner_id=user_id)
    except EventGoError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    with get_db_session() as db:
        profile = update_row(db, profiles, profile["id"], {"avatar_url": public_url(AVATAR_BUCKET, path)})

    return ProfileResponse(**profile)


@router.delete("/{user_id}/avatar", response_model=ProfileResponse)
async def remove_avatar(user_id: str, user: dict = Depends(get_current_user), storage=Depends(get_storage)):
    """Drop the profile photo and clear avatar_url."""
    if user["user_id"] != user_id:
        raise HTTPException(status_code=403, detail="You can only change your own avatar")

    with get_db_session() as db:
        profile = fetch_one(db, profiles, user_id=user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")

    _discard_avatar(storage, profile["avatar_url"])

    with get_db_session() as db:
        profile = update_row(db, profiles, profile["id"], {"avatar_url": None})

    return ProfileResponse(**profile)
