"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes and role-scoped access
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from eventgo.core.config import get_settings
from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_one
from eventgo.db.tables import colleges, companies, profiles, user_roles, users

logger = logging.getLogger(__name__)

settings = get_settings()

ROLES = ("student", "college", "company", "admin")

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractors
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def token_for_user(user_id: str, email: str, role: str) -> str:
    return create_access_token(data={"sub": user_id, "email": email, "role": role})


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def load_user(user_id: str) -> Optional[dict]:
    """Account + role + active flag, or None if the account is gone."""
    with get_db_session() as db:
        account = fetch_one(db, users, id=user_id)
        if not account:
            return None
        role_row = fetch_one(db, user_roles, user_id=user_id)
        profile = fetch_one(db, profiles, user_id=user_id)

    return {
        "user_id": account["id"],
        "email": account["email"],
        "role": role_row["role"] if role_row else None,
        "is_active": profile["is_active"] if profile else True,
    }


def _user_from_token(token: str) -> Optional[dict]:
    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        return None
    return load_user(payload["sub"])


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        async def route(user: dict = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user = _user_from_token(credentials.credentials)
    if not user:
        raise credentials_exception

    if not user["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer_scheme),
) -> Optional[dict]:
    """Dependency - the caller if a valid token was sent, else None."""
    if credentials is None:
        return None
    user = _user_from_token(credentials.credentials)
    if user and user["is_active"]:
        return user
    return None


async def get_current_admin(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require admin role."""
    if user["role"] != "admin":
        raise HTTPException(status_code=403, detail="Admins only")
    return user


async def get_current_college(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require college role and get college_id."""
    if user["role"] != "college":
        raise HTTPException(status_code=403, detail="Colleges only")

    with get_db_session() as db:
        row = fetch_one(db, colleges, user_id=user["user_id"])

    if not row:
        raise HTTPException(status_code=404, detail="College profile not found.")

    user["college_id"] = row["id"]
    return user


async def get_current_company(user: dict = Depends(get_current_user)) -> dict:
    """Dependency - Require company role and get company_id."""
    if user["role"] != "company":
        raise HTTPException(status_code=403, detail="Companies only")

    with get_db_session() as db:
        row = fetch_one(db, companies, user_id=user["user_id"])

    if not row:
        raise HTTPException(status_code=404, detail="Company profile not found.")

    user["company_id"] = row["id"]
    return user
