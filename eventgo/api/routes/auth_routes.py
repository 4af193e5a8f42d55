"""
Authentication Routes

POST /auth/signup - Create account (+ profile, role, organization) and get token
POST /auth/login - Login and get JWT token
GET /auth/user - Who does this token belong to (never 401s)
GET /auth/logout - Stateless logout
POST /auth/update-password - Change own password
POST /auth/password-strength - Check a candidate password
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from typing import Optional

from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_one, update_rows
from eventgo.db.tables import profiles, user_roles, users
from eventgo.core.auth import (
    verify_password, hash_password, token_for_user, get_current_user, get_optional_user
)
from eventgo.core.exceptions import EventGoError
from eventgo.core.passwords import validate_password, password_strength
from eventgo.services.account_service import create_account, auth_user_payload
from eventgo.schemas.schemas import (
    SignupRequest, LoginRequest, PasswordUpdateRequest, PasswordCheckRequest,
    PasswordCheckResponse, AuthResponse, AuthStatusResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(request: SignupRequest):
    """
    Register a new account and log it in.

    Colleges must send college_name, companies company_name; that row is
    created alongside the profile and role.
    """
    if request.role.value == "admin":
        raise HTTPException(status_code=403, detail="Admin accounts cannot be self-registered")

    ok, message = validate_password(request.password)
    if not ok:
        raise HTTPException(status_code=400, detail=message)

    if request.role.value == "college" and not request.college_name:
        raise HTTPException(status_code=400, detail="College name is required")
    if request.role.value == "company" and not request.company_name:
        raise HTTPException(status_code=400, detail="Company name is required")

    try:
        with get_db_session() as db:
            created = create_account(
                db,
                email=request.email,
                password=request.password,
                full_name=request.full_name,
                role=request.role.value,
                phone=request.phone,
                college_name=request.college_name,
                graduation_year=request.graduation_year,
                organization_name=request.company_name if request.role.value == "company" else request.college_name,
                city=request.city,
                industry=request.industry,
            )
    except EventGoError as e:
        raise HTTPException(status_code=400, detail=e.message)

    account = created["account"]
    token = token_for_user(account["id"], account["email"], created["role"])
    return AuthResponse(
        user=auth_user_payload(account, created["profile"], created["role"]),
        token=token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    with get_db_session() as db:
        account = fetch_one(db, users, email=request.email.lower())
        profile = fetch_one(db, profiles, user_id=account["id"]) if account else None
        role_row = fetch_one(db, user_roles, user_id=account["id"]) if account else None

    if not account or not verify_password(request.password, account["password_hash"]):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if profile and not profile["is_active"]:
        raise HTTPException(status_code=403, detail="Account deactivated")

    role = role_row["role"] if role_row else None
    token = token_for_user(account["id"], account["email"], role)
    logger.info("User %s logged in", account["id"])

    return AuthResponse(user=auth_user_payload(account, profile, role), token=token)


@router.get("/user", response_model=AuthStatusResponse)
async def current_user(user: Optional[dict] = Depends(get_optional_user)):
    """Resolve the bearer token. Unknown or expired tokens give authenticated=false."""
    if not user:
        return AuthStatusResponse(authenticated=False, user=None)

    with get_db_session() as db:
        account = fetch_one(db, users, id=user["user_id"])
        profile = fetch_one(db, profiles, user_id=user["user_id"])

    return AuthStatusResponse(
        authenticated=True,
        user=auth_user_payload(account, profile, user["role"]),
    )


@router.get("/logout")
async def logout():
    """Tokens are stateless; the client drops its copy."""
    return {"message": "Logged out successfully", "authenticated": False}


@router.post("/update-password", response_model=MessageResponse)
async def update_password(request: PasswordUpdateRequest, user: dict = Depends(get_current_user)):
    """Change password after re-checking the current one."""
    ok, message = validate_password(request.new_password)
    if not ok:
        raise HTTPException(status_code=400, detail=message)

    with get_db_session() as db:
        account = fetch_one(db, users, id=user["user_id"])
        if not verify_password(request.current_password, account["password_hash"]):
            raise HTTPException(status_code=400, detail="Current password is incorrect")
        update_rows(db, users, {"password_hash": hash_password(request.new_password)}, id=user["user_id"])

    return MessageResponse(message="Password updated successfully")


@router.post("/password-strength", response_model=PasswordCheckResponse)
async def check_password(request: PasswordCheckRequest):
    ok, message = validate_password(request.password)
    return PasswordCheckResponse(is_valid=ok, message=message, strength=password_strength(request.password))
