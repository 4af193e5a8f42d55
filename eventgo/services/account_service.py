"""
Account Service - creates the rows that make up one account.

An account is four rows: users (credentials), profiles, user_roles and,
for organizational roles, a colleges/companies row. Signup and the admin
"create user" dialog both go through create_account(); the caller's
session decides whether they commit together.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from eventgo.core.auth import hash_password
from eventgo.core.exceptions import EventGoError
from eventgo.db.query import fetch_one, insert_row
from eventgo.db.tables import colleges, companies, profiles, user_roles, users

logger = logging.getLogger(__name__)


def create_account(
    db: Session,
    email: str,
    password: str,
    full_name: str,
    role: str,
    phone: Optional[str] = None,
    college_name: Optional[str] = None,
    graduation_year: Optional[int] = None,
    organization_name: Optional[str] = None,
    city: Optional[str] = None,
    industry: Optional[str] = None,
) -> dict:
    """
    Create account + profile + role (+ organization).

    For role 'college' the organization name falls back to college_name;
    for 'company' it must be given as organization_name. A missing
    organization name raises before anything is committed.

    Returns:
        dict with keys account, profile, role, organization (may be None)

    Raises:
        EventGoError if the email is taken or the organization name is missing
    """
    email = email.lower()
    if fetch_one(db, users, email=email):
        raise EventGoError("Email already registered")

    account = insert_row(db, users, {
        "email": email,
        "password_hash": hash_password(password),
    })

    profile_data = {
        "user_id": account["id"],
        "full_name": full_name,
        "email": email,
        "phone": phone,
        "skills": [],
    }
    if role == "student":
        profile_data["college_name"] = college_name
        profile_data["graduation_year"] = graduation_year
    profile = insert_row(db, profiles, profile_data)

    insert_row(db, user_roles, {"user_id": account["id"], "role": role})

    organization = None
    if role == "college":
        name = organization_name or college_name
        if not name:
            raise EventGoError("College name is required")
        organization = insert_row(db, colleges, {
            "user_id": account["id"],
            "name": name,
            "city": city,
        })
    elif role == "company":
        if not organization_name:
            raise EventGoError("Company name is required")
        organization = insert_row(db, companies, {
            "user_id": account["id"],
            "name": organization_name,
            "industry": industry,
        })

    logger.info("Created %s account %s", role, account["id"])
    return {"account": account, "profile": profile, "role": role, "organization": organization}


def auth_user_payload(account: dict, profile: Optional[dict], role: Optional[str]) -> dict:
    """The `user` object returned by the auth endpoints (never the hash)."""
    return {
        "id": account["id"],
        "email": account["email"],
        "full_name": profile["full_name"] if profile else None,
        "role": role,
        "created_at": account["created_at"],
    }
