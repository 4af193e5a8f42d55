"""
Listing Service - shaping and ownership rules for events and opportunities.

Shared by the public catalog routes and the college/company/admin
dashboards so every caller sees the same row shape:
- events carry their college summary (and sub-events on detail)
- opportunities carry their company summary
"""

from typing import Iterable, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from eventgo.db.query import fetch_all, fetch_one
from eventgo.db.tables import colleges, companies, events, opportunities, sub_events


def _college_summary(row: Optional[dict]) -> Optional[dict]:
    if not row:
        return None
    return {k: row[k] for k in ("id", "name", "city", "logo_url", "is_verified")}


def _company_summary(row: Optional[dict]) -> Optional[dict]:
    if not row:
        return None
    return {k: row[k] for k in ("id", "name", "logo_url", "industry", "is_verified")}


def event_out(db: Session, row: dict, with_sub_events: bool = False) -> dict:
    data = dict(row)
    data["tags"] = data.get("tags") or []
    data["college"] = _college_summary(fetch_one(db, colleges, id=row["college_id"]))
    data["sub_events"] = (
        fetch_all(db, sub_events, order_by="start_time", descending=False, event_id=row["id"])
        if with_sub_events else []
    )
    return data


def opportunity_out(db: Session, row: dict) -> dict:
    data = dict(row)
    data["skills_required"] = data.get("skills_required") or []
    data["company"] = _company_summary(
        fetch_one(db, companies, id=row["company_id"]) if row.get("company_id") else None
    )
    return data


def matches_search(search: Optional[str], fields: Iterable[Optional[str]]) -> bool:
    """Case-insensitive substring match against any of the fields."""
    if not search:
        return True
    needle = search.lower()
    return any(needle in (f or "").lower() for f in fields)


def bump_view_count(db: Session, table, row_id: str) -> None:
    db.execute(
        update(table).where(table.c.id == row_id).values(view_count=table.c.view_count + 1, updated_at=table.c.updated_at)
    )


def college_id_for(db: Session, user_id: str) -> Optional[str]:
    row = fetch_one(db, colleges, user_id=user_id)
    return row["id"] if row else None


def company_id_for(db: Session, user_id: str) -> Optional[str]:
    row = fetch_one(db, companies, user_id=user_id)
    return row["id"] if row else None


def can_manage_event(db: Session, user: Optional[dict], event: dict) -> bool:
    """Admins manage everything; a college manages its own events."""
    if not user:
        return False
    if user["role"] == "admin":
        return True
    return user["role"] == "college" and college_id_for(db, user["user_id"]) == event["college_id"]


def can_manage_opportunity(db: Session, user: Optional[dict], opportunity: dict) -> bool:
    """Admins, the creator, or the owning company."""
    if not user:
        return False
    if user["role"] == "admin" or opportunity.get("created_by") == user["user_id"]:
        return True
    return (
        user["role"] == "company"
        and opportunity.get("company_id") is not None
        and company_id_for(db, user["user_id"]) == opportunity["company_id"]
    )


def load_event(db: Session, event_id: str) -> Optional[dict]:
    return fetch_one(db, events, id=event_id)


def load_opportunity(db: Session, opportunity_id: str) -> Optional[dict]:
    return fetch_one(db, opportunities, id=opportunity_id)
