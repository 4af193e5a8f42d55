"""
Inquiry Routes

POST /api/inquiries - Ask about an event or opportunity
GET /api/inquiries - Inbox: inquiries about the caller's listings (admin: all)
GET /api/inquiries/sent - Inquiries the caller sent
PUT /api/inquiries/{id}/read - Mark as read (owner or admin)
PUT /api/inquiries/{id}/reply - Mark as replied (owner or admin)
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from sqlalchemy import or_
from typing import List

from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_all, fetch_one, insert_row, update_row
from eventgo.db.tables import events, inquiries, opportunities, profiles, utcnow
from eventgo.core.auth import get_current_user
from eventgo.services.listing_service import (
    can_manage_event, can_manage_opportunity, college_id_for, company_id_for, load_event, load_opportunity
)
from eventgo.schemas.schemas import InquiryCreate, InquiryResponse

router = APIRouter(prefix="/api/inquiries", tags=["Inquiries"])


def inquiry_out(db, row: dict) -> InquiryResponse:
    event = load_event(db, row["event_id"]) if row["event_id"] else None
    opportunity = load_opportunity(db, row["opportunity_id"]) if row["opportunity_id"] else None
    return InquiryResponse(
        **row,
        event_title=event["title"] if event else None,
        opportunity_title=opportunity["title"] if opportunity else None,
    )


def _owned_listing_ids(db, user: dict):
    """Event and opportunity ids whose inquiries land in this user's inbox."""
    event_ids, opportunity_ids = [], []

    college_id = college_id_for(db, user["user_id"]) if user["role"] == "college" else None
    if college_id:
        event_ids = [e["id"] for e in fetch_all(db, events, college_id=college_id)]

    owned = [opportunities.c.created_by == user["user_id"]]
    company_id = company_id_for(db, user["user_id"]) if user["role"] == "company" else None
    if company_id:
        owned.append(opportunities.c.company_id == company_id)
    opportunity_ids = [o["id"] for o in fetch_all(db, opportunities, or_(*owned))]

    return event_ids, opportunity_ids


def _get_owned_inquiry(db, inquiry_id: str, user: dict) -> dict:
    inquiry = fetch_one(db, inquiries, id=inquiry_id)
    if not inquiry:
        raise HTTPException(status_code=404, detail="Inquiry not found")

    if inquiry["event_id"]:
        allowed = can_manage_event(db, user, load_event(db, inquiry["event_id"]))
    else:
        allowed = can_manage_opportunity(db, user, load_opportunity(db, inquiry["opportunity_id"]))
    if not allowed:
        raise HTTPException(status_code=403, detail="Inquiry not found or access denied")
    return inquiry


@router.post("", response_model=InquiryResponse, status_code=201)
async def create_inquiry(data: InquiryCreate, user: dict = Depends(get_current_user)):
    """Sender name and email are taken from the caller's profile."""
    with get_db_session() as db:
        if data.event_id and not load_event(db, data.event_id):
            raise HTTPException(status_code=404, detail="Event not found")
        if data.opportunity_id and not load_opportunity(db, data.opportunity_id):
            raise HTTPException(status_code=404, detail="Opportunity not found")

        profile = fetch_one(db, profiles, user_id=user["user_id"])
        row = insert_row(db, inquiries, {
            "sender_id": user["user_id"],
            "sender_name": profile["full_name"] if profile else user["email"],
            "sender_email": profile["email"] if profile else user["email"],
            "event_id": data.event_id,
            "opportunity_id": data.opportunity_id,
            "subject": data.subject,
            "message": data.message,
        })
        return inquiry_out(db, row)


@router.get("", response_model=List[InquiryResponse])
async def list_inbox(
    unread_only: bool = Query(False),
    user: dict = Depends(get_current_user)
):
    """Newest first."""
    filters = {"is_read": False} if unread_only else {}

    with get_db_session() as db:
        if user["role"] == "admin":
            rows = fetch_all(db, inquiries, order_by="created_at", **filters)
        else:
            event_ids, opportunity_ids = _owned_listing_ids(db, user)
            if not event_ids and not opportunity_ids:
                return []
            rows = fetch_all(
                db, inquiries,
                or_(inquiries.c.event_id.in_(event_ids), inquiries.c.opportunity_id.in_(opportunity_ids)),
                order_by="created_at", **filters,
            )
        return [inquiry_out(db, r) for r in rows]


@router.get("/sent", response_model=List[InquiryResponse])
async def list_sent(user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        rows = fetch_all(db, inquiries, order_by="created_at", sender_id=user["user_id"])
        return [inquiry_out(db, r) for r in rows]


@router.put("/{inquiry_id}/read", response_model=InquiryResponse)
async def mark_read(inquiry_id: str, user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        _get_owned_inquiry(db, inquiry_id, user)
        row = update_row(db, inquiries, inquiry_id, {"is_read": True})
        return inquiry_out(db, row)


@router.put("/{inquiry_id}/reply", response_model=InquiryResponse)
async def mark_replied(inquiry_id: str, user: dict = Depends(get_current_user)):
    """Replies go out by email; this only records when."""
    with get_db_session() as db:
        _get_owned_inquiry(db, inquiry_id, user)
        row = update_row(db, inquiries, inquiry_id, {"is_read": True, "replied_at": utcnow()})
        return inquiry_out(db, row)
