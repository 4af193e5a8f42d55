"""
Event Routes

GET /api/events - List published events (search, tag, city, featured)
GET /api/events/{event_id} - Event details with college and sub-events
POST /api/events - Create event (college, or admin on behalf of a college)
PUT /api/events/{event_id} - Update event (owner college or admin)
DELETE /api/events/{event_id} - Delete event (owner college or admin)
GET /api/events/{event_id}/sub-events - List sub-events
POST /api/events/{event_id}/sub-events - Add sub-event (owner)
DELETE /api/events/{event_id}/sub-events/{sub_event_id} - Remove sub-event (owner)
GET /api/events/{event_id}/registrations - Registrations for an event (owner)
"""

import logging
import re

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from eventgo.db.postgres import get_db_session
from eventgo.db.query import delete_rows, fetch_all, fetch_one, insert_row, update_row
from eventgo.db.tables import colleges, events, payments, profiles, registrations, sub_events, new_id, as_utc
from eventgo.core.auth import get_current_user, get_optional_user
from eventgo.services.listing_service import (
    event_out, matches_search, bump_view_count, can_manage_event, college_id_for, load_event
)
from eventgo.schemas.schemas import (
    EventCreate, EventUpdate, EventResponse, SubEventCreate, SubEventResponse,
    RegistrationResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["Events"])


def slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return f"{slug}-{new_id()[:8]}"


def _get_managed_event(db, event_id: str, user: dict) -> dict:
    event = load_event(db, event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    if not can_manage_event(db, user, event):
        raise HTTPException(status_code=403, detail="Event not found or access denied")
    return event


@router.get("", response_model=List[EventResponse])
async def list_events(
    search: Optional[str] = Query(None, description="Search in title, description, city"),
    tag: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    featured: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=200)
):
    """Public catalog: published events, soonest first."""
    filters = {"status": "published"}
    if featured is not None:
        filters["is_featured"] = featured

    with get_db_session() as db:
        rows = fetch_all(db, events, order_by="start_date", descending=False, **filters)
        rows = [
            r for r in rows
            if matches_search(search, [r["title"], r["description"], r["city"]])
            and (not tag or tag.lower() in [t.lower() for t in (r["tags"] or [])])
            and (not city or city.lower() in (r["city"] or "").lower())
        ][:limit]
        return [EventResponse(**event_out(db, r)) for r in rows]


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, user: Optional[dict] = Depends(get_optional_user)):
    """Event details. Drafts are only visible to their college and admins."""
    with get_db_session() as db:
        event = load_event(db, event_id)
        if not event:
            raise HTTPException(status_code=404, detail="Event not found")
        if event["status"] == "draft" and not can_manage_event(db, user, event):
            raise HTTPException(status_code=404, detail="Event not found")

        bump_view_count(db, events, event_id)
        event = load_event(db, event_id)
        return EventResponse(**event_out(db, event, with_sub_events=True))


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(data: EventCreate, user: dict = Depends(get_current_user)):
    """Create an event. Colleges create for themselves; admins must pass college_id."""
    with get_db_session() as db:
        if user["role"] == "college":
            college_id = college_id_for(db, user["user_id"])
            if not college_id:
                raise HTTPException(status_code=404, detail="College profile not found.")
        elif user["role"] == "admin":
            if not data.college_id or not fetch_one(db, colleges, id=data.college_id):
                raise HTTPException(status_code=400, detail="A valid college_id is required")
            college_id = data.college_id
        else:
            raise HTTPException(status_code=403, detail="Only colleges and admins can create events")

        values = data.model_dump(exclude={"college_id"})
        values["status"] = data.status.value
        values["college_id"] = college_id
        values["slug"] = slugify(data.title)
        if data.is_free:
            values["base_price"] = 0

        event = insert_row(db, events, values)
        logger.info("Event %s created by %s", event["id"], user["user_id"])
        return EventResponse(**event_out(db, event))


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(event_id: str, update: EventUpdate, user: dict = Depends(get_current_user)):
    """Update an event. Only provided fields are updated."""
    values = update.model_dump(exclude_unset=True)
    if "status" in values and values["status"] is not None:
        values["status"] = update.status.value
    values = {k: v for k, v in values.items() if v is not None or k in ("registration_deadline", "max_participants")}

    with get_db_session() as db:
        event = _get_managed_event(db, event_id, user)

        is_free = values.get("is_free", event["is_free"])
        if is_free:
            values["base_price"] = 0

        start = values.get("start_date", event["start_date"])
        end = values.get("end_date", event["end_date"])
        if start and end and as_utc(end) < as_utc(start):
            raise HTTPException(status_code=400, detail="end_date must be after start_date")

        event = update_row(db, events, event_id, values)
        return EventResponse(**event_out(db, event))


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(event_id: str, user: dict = Depends(get_current_user)):
    """Delete an event. Cascades to sub-events and registrations."""
    with get_db_session() as db:
        _get_managed_event(db, event_id, user)
        delete_rows(db, events, id=event_id)

    return MessageResponse(message="Event deleted successfully")


@router.get("/{event_id}/sub-events", response_model=List[SubEventResponse])
async def list_sub_events(event_id: str):
    with get_db_session() as db:
        if not load_event(db, event_id):
            raise HTTPException(status_code=404, detail="Event not found")
        rows = fetch_all(db, sub_events, order_by="start_time", descending=False, event_id=event_id)
    return [SubEventResponse(**r) for r in rows]


@router.post("/{event_id}/sub-events", response_model=SubEventResponse, status_code=201)
async def create_sub_event(event_id: str, data: SubEventCreate, user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        _get_managed_event(db, event_id, user)
        row = insert_row(db, sub_events, {**data.model_dump(), "event_id": event_id})
    return SubEventResponse(**row)


@router.delete("/{event_id}/sub-events/{sub_event_id}", response_model=MessageResponse)
async def delete_sub_event(event_id: str, sub_event_id: str, user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        _get_managed_event(db, event_id, user)
        if delete_rows(db, sub_events, id=sub_event_id, event_id=event_id) == 0:
            raise HTTPException(status_code=404, detail="Sub-event not found")

    return MessageResponse(message="Sub-event deleted")


@router.get("/{event_id}/registrations", response_model=List[RegistrationResponse])
async def list_event_registrations(event_id: str, user: dict = Depends(get_current_user)):
    """Participants of an event, newest first, with payment state."""
    with get_db_session() as db:
        event = _get_managed_event(db, event_id, user)
        regs = fetch_all(db, registrations, order_by="registered_at", event_id=event_id)

        results = []
        for r in regs:
            profile = fetch_one(db, profiles, user_id=r["user_id"])
            payment = fetch_one(db, payments, registration_id=r["id"])
            results.append(RegistrationResponse(
                **r,
                event_title=event["title"],
                participant_name=profile["full_name"] if profile else None,
                participant_email=profile["email"] if profile else None,
                payment=payment,
            ))
    return results
