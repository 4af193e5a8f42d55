"""
College Routes

GET /api/colleges - Active colleges
GET /api/colleges/me - Own college profile
PUT /api/colleges/me - Update own college profile
GET /api/colleges/me/events - Own events (any status)
GET /api/colleges/me/opportunities - Opportunities posted by this account
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_all, fetch_one, update_row
from eventgo.db.tables import colleges, events, opportunities
from eventgo.core.auth import get_current_college
from eventgo.services.listing_service import event_out, matches_search, opportunity_out
from eventgo.schemas.schemas import CollegeUpdate, CollegeResponse, EventResponse, OpportunityResponse

router = APIRouter(prefix="/api/colleges", tags=["Colleges"])


@router.get("", response_model=List[CollegeResponse])
async def list_colleges(search: Optional[str] = Query(None)):
    with get_db_session() as db:
        rows = fetch_all(db, colleges, order_by="name", descending=False, is_active=True)
    return [CollegeResponse(**r) for r in rows if matches_search(search, [r["name"], r["city"]])]


@router.get("/me", response_model=CollegeResponse)
async def get_my_college(college: dict = Depends(get_current_college)):
    with get_db_session() as db:
        row = fetch_one(db, colleges, id=college["college_id"])
    return CollegeResponse(**row)


@router.put("/me", response_model=CollegeResponse)
async def update_my_college(data: CollegeUpdate, college: dict = Depends(get_current_college)):
    """Update college profile. Verification is admin-only and not editable here."""
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    with get_db_session() as db:
        row = update_row(db, colleges, college["college_id"], updates)
    return CollegeResponse(**row)


@router.get("/me/events", response_model=List[EventResponse])
async def get_my_events(college: dict = Depends(get_current_college)):
    """All of the college's events, drafts included, newest first."""
    with get_db_session() as db:
        rows = fetch_all(db, events, order_by="created_at", college_id=college["college_id"])
        return [EventResponse(**event_out(db, r)) for r in rows]


@router.get("/me/opportunities", response_model=List[OpportunityResponse])
async def get_my_opportunities(college: dict = Depends(get_current_college)):
    with get_db_session() as db:
        rows = fetch_all(db, opportunities, order_by="created_at", created_by=college["user_id"])
        return [OpportunityResponse(**opportunity_out(db, r)) for r in rows]
