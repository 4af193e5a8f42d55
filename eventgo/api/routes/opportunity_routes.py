"""
Opportunity Routes

GET /api/opportunities - List active opportunities with filters
GET /api/opportunities/{id} - Opportunity details with company
POST /api/opportunities - Create listing (company, college or admin)
PUT /api/opportunities/{id} - Update listing (creator, owning company or admin)
DELETE /api/opportunities/{id} - Delete listing (creator, owning company or admin)
POST /api/opportunities/{id}/apply - Apply in-app, or get the external URL
GET /api/opportunities/{id}/applications - Applications received (owner)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from eventgo.db.postgres import get_db_session
from eventgo.db.query import delete_rows, fetch_all, fetch_one, insert_row, update_row
from eventgo.db.tables import applications, companies, opportunities, profiles
from eventgo.core.auth import get_current_user
from eventgo.services.listing_service import (
    opportunity_out, matches_search, bump_view_count, can_manage_opportunity,
    company_id_for, load_opportunity
)
from eventgo.schemas.schemas import (
    OpportunityCreate, OpportunityUpdate, OpportunityResponse, OpportunityType,
    ApplicationCreate, ApplicationResponse, ApplyResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/opportunities", tags=["Opportunities"])


def _get_managed_opportunity(db, opportunity_id: str, user: dict) -> dict:
    opportunity = load_opportunity(db, opportunity_id)
    if not opportunity:
        raise HTTPException(status_code=404, detail="Opportunity not found")
    if not can_manage_opportunity(db, user, opportunity):
        raise HTTPException(status_code=403, detail="Opportunity not found or access denied")
    return opportunity


def application_out(db, row: dict, opportunity: Optional[dict] = None) -> ApplicationResponse:
    opportunity = opportunity or load_opportunity(db, row["opportunity_id"])
    profile = fetch_one(db, profiles, user_id=row["user_id"])
    return ApplicationResponse(
        **row,
        opportunity_title=opportunity["title"] if opportunity else None,
        applicant_name=profile["full_name"] if profile else None,
        applicant_email=profile["email"] if profile else None,
    )


@router.get("", response_model=List[OpportunityResponse])
async def list_opportunities(
    type: Optional[OpportunityType] = Query(None),
    search: Optional[str] = Query(None, description="Search in title or company name"),
    location: Optional[str] = Query(None),
    remote_only: bool = Query(False),
    skill: Optional[str] = Query(None, description="Filter by required skill"),
    featured: Optional[bool] = Query(None),
    limit: int = Query(50, ge=1, le=200)
):
    """Public catalog: active listings, newest first."""
    filters = {"is_active": True}
    if type:
        filters["type"] = type.value
    if remote_only:
        filters["is_remote"] = True
    if featured is not None:
        filters["is_featured"] = featured

    with get_db_session() as db:
        rows = [opportunity_out(db, r) for r in fetch_all(db, opportunities, order_by="created_at", **filters)]

    results = [
        r for r in rows
        if matches_search(search, [r["title"], (r["company"] or {}).get("name")])
        and (not location or location.lower() in (r["location"] or "").lower())
        and (not skill or skill.lower() in [s.lower() for s in r["skills_required"]])
    ]
    return [OpportunityResponse(**r) for r in results[:limit]]


@router.get("/{opportunity_id}", response_model=OpportunityResponse)
async def get_opportunity(opportunity_id: str):
    """Listing details. Counts a view."""
    with get_db_session() as db:
        if not load_opportunity(db, opportunity_id):
            raise HTTPException(status_code=404, detail="Opportunity not found")
        bump_view_count(db, opportunities, opportunity_id)
        return OpportunityResponse(**opportunity_out(db, load_opportunity(db, opportunity_id)))


@router.post("", response_model=OpportunityResponse, status_code=201)
async def create_opportunity(data: OpportunityCreate, user: dict = Depends(get_current_user)):
    """
    Create a listing.

    Companies post under their own company; colleges post without one;
    admins may attach any company via company_id.
    """
    with get_db_session() as db:
        if user["role"] == "company":
            company_id = company_id_for(db, user["user_id"])
            if not company_id:
                raise HTTPException(status_code=404, detail="Company profile not found.")
        elif user["role"] == "college":
            company_id = None
        elif user["role"] == "admin":
            company_id = data.company_id
            if company_id and not fetch_one(db, companies, id=company_id):
                raise HTTPException(status_code=400, detail="Unknown company_id")
        else:
            raise HTTPException(status_code=403, detail="Students cannot post opportunities")

        values = data.model_dump(exclude={"company_id"})
        values["type"] = data.type.value
        values["company_id"] = company_id
        values["created_by"] = user["user_id"]

        row = insert_row(db, opportunities, values)
        logger.info("Opportunity %s created by %s", row["id"], user["user_id"])
        return OpportunityResponse(**opportunity_out(db, row))


@router.put("/{opportunity_id}", response_model=OpportunityResponse)
async def update_opportunity(opportunity_id: str, update: OpportunityUpdate, user: dict = Depends(get_current_user)):
    """Update a listing. Only provided fields are updated."""
    values = {k: v for k, v in update.model_dump(exclude_unset=True).items() if v is not None}
    if update.type:
        values["type"] = update.type.value

    with get_db_session() as db:
        opportunity = _get_managed_opportunity(db, opportunity_id, user)

        is_external = values.get("is_external", opportunity["is_external"])
        if is_external and not values.get("external_url", opportunity["external_url"]):
            raise HTTPException(status_code=400, detail="external_url is required for external listings")

        row = update_row(db, opportunities, opportunity_id, values)
        return OpportunityResponse(**opportunity_out(db, row))


@router.delete("/{opportunity_id}", response_model=MessageResponse)
async def delete_opportunity(opportunity_id: str, user: dict = Depends(get_current_user)):
    """Delete a listing. Cascades to applications."""
    with get_db_session() as db:
        _get_managed_opportunity(db, opportunity_id, user)
        delete_rows(db, opportunities, id=opportunity_id)

    return MessageResponse(message="Opportunity deleted successfully")


@router.post("/{opportunity_id}/apply", response_model=ApplyResponse)
async def apply_to_opportunity(
    opportunity_id: str,
    application: ApplicationCreate,
    user: dict = Depends(get_current_user)
):
    """
    Apply to a listing.

    External listings are not recorded; the caller gets the URL to open.
    Internal listings record one application per user.
    """
    with get_db_session() as db:
        opportunity = load_opportunity(db, opportunity_id)
        if not opportunity or not opportunity["is_active"]:
            raise HTTPException(status_code=404, detail="Opportunity not found")

        if opportunity["is_external"] and opportunity["external_url"]:
            return ApplyResponse(applied=False, redirect_url=opportunity["external_url"])

        if user["role"] != "student":
            raise HTTPException(status_code=403, detail="Only students can apply")

        if fetch_one(db, applications, opportunity_id=opportunity_id, user_id=user["user_id"]):
            raise HTTPException(status_code=400, detail="Already applied to this opportunity")

        row = insert_row(db, applications, {
            "opportunity_id": opportunity_id,
            "user_id": user["user_id"],
            "cover_letter": application.cover_letter,
            "status": "applied",
        })
        return ApplyResponse(applied=True, application=application_out(db, row, opportunity))


@router.get("/{opportunity_id}/applications", response_model=List[ApplicationResponse])
async def list_opportunity_applications(opportunity_id: str, user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        opportunity = _get_managed_opportunity(db, opportunity_id, user)
        rows = fetch_all(db, applications, order_by="applied_at", opportunity_id=opportunity_id)
        return [application_out(db, r, opportunity) for r in rows]
