"""
Company Routes

GET /api/companies - Active companies
GET /api/companies/me - Own company profile
PUT /api/companies/me - Update own company profile
GET /api/companies/me/opportunities - Company's listings
GET /api/companies/me/applications - Applications received
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List, Optional

from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_all, fetch_one, update_row
from eventgo.db.tables import applications, companies, opportunities
from eventgo.core.auth import get_current_company
from eventgo.services.listing_service import matches_search, opportunity_out
from eventgo.api.routes.opportunity_routes import application_out
from eventgo.schemas.schemas import (
    ApplicationResponse, ApplicationStatus, CompanyUpdate, CompanyResponse, OpportunityResponse
)

router = APIRouter(prefix="/api/companies", tags=["Companies"])


@router.get("", response_model=List[CompanyResponse])
async def list_companies(search: Optional[str] = Query(None)):
    with get_db_session() as db:
        rows = fetch_all(db, companies, order_by="name", descending=False, is_active=True)
    return [CompanyResponse(**r) for r in rows if matches_search(search, [r["name"], r["industry"]])]


@router.get("/me", response_model=CompanyResponse)
async def get_profile(company: dict = Depends(get_current_company)):
    """Get current company's profile."""
    with get_db_session() as db:
        row = fetch_one(db, companies, id=company["company_id"])
    return CompanyResponse(**row)


@router.put("/me", response_model=CompanyResponse)
async def update_profile(data: CompanyUpdate, company: dict = Depends(get_current_company)):
    """Update company profile. Only provided fields are updated."""
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No fields to update")

    with get_db_session() as db:
        row = update_row(db, companies, company["company_id"], updates)
    return CompanyResponse(**row)


@router.get("/me/opportunities", response_model=List[OpportunityResponse])
async def get_company_opportunities(company: dict = Depends(get_current_company)):
    """Listings owned by the company or posted from this account."""
    with get_db_session() as db:
        rows = fetch_all(
            db, opportunities,
            (opportunities.c.company_id == company["company_id"]) | (opportunities.c.created_by == company["user_id"]),
            order_by="created_at",
        )
        return [OpportunityResponse(**opportunity_out(db, r)) for r in rows]


@router.get("/me/applications", response_model=List[ApplicationResponse])
async def get_applications(
    opportunity_id: Optional[str] = Query(None, description="Filter by listing"),
    status: Optional[ApplicationStatus] = Query(None, description="Filter by status"),
    company: dict = Depends(get_current_company)
):
    """Get applications received for company's listings."""
    with get_db_session() as db:
        owned = fetch_all(
            db, opportunities,
            (opportunities.c.company_id == company["company_id"]) | (opportunities.c.created_by == company["user_id"]),
        )
        by_id = {o["id"]: o for o in owned}
        if opportunity_id:
            by_id = {k: v for k, v in by_id.items() if k == opportunity_id}
        if not by_id:
            return []

        filters = {"opportunity_id": list(by_id)}
        if status:
            filters["status"] = status.value
        rows = fetch_all(db, applications, order_by="applied_at", **filters)
        return [application_out(db, r, by_id[r["opportunity_id"]]) for r in rows]
