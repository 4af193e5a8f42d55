"""
Application Routes

GET /api/applications/me - Student's own applications
PUT /api/applications/{id}/status - Move an application (listing owner or admin)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_all, fetch_one, update_row
from eventgo.db.tables import applications
from eventgo.core.auth import get_current_user
from eventgo.services.listing_service import can_manage_opportunity, load_opportunity
from eventgo.api.routes.opportunity_routes import application_out
from eventgo.schemas.schemas import ApplicationResponse, ApplicationStatusUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["Applications"])


@router.get("/me", response_model=List[ApplicationResponse])
async def get_my_applications(user: dict = Depends(get_current_user)):
    """Applications submitted by the caller, newest first."""
    with get_db_session() as db:
        rows = fetch_all(db, applications, order_by="applied_at", user_id=user["user_id"])
        return [application_out(db, r) for r in rows]


@router.put("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    user: dict = Depends(get_current_user)
):
    """
    Update application status.

    Allowed: applied, under_review, shortlisted, rejected, accepted
    """
    with get_db_session() as db:
        application = fetch_one(db, applications, id=application_id)
        if not application:
            raise HTTPException(status_code=404, detail="Application not found")

        opportunity = load_opportunity(db, application["opportunity_id"])
        if not can_manage_opportunity(db, user, opportunity):
            raise HTTPException(status_code=403, detail="Application not found or access denied")

        row = update_row(db, applications, application_id, {"status": update.status.value})
        logger.info("Application %s -> %s", application_id, update.status.value)
        return application_out(db, row, opportunity)
