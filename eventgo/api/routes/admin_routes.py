"""
Admin Routes

Every mutation here writes an admin_activity_logs row.

Users:
    GET /api/admin/users - Profiles with role and organization
    POST /api/admin/users - Create account (any role)
    PUT /api/admin/users/{id}/active - Activate / deactivate
    PUT /api/admin/users/{id}/role - Reassign role
    POST /api/admin/users/bulk-status - Bulk activate / deactivate
    GET /api/admin/users/export - CSV export

Organizations:
    GET /api/admin/colleges, GET /api/admin/companies
    PUT /api/admin/colleges/{id}/verify, PUT /api/admin/colleges/{id}/active
    PUT /api/admin/companies/{id}/verify, PUT /api/admin/companies/{id}/active

Listings:
    GET /api/admin/events, POST /api/admin/events/bulk-status, DELETE /api/admin/events/{id}
    GET /api/admin/opportunities, POST /api/admin/opportunities/bulk-active,
    DELETE /api/admin/opportunities/{id}

Reports:
    GET /api/admin/stats - Platform counters
    GET /api/admin/activity-logs - Recent admin actions
"""

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Depends, Query, Request
from fastapi.responses import Response
from typing import List, Optional

from eventgo.db.postgres import get_db_session, execute_raw_sql
from eventgo.db.query import delete_rows, fetch_all, fetch_one, update_row, update_rows
from eventgo.db.tables import (
    admin_activity_logs, colleges, companies, events, opportunities, profiles, user_roles
)
from eventgo.core.auth import get_current_admin
from eventgo.core.exceptions import EventGoError
from eventgo.core.passwords import validate_password
from eventgo.services.account_service import create_account
from eventgo.services.activity_log import log_admin_action
from eventgo.services.csv_export import users_to_csv
from eventgo.services.listing_service import event_out, matches_search, opportunity_out
from eventgo.schemas.schemas import (
    AdminUserCreate, AdminUserResponse, ActiveUpdate, VerifyUpdate, RoleUpdate, AppRole,
    BulkUserStatus, BulkEventStatus, BulkOpportunityActive, BulkResult,
    CollegeResponse, CompanyResponse, EventResponse, EventStatus, OpportunityResponse,
    PlatformStatsResponse, ActivityLogResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


# ============================================================
# USERS
# ============================================================

def _user_rows(db) -> List[dict]:
    """Profiles merged with role and organization name."""
    roles = {r["user_id"]: r["role"] for r in fetch_all(db, user_roles)}
    orgs = {c["user_id"]: c["name"] for c in fetch_all(db, colleges)}
    orgs.update({c["user_id"]: c["name"] for c in fetch_all(db, companies)})

    rows = []
    for p in fetch_all(db, profiles, order_by="created_at"):
        row = dict(p)
        row["role"] = roles.get(p["user_id"])
        row["organization_name"] = orgs.get(p["user_id"])
        rows.append(row)
    return rows


def _filter_users(rows: List[dict], role: Optional[AppRole], search: Optional[str], is_active: Optional[bool]):
    return [
        r for r in rows
        if (not role or r["role"] == role.value)
        and (is_active is None or r["is_active"] == is_active)
        and matches_search(search, [r["full_name"], r["email"], r["organization_name"], r["college_name"]])
    ]


@router.get("/users", response_model=List[AdminUserResponse])
async def list_users(
    role: Optional[AppRole] = Query(None),
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    admin: dict = Depends(get_current_admin)
):
    with get_db_session() as db:
        rows = _user_rows(db)
    return [AdminUserResponse(**r) for r in _filter_users(rows, role, search, is_active)]


@router.post("/users", response_model=AdminUserResponse, status_code=201)
async def create_user(data: AdminUserCreate, request: Request, admin: dict = Depends(get_current_admin)):
    """
    Create a complete account in one transaction: credentials, profile,
    role and (for colleges/companies) the organization row.
    """
    ok, message = validate_password(data.password)
    if not ok:
        raise HTTPException(status_code=400, detail=message)
    org_name = data.organization_name
    if data.role == AppRole.college:
        org_name = org_name or data.college_name
    if data.role in (AppRole.college, AppRole.company) and not org_name:
        raise HTTPException(status_code=400, detail="Organization name is required")

    try:
        with get_db_session() as db:
            created = create_account(
                db,
                email=data.email,
                password=data.password,
                full_name=data.full_name,
                role=data.role.value,
                phone=data.phone,
                college_name=data.college_name,
                graduation_year=data.graduation_year,
                organization_name=data.organization_name,
                city=data.city,
                industry=data.industry,
            )
            log_admin_action(
                db, admin["user_id"], "create_user", "user", created["account"]["id"],
                details={"email": created["account"]["email"], "role": created["role"]},
                ip_address=_client_ip(request),
            )
    except EventGoError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return AdminUserResponse(**created["profile"], role=created["role"])


@router.put("/users/{user_id}/active", response_model=AdminUserResponse)
async def set_user_active(user_id: str, data: ActiveUpdate, request: Request, admin: dict = Depends(get_current_admin)):
    if user_id == admin["user_id"] and not data.is_active:
        raise HTTPException(status_code=400, detail="You cannot deactivate your own account")

    with get_db_session() as db:
        profile = fetch_one(db, profiles, user_id=user_id)
        if not profile:
            raise HTTPException(status_code=404, detail="User not found")

        profile = update_row(db, profiles, profile["id"], {"is_active": data.is_active})
        role_row = fetch_one(db, user_roles, user_id=user_id)
        log_admin_action(
            db, admin["user_id"], "activate_user" if data.is_active else "deactivate_user", "user", user_id,
            ip_address=_client_ip(request),
        )

    return AdminUserResponse(**profile, role=role_row["role"] if role_row else None)


@router.put("/users/{user_id}/role", response_model=AdminUserResponse)
async def set_user_role(user_id: str, data: RoleUpdate, request: Request, admin: dict = Depends(get_current_admin)):
    """Reassign a role. Organization rows are left as they are."""
    if user_id == admin["user_id"] and data.role != AppRole.admin:
        raise HTTPException(status_code=400, detail="You cannot remove your own admin role")

    with get_db_session() as db:
        profile = fetch_one(db, profiles, user_id=user_id)
        role_row = fetch_one(db, user_roles, user_id=user_id)
        if not profile or not role_row:
            raise HTTPException(status_code=404, detail="User not found")

        update_rows(db, user_roles, {"role": data.role.value}, user_id=user_id)
        log_admin_action(
            db, admin["user_id"], "change_role", "user", user_id,
            details={"from": role_row["role"], "to": data.role.value},
            ip_address=_client_ip(request),
        )

    return AdminUserResponse(**profile, role=data.role.value)


@router.post("/users/bulk-status", response_model=BulkResult)
async def bulk_user_status(data: BulkUserStatus, request: Request, admin: dict = Depends(get_current_admin)):
    user_ids = [u for u in data.user_ids if not (u == admin["user_id"] and not data.is_active)]

    with get_db_session() as db:
        found = [p["user_id"] for p in fetch_all(db, profiles, user_id=user_ids)]
        updated = update_rows(db, profiles, {"is_active": data.is_active}, user_id=found) if found else 0
        log_admin_action(
            db, admin["user_id"], "bulk_activate_users" if data.is_active else "bulk_deactivate_users", "user",
            details={"user_ids": found},
            ip_address=_client_ip(request),
        )

    return BulkResult(updated=updated, ids=found)


@router.get("/users/export")
async def export_users(
    role: Optional[AppRole] = Query(None),
    search: Optional[str] = Query(None),
    is_active: Optional[bool] = Query(None),
    admin: dict = Depends(get_current_admin)
):
    """CSV of the (filtered) user list."""
    with get_db_session() as db:
        rows = _filter_users(_user_rows(db), role, search, is_active)

    filename = f"users-export-{date.today().isoformat()}.csv"
    return Response(
        content=users_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ============================================================
# ORGANIZATIONS
# ============================================================

def _set_org_flag(table, entity: str, org_id: str, values: dict, action: str, admin: dict, request: Request) -> dict:
    with get_db_session() as db:
        if not fetch_one(db, table, id=org_id):
            raise HTTPException(status_code=404, detail=f"{entity.capitalize()} not found")
        row = update_row(db, table, org_id, values)
        log_admin_action(db, admin["user_id"], f"{action}_{entity}", entity, org_id, details=values,
                         ip_address=_client_ip(request))
    return row


@router.get("/colleges", response_model=List[CollegeResponse])
async def list_colleges(search: Optional[str] = Query(None), admin: dict = Depends(get_current_admin)):
    """All colleges, verified or not."""
    with get_db_session() as db:
        rows = fetch_all(db, colleges, order_by="created_at")
    return [CollegeResponse(**r) for r in rows if matches_search(search, [r["name"], r["city"]])]


@router.put("/colleges/{college_id}/verify", response_model=CollegeResponse)
async def verify_college(college_id: str, data: VerifyUpdate, request: Request,
                         admin: dict = Depends(get_current_admin)):
    action = "verify" if data.is_verified else "unverify"
    return CollegeResponse(**_set_org_flag(colleges, "college", college_id, {"is_verified": data.is_verified},
                                           action, admin, request))


@router.put("/colleges/{college_id}/active", response_model=CollegeResponse)
async def activate_college(college_id: str, data: ActiveUpdate, request: Request,
                           admin: dict = Depends(get_current_admin)):
    action = "activate" if data.is_active else "deactivate"
    return CollegeResponse(**_set_org_flag(colleges, "college", college_id, {"is_active": data.is_active},
                                           action, admin, request))


@router.get("/companies", response_model=List[CompanyResponse])
async def list_companies(search: Optional[str] = Query(None), admin: dict = Depends(get_current_admin)):
    """All companies, verified or not."""
    with get_db_session() as db:
        rows = fetch_all(db, companies, order_by="created_at")
    return [CompanyResponse(**r) for r in rows if matches_search(search, [r["name"], r["industry"]])]


@router.put("/companies/{company_id}/verify", response_model=CompanyResponse)
async def verify_company(company_id: str, data: VerifyUpdate, request: Request,
                         admin: dict = Depends(get_current_admin)):
    action = "verify" if data.is_verified else "unverify"
    return CompanyResponse(**_set_org_flag(companies, "company", company_id, {"is_verified": data.is_verified},
                                           action, admin, request))


@router.put("/companies/{company_id}/active", response_model=CompanyResponse)
async def activate_company(company_id: str, data: ActiveUpdate, request: Request,
                           admin: dict = Depends(get_current_admin)):
    action = "activate" if data.is_active else "deactivate"
    return CompanyResponse(**_set_org_flag(companies, "company", company_id, {"is_active": data.is_active},
                                           action, admin, request))


# ============================================================
# EVENTS & OPPORTUNITIES
# ============================================================

@router.get("/events", response_model=List[EventResponse])
async def list_all_events(status: Optional[EventStatus] = Query(None), admin: dict = Depends(get_current_admin)):
    filters = {"status": status.value} if status else {}
    with get_db_session() as db:
        rows = fetch_all(db, events, order_by="created_at", **filters)
        return [EventResponse(**event_out(db, r)) for r in rows]


@router.post("/events/bulk-status", response_model=BulkResult)
async def bulk_event_status(data: BulkEventStatus, request: Request, admin: dict = Depends(get_current_admin)):
    with get_db_session() as db:
        found = [e["id"] for e in fetch_all(db, events, id=data.event_ids)]
        updated = update_rows(db, events, {"status": data.status.value}, id=found) if found else 0
        log_admin_action(db, admin["user_id"], "bulk_event_status", "event",
                         details={"event_ids": found, "status": data.status.value},
                         ip_address=_client_ip(request))

    return BulkResult(updated=updated, ids=found)


@router.delete("/events/{event_id}", response_model=MessageResponse)
async def delete_event(event_id: str, request: Request, admin: dict = Depends(get_current_admin)):
    with get_db_session() as db:
        event = fetch_one(db, events, id=event_id)
        if not event:
            raise HTTPException(status_code=404, detail="Event not found")
        delete_rows(db, events, id=event_id)
        log_admin_action(db, admin["user_id"], "delete_event", "event", event_id,
                         details={"title": event["title"]}, ip_address=_client_ip(request))

    return MessageResponse(message="Event deleted successfully")


@router.get("/opportunities", response_model=List[OpportunityResponse])
async def list_all_opportunities(is_active: Optional[bool] = Query(None), admin: dict = Depends(get_current_admin)):
    filters = {"is_active": is_active} if is_active is not None else {}
    with get_db_session() as db:
        rows = fetch_all(db, opportunities, order_by="created_at", **filters)
        return [OpportunityResponse(**opportunity_out(db, r)) for r in rows]


@router.post("/opportunities/bulk-active", response_model=BulkResult)
async def bulk_opportunity_active(data: BulkOpportunityActive, request: Request,
                                  admin: dict = Depends(get_current_admin)):
    with get_db_session() as db:
        found = [o["id"] for o in fetch_all(db, opportunities, id=data.opportunity_ids)]
        updated = update_rows(db, opportunities, {"is_active": data.is_active}, id=found) if found else 0
        log_admin_action(db, admin["user_id"], "bulk_opportunity_active", "opportunity",
                         details={"opportunity_ids": found, "is_active": data.is_active},
                         ip_address=_client_ip(request))

    return BulkResult(updated=updated, ids=found)


@router.delete("/opportunities/{opportunity_id}", response_model=MessageResponse)
async def delete_opportunity(opportunity_id: str, request: Request, admin: dict = Depends(get_current_admin)):
    with get_db_session() as db:
        opportunity = fetch_one(db, opportunities, id=opportunity_id)
        if not opportunity:
            raise HTTPException(status_code=404, detail="Opportunity not found")
        delete_rows(db, opportunities, id=opportunity_id)
        log_admin_action(db, admin["user_id"], "delete_opportunity", "opportunity", opportunity_id,
                         details={"title": opportunity["title"]}, ip_address=_client_ip(request))

    return MessageResponse(message="Opportunity deleted successfully")


# ============================================================
# REPORTS
# ============================================================

STATS_SQL = """
    SELECT
        (SELECT COUNT(*) FROM users) AS total_users,
        (SELECT COUNT(*) FROM user_roles WHERE role = 'student') AS students,
        (SELECT COUNT(*) FROM user_roles WHERE role = 'college') AS colleges,
        (SELECT COUNT(*) FROM user_roles WHERE role = 'company') AS companies,
        (SELECT COUNT(*) FROM user_roles WHERE role = 'admin') AS admins,
        (SELECT COUNT(*) FROM profiles WHERE is_active = :active) AS active_users,
        (SELECT COUNT(*) FROM events) AS total_events,
        (SELECT COUNT(*) FROM events WHERE status = 'published') AS published_events,
        (SELECT COUNT(*) FROM opportunities) AS total_opportunities,
        (SELECT COUNT(*) FROM opportunities WHERE is_active = :active) AS active_opportunities,
        (SELECT COUNT(*) FROM registrations WHERE status != 'cancelled') AS total_registrations,
        (SELECT COALESCE(SUM(amount), 0) FROM payments WHERE status = 'completed') AS revenue
"""


@router.get("/stats", response_model=PlatformStatsResponse)
async def platform_stats(admin: dict = Depends(get_current_admin)):
    """Dashboard counters in one round trip."""
    rows = execute_raw_sql(STATS_SQL, {"active": True})
    return PlatformStatsResponse(**rows[0])


@router.get("/activity-logs", response_model=List[ActivityLogResponse])
async def activity_logs(
    limit: int = Query(50, ge=1, le=500),
    action: Optional[str] = Query(None),
    admin: dict = Depends(get_current_admin)
):
    filters = {"action": action} if action else {}
    with get_db_session() as db:
        rows = fetch_all(db, admin_activity_logs, order_by="created_at", limit=limit, **filters)
    return [ActivityLogResponse(**r) for r in rows]
