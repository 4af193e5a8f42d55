"""
Registration & Payment Routes

POST /api/events/{event_id}/register - Register for an event
GET /api/registrations/me - Caller's registrations with payment state
POST /api/registrations/{id}/cancel - Cancel own registration
POST /api/payments/{id}/complete - Mark payment completed (payer)
POST /api/payments/{id}/fail - Mark payment failed (payer)
POST /api/payments/{id}/refund - Refund a completed payment (admin)
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, Request
from typing import List

from eventgo.db.postgres import get_db_session
from eventgo.db.query import count_rows, fetch_all, fetch_one, insert_row, update_row, update_rows
from eventgo.db.tables import events, payments, profiles, registrations, sub_events, as_utc, new_id, utcnow
from eventgo.core.auth import get_current_user, get_current_admin
from eventgo.services.activity_log import log_admin_action
from eventgo.schemas.schemas import RegistrationCreate, RegistrationResponse, PaymentResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Registrations"])

PAYMENT_METHOD = "mock"


def registration_out(db, row: dict, event: dict = None) -> RegistrationResponse:
    event = event or fetch_one(db, events, id=row["event_id"])
    profile = fetch_one(db, profiles, user_id=row["user_id"])
    payment = fetch_one(db, payments, registration_id=row["id"])
    return RegistrationResponse(
        **row,
        event_title=event["title"] if event else None,
        participant_name=profile["full_name"] if profile else None,
        participant_email=profile["email"] if profile else None,
        payment=payment,
    )


def _active_registrations(db, **filters) -> int:
    return count_rows(db, registrations, registrations.c.status != "cancelled", **filters)


@router.post("/api/events/{event_id}/register", response_model=RegistrationResponse, status_code=201)
async def register_for_event(event_id: str, data: RegistrationCreate, user: dict = Depends(get_current_user)):
    """
    Register the caller for a published event.

    Free events confirm immediately. Priced events create a pending
    registration and a pending payment for the sub-event price (when a
    sub-event is chosen) or the event's base price.
    """
    with get_db_session() as db:
        event = fetch_one(db, events, id=event_id)
        if not event or event["status"] != "published":
            raise HTTPException(status_code=404, detail="Event not found")

        if event["registration_deadline"] and as_utc(event["registration_deadline"]) < utcnow():
            raise HTTPException(status_code=400, detail="Registration deadline has passed")

        if fetch_one(db, registrations, user_id=user["user_id"], event_id=event_id):
            raise HTTPException(status_code=400, detail="Already registered for this event")

        if event["max_participants"] and _active_registrations(db, event_id=event_id) >= event["max_participants"]:
            raise HTTPException(status_code=400, detail="Event is full")

        sub_event = None
        if data.sub_event_id:
            sub_event = fetch_one(db, sub_events, id=data.sub_event_id, event_id=event_id)
            if not sub_event:
                raise HTTPException(status_code=404, detail="Sub-event not found")
            if (sub_event["max_participants"]
                    and _active_registrations(db, sub_event_id=sub_event["id"]) >= sub_event["max_participants"]):
                raise HTTPException(status_code=400, detail="Sub-event is full")
            if sub_event["is_team_event"]:
                size = len(data.team_members or []) + 1
                if not data.team_name or not sub_event["min_team_size"] <= size <= sub_event["max_team_size"]:
                    raise HTTPException(
                        status_code=400,
                        detail=f"Team of {sub_event['min_team_size']}-{sub_event['max_team_size']} with a team name required",
                    )

        amount = sub_event["price"] if sub_event and sub_event["price"] else (0 if event["is_free"] else event["base_price"])

        registration = insert_row(db, registrations, {
            "user_id": user["user_id"],
            "event_id": event_id,
            "sub_event_id": data.sub_event_id,
            "team_name": data.team_name,
            "team_members": data.team_members,
            "status": "pending" if amount > 0 else "confirmed",
        })

        if amount > 0:
            insert_row(db, payments, {
                "registration_id": registration["id"],
                "user_id": user["user_id"],
                "amount": amount,
                "currency": "INR",
                "status": "pending",
                "payment_method": PAYMENT_METHOD,
            })

        logger.info("User %s registered for event %s (amount %s)", user["user_id"], event_id, amount)
        return registration_out(db, registration, event)


@router.get("/api/registrations/me", response_model=List[RegistrationResponse])
async def get_my_registrations(user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        rows = fetch_all(db, registrations, order_by="registered_at", user_id=user["user_id"])
        return [registration_out(db, r) for r in rows]


@router.post("/api/registrations/{registration_id}/cancel", response_model=RegistrationResponse)
async def cancel_registration(registration_id: str, user: dict = Depends(get_current_user)):
    """Cancel own registration. Completed payments stay as they are until an admin refunds."""
    with get_db_session() as db:
        registration = fetch_one(db, registrations, id=registration_id)
        if not registration or registration["user_id"] != user["user_id"]:
            raise HTTPException(status_code=404, detail="Registration not found")
        if registration["status"] == "cancelled":
            raise HTTPException(status_code=400, detail="Registration already cancelled")

        row = update_row(db, registrations, registration_id, {"status": "cancelled"})
        update_rows(db, payments, {"status": "failed"}, registration_id=registration_id, status="pending")
        return registration_out(db, row)


def _get_own_pending_payment(db, payment_id: str, user: dict) -> dict:
    payment = fetch_one(db, payments, id=payment_id)
    if not payment or payment["user_id"] != user["user_id"]:
        raise HTTPException(status_code=404, detail="Payment not found")
    if payment["status"] != "pending":
        raise HTTPException(status_code=400, detail=f"Payment is {payment['status']}, expected pending")
    return payment


@router.post("/api/payments/{payment_id}/complete", response_model=PaymentResponse)
async def complete_payment(payment_id: str, user: dict = Depends(get_current_user)):
    """Settle a pending payment and confirm its registration."""
    with get_db_session() as db:
        payment = _get_own_pending_payment(db, payment_id, user)
        row = update_row(db, payments, payment_id, {
            "status": "completed",
            "paid_at": utcnow(),
            "transaction_id": f"txn_{new_id().replace('-', '')[:16]}",
        })
        update_rows(db, registrations, {"status": "confirmed"}, id=payment["registration_id"])

    logger.info("Payment %s completed", payment_id)
    return PaymentResponse(**row)


@router.post("/api/payments/{payment_id}/fail", response_model=PaymentResponse)
async def fail_payment(payment_id: str, user: dict = Depends(get_current_user)):
    with get_db_session() as db:
        _get_own_pending_payment(db, payment_id, user)
        row = update_row(db, payments, payment_id, {"status": "failed"})

    logger.info("Payment %s failed", payment_id)
    return PaymentResponse(**row)


@router.post("/api/payments/{payment_id}/refund", response_model=PaymentResponse)
async def refund_payment(payment_id: str, request: Request, admin: dict = Depends(get_current_admin)):
    """Refund a completed payment; its registration is cancelled."""
    with get_db_session() as db:
        payment = fetch_one(db, payments, id=payment_id)
        if not payment:
            raise HTTPException(status_code=404, detail="Payment not found")
        if payment["status"] != "completed":
            raise HTTPException(status_code=400, detail="Only completed payments can be refunded")

        row = update_row(db, payments, payment_id, {"status": "refunded"})
        update_rows(db, registrations, {"status": "cancelled"}, id=payment["registration_id"])
        log_admin_action(
            db, admin["user_id"], "refund_payment", "payment", payment_id,
            details={"amount": payment["amount"], "registration_id": payment["registration_id"]},
            ip_address=request.client.host if request.client else None,
        )

    return PaymentResponse(**row)
