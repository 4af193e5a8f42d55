"""
Connection Routes

POST /api/connections - Send a connection request
GET /api/connections - Accepted connections (with the other user's profile)
GET /api/connections/requests - Pending requests received
PUT /api/connections/{id} - Accept or reject (receiver only)
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from typing import List

from eventgo.db.postgres import get_db_session
from eventgo.db.query import fetch_all, fetch_one, insert_row, update_row
from eventgo.db.tables import connections, profiles
from eventgo.core.auth import get_current_user
from eventgo.schemas.schemas import (
    ConnectionCreate, ConnectionRespond, ConnectionResponse, ConnectionStatus, ConnectionDetailResponse
)

router = APIRouter(prefix="/api/connections", tags=["Connections"])


def pair_key(a: str, b: str) -> str:
    """Order-independent key for a pair of user ids."""
    return ":".join(sorted((a, b)))


def _with_other(db, row: dict, me: str) -> ConnectionDetailResponse:
    other_id = row["receiver_id"] if row["requester_id"] == me else row["requester_id"]
    profile = fetch_one(db, profiles, user_id=other_id)
    return ConnectionDetailResponse(**row, other_user=profile)


@router.post("", response_model=ConnectionResponse, status_code=201)
async def send_request(data: ConnectionCreate, user: dict = Depends(get_current_user)):
    me = user["user_id"]
    if data.receiver_id == me:
        raise HTTPException(status_code=400, detail="Cannot connect with yourself")

    with get_db_session() as db:
        if not fetch_one(db, profiles, user_id=data.receiver_id):
            raise HTTPException(status_code=404, detail="User not found")

        key = pair_key(me, data.receiver_id)
        if fetch_one(db, connections, pair_key=key):
            raise HTTPException(status_code=400, detail="Connection already exists")

        try:
            row = insert_row(db, connections, {
                "requester_id": me,
                "receiver_id": data.receiver_id,
                "pair_key": key,
                "status": "pending",
            })
        except IntegrityError:
            # a concurrent request for the same pair got there first
            raise HTTPException(status_code=400, detail="Connection already exists")
    return ConnectionResponse(**row)


@router.get("", response_model=List[ConnectionDetailResponse])
async def list_connections(user: dict = Depends(get_current_user)):
    me = user["user_id"]
    with get_db_session() as db:
        rows = fetch_all(
            db, connections,
            or_(connections.c.requester_id == me, connections.c.receiver_id == me),
            order_by="updated_at", status="accepted",
        )
        return [_with_other(db, r, me) for r in rows]


@router.get("/requests", response_model=List[ConnectionDetailResponse])
async def list_requests(user: dict = Depends(get_current_user)):
    me = user["user_id"]
    with get_db_session() as db:
        rows = fetch_all(db, connections, order_by="created_at", receiver_id=me, status="pending")
        return [_with_other(db, r, me) for r in rows]


@router.put("/{connection_id}", response_model=ConnectionResponse)
async def respond(connection_id: str, data: ConnectionRespond, user: dict = Depends(get_current_user)):
    """Accept or reject a pending request addressed to the caller."""
    if data.status == ConnectionStatus.pending:
        raise HTTPException(status_code=400, detail="Status must be accepted or rejected")

    with get_db_session() as db:
        row = fetch_one(db, connections, id=connection_id)
        if not row or row["receiver_id"] != user["user_id"]:
            raise HTTPException(status_code=404, detail="Connection request not found")
        if row["status"] != "pending":
            raise HTTPException(status_code=400, detail=f"Request already {row['status']}")

        row = update_row(db, connections, connection_id, {"status": data.status.value})
    return ConnectionResponse(**row)
