import pytest
from sqlalchemy.exc import IntegrityError

from conftest import auth
from eventgo.api.routes import connection_routes
from eventgo.api.routes.connection_routes import pair_key
from eventgo.db.postgres import get_db_session
from eventgo.db.query import insert_row
from eventgo.db.tables import connections


def test_connection_request_flow(client, student, make_user):
    asha_token, asha = student
    ravi_token, ravi = make_user("ravi@campus.io", full_name="Ravi K")

    assert client.post("/api/connections", json={"receiver_id": asha["id"]},
                       headers=auth(asha_token)).status_code == 400

    r = client.post("/api/connections", json={"receiver_id": ravi["id"]}, headers=auth(asha_token))
    assert r.status_code == 201
    conn_id = r.json()["id"]
    assert r.json()["status"] == "pending"

    # the reverse direction counts as the same pair
    r = client.post("/api/connections", json={"receiver_id": asha["id"]}, headers=auth(ravi_token))
    assert r.status_code == 400

    requests = client.get("/api/connections/requests", headers=auth(ravi_token)).json()
    assert [c["other_user"]["full_name"] for c in requests] == ["Asha Rao"]
    assert client.get("/api/connections/requests", headers=auth(asha_token)).json() == []

    # only the receiver may answer
    assert client.put(f"/api/connections/{conn_id}", json={"status": "accepted"},
                      headers=auth(asha_token)).status_code == 404

    r = client.put(f"/api/connections/{conn_id}", json={"status": "accepted"}, headers=auth(ravi_token))
    assert r.json()["status"] == "accepted"

    assert client.put(f"/api/connections/{conn_id}", json={"status": "rejected"},
                      headers=auth(ravi_token)).status_code == 400

    mine = client.get("/api/connections", headers=auth(asha_token)).json()
    assert [c["other_user"]["full_name"] for c in mine] == ["Ravi K"]


def test_connect_to_unknown_user(client, student):
    r = client.post("/api/connections", json={"receiver_id": "missing"}, headers=auth(student[0]))
    assert r.status_code == 404


def test_inquiry_needs_exactly_one_target(client, student):
    r = client.post("/api/inquiries", json={"subject": "Hi", "message": "?"}, headers=auth(student[0]))
    assert r.status_code == 422
    r = client.post("/api/inquiries", json={"subject": "Hi", "message": "?", "event_id": "a",
                                            "opportunity_id": "b"}, headers=auth(student[0]))
    assert r.status_code == 422


def test_event_inquiry_inbox(client, student, college, admin_token, make_user, create_event):
    event = create_event()
    r = client.post("/api/inquiries", json={"event_id": event["id"], "subject": "Parking",
                                            "message": "Is there parking?"}, headers=auth(student[0]))
    assert r.status_code == 201
    inquiry = r.json()
    assert inquiry["sender_name"] == "Asha Rao"
    assert inquiry["sender_email"] == "asha@campus.io"
    assert inquiry["event_title"] == "TechFest 2030"

    inbox = client.get("/api/inquiries", headers=auth(college[0])).json()
    assert [i["id"] for i in inbox] == [inquiry["id"]]
    assert client.get("/api/inquiries", headers=auth(student[0])).json() == []
    assert len(client.get("/api/inquiries", headers=auth(admin_token)).json()) == 1
    assert len(client.get("/api/inquiries/sent", headers=auth(student[0])).json()) == 1

    other_college, _ = make_user("other@campus.io", role="college", college_name="Other College")
    assert client.put(f"/api/inquiries/{inquiry['id']}/read", headers=auth(other_college)).status_code == 403

    r = client.put(f"/api/inquiries/{inquiry['id']}/read", headers=auth(college[0]))
    assert r.json()["is_read"] is True
    assert r.json()["replied_at"] is None
    assert client.get("/api/inquiries", params={"unread_only": True}, headers=auth(college[0])).json() == []

    r = client.put(f"/api/inquiries/{inquiry['id']}/reply", headers=auth(college[0]))
    assert r.json()["replied_at"] is not None
    assert r.json()["subject"] == "Parking"


def test_opportunity_inquiry_goes_to_company(client, student, company):
    listing = client.post("/api/opportunities", json={"title": "ML Intern", "type": "internship"},
                          headers=auth(company[0])).json()
    r = client.post("/api/inquiries", json={"opportunity_id": listing["id"], "subject": "Stipend",
                                            "message": "What is the stipend?"}, headers=auth(student[0]))
    assert r.json()["opportunity_title"] == "ML Intern"

    inbox = client.get("/api/inquiries", headers=auth(company[0])).json()
    assert [i["subject"] for i in inbox] == ["Stipend"]


def test_pair_is_unique_in_storage(client, student, make_user, monkeypatch):
    asha_token, asha = student
    ravi_token, ravi = make_user("ravi@campus.io", full_name="Ravi K")
    client.post("/api/connections", json={"receiver_id": ravi["id"]}, headers=auth(asha_token))

    with pytest.raises(IntegrityError):
        with get_db_session() as db:
            insert_row(db, connections, {"requester_id": ravi["id"], "receiver_id": asha["id"],
                                         "pair_key": pair_key(ravi["id"], asha["id"]), "status": "pending"})

    # a request that slips past the lookup still gets a clean 400
    real_fetch_one = connection_routes.fetch_one

    def miss_connections(db, table, *conditions, **filters):
        return None if table is connections else real_fetch_one(db, table, *conditions, **filters)

    monkeypatch.setattr(connection_routes, "fetch_one", miss_connections)
    r = client.post("/api/connections", json={"receiver_id": asha["id"]}, headers=auth(ravi_token))
    assert r.status_code == 400
    assert r.json()["detail"] == "Connection already exists"
