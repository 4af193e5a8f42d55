from conftest import EVENT_PAYLOAD, auth


def test_college_creates_event_with_slug_and_college(client, college, create_event):
    event = create_event()
    assert event["title"] == "TechFest 2030"
    assert event["slug"].startswith("techfest-2030-")
    assert event["college"]["name"] == "Campus Institute"
    assert event["is_free"] is True
    assert event["base_price"] == 0


def test_students_cannot_create_events(client, student):
    r = client.post("/api/events", json=EVENT_PAYLOAD, headers=auth(student[0]))
    assert r.status_code == 403


def test_event_dates_validated(client, college):
    payload = {**EVENT_PAYLOAD, "end_date": "2030-02-14T09:00:00Z"}
    r = client.post("/api/events", json=payload, headers=auth(college[0]))
    assert r.status_code == 422


def test_public_list_shows_only_published(client, create_event):
    create_event(title="Published One")
    create_event(title="Draft One", status="draft")

    r = client.get("/api/events")
    assert r.status_code == 200
    assert [e["title"] for e in r.json()] == ["Published One"]


def test_list_filters(client, create_event):
    create_event(title="Robotics Cup", tags=["Robotics"], city="Mumbai", is_featured=True)
    create_event(title="Code Sprint", tags=["Coding"], city="Pune")

    assert [e["title"] for e in client.get("/api/events", params={"search": "robot"}).json()] == ["Robotics Cup"]
    assert [e["title"] for e in client.get("/api/events", params={"tag": "coding"}).json()] == ["Code Sprint"]
    assert [e["title"] for e in client.get("/api/events", params={"city": "mumbai"}).json()] == ["Robotics Cup"]
    assert [e["title"] for e in client.get("/api/events", params={"featured": True}).json()] == ["Robotics Cup"]


def test_detail_counts_views_and_hides_drafts(client, college, student, admin_token, create_event):
    event = create_event()
    first = client.get(f"/api/events/{event['id']}").json()
    second = client.get(f"/api/events/{event['id']}").json()
    assert second["view_count"] == first["view_count"] + 1

    draft = create_event(title="Secret Draft", status="draft")
    assert client.get(f"/api/events/{draft['id']}").status_code == 404
    assert client.get(f"/api/events/{draft['id']}", headers=auth(student[0])).status_code == 404
    assert client.get(f"/api/events/{draft['id']}", headers=auth(college[0])).status_code == 200
    assert client.get(f"/api/events/{draft['id']}", headers=auth(admin_token)).status_code == 200


def test_update_and_delete_by_owner_only(client, college, make_user, create_event):
    event = create_event()
    other_token, _ = make_user("other@campus.io", role="college", college_name="Other College")

    r = client.put(f"/api/events/{event['id']}", json={"title": "TechFest Reloaded"}, headers=auth(other_token))
    assert r.status_code == 403

    r = client.put(f"/api/events/{event['id']}", json={"title": "TechFest Reloaded", "is_free": False,
                                                      "base_price": 199}, headers=auth(college[0]))
    assert r.status_code == 200
    assert r.json()["title"] == "TechFest Reloaded"
    assert r.json()["base_price"] == 199

    r = client.put(f"/api/events/{event['id']}", json={"end_date": "2020-01-01T00:00:00Z"}, headers=auth(college[0]))
    assert r.status_code == 400

    assert client.delete(f"/api/events/{event['id']}", headers=auth(other_token)).status_code == 403
    assert client.delete(f"/api/events/{event['id']}", headers=auth(college[0])).status_code == 200
    assert client.get(f"/api/events/{event['id']}").status_code == 404


def test_admin_creates_event_for_college(client, college, admin_token):
    me = client.get("/api/colleges/me", headers=auth(college[0])).json()

    r = client.post("/api/events", json=EVENT_PAYLOAD, headers=auth(admin_token))
    assert r.status_code == 400

    r = client.post("/api/events", json={**EVENT_PAYLOAD, "college_id": me["id"]}, headers=auth(admin_token))
    assert r.status_code == 201
    assert r.json()["college_id"] == me["id"]


def test_sub_events(client, college, create_event):
    event = create_event()
    sub = {
        "title": "Hackathon Track",
        "start_time": "2030-02-15T10:00:00Z",
        "end_time": "2030-02-15T22:00:00Z",
        "price": 99,
        "is_team_event": True,
        "min_team_size": 2,
        "max_team_size": 4,
    }
    r = client.post(f"/api/events/{event['id']}/sub-events", json=sub, headers=auth(college[0]))
    assert r.status_code == 201
    sub_id = r.json()["id"]

    detail = client.get(f"/api/events/{event['id']}").json()
    assert [s["title"] for s in detail["sub_events"]] == ["Hackathon Track"]
    assert len(client.get(f"/api/events/{event['id']}/sub-events").json()) == 1

    bad = {**sub, "min_team_size": 5}
    assert client.post(f"/api/events/{event['id']}/sub-events", json=bad,
                       headers=auth(college[0])).status_code == 422

    r = client.delete(f"/api/events/{event['id']}/sub-events/{sub_id}", headers=auth(college[0]))
    assert r.status_code == 200
    r = client.delete(f"/api/events/{event['id']}/sub-events/{sub_id}", headers=auth(college[0]))
    assert r.status_code == 404


def test_college_dashboard_lists_all_own_events(client, college, create_event):
    create_event(title="Live Event")
    create_event(title="Work In Progress", status="draft")

    r = client.get("/api/colleges/me/events", headers=auth(college[0]))
    assert sorted(e["title"] for e in r.json()) == ["Live Event", "Work In Progress"]

    r = client.put("/api/colleges/me", json={"short_name": "CI", "established_year": 1990}, headers=auth(college[0]))
    assert r.json()["short_name"] == "CI"
    assert r.json()["is_verified"] is False


def test_dashboards_are_role_scoped(client, student):
    assert client.get("/api/colleges/me", headers=auth(student[0])).status_code == 403
    assert client.get("/api/companies/me", headers=auth(student[0])).status_code == 403


def test_mixed_offset_dates_are_compared_as_utc(client, college, create_event):
    r = client.post("/api/events", json={**EVENT_PAYLOAD, "end_date": "2030-02-17T18:00:00"},
                    headers=auth(college[0]))
    assert r.status_code == 201

    r = client.post("/api/events", json={**EVENT_PAYLOAD, "end_date": "2030-02-14T18:00:00"},
                    headers=auth(college[0]))
    assert r.status_code == 422

    event = create_event()
    r = client.post(f"/api/events/{event['id']}/sub-events", json={
        "title": "Keynote",
        "start_time": "2030-02-15T10:00:00+05:30",
        "end_time": "2030-02-15T09:00:00",
    }, headers=auth(college[0]))
    assert r.status_code == 201

    r = client.put(f"/api/events/{event['id']}", json={"end_date": "2030-02-10T00:00:00"},
                   headers=auth(college[0]))
    assert r.status_code == 400
