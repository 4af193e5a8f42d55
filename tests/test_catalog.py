import httpx

from conftest import auth
from eventgo.client import CatalogBrowser, filter_listings
from eventgo.client.samples import SAMPLE_EVENTS, SAMPLE_INTERNSHIPS, SAMPLE_JOBS

LISTINGS = [
    {"title": "Robotics Cup", "description": "Build a bot", "city": "Mumbai", "tags": ["Robotics", "Tech"],
     "college": {"name": "IIT Bombay"}},
    {"title": "Backend Engineer", "description": "APIs", "location": "Bangalore",
     "skills_required": ["Python", "Go"], "company": {"name": "Acme Labs"}},
    {"title": "Design Jam", "description": None, "city": None, "tags": []},
]


def titles(items):
    return [i["title"] for i in items]


def test_filter_by_search_matches_org_name():
    assert titles(filter_listings(LISTINGS, search="acme")) == ["Backend Engineer"]
    assert titles(filter_listings(LISTINGS, search="  BOT ")) == ["Robotics Cup"]
    assert titles(filter_listings(LISTINGS)) == ["Robotics Cup", "Backend Engineer", "Design Jam"]


def test_filter_by_tags_is_any_of():
    assert titles(filter_listings(LISTINGS, tags=["python", "tech"])) == ["Robotics Cup", "Backend Engineer"]
    assert titles(filter_listings(LISTINGS, tags=["Rust"])) == []


def test_filter_by_location_and_combined():
    assert titles(filter_listings(LISTINGS, location="bangalore")) == ["Backend Engineer"]
    assert filter_listings(LISTINGS, search="robotics", location="pune") == []


def test_empty_catalog_falls_back_to_samples(client):
    browser = CatalogBrowser(http=client)
    events = browser.events()
    assert titles(events) == titles(SAMPLE_EVENTS)

    # callers get copies, the bundled samples stay untouched
    events[0]["title"] = "Changed"
    assert SAMPLE_EVENTS[0]["title"] != "Changed"

    assert titles(browser.jobs(location="mumbai")) == ["Full Stack Developer"]


def test_live_catalog_wins_over_samples(client, company):
    client.post("/api/opportunities", json={"title": "Platform Engineer", "type": "job", "location": "Pune"},
                headers=auth(company[0]))
    browser = CatalogBrowser(http=client)
    assert titles(browser.jobs()) == ["Platform Engineer"]
    assert titles(browser.internships()) == titles(SAMPLE_INTERNSHIPS)
    assert "Platform Engineer" not in titles(browser.hackathons())


def test_server_errors_fall_back_to_samples():
    def broken(request):
        return httpx.Response(500, json={"detail": "boom"})

    http = httpx.Client(base_url="http://eventgo.invalid", transport=httpx.MockTransport(broken))
    assert titles(CatalogBrowser(http=http).jobs()) == titles(SAMPLE_JOBS)
