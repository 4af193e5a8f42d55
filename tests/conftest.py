import os
import tempfile

# Point settings at a throwaway SQLite file before anything imports eventgo
_DB_DIR = tempfile.mkdtemp(prefix="eventgo-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'eventgo.sqlite')}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient

from eventgo.core.exceptions import NotFoundError, StorageError
from eventgo.db.mongodb import BUCKETS
from eventgo.db.postgres import engine, get_db_session
from eventgo.db.tables import metadata
from eventgo.main import app
from eventgo.services.account_service import create_account
from eventgo.services.storage_service import get_storage

PASSWORD = "Secret123"


class InMemoryStorage:
    """Same surface as GridFSStorage, kept in a dict."""

    def __init__(self):
        self.objects = {}

    def _check(self, bucket):
        if bucket not in BUCKETS:
            raise NotFoundError("Bucket", bucket)

    def upload(self, bucket, path, data, content_type, owner_id):
        self._check(bucket)
        if (bucket, path) in self.objects:
            raise StorageError(f"Object '{path}' already exists")
        self.objects[(bucket, path)] = (data, content_type, owner_id)
        return path

    def exists(self, bucket, path):
        self._check(bucket)
        return (bucket, path) in self.objects

    def owner_of(self, bucket, path):
        self._check(bucket)
        if (bucket, path) not in self.objects:
            raise NotFoundError("Object", path)
        return self.objects[(bucket, path)][2]

    def open(self, bucket, path):
        self._check(bucket)
        if (bucket, path) not in self.objects:
            raise NotFoundError("Object", path)
        data, content_type, _ = self.objects[(bucket, path)]
        return data, content_type

    def remove(self, bucket, paths):
        self._check(bucket)
        removed = 0
        for path in paths:
            if self.objects.pop((bucket, path), None) is not None:
                removed += 1
        return removed


@pytest.fixture(autouse=True)
def fresh_db():
    metadata.drop_all(bind=engine)
    metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def storage():
    fake = InMemoryStorage()
    app.dependency_overrides[get_storage] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture()
def client(storage):
    return TestClient(app)


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(client):
    """Sign up through the API; returns (token, user dict)."""

    def _make(email, role="student", full_name="Test User", password=PASSWORD, **extra):
        payload = {"email": email, "password": password, "full_name": full_name, "role": role}
        if role == "college":
            payload.setdefault("college_name", "Campus Institute")
        if role == "company":
            payload.setdefault("company_name", "Acme Labs")
        payload.update(extra)
        r = client.post("/auth/signup", json=payload)
        assert r.status_code == 201, r.text
        body = r.json()
        return body["token"], body["user"]

    return _make


@pytest.fixture()
def admin_token(client):
    """Admins cannot self-register, so the account is created directly."""
    with get_db_session() as db:
        create_account(db, email="admin@eventgo.io", password=PASSWORD, full_name="Site Admin", role="admin")
    r = client.post("/auth/login", json={"email": "admin@eventgo.io", "password": PASSWORD})
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture()
def college(make_user):
    token, user = make_user("college@campus.io", role="college", full_name="College Admin", city="Pune")
    return token, user


@pytest.fixture()
def company(make_user):
    token, user = make_user("hr@acme.io", role="company", full_name="Acme HR", industry="Software")
    return token, user


@pytest.fixture()
def student(make_user):
    return make_user("asha@campus.io", full_name="Asha Rao", college_name="Campus Institute")


EVENT_PAYLOAD = {
    "title": "TechFest 2030",
    "description": "Annual technical festival",
    "city": "Pune",
    "start_date": "2030-02-15T09:00:00Z",
    "end_date": "2030-02-17T18:00:00Z",
    "tags": ["Tech", "Coding"],
    "status": "published",
}


@pytest.fixture()
def create_event(client, college):
    def _create(token=None, **overrides):
        payload = {**EVENT_PAYLOAD, **overrides}
        r = client.post("/api/events", json=payload, headers=auth(token or college[0]))
        assert r.status_code == 201, r.text
        return r.json()

    return _create
