import httpx

from conftest import PASSWORD
from eventgo.client import AuthSession, FileTokenStore, MemoryTokenStore


def _session(client, store=None):
    return AuthSession(base_url="http://testserver", http=client, token_store=store or MemoryTokenStore())


def test_load_without_token_finishes_logged_out(client):
    session = _session(client)
    assert session.is_loading is True
    session.load()
    assert session.is_loading is False
    assert session.user is None
    assert session.role is None


def test_sign_up_persists_token_and_profile(client):
    store = MemoryTokenStore()
    session = _session(client, store)

    result = session.sign_up("meera@campus.io", PASSWORD, "Meera N", "student",
                             extra={"collegeName": "Campus Institute", "graduationYear": 2026})
    assert result.ok
    assert session.role == "student"
    assert session.profile["college_name"] == "Campus Institute"
    assert session.profile["graduation_year"] == 2026
    assert store.load()["token"] == session.token


def test_sign_up_error_is_returned_not_raised(client):
    session = _session(client)
    result = session.sign_up("meera@campus.io", "weak", "Meera N")
    assert not result.ok
    assert result.error.status_code == 400
    assert "8 characters" in result.error.message
    assert session.user is None


def test_sign_in_and_restore_from_store(client, make_user):
    make_user("dev@campus.io", full_name="Dev P")
    store = MemoryTokenStore()

    first = _session(client, store)
    assert first.sign_in("dev@campus.io", PASSWORD).ok
    assert first.profile["full_name"] == "Dev P"

    second = _session(client, store)
    second.load()
    assert second.user["email"] == "dev@campus.io"
    assert second.role == "student"
    assert second.profile["full_name"] == "Dev P"


def test_sign_in_wrong_password(client, make_user):
    make_user("dev@campus.io")
    session = _session(client)
    result = session.sign_in("dev@campus.io", "Wrong1234")
    assert result.error.status_code == 401
    assert result.error.message == "Invalid email or password"
    assert not session.is_authenticated


def test_load_with_bad_token_clears_store(client):
    store = MemoryTokenStore({"token": "expired.token.value", "user": {"id": "x"}})
    session = _session(client, store)
    session.load()
    assert session.user is None
    assert store.load() is None
    assert session.is_loading is False


def test_sign_out_always_clears(client, make_user):
    make_user("dev@campus.io")
    store = MemoryTokenStore()
    session = _session(client, store)
    session.sign_in("dev@campus.io", PASSWORD)

    session.sign_out()
    assert session.user is None
    assert session.profile is None
    assert session.token is None
    assert store.load() is None


def test_sign_out_ignores_network_failure():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://eventgo.invalid", transport=httpx.MockTransport(refuse))
    store = MemoryTokenStore({"token": "t", "user": {"id": "u"}})
    session = AuthSession(http=http, token_store=store)
    session.token = "t"

    session.sign_out()
    assert store.load() is None
    assert session.token is None


def test_network_error_becomes_auth_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://eventgo.invalid", transport=httpx.MockTransport(refuse))
    session = AuthSession(http=http)
    result = session.sign_in("a@campus.io", PASSWORD)
    assert result.error is not None
    assert result.error.status_code is None
    assert "Network error" in result.error.message


def test_refresh_profile_and_update_password(client, make_user):
    token, user = make_user("dev@campus.io", full_name="Dev P")
    session = _session(client)
    session.refresh_profile()
    assert session.profile is None

    session.sign_in("dev@campus.io", PASSWORD)
    client.put(f"/api/users/{user['id']}", json={"full_name": "Dev Patel"},
               headers={"Authorization": f"Bearer {token}"})
    session.refresh_profile()
    assert session.profile["full_name"] == "Dev Patel"

    assert session.update_password(PASSWORD, "Another789").ok
    bad = session.update_password("Wrong1234", "Another999")
    assert bad.error.message == "Current password is incorrect"


def test_file_token_store_round_trip(tmp_path):
    store = FileTokenStore(config_dir=tmp_path)
    assert store.load() is None

    store.save({"token": "abc", "user": {"id": "1"}})
    assert FileTokenStore(config_dir=tmp_path).load() == {"token": "abc", "user": {"id": "1"}}

    store.clear()
    assert store.load() is None
    store.clear()


def test_file_token_store_ignores_corrupt_file(tmp_path):
    (tmp_path / "session.json").write_text("{not json", encoding="utf-8")
    assert FileTokenStore(config_dir=tmp_path).load() is None


def test_garbled_success_response_is_an_error():
    def proxy_page(request):
        return httpx.Response(200, text="<html>captive portal</html>")

    http = httpx.Client(base_url="http://eventgo.invalid", transport=httpx.MockTransport(proxy_page))
    store = MemoryTokenStore({"token": "t", "user": {"id": "u"}})
    session = AuthSession(http=http, token_store=store)

    result = session.sign_in("a@campus.io", PASSWORD)
    assert result.error.message == "Unexpected response from server"
    assert result.error.status_code == 200
    assert not session.is_authenticated

    session.load()
    assert session.user is None
    assert store.load() is None


def test_success_without_token_is_an_error():
    http = httpx.Client(base_url="http://eventgo.invalid",
                        transport=httpx.MockTransport(lambda request: httpx.Response(201, json={"user": {}})))
    result = AuthSession(http=http).sign_up("a@campus.io", PASSWORD, "A Person")
    assert result.error.message == "Unexpected response from server"
