"""
Session client - the signed-in state of one EventGo user.

Wraps the /auth endpoints and the caller's profile:

    session = AuthSession("http://localhost:8000", token_store=FileTokenStore())
    session.load()
    if not session.user:
        result = session.sign_in("asha@campus.io", "Secret123")
        if result.error:
            print(result.error.message)
    print(session.role, session.profile["full_name"])

Auth operations never raise. Failures come back as AuthResult.error.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from eventgo.client.token_store import MemoryTokenStore, TokenStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0

# Sign-up form keys accepted in `extra`, mapped to the API field names
SIGNUP_FIELDS = {
    "phone": "phone",
    "collegeName": "college_name",
    "college_name": "college_name",
    "graduationYear": "graduation_year",
    "graduation_year": "graduation_year",
    "city": "city",
    "companyName": "company_name",
    "company_name": "company_name",
    "industry": "industry",
}


@dataclass
class AuthError:
    message: str
    status_code: Optional[int] = None


@dataclass
class AuthResult:
    error: Optional[AuthError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _error_from_response(response: httpx.Response) -> AuthError:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if isinstance(detail, list):
        # request validation errors
        detail = "; ".join(str(d.get("msg", d)) for d in detail)
    return AuthError(message=detail or f"Request failed ({response.status_code})", status_code=response.status_code)


class AuthSession:
    """
    Holds user, profile, role and the persisted token.

    `http` may be any httpx.Client (a FastAPI TestClient works); by default
    one is created for base_url.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http: Optional[httpx.Client] = None,
        token_store: Optional[TokenStore] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.http = http or httpx.Client(base_url=self.base_url, timeout=timeout)
        self.token_store = token_store or MemoryTokenStore()

        self.token: Optional[str] = None
        self.user: Optional[Dict[str, Any]] = None
        self.profile: Optional[Dict[str, Any]] = None
        self.role: Optional[str] = None
        self.is_loading = True

    # ------------------------------------------------------------
    # plumbing
    # ------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        return self.http.request(method, path, headers=self._headers(), **kwargs)

    def _reset(self) -> None:
        self.token = None
        self.user = None
        self.profile = None
        self.role = None

    def _persist(self, token: str, user: Dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self.role = user.get("role")
        self.token_store.save({"token": token, "user": user})

    def _fetch_profile(self) -> None:
        try:
            response = self._request("GET", f"/api/users/{self.user['id']}")
        except httpx.HTTPError as e:
            logger.error("Error fetching profile: %s", e)
            return
        if response.status_code != 200:
            logger.error("Error fetching profile: %s", _error_from_response(response).message)
            return
        try:
            data = response.json()
        except ValueError:
            logger.error("Error fetching profile: response was not JSON")
            return
        self.profile = data.get("profile")
        self.role = data.get("role")

    def _authenticate(self, path: str, payload: Dict[str, Any]) -> AuthResult:
        try:
            response = self._request("POST", path, json=payload)
        except httpx.HTTPError as e:
            return AuthResult(error=AuthError(message=f"Network error: {e}"))

        if not response.is_success:
            return AuthResult(error=_error_from_response(response))

        try:
            data = response.json()
            token, user = data["token"], data["user"]
        except (ValueError, KeyError, TypeError):
            error = AuthError(message="Unexpected response from server", status_code=response.status_code)
            return AuthResult(error=error)
        self._persist(token, user)
        self._fetch_profile()
        return AuthResult()

    # ------------------------------------------------------------
    # public API
    # ------------------------------------------------------------

    def load(self) -> None:
        """
        Restore a persisted session.

        Without a stored token this just finishes loading. Otherwise the
        token is checked against /auth/user; any non-success response drops
        it and leaves the session logged out.
        """
        self.is_loading = True
        stored = self.token_store.load()
        if not stored or not stored.get("token"):
            self._reset()
            self.is_loading = False
            return

        self.token = stored["token"]
        try:
            response = self._request("GET", "/auth/user")
        except httpx.HTTPError as e:
            logger.warning("Could not verify stored session: %s", e)
            response = None

        data = {}
        if response is not None and response.is_success:
            try:
                data = response.json()
            except ValueError:
                logger.warning("Session check returned a non-JSON body")
        if not isinstance(data, dict):
            data = {}
        if data.get("authenticated") and data.get("user"):
            self.user = data["user"]
            self.role = self.user.get("role")
            self._fetch_profile()
        else:
            self.token_store.clear()
            self._reset()

        self.is_loading = False

    def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        role: str = "student",
        extra: Optional[Dict[str, Any]] = None,
    ) -> AuthResult:
        payload = {"email": email, "password": password, "full_name": full_name, "role": role}
        for key, value in (extra or {}).items():
            if key in SIGNUP_FIELDS and value not in (None, ""):
                payload[SIGNUP_FIELDS[key]] = value
        return self._authenticate("/auth/signup", payload)

    def sign_in(self, email: str, password: str) -> AuthResult:
        return self._authenticate("/auth/login", {"email": email, "password": password})

    def sign_out(self) -> None:
        """Tell the server (best effort), then forget everything locally."""
        try:
            self._request("GET", "/auth/logout")
        except httpx.HTTPError as e:
            logger.debug("Logout request failed: %s", e)
        self.token_store.clear()
        self._reset()

    def refresh_profile(self) -> None:
        if self.user:
            self._fetch_profile()

    def update_password(self, current_password: str, new_password: str) -> AuthResult:
        if not self.token:
            return AuthResult(error=AuthError(message="Not signed in", status_code=401))
        try:
            response = self._request(
                "POST", "/auth/update-password",
                json={"current_password": current_password, "new_password": new_password},
            )
        except httpx.HTTPError as e:
            return AuthResult(error=AuthError(message=f"Network error: {e}"))
        if not response.is_success:
            return AuthResult(error=_error_from_response(response))
        return AuthResult()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def close(self) -> None:
        self.http.close()
