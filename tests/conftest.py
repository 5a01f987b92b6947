"""
Pytest configuration and fixtures for Uyuni provider tests.
"""

import json

import httpx
import pytest

from uyuni_provider import api
from uyuni_provider.api import ConnectionDetails
from uyuni_provider.provider import ProviderConfig, UyuniProvider

API_PREFIX = "/rhn/manager/api/"
ADMIN_LOGIN = "admin"
ADMIN_PASSWORD = "admin-secret"


class FakeUyuni:
    """In-memory stand-in for the Uyuni HTTP API.

    Serves auth/login and the user/* calls the provider uses. Every request
    is recorded in ``requests``.
    """

    def __init__(self):
        self.users: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail: dict[str, str] = {}
        self.detail_overrides: dict[str, object] = {}
        self.list_overrides: dict[str, object] = {}
        self._next_id = 1

    def add_user(self, login, firstname="", lastname="", email="", password="x"):
        self.users[login] = {
            "id": self._next_id,
            "login": login,
            "password": password,
            "first_name": firstname,
            "last_name": lastname,
            "email": email,
        }
        self._next_id += 1

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)

        if path == "auth/login":
            return self._login(request)
        if "pxt-session-cookie" not in request.headers.get("cookie", ""):
            return httpx.Response(401)
        if path in self.fail:
            return httpx.Response(200, json={"success": False, "message": self.fail[path]})

        login = request.url.params.get("login")
        if path == "user/create" and request.method == "POST":
            body = json.loads(request.content)
            if body["login"] in self.users:
                return _failure(f"User {body['login']} already exists")
            self.add_user(
                body["login"],
                body["firstName"],
                body["lastName"],
                body["email"],
                body["password"],
            )
            return _success(1)
        if path == "user/getDetails" and request.method == "GET":
            user = self.users.get(login)
            if user is None:
                return _failure(f"No such user: {login}")
            return _success(
                {
                    "first_name": user["first_name"],
                    "last_name": user["last_name"],
                    "email": user["email"],
                    "org_id": 1,
                    "org_name": "Default Organization",
                    "prefix": "",
                    "last_login_date": "",
                    "created_date": "2024-01-01T00:00:00Z",
                    "enabled": True,
                    "use_pam": False,
                    "read_only": False,
                    "errata_notification": True,
                    **self.detail_overrides,
                }
            )
        if path == "user/delete" and request.method == "POST":
            if self.users.pop(login, None) is None:
                return _failure(f"No such user: {login}")
            return _success(1)
        if path == "user/listUsers" and request.method == "GET":
            return _success(
                [
                    {
                        "id": user["id"],
                        "login": user["login"],
                        "login_uc": user["login"].upper(),
                        "enabled": True,
                        **self.list_overrides,
                    }
                    for user in self.users.values()
                ]
            )
        return httpx.Response(404)

    def _login(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if body.get("login") != ADMIN_LOGIN or body.get("password") != ADMIN_PASSWORD:
            return httpx.Response(
                200,
                json={
                    "success": False,
                    "messages": ["Either the password or username is incorrect."],
                },
            )
        return httpx.Response(
            200,
            json={"success": True, "messages": []},
            headers={"Set-Cookie": "pxt-session-cookie=42xsession; Path=/; Max-Age=3600"},
        )


def _success(result) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "result": result})


def _failure(message: str) -> httpx.Response:
    return httpx.Response(200, json={"success": False, "message": message})


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove UYUNI_* connection variables from the environment."""
    for name in ("UYUNI_HOST", "UYUNI_USERNAME", "UYUNI_PASSWORD"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_uyuni():
    """Provide an empty fake Uyuni server."""
    return FakeUyuni()


@pytest.fixture
def transport(fake_uyuni):
    """Provide an httpx transport routed to the fake server."""
    return httpx.MockTransport(fake_uyuni.handle)


@pytest.fixture
def connection():
    """Provide connection details matching the fake server's admin account."""
    return ConnectionDetails(
        server="uyuni.example",
        user=ADMIN_LOGIN,
        password=ADMIN_PASSWORD,
        insecure=True,
    )


@pytest.fixture
def client(connection, transport):
    """Provide a logged-in client."""
    with api.init(connection, transport=transport) as client:
        yield client


@pytest.fixture
def provider(transport):
    """Provide a provider routed to the fake server, not configured yet."""
    return UyuniProvider(version="test", transport=transport)


@pytest.fixture
def configured_provider(provider):
    """Provide a provider configured with the fake server's admin account."""
    provider.configure(
        ProviderConfig(host="uyuni.example", username=ADMIN_LOGIN, password=ADMIN_PASSWORD)
    )
    yield provider
    provider.client.close()
