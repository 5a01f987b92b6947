"""Low-level HTTP client for the Uyuni API.

Handles login, the session cookie and decoding of the response envelope.
"""

import logging
import ssl
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..errors import UyuniAPIError
from .models import APIResponse, ConnectionDetails

logger = logging.getLogger(__name__)

T = TypeVar("T")

SESSION_COOKIE = "pxt-session-cookie"
DEFAULT_TIMEOUT = 30.0


class UyuniClient:
    """HTTP client for the Uyuni API.

    The client logs in once and keeps the session cookie for every later call.
    It holds no per-call state and can be shared between callers.

    Usage:
        client = UyuniClient(ConnectionDetails(server="uyuni.example", user="admin", password="secret"))
        client.login()
        details = client.get("user/getDetails", UserDetails, params={"login": "admin"})
    """

    def __init__(
        self,
        conn: ConnectionDetails,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client without contacting the server.

        Args:
            conn: Connection parameters
            timeout: Timeout in seconds for each request
            transport: Optional httpx transport (used to stub the server)

        Raises:
            UyuniAPIError: If the server address does not form a valid URL
        """
        self.conn = conn
        if conn.insecure:
            verify: bool | ssl.SSLContext = False
        elif conn.cacert:
            verify = ssl.create_default_context(cafile=conn.cacert)
        else:
            verify = True
        try:
            self._http = httpx.Client(
                base_url=conn.base_url,
                verify=verify,
                timeout=timeout,
                transport=transport,
            )
        except httpx.InvalidURL as e:
            raise UyuniAPIError(f"invalid server address {conn.server!r}: {e}", "") from e

    @property
    def authenticated(self) -> bool:
        return any(
            cookie.name.startswith(SESSION_COOKIE) and cookie.value
            for cookie in self._http.cookies.jar
        )

    def login(self) -> None:
        """Authenticate against ``auth/login`` and keep the session cookie.

        Raises:
            UyuniAPIError: If the credentials are refused or no session cookie is returned
        """
        logger.debug(f"Logging in to {self.conn.server} as {self.conn.user}")
        data = self._request(
            "POST",
            "auth/login",
            json={"login": self.conn.user, "password": self.conn.password},
        )
        if not data.get("success", False):
            messages = data.get("messages") or [data.get("message") or "login failed"]
            raise UyuniAPIError(str(messages[0]), "auth/login")
        if not self.authenticated:
            raise UyuniAPIError("auth cookie not found in login response", "auth/login")
        logger.info(f"Logged in to Uyuni server {self.conn.server}")

    def get(
        self,
        path: str,
        result_type: type[T],
        params: dict[str, Any] | None = None,
    ) -> APIResponse[T]:
        """Execute a GET call and decode its envelope.

        Args:
            path: API path relative to the base URL (e.g., "user/listUsers")
            result_type: Type of the ``result`` field
            params: Query parameters

        Returns:
            Decoded response envelope

        Raises:
            UyuniAPIError: On transport, HTTP or API error
        """
        data = self._request("GET", path, params=params)
        return self._decode(path, data, result_type)

    def post(
        self,
        path: str,
        result_type: type[T],
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> APIResponse[T]:
        """Execute a POST call with a JSON body and decode its envelope.

        Args:
            path: API path relative to the base URL (e.g., "user/create")
            result_type: Type of the ``result`` field
            data: JSON body
            params: Query parameters

        Returns:
            Decoded response envelope

        Raises:
            UyuniAPIError: On transport, HTTP or API error
        """
        body = self._request("POST", path, json=data if data is not None else {}, params=params)
        return self._decode(path, body, result_type)

    def close(self) -> None:
        self._http.close()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    def __enter__(self) -> "UyuniClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            resp = self._http.request(method, path, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UyuniAPIError(f"{method} {path} failed: {e}", path) from e

        if resp.status_code == 401:
            raise UyuniAPIError("401: unauthorized", path, status_code=401)
        if resp.is_error:
            raise UyuniAPIError(
                f"{resp.status_code}: {resp.reason_phrase}",
                path,
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise UyuniAPIError(
                f"invalid JSON in response: {e}", path, status_code=resp.status_code
            ) from e
        if not isinstance(data, dict):
            raise UyuniAPIError(
                "unexpected response body", path, status_code=resp.status_code
            )
        return data

    def _decode(
        self, path: str, data: dict[str, Any], result_type: type[T]
    ) -> APIResponse[T]:
        if not data.get("success", False):
            raise UyuniAPIError(data.get("message") or "unknown API error", path)
        try:
            return APIResponse[result_type].model_validate(data)
        except PydanticValidationError as e:
            raise UyuniAPIError(f"unexpected response format: {e}", path) from e


def init(
    conn: ConnectionDetails,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.BaseTransport | None = None,
) -> UyuniClient:
    """Create a client and log in.

    Raises:
        UyuniAPIError: If the login fails
    """
    client = UyuniClient(conn, timeout=timeout, transport=transport)
    try:
        client.login()
    except UyuniAPIError:
        client.close()
        raise
    return client
