"""HTTP transport for the storefront API.

Wraps an httpx client: injects the bearer token, turns error responses into
`ApiError`, and on 401 drops the session and sends the user to the login
page (unless they are already on login or register).
"""

import httpx
import structlog

from storefront.config import ClientSettings
from storefront.navigation import LOGIN_PATH, Navigator
from storefront.session import Session

logger = structlog.get_logger(__name__)

FALLBACK_ERROR_MESSAGE = "Request failed"
NETWORK_ERROR_MESSAGE = "Network error, please check your connection"


class ApiError(Exception):
    """A failed API call. `status_code` is None when no response arrived."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def error_message(response: httpx.Response) -> str:
    """The server's `message`, `error` or `detail`, else a generic fallback."""
    try:
        body = response.json()
    except ValueError:
        return FALLBACK_ERROR_MESSAGE
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str) and body[key]:
                return body[key]
    return FALLBACK_ERROR_MESSAGE


class ApiClient:
    def __init__(
        self,
        session: Session,
        navigator: Navigator | None = None,
        settings: ClientSettings | None = None,
        http_client: httpx.Client | None = None,
    ):
        settings = settings or ClientSettings.from_env()
        self.session = session
        self.navigator = navigator
        self._client = http_client or httpx.Client(
            base_url=settings.api_base_url,
            timeout=settings.api_timeout,
            headers={"Content-Type": "application/json"},
        )

    def _auth_headers(self) -> dict:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def _handle_unauthorized(self) -> None:
        self.session.clear()
        if self.navigator is not None and not self.navigator.on_auth_page:
            self.navigator.navigate(LOGIN_PATH)

    def request(self, method: str, path: str, json=None, params=None):
        try:
            response = self._client.request(method, path, json=json, params=params, headers=self._auth_headers())
        except httpx.RequestError as exc:
            logger.warning("api_unreachable", method=method, path=path, error=str(exc))
            raise ApiError(NETWORK_ERROR_MESSAGE) from exc

        if response.is_error:
            message = error_message(response)
            logger.info("api_error", method=method, path=path, status=response.status_code, message=message)
            if response.status_code == 401:
                self._handle_unauthorized()
            raise ApiError(message, response.status_code)

        if not response.content:
            return None
        return response.json()

    def get(self, path: str, params=None):
        return self.request("GET", path, params=params)

    def post(self, path: str, json=None):
        return self.request("POST", path, json=json)

    def put(self, path: str, json=None):
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json=None):
        return self.request("PATCH", path, json=json)

    def delete(self, path: str):
        return self.request("DELETE", path)

    def close(self) -> None:
        self._client.close()
