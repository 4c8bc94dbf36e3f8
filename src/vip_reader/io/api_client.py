"""HTTP transport shared by every remote collaborator.

Attaches the current session credential as a bearer token and notifies
listeners whenever an authenticated call is rejected with 401, whichever
gateway issued it.
"""

import logging
from typing import Any, Callable, Optional

import requests

from vip_reader.io.errors import ApiError, ServiceUnavailableError, UnauthorizedError

logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], Optional[str]]
UnauthorizedListener = Callable[[], None]


class ApiClient:
    """Thin wrapper over requests.Session for the reader backend."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not base_url:
            raise ValueError("base_url must not be empty")
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        self._credential_provider: Optional[CredentialProvider] = None
        self._unauthorized_listeners: list[UnauthorizedListener] = []

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_credential_provider(self, provider: Optional[CredentialProvider]) -> None:
        """Set the callable that returns the bearer token for authenticated calls."""
        self._credential_provider = provider

    def add_unauthorized_listener(self, listener: UnauthorizedListener) -> None:
        self._unauthorized_listeners.append(listener)

    def request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        data: Optional[dict[str, Any]] = None,
        files: Optional[dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> Any:
        """Perform a call and return the decoded JSON body (None if empty).

        Raises:
            UnauthorizedError: on 401; listeners have already run if authenticated.
            ApiError: on any other non-2xx response.
            ServiceUnavailableError: if the service could not be reached.
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        headers = {}
        if authenticated and self._credential_provider is not None:
            token = self._credential_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        try:
            response = self._session.request(
                method,
                url,
                json=json,
                data=data,
                files=files,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ServiceUnavailableError(f"{method} {path} failed: {e}") from e

        body = self._decode(response)

        if response.status_code == 401:
            if authenticated:
                logger.warning("%s %s rejected credential; clearing session", method, path)
                self._notify_unauthorized()
            raise UnauthorizedError(
                f"{method} {path} unauthorized", status_code=401, payload=body
            )

        if not response.ok:
            raise ApiError(
                f"{method} {path} returned {response.status_code}: {self._message(body)}",
                status_code=response.status_code,
                payload=body,
            )

        return body

    def _notify_unauthorized(self) -> None:
        for listener in list(self._unauthorized_listeners):
            listener()

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _message(body: Any) -> str:
        if isinstance(body, dict):
            return str(body.get("message") or body.get("error") or body)
        return str(body)
